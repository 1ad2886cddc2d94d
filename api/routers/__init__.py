"""
API Routers - Endpoint handlers for the reception pass API.

- passes: pass resolution and people search for the reception kiosk
"""

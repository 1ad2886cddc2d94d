"""Reception pass resolution service."""

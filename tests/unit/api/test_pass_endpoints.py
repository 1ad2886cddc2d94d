"""Tests for GET /api/get-pass, GET /api/search and /health.

The resolver dependency is overridden with one bound to a FakeNexudus and
a fixed clock, so requests run the real engine without network access.
"""

from __future__ import annotations

from collections.abc import Generator
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_pass_resolver
from api.main import app
from reception.pass_engine.passes import PassResolver
from tests.fixtures.fake_nexudus import FakeNexudus
from tests.fixtures.records import booking, coworker, ts, visitor


@pytest.fixture
def client_for(fake_nexudus, clock_at) -> Generator:
    """Factory: client_for("10:30") -> TestClient whose resolver reads the fake upstream at 10:30."""

    def _make(hhmm: str = "10:30", resolver: PassResolver | Mock | None = None) -> TestClient:
        bound = resolver or PassResolver(fake_nexudus, clock_at(hhmm))
        app.dependency_overrides[get_pass_resolver] = lambda: bound
        return TestClient(app, raise_server_exceptions=False)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def coworker_42(fake_nexudus: FakeNexudus) -> FakeNexudus:
    fake_nexudus.serve_records(
        "bookings",
        [booking(900, ts("10:00"), ts("11:00"), resource="Meeting Room 1", coworker_id=42, coworker_name="Sam Lee")],
    )
    return fake_nexudus


class TestGetPass:
    def test_coworker_by_id(self, client_for, coworker_42):
        response = client_for("10:30").get("/api/get-pass", params={"type": "coworker", "id": "42"})

        assert response.status_code == 200
        assert response.json() == {
            "source": "booking",
            "pass": {
                "name": "Sam Lee",
                "resource": "Meeting Room 1",
                "fromTime": "2026-10-19T10:00:00",
                "toTime": "2026-10-19T11:00:00",
                "bookingId": 900,
            },
            "matches": 1,
        }

    def test_coworker_without_booking(self, client_for, coworker_42):
        response = client_for().get("/api/get-pass", params={"type": "coworker", "id": "7"})

        assert response.status_code == 200
        assert response.json() == {"source": "none", "pass": None, "matches": 1}

    def test_visitor_by_name(self, client_for, fake_nexudus):
        fake_nexudus.serve_records("visitors", [visitor(3, "Amy Lee", ts("12:00"))])

        response = client_for().get("/api/get-pass", params={"type": "visitor", "name": "amy lee"})

        assert response.status_code == 200
        body = response.json()
        assert body["source"] == "visitor-fallback"
        assert body["pass"]["name"] == "Amy Lee"
        assert body["pass"]["fromTime"] == "2026-10-19T12:00:00"

    @pytest.mark.parametrize(
        "params",
        [
            {"id": "42"},
            {"type": "robot", "id": "42"},
            {"type": "coworker"},
            {"type": "coworker", "id": "x"},
            {"type": "coworker", "id": "4²"},
            {"type": "visitor", "id": "١٢"},
        ],
    )
    def test_invalid_input(self, client_for, params):
        response = client_for().get("/api/get-pass", params=params)

        assert response.status_code == 400
        assert "error" in response.json()

    def test_not_found(self, client_for):
        response = client_for().get("/api/get-pass", params={"type": "visitor", "id": "404"})

        assert response.status_code == 404
        assert response.json() == {"error": "Visitor not found"}

    def test_upstream_failure(self, client_for, fake_nexudus):
        fake_nexudus.fail_list("bookings", status=503)

        response = client_for().get("/api/get-pass", params={"type": "coworker", "id": "42"})

        assert response.status_code == 502
        body = response.json()
        assert body["status"] == 503
        assert body["detail"] == "Internal Server Error"

    def test_unexpected_error(self, client_for):
        resolver = Mock(spec=PassResolver)
        resolver.resolve_pass.side_effect = RuntimeError("x" * 1000)

        response = client_for(resolver=resolver).get("/api/get-pass", params={"type": "coworker", "id": "42"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Server error"
        assert len(body["detail"]) == 400


class TestSearch:
    def test_lists_visitors_then_coworkers(self, client_for, fake_nexudus):
        fake_nexudus.serve_records("visitors", [visitor(1, "Sam Lee", ts("09:00"), host="Ann Host", code="Q7")])
        fake_nexudus.serve_records("coworkers", [coworker(9, "Sam Lee", email="sam@example.com")])

        response = client_for().get("/api/search", params={"name": "Sam"})

        assert response.status_code == 200
        assert response.json() == {
            "results": [
                {"type": "visitor", "id": 1, "label": "Sam Lee (#Q7)", "sub": "Ann Host • Expected 2026-10-19T09:00:00"},
                {"type": "coworker", "id": 9, "label": "Sam Lee", "sub": "sam@example.com"},
            ]
        }

    def test_type_filter(self, client_for, fake_nexudus):
        fake_nexudus.serve_records("visitors", [visitor(1, "Sam Lee")])
        fake_nexudus.serve_records("coworkers", [coworker(9, "Sam Lee")])

        response = client_for().get("/api/search", params={"name": "Sam", "type": "coworker"})

        assert [r["type"] for r in response.json()["results"]] == ["coworker"]

    def test_missing_name(self, client_for):
        response = client_for().get("/api/search")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing or invalid name"}

    def test_no_results(self, client_for):
        response = client_for().get("/api/search", params={"name": "Nobody"})

        assert response.status_code == 200
        assert response.json() == {"results": []}


def test_health():
    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "reception-pass-api"}

"""Tests for linking coworkers and visitors to today's bookings."""

from __future__ import annotations

import pytest

from reception.pass_engine.core.config import EngineConfig
from reception.pass_engine.core.errors import UpstreamUnavailableError
from reception.pass_engine.data.record_adapters import visitor_from_record
from reception.pass_engine.data.repositories import BookingRepository, BookingVisitorRepository
from reception.pass_engine.passes import BookingLinker
from tests.fixtures.fake_nexudus import upstream_error
from tests.fixtures.records import at, booking, booking_visitor, ts, visitor

YESTERDAY = "2026-10-18"


def make_linker(client, config: EngineConfig) -> BookingLinker:
    return BookingLinker(BookingRepository(client, config), BookingVisitorRepository(client, config), config)


@pytest.fixture
def linker(fake_nexudus, engine_config) -> BookingLinker:
    return make_linker(fake_nexudus, engine_config)


def links_by_visitor(rows, filtered_status: int | None = None):
    """bookingvisitors handler: server-side filter by visitor, or every row."""

    def handler(params):
        if "BookingVisitor_Visitor" in params:
            if filtered_status is not None:
                raise upstream_error(filtered_status, "filter not allowed")
            wanted = params["BookingVisitor_Visitor"]
            return {"Records": [r for r in rows if r["VisitorId"] == wanted], "HasNextPage": False}
        return {"Records": list(rows), "HasNextPage": False}

    return handler


class TestForCoworker:
    def test_matches_every_coworker_field_spelling(self, linker, fake_nexudus):
        fake_nexudus.serve_records(
            "bookings",
            [
                booking(1, ts("09:00"), ts("10:00"), coworker_id=42, coworker_field="Booking_Coworker"),
                booking(2, ts("11:00"), ts("12:00"), coworker_id=42, coworker_field="CoworkerId"),
                booking(3, ts("13:00"), ts("14:00"), coworker_id=42, coworker_field="Coworker"),
                booking(4, ts("13:00"), ts("14:00"), coworker_id=7),
            ],
        )

        bookings = linker.for_coworker(42, at("10:30"))

        assert [b.booking_id for b in bookings] == [1, 2, 3]

    def test_queries_confirmed_bookings_for_today(self, linker, fake_nexudus):
        linker.for_coworker(42, at("10:30"))

        params = fake_nexudus.list_calls("bookings")[0]
        assert params["status"] == "Confirmed"
        assert params["from_Booking_FromTime"] == "2026-10-19T00:00"
        assert params["to_Booking_ToTime"] == "2026-10-19T23:59"
        assert params["size"] == 500

    def test_bookings_unavailable_raises(self, linker, fake_nexudus):
        fake_nexudus.fail_list("bookings", status=503)

        with pytest.raises(UpstreamUnavailableError):
            linker.for_coworker(42, at("10:30"))

    def test_partial_pages_are_used(self, linker, fake_nexudus):
        fake_nexudus.serve_pages(
            "bookings",
            [
                {"Records": [booking(1, ts("10:00"), ts("11:00"), coworker_id=42)], "HasNextPage": True},
                upstream_error(500),
            ],
        )

        assert [b.booking_id for b in linker.for_coworker(42, at("10:30"))] == [1]

    def test_shared_prefetch_is_not_refetched(self, linker, fake_nexudus):
        fake_nexudus.serve_records("bookings", [booking(1, ts("10:00"), ts("11:00"), coworker_id=42)])
        todays = linker.todays_bookings(at("10:30"))

        linker.for_coworker(42, at("10:30"), todays)
        linker.for_coworker(43, at("10:30"), todays)

        assert len(fake_nexudus.list_calls("bookings")) == 1


class TestForVisitorFilteredLinks:
    def test_fetches_linked_bookings_and_keeps_today(self, linker, fake_nexudus):
        fake_nexudus.on_list(
            "bookingvisitors",
            links_by_visitor([booking_visitor(100, 5, "Jane Roe"), booking_visitor(101, 5, "Jane Roe")]),
        )
        fake_nexudus.add_record("bookings", booking(100, ts("10:00"), ts("11:00"), resource="Studio"))
        fake_nexudus.add_record("bookings", booking(101, ts("10:00", YESTERDAY), ts("11:00", YESTERDAY)))

        bookings = linker.for_visitor(visitor_from_record(visitor(5, "Jane Roe")), at("10:30"))

        assert [b.booking_id for b in bookings] == [100]
        assert bookings[0].resource_name == "Studio"
        assert fake_nexudus.list_calls("bookingvisitors")[0]["BookingVisitor_Visitor"] == 5
        assert fake_nexudus.list_calls("bookings") == []

    def test_detail_fetches_are_capped(self, fake_nexudus):
        linker = make_linker(fake_nexudus, EngineConfig(max_booking_detail_fetches=2))
        fake_nexudus.on_list(
            "bookingvisitors", links_by_visitor([booking_visitor(n, 5, "Jane Roe") for n in (1, 2, 3)])
        )
        for n in (1, 2, 3):
            fake_nexudus.add_record("bookings", booking(n, ts("10:00"), ts("11:00")))

        bookings = linker.for_visitor(visitor_from_record(visitor(5, "Jane Roe")), at("10:30"))

        assert fake_nexudus.get_calls("bookings") == [1, 2]
        assert len(bookings) == 2

    def test_failed_detail_fetch_is_skipped(self, linker, fake_nexudus):
        fake_nexudus.on_list(
            "bookingvisitors",
            links_by_visitor([booking_visitor(100, 5, "Jane Roe"), booking_visitor(101, 5, "Jane Roe")]),
        )
        fake_nexudus.records["bookings"] = {100: upstream_error(500)}
        fake_nexudus.add_record("bookings", booking(101, ts("12:00"), ts("13:00")))

        bookings = linker.for_visitor(visitor_from_record(visitor(5, "Jane Roe")), at("10:30"))

        assert [b.booking_id for b in bookings] == [101]

    def test_unconfirmed_bookings_are_dropped(self, linker, fake_nexudus):
        fake_nexudus.on_list(
            "bookingvisitors",
            links_by_visitor([booking_visitor(100, 5, "Jane Roe"), booking_visitor(101, 5, "Jane Roe")]),
        )
        cancelled = booking(100, ts("10:00"), ts("11:00"), resource="Boardroom")
        cancelled["Status"] = "Cancelled"
        confirmed = booking(101, ts("15:00"), ts("16:00"), resource="Studio")
        confirmed["Status"] = "Confirmed"
        fake_nexudus.add_record("bookings", cancelled)
        fake_nexudus.add_record("bookings", confirmed)

        bookings = linker.for_visitor(visitor_from_record(visitor(5, "Jane Roe")), at("10:30"))

        assert [b.booking_id for b in bookings] == [101]

    def test_no_links_means_no_bookings(self, linker, fake_nexudus):
        fake_nexudus.on_list("bookingvisitors", links_by_visitor([]))

        assert linker.for_visitor(visitor_from_record(visitor(5, "Jane Roe")), at("10:30")) == []
        assert len(fake_nexudus.list_calls("bookingvisitors")) == 1


class TestForVisitorFullScan:
    def test_falls_back_when_filter_rejected(self, linker, fake_nexudus):
        fake_nexudus.on_list(
            "bookingvisitors",
            links_by_visitor(
                [booking_visitor(100, 5, "Jane Roe"), booking_visitor(200, 6, "Other Person")], filtered_status=400
            ),
        )
        fake_nexudus.serve_records(
            "bookings",
            [booking(100, ts("10:00"), ts("11:00")), booking(200, ts("10:00"), ts("11:00"))],
        )

        bookings = linker.for_visitor(visitor_from_record(visitor(5, "Jane Roe")), at("10:30"))

        assert [b.booking_id for b in bookings] == [100]
        assert len(fake_nexudus.list_calls("bookingvisitors")) == 2

    def test_matches_link_rows_by_name(self, linker, fake_nexudus):
        fake_nexudus.serve_records("bookingvisitors", [{"BookingId": 100, "VisitorFullName": "JANE  roe"}])
        fake_nexudus.serve_records("bookings", [booking(100, ts("10:00"), ts("11:00"))])
        nameless_id = visitor_from_record({"FullName": "Jane Roe"})

        bookings = linker.for_visitor(nameless_id, at("10:30"))

        assert [b.booking_id for b in bookings] == [100]

    def test_failed_scan_yields_nothing(self, linker, fake_nexudus):
        fake_nexudus.fail_list("bookingvisitors")

        assert linker.for_visitor(visitor_from_record(visitor(5, "Jane Roe")), at("10:30")) == []
        assert fake_nexudus.list_calls("bookings") == []

    def test_todays_bookings_failure_surfaces(self, linker, fake_nexudus):
        fake_nexudus.on_list(
            "bookingvisitors", links_by_visitor([booking_visitor(100, 5, "Jane Roe")], filtered_status=400)
        )
        fake_nexudus.fail_list("bookings", status=502)

        with pytest.raises(UpstreamUnavailableError):
            linker.for_visitor(visitor_from_record(visitor(5, "Jane Roe")), at("10:30"))

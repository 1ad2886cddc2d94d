"""Tests for upstream record adapters."""

from __future__ import annotations

import pytest

from reception.pass_engine.core.models import PersonKind
from reception.pass_engine.data.record_adapters import (
    booking_coworker_ids,
    booking_from_record,
    booking_is_confirmed,
    coworker_from_record,
    custom_field_value,
    is_numeric_id,
    link_from_record,
    to_int,
    visitor_from_record,
)
from tests.fixtures.records import booking, coworker, visitor


class TestBookingAdapter:
    def test_full_record(self):
        candidate = booking_from_record(
            booking(11, "2026-10-19T10:00:00", "2026-10-19T11:00:00", resource="Desk 4", coworker_name="Ann Bo")
        )
        assert candidate.booking_id == 11
        assert candidate.resource_name == "Desk 4"
        assert candidate.from_time == "2026-10-19T10:00:00"
        assert candidate.owner_name == "Ann Bo"

    def test_missing_fields_are_none(self):
        candidate = booking_from_record({})
        assert candidate.booking_id is None
        assert candidate.resource_name is None
        assert candidate.from_time is None

    def test_nested_resource_name(self):
        assert booking_from_record({"Id": 1, "Resource": {"Name": "Studio"}}).resource_name == "Studio"

    def test_coworker_id_spellings(self):
        for field in ("Booking_Coworker", "CoworkerId", "Coworker"):
            record = booking(1, "a", "b", coworker_id=42, coworker_field=field)
            assert booking_coworker_ids(record) == {42}

    def test_coworker_ids_from_strings_and_multiple_fields(self):
        record = {"CoworkerId": "42", "Coworker": {"Id": 43}}
        assert booking_coworker_ids(record) == {42, 43}

    def test_no_coworker(self):
        assert booking_coworker_ids({"Id": 1}) == set()


class TestPersonAdapters:
    def test_visitor(self):
        person = visitor_from_record(visitor(5, "Jane Roe", "2026-10-19T09:00:00"))
        assert person.kind is PersonKind.VISITOR
        assert person.id == 5
        assert person.display_name == "Jane Roe"
        assert person.raw["ExpectedArrival"] == "2026-10-19T09:00:00"

    def test_coworker_falls_back_to_billing_name(self):
        person = coworker_from_record({"Id": 9, "BillingName": "Acme Ltd"})
        assert person.display_name == "Acme Ltd"

    def test_coworker(self):
        assert coworker_from_record(coworker(9, "Sam Lee")).display_name == "Sam Lee"


class TestLinkAdapter:
    def test_flat_and_nested(self):
        flat = link_from_record({"BookingId": 3, "VisitorId": 4, "VisitorFullName": "Al"})
        nested = link_from_record({"Booking": {"Id": 3}, "Visitor": {"Id": 4, "FullName": "Al"}})
        assert flat == nested


class TestCustomFields:
    def test_reads_named_value(self):
        record = visitor(1, "A", custom_fields={"Nexudus.Booking.ResourceName": "Room 2"})
        assert custom_field_value(record, "Nexudus.Booking.ResourceName") == "Room 2"

    def test_absent(self):
        assert custom_field_value({}, "Nexudus.Booking.ResourceName") is None
        assert custom_field_value({"CustomFields": {"Data": None}}, "x") is None


def test_to_int():
    assert to_int(5) == 5
    assert to_int(" 12 ") == 12
    assert to_int("abc") is None
    assert to_int(None) is None
    assert to_int(True) is None


@pytest.mark.parametrize("value", ["²", "4²", "١٢", "４２", ""])
def test_to_int_rejects_non_ascii_digits(value):
    assert to_int(value) is None
    assert not is_numeric_id(value)


def test_malformed_upstream_ids_degrade_to_none():
    assert booking_from_record({"Id": "²"}).booking_id is None
    assert visitor_from_record({"Id": "١٢", "FullName": "Jane Roe"}).id is None
    assert booking_coworker_ids({"CoworkerId": "4²", "Coworker": {"Id": 43}}) == {43}
    assert link_from_record({"BookingId": "²", "VisitorId": "5"}).booking_id is None


class TestBookingStatus:
    @pytest.mark.parametrize("record", [{}, {"Status": "Confirmed"}, {"BookingStatus": "confirmed"}])
    def test_confirmed_or_unspecified(self, record):
        assert booking_is_confirmed(record)

    @pytest.mark.parametrize("record", [{"Status": "Cancelled"}, {"BookingStatus": "Tentative"}])
    def test_other_statuses(self, record):
        assert not booking_is_confirmed(record)

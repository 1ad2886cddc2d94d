"""Adapters from raw upstream records to domain models.

Upstream record shapes are inconsistent: the same logical field can appear
under several spellings depending on the endpoint and account version. Each
logical field is described by an ordered tuple of key paths tried in turn."""

from __future__ import annotations

import re
from typing import Any

from ..core.models import BookingCandidate, BookingVisitorLink, PersonKind, PersonRef

KeyPath = tuple[str, ...]

BOOKING_ID_PATHS: tuple[KeyPath, ...] = (("Id",),)
BOOKING_RESOURCE_PATHS: tuple[KeyPath, ...] = (("ResourceName",), ("Resource", "Name"))
BOOKING_FROM_PATHS: tuple[KeyPath, ...] = (("FromTime",),)
BOOKING_TO_PATHS: tuple[KeyPath, ...] = (("ToTime",),)
BOOKING_OWNER_PATHS: tuple[KeyPath, ...] = (("CoworkerFullName",), ("Coworker", "FullName"))
BOOKING_STATUS_PATHS: tuple[KeyPath, ...] = (("Status",), ("BookingStatus",))
BOOKING_COWORKER_ID_PATHS: tuple[KeyPath, ...] = (
    ("Booking_Coworker", "Id"),
    ("CoworkerId",),
    ("Coworker", "Id"),
)

LINK_BOOKING_ID_PATHS: tuple[KeyPath, ...] = (("BookingId",), ("Booking", "Id"))
LINK_VISITOR_ID_PATHS: tuple[KeyPath, ...] = (("VisitorId",), ("Visitor", "Id"))
LINK_VISITOR_NAME_PATHS: tuple[KeyPath, ...] = (("VisitorFullName",), ("Visitor", "FullName"))

PERSON_ID_PATHS: tuple[KeyPath, ...] = (("Id",),)
COWORKER_NAME_PATHS: tuple[KeyPath, ...] = (("FullName",), ("BillingName",))
VISITOR_NAME_PATHS: tuple[KeyPath, ...] = (("FullName",),)

# Upstream ids are plain ASCII digit strings
NUMERIC_ID = re.compile(r"\d+", re.ASCII)

CONFIRMED_STATUS = "confirmed"

# Visitor profile custom fields that mirror booking metadata
CUSTOM_FIELD_RESOURCE = "Nexudus.Booking.ResourceName"
CUSTOM_FIELD_FROM_TIME = "Nexudus.Booking.FromTime"


def _lookup(record: dict[str, Any], path: KeyPath) -> Any:
    value: Any = record
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def first_present(record: dict[str, Any], paths: tuple[KeyPath, ...]) -> Any:
    """Return the first non-empty value found along the given key paths."""
    for path in paths:
        value = _lookup(record, path)
        if value is not None and value != "":
            return value
    return None


def all_present(record: dict[str, Any], paths: tuple[KeyPath, ...]) -> list[Any]:
    """Return every non-empty value found along the given key paths."""
    values = [_lookup(record, path) for path in paths]
    return [v for v in values if v is not None and v != ""]


def to_int(value: Any) -> int | None:
    """Coerce an upstream id (int or numeric string) to int."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and is_numeric_id(value.strip()):
        return int(value.strip())
    return None


def is_numeric_id(text: str) -> bool:
    """True for a non-empty run of ASCII digits (no superscripts or other scripts)."""
    return NUMERIC_ID.fullmatch(text) is not None


def to_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def booking_from_record(record: dict[str, Any]) -> BookingCandidate:
    """Build a BookingCandidate; absent fields become None."""
    return BookingCandidate(
        booking_id=to_int(first_present(record, BOOKING_ID_PATHS)),
        resource_name=to_text(first_present(record, BOOKING_RESOURCE_PATHS)),
        from_time=to_text(first_present(record, BOOKING_FROM_PATHS)),
        to_time=to_text(first_present(record, BOOKING_TO_PATHS)),
        owner_name=to_text(first_present(record, BOOKING_OWNER_PATHS)),
    )


def booking_is_confirmed(record: dict[str, Any]) -> bool:
    """False only when the record carries a status other than Confirmed."""
    status = to_text(first_present(record, BOOKING_STATUS_PATHS))
    return status is None or status.casefold() == CONFIRMED_STATUS


def booking_coworker_ids(record: dict[str, Any]) -> set[int]:
    """All coworker ids a booking record carries, across known spellings."""
    ids = {to_int(v) for v in all_present(record, BOOKING_COWORKER_ID_PATHS)}
    ids.discard(None)
    return ids  # type: ignore[return-value]


def link_from_record(record: dict[str, Any]) -> BookingVisitorLink:
    return BookingVisitorLink(
        booking_id=to_int(first_present(record, LINK_BOOKING_ID_PATHS)),
        visitor_id=to_int(first_present(record, LINK_VISITOR_ID_PATHS)),
        visitor_full_name=to_text(first_present(record, LINK_VISITOR_NAME_PATHS)),
    )


def visitor_from_record(record: dict[str, Any]) -> PersonRef:
    return PersonRef(
        kind=PersonKind.VISITOR,
        id=to_int(first_present(record, PERSON_ID_PATHS)),
        display_name=to_text(first_present(record, VISITOR_NAME_PATHS)) or "",
        raw=record,
    )


def coworker_from_record(record: dict[str, Any]) -> PersonRef:
    return PersonRef(
        kind=PersonKind.COWORKER,
        id=to_int(first_present(record, PERSON_ID_PATHS)),
        display_name=to_text(first_present(record, COWORKER_NAME_PATHS)) or "",
        raw=record,
    )


def person_from_record(kind: PersonKind, record: dict[str, Any]) -> PersonRef:
    if kind is PersonKind.VISITOR:
        return visitor_from_record(record)
    return coworker_from_record(record)


def custom_field_value(record: dict[str, Any], name: str) -> str | None:
    """Read a named custom field from a visitor profile (CustomFields.Data[])."""
    data = _lookup(record, ("CustomFields", "Data"))
    if not isinstance(data, list):
        return None
    for entry in data:
        if isinstance(entry, dict) and entry.get("Name") == name:
            return to_text(entry.get("Value"))
    return None

"""
Journal Backend — Request Validation
====================================

What:  Pure, synchronous checks that run before anything touches storage.
Why:   Handlers must reject malformed input with a precise, deterministic 400
       message; the field order (title → notes → photoUrl) is part of the contract.
"""

import re

from journal.exceptions import ValidationError
from journal.schemas.auth import Credentials
from journal.schemas.entry import EntryFields, EntryPayload

# Largest value a 32-bit SERIAL primary key can hold
MAX_ENTRY_ID = 2**31 - 1

# ASCII digits only: \d would also accept other scripts' digits, which int() converts
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# (attribute, JSON name, message) in reporting order
_REQUIRED_ENTRY_FIELDS = (
    ("title", "title", "Title is missing"),
    ("notes", "notes", "Notes is missing"),
    ("photo_url", "photoUrl", "photoUrl is missing"),
)


def parse_entry_id(raw: str) -> int:
    """
    Parse an `entryId` path parameter.

    Raises:
        ValidationError: not an integer, or outside the storable id range.
    """
    if not _INTEGER_RE.fullmatch(raw.strip()):
        raise ValidationError("entryId needs to be a number", field="entryId")
    entry_id = int(raw)
    if abs(entry_id) > MAX_ENTRY_ID:
        raise ValidationError("entryId is out of range", field="entryId")
    return entry_id


def require_entry_fields(payload: EntryPayload) -> EntryFields:
    """
    Check that title, notes and photoUrl are present and non-empty, in that order.

    Raises:
        ValidationError: for the first field that is missing or empty.
    """
    for attr, field_name, message in _REQUIRED_ENTRY_FIELDS:
        if not getattr(payload, attr):
            raise ValidationError(message, field=field_name)
    return EntryFields(
        title=payload.title,
        notes=payload.notes,
        photo_url=payload.photo_url,
    )


def require_sign_up_fields(credentials: Credentials) -> Credentials:
    if not credentials.username or not credentials.password:
        raise ValidationError("username and password are required fields")
    return credentials

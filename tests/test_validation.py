"""
Journal Backend — Request Validation Unit Tests
===============================================

What we test:
    ✅ entryId parsing: digits accepted, anything else rejected with 400
    ✅ Entry fields reported in the fixed order title → notes → photoUrl
    ✅ Sign-up requires both username and password
"""

import pytest

from journal.exceptions import ValidationError
from journal.schemas.auth import Credentials
from journal.schemas.entry import EntryPayload
from journal.services.validation import (
    MAX_ENTRY_ID,
    parse_entry_id,
    require_entry_fields,
    require_sign_up_fields,
)


class TestParseEntryId:

    @pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), ("99999", 99999), ("-3", -3)])
    def test_accepts_integers(self, raw, expected):
        assert parse_entry_id(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", "1.5", "1e3", "12abc", "0x10", "١٢", "１２"])
    def test_rejects_non_integers(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            parse_entry_id(raw)
        assert exc_info.value.message == "entryId needs to be a number"
        assert exc_info.value.field == "entryId"

    def test_rejects_ids_beyond_storage_range(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_entry_id(str(MAX_ENTRY_ID + 1))
        assert exc_info.value.message == "entryId is out of range"

    def test_largest_storable_id_is_accepted(self):
        assert parse_entry_id(str(MAX_ENTRY_ID)) == MAX_ENTRY_ID


class TestRequireEntryFields:

    def test_complete_payload_passes(self):
        fields = require_entry_fields(
            EntryPayload(title="T", notes="N", photoUrl="U")
        )
        assert (fields.title, fields.notes, fields.photo_url) == ("T", "N", "U")

    def test_everything_missing_reports_title_first(self):
        with pytest.raises(ValidationError) as exc_info:
            require_entry_fields(EntryPayload())
        assert exc_info.value.message == "Title is missing"

    def test_notes_reported_before_photo_url(self):
        with pytest.raises(ValidationError) as exc_info:
            require_entry_fields(EntryPayload(title="T"))
        assert exc_info.value.message == "Notes is missing"

    def test_photo_url_reported_last(self):
        with pytest.raises(ValidationError) as exc_info:
            require_entry_fields(EntryPayload(title="T", notes="N"))
        assert exc_info.value.message == "photoUrl is missing"

    def test_empty_string_counts_as_missing(self):
        with pytest.raises(ValidationError) as exc_info:
            require_entry_fields(EntryPayload(title="", notes="N", photoUrl="U"))
        assert exc_info.value.field == "title"

    def test_client_supplied_user_id_is_ignored(self):
        payload = EntryPayload.model_validate(
            {"title": "T", "notes": "N", "photoUrl": "U", "userId": 999}
        )
        fields = require_entry_fields(payload)
        assert not hasattr(fields, "user_id")


class TestRequireSignUpFields:

    @pytest.mark.parametrize("username, password", [(None, "pw"), ("alice", None), ("", "pw"), ("alice", "")])
    def test_missing_field_rejected(self, username, password):
        with pytest.raises(ValidationError) as exc_info:
            require_sign_up_fields(Credentials(username=username, password=password))
        assert exc_info.value.message == "username and password are required fields"

    def test_complete_credentials_pass(self):
        creds = Credentials(username="alice", password="pw")
        assert require_sign_up_fields(creds) is creds

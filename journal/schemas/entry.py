"""
Journal Backend — Entry Request/Response Schemas
================================================

What:  Pydantic models defining the entry API contract.
Why:   Automatic JSON parsing, type checks, camel-case serialization, and
       OpenAPI doc generation.

Design Decision:
    Request fields are Optional here on purpose: presence and non-emptiness are
    checked by journal.services.validation so the first missing field (title,
    then notes, then photoUrl) produces a deterministic 400 message. Pydantic
    only rejects values of the wrong JSON type.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EntryPayload(BaseModel):
    """
    What:  Body of POST /api/entries and PUT /api/entries/{entryId}.

    Unknown keys (including a client-supplied userId or entryId) are ignored;
    ownership always comes from the session token.
    """
    title: Optional[str] = Field(default=None, description="Entry title")
    notes: Optional[str] = Field(default=None, description="Free-form notes")
    photo_url: Optional[str] = Field(default=None, description="Opaque photo URL")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class EntryFields(BaseModel):
    """Validated entry fields, ready to be written to storage."""
    title: str
    notes: str
    photo_url: str


class EntryResponse(BaseModel):
    """
    What:  Full representation of an entry.
    Who:   Returned by every entry endpoint except DELETE.

    userId is omitted from the JSON when the entry has no owner (unscoped mode).
    """
    entry_id: int = Field(description="Storage-assigned entry identifier")
    user_id: Optional[int] = Field(default=None, description="Owning user, when scoped")
    title: str
    notes: str
    photo_url: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

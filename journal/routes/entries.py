"""
Journal Backend — Entry Route Handlers
======================================

What:  The five entry endpoints under /api/entries.
How:   Each handler runs the same lifecycle:
           authorize (get_entry_owner) → validate → EntryService → respond
       Any step may raise a JournalError, which short-circuits to the global
       exception handlers registered in main.py.

Endpoints:
    GET    /api/entries              → 200 Entry[]
    GET    /api/entries/{entryId}    → 200 Entry       | 400 | 404
    POST   /api/entries              → 201 Entry       | 400
    PUT    /api/entries/{entryId}    → 200 Entry       | 400 | 404
    DELETE /api/entries/{entryId}    → 204 (no body)   | 400 | 404
    All of them → 401 without a valid bearer token when entries are user-scoped.
"""

import logging
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from journal.database import get_db_session
from journal.dependencies import get_entry_owner
from journal.schemas.common import ErrorResponse
from journal.schemas.entry import EntryPayload, EntryResponse
from journal.services.entry_service import entry_service
from journal.services.validation import parse_entry_id, require_entry_fields

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Entries"])

_AUTH_ERRORS = {401: {"description": "Missing or invalid bearer token", "model": ErrorResponse}}
_ID_ERRORS = {
    400: {"description": "entryId is not a number", "model": ErrorResponse},
    404: {"description": "Entry does not exist or belongs to someone else", "model": ErrorResponse},
}

# The path segment is camel-case to match the rest of the JSON contract
EntryId = Annotated[str, Path(alias="entryId", description="Entry identifier (integer)")]


@router.get(
    "/entries",
    response_model=List[EntryResponse],
    response_model_exclude_none=True,
    responses=_AUTH_ERRORS,
    summary="List entries",
)
async def list_entries(
    owner_id: Optional[int] = Depends(get_entry_owner),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> List[EntryResponse]:
    """All of the caller's entries, oldest first. Empty list when there are none."""
    return await entry_service.list_entries(db, owner_id)


@router.get(
    "/entries/{entryId}",
    response_model=EntryResponse,
    response_model_exclude_none=True,
    responses={**_AUTH_ERRORS, **_ID_ERRORS},
    summary="Get one entry",
)
async def get_entry(
    entry_id: EntryId,
    owner_id: Optional[int] = Depends(get_entry_owner),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> EntryResponse:
    return await entry_service.get_entry(db, parse_entry_id(entry_id), owner_id)


@router.post(
    "/entries",
    response_model=EntryResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses={**_AUTH_ERRORS, 400: {"description": "A field is missing", "model": ErrorResponse}},
    summary="Create an entry",
)
async def create_entry(
    payload: Optional[EntryPayload] = None,
    owner_id: Optional[int] = Depends(get_entry_owner),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> EntryResponse:
    """Create an entry owned by the caller. Any userId in the body is ignored."""
    fields = require_entry_fields(payload or EntryPayload())
    return await entry_service.create_entry(db, fields, owner_id)


@router.put(
    "/entries/{entryId}",
    response_model=EntryResponse,
    response_model_exclude_none=True,
    responses={**_AUTH_ERRORS, **_ID_ERRORS},
    summary="Replace an entry's title, notes and photo URL",
)
async def update_entry(
    entry_id: EntryId,
    payload: Optional[EntryPayload] = None,
    owner_id: Optional[int] = Depends(get_entry_owner),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> EntryResponse:
    parsed_id = parse_entry_id(entry_id)
    fields = require_entry_fields(payload or EntryPayload())
    return await entry_service.update_entry(db, parsed_id, fields, owner_id)


@router.delete(
    "/entries/{entryId}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_AUTH_ERRORS, **_ID_ERRORS},
    summary="Delete an entry",
)
async def delete_entry(
    entry_id: EntryId,
    owner_id: Optional[int] = Depends(get_entry_owner),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Response:
    await entry_service.delete_entry(db, parse_entry_id(entry_id), owner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

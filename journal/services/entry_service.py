"""
Journal Backend — Entry Service (CRUD)
======================================

What:  List, read, create, update, and delete journal entries.
Why:   Keeps SQL and not-found policy out of the route handlers.
How:   Every operation is a single parameterized statement. Writes use
       UPDATE/DELETE ... RETURNING so "did a row match?" and the write itself
       are one atomic step; there is no read-then-write window.
Who:   Called by the /api/entries route handlers.

Ownership scoping:
    Every method takes `owner_id`. When it is an int, the statement is
    restricted to rows whose "userId" equals it and new rows are stamped with
    it. When it is None (unscoped mode) no owner predicate is applied. The
    value always comes from the authorization gate, never from the request body.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from journal.exceptions import DatabaseError, NotFoundError
from journal.models.entry import Entry
from journal.schemas.entry import EntryFields, EntryResponse

logger = logging.getLogger(__name__)


def _scoped(stmt, owner_id: Optional[int]):
    if owner_id is None:
        return stmt
    return stmt.where(Entry.user_id == owner_id)


def _to_response(entry: Entry) -> EntryResponse:
    return EntryResponse(
        entry_id=entry.entry_id,
        user_id=entry.user_id,
        title=entry.title,
        notes=entry.notes,
        photo_url=entry.photo_url,
    )


class EntryService:
    """
    Stateless CRUD over the `entries` table.

    Error Handling Strategy:
        Storage failures are wrapped in DatabaseError (generic 500, details
        logged). Zero matching rows on read/update/delete raise NotFoundError.
    """

    async def list_entries(
        self, db: AsyncSession, owner_id: Optional[int]
    ) -> List[EntryResponse]:
        """
        All visible entries ordered by entryId ascending.

        An empty list is a normal result, not an error.
        """
        stmt = _scoped(select(Entry), owner_id).order_by(Entry.entry_id.asc())
        try:
            result = await db.execute(stmt)
            entries = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing entries: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})
        return [_to_response(entry) for entry in entries]

    async def get_entry(
        self, db: AsyncSession, entry_id: int, owner_id: Optional[int]
    ) -> EntryResponse:
        stmt = _scoped(select(Entry).where(Entry.entry_id == entry_id), owner_id)
        try:
            result = await db.execute(stmt)
            entry = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching entry %d: %s", entry_id, str(e), exc_info=True)
            raise DatabaseError(context={"entry_id": entry_id})

        if entry is None:
            raise NotFoundError("entry not found", resource="entry", resource_id=str(entry_id))
        return _to_response(entry)

    async def create_entry(
        self, db: AsyncSession, fields: EntryFields, owner_id: Optional[int]
    ) -> EntryResponse:
        """Insert one row; the storage-assigned entryId is returned."""
        entry = Entry(
            user_id=owner_id,
            title=fields.title,
            notes=fields.notes,
            photo_url=fields.photo_url,
        )
        try:
            db.add(entry)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating entry: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("Entry %d created (userId=%s)", entry.entry_id, owner_id)
        return _to_response(entry)

    async def update_entry(
        self,
        db: AsyncSession,
        entry_id: int,
        fields: EntryFields,
        owner_id: Optional[int],
    ) -> EntryResponse:
        """
        Overwrite title, notes and photoUrl of one entry.

        Identity fields are never written. Concurrent updates: last write wins.
        """
        stmt = (
            _scoped(update(Entry).where(Entry.entry_id == entry_id), owner_id)
            .values(title=fields.title, notes=fields.notes, photo_url=fields.photo_url)
            .returning(Entry)
        )
        try:
            result = await db.execute(stmt)
            entry = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error updating entry %d: %s", entry_id, str(e), exc_info=True)
            raise DatabaseError(context={"entry_id": entry_id})

        if entry is None:
            raise NotFoundError("Entry not found", resource="entry", resource_id=str(entry_id))
        logger.info("Entry %d updated", entry_id)
        return _to_response(entry)

    async def delete_entry(
        self, db: AsyncSession, entry_id: int, owner_id: Optional[int]
    ) -> EntryResponse:
        """Delete one entry and return the row as it was."""
        stmt = _scoped(delete(Entry).where(Entry.entry_id == entry_id), owner_id).returning(Entry)
        try:
            result = await db.execute(stmt)
            entry = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error deleting entry %d: %s", entry_id, str(e), exc_info=True)
            raise DatabaseError(context={"entry_id": entry_id})

        if entry is None:
            raise NotFoundError("Entry not found", resource="entry", resource_id=str(entry_id))
        logger.info("Entry %d deleted", entry_id)
        return _to_response(entry)


# Stateless; one instance serves every request
entry_service = EntryService()

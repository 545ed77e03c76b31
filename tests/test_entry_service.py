"""
Journal Backend — Entry Service Unit Tests
==========================================

What:  Tests for EntryService with a mocked AsyncSession (no real database).

What we test:
    ✅ Rows are mapped to EntryResponse
    ✅ Zero matching rows on read/update/delete raise NotFoundError
    ✅ Created entries are stamped with the owner from the gate
    ✅ The owner predicate is only present in scoped mode
    ✅ Storage failures are wrapped in DatabaseError
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from journal.exceptions import DatabaseError, NotFoundError
from journal.schemas.entry import EntryFields
from journal.services.entry_service import EntryService

FIELDS = EntryFields(title="Trip", notes="Fun", photo_url="http://x/y.jpg")


def result_with(entry):
    result = MagicMock()
    result.scalar_one_or_none.return_value = entry
    return result


def executed_sql(mock_db_session) -> str:
    stmt = mock_db_session.execute.await_args.args[0]
    return str(stmt)


class TestEntryServiceList:

    def setup_method(self):
        self.service = EntryService()

    @pytest.mark.asyncio
    async def test_empty_list_is_not_an_error(self, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = result

        assert await self.service.list_entries(mock_db_session, owner_id=7) == []

    @pytest.mark.asyncio
    async def test_rows_are_mapped(self, mock_db_session, sample_entry):
        result = MagicMock()
        result.scalars.return_value.all.return_value = [sample_entry]
        mock_db_session.execute.return_value = result

        entries = await self.service.list_entries(mock_db_session, owner_id=7)

        assert len(entries) == 1
        assert entries[0].entry_id == 1
        assert entries[0].model_dump(by_alias=True)["photoUrl"] == "http://x/y.jpg"

    @pytest.mark.asyncio
    async def test_scoped_list_filters_by_owner_and_orders_by_id(self, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = result

        await self.service.list_entries(mock_db_session, owner_id=7)

        sql = executed_sql(mock_db_session)
        assert '"userId" =' in sql
        assert 'ORDER BY entries."entryId" ASC' in sql

    @pytest.mark.asyncio
    async def test_unscoped_list_has_no_owner_filter(self, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = result

        await self.service.list_entries(mock_db_session, owner_id=None)

        assert "WHERE" not in executed_sql(mock_db_session)

    @pytest.mark.asyncio
    async def test_storage_failure_is_wrapped(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )
        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_entries(mock_db_session, owner_id=7)
        assert "connection lost" not in exc_info.value.message


class TestEntryServiceRead:

    def setup_method(self):
        self.service = EntryService()

    @pytest.mark.asyncio
    async def test_found(self, mock_db_session, sample_entry):
        mock_db_session.execute.return_value = result_with(sample_entry)

        entry = await self.service.get_entry(mock_db_session, 1, owner_id=7)

        assert entry.title == "Trip"
        assert entry.user_id == 7

    @pytest.mark.asyncio
    async def test_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = result_with(None)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_entry(mock_db_session, 99999, owner_id=7)
        assert exc_info.value.message == "entry not found"

    @pytest.mark.asyncio
    async def test_scoped_read_filters_by_both_ids(self, mock_db_session, sample_entry):
        mock_db_session.execute.return_value = result_with(sample_entry)

        await self.service.get_entry(mock_db_session, 1, owner_id=7)

        sql = executed_sql(mock_db_session)
        assert '"entryId" =' in sql
        assert '"userId" =' in sql


class TestEntryServiceCreate:

    def setup_method(self):
        self.service = EntryService()

    @pytest.mark.asyncio
    async def test_owner_is_stamped_on_new_row(self, mock_db_session):
        async def assign_id():
            added = mock_db_session.add.call_args.args[0]
            added.entry_id = 12

        mock_db_session.flush = AsyncMock(side_effect=assign_id)

        entry = await self.service.create_entry(mock_db_session, FIELDS, owner_id=7)

        added = mock_db_session.add.call_args.args[0]
        assert added.user_id == 7
        assert entry.entry_id == 12
        assert entry.title == "Trip"

    @pytest.mark.asyncio
    async def test_flush_failure_is_wrapped(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk full"))
        )
        with pytest.raises(DatabaseError):
            await self.service.create_entry(mock_db_session, FIELDS, owner_id=7)


class TestEntryServiceUpdateDelete:

    def setup_method(self):
        self.service = EntryService()

    @pytest.mark.asyncio
    async def test_update_returns_updated_row(self, mock_db_session, sample_entry):
        sample_entry.title = "New title"
        mock_db_session.execute.return_value = result_with(sample_entry)

        entry = await self.service.update_entry(mock_db_session, 1, FIELDS, owner_id=7)

        assert entry.title == "New title"
        assert executed_sql(mock_db_session).startswith("UPDATE entries")

    @pytest.mark.asyncio
    async def test_update_with_no_match_is_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = result_with(None)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.update_entry(mock_db_session, 1, FIELDS, owner_id=8)
        assert exc_info.value.message == "Entry not found"

    @pytest.mark.asyncio
    async def test_delete_returns_deleted_row(self, mock_db_session, sample_entry):
        mock_db_session.execute.return_value = result_with(sample_entry)

        entry = await self.service.delete_entry(mock_db_session, 1, owner_id=7)

        assert entry.entry_id == 1
        assert executed_sql(mock_db_session).startswith("DELETE FROM entries")

    @pytest.mark.asyncio
    async def test_delete_with_no_match_is_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = result_with(None)

        with pytest.raises(NotFoundError):
            await self.service.delete_entry(mock_db_session, 1, owner_id=8)

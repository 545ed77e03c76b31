"""
Journal Client — Entry List State
=================================

What:  Decides when the entry list is re-fetched and what the view shows.
Rules:
    - First sync with a signed-in user fetches the full list ("mount").
    - A different user on a later sync fetches again (session changed).
    - invalidate() forces the next sync to fetch, used after create/update/delete.
    - Signed out: no fetch; the list is cleared.
    There is no incremental update and no optimistic write: every refresh is
    a full GET /api/entries.
"""

from typing import Callable, Hashable, List, Optional

import httpx

from journal_client.api import ClientHTTPError, Entry

UNKNOWN_ERROR = "Unknown Error"

_NOT_LOADED = object()


class EntryListState:
    """
    Args:
        fetch: Zero-argument callable returning the current user's entries,
            typically JournalClient.read_entries.
    """

    def __init__(self, fetch: Callable[[], List[Entry]]):
        self._fetch = fetch
        self.entries: List[Entry] = []
        self.error: Optional[str] = None
        self._loaded_for = _NOT_LOADED
        self._stale = True

    def invalidate(self) -> None:
        self._stale = True

    def sync(self, user: Optional[Hashable]) -> bool:
        """
        Bring the list in line with the active session.

        Args:
            user: Identity of the signed-in user (e.g. userId), or None.

        Returns:
            True when a fetch was attempted.
        """
        if user is None:
            self.entries = []
            self.error = None
            self._loaded_for = None
            self._stale = True
            return False

        if not self._stale and self._loaded_for == user:
            return False

        try:
            self.entries = list(self._fetch())
            self.error = None
        except (ClientHTTPError, httpx.HTTPError) as e:
            self.entries = []
            self.error = str(e) or UNKNOWN_ERROR
        self._loaded_for = user
        self._stale = False
        return True

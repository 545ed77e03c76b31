"""
Journal Client — API Data Module
================================

What:  Wraps every journal endpoint as one synchronous HTTP call.
How:   A single httpx.Client per JournalClient; the bearer token from sign-in
       is attached to every later request. Any non-2xx response raises
       ClientHTTPError carrying the status code and the server's `error` text.

Example:
    with JournalClient("http://localhost:8000") as client:
        client.sign_in("alice", "pw")
        entry = client.add_entry({"title": "Trip", "notes": "Fun", "photoUrl": "http://x/y.jpg"})
        client.remove_entry(entry["entryId"])
"""

import logging
from typing import Any, List, Optional, TypedDict

import httpx

logger = logging.getLogger(__name__)


class Entry(TypedDict, total=False):
    entryId: int
    userId: int
    title: str
    notes: str
    photoUrl: str


class ClientHTTPError(Exception):
    """The API answered with a non-success status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"HTTP error! Status: {response.status_code}"


class JournalClient:
    """
    HTTP wrapper for the journal API.

    Args:
        base_url: API root, e.g. http://localhost:8000
        token: Existing session token, if already signed in
        http: Pre-built httpx.Client (tests pass one with a MockTransport)
        timeout: Per-request timeout in seconds when building our own client
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self.token = token
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def __enter__(self) -> "JournalClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        response = self._http.request(method, path, json=json, headers=headers)
        if not response.is_success:
            message = _error_message(response)
            logger.debug("%s %s failed: %d %s", method, path, response.status_code, message)
            raise ClientHTTPError(response.status_code, message)
        return response

    # ── Auth ──────────────────────────────────────────────────────────────

    def sign_up(self, username: str, password: str) -> dict:
        response = self._request(
            "POST", "/api/auth/sign-up", json={"username": username, "password": password}
        )
        return response.json()

    def sign_in(self, username: str, password: str) -> dict:
        """Sign in and keep the returned token for subsequent calls."""
        response = self._request(
            "POST", "/api/auth/sign-in", json={"username": username, "password": password}
        )
        data = response.json()
        self.token = data["token"]
        return data

    def sign_out(self) -> None:
        # Tokens are stateless; forgetting it is all there is to do
        self.token = None

    # ── Entries ───────────────────────────────────────────────────────────

    def read_entries(self) -> List[Entry]:
        return self._request("GET", "/api/entries").json()

    def read_entry(self, entry_id: int) -> Entry:
        return self._request("GET", f"/api/entries/{entry_id}").json()

    def add_entry(self, entry: Entry) -> Entry:
        return self._request("POST", "/api/entries", json=_entry_body(entry)).json()

    def update_entry(self, entry: Entry) -> Entry:
        return self._request(
            "PUT", f"/api/entries/{entry['entryId']}", json=_entry_body(entry)
        ).json()

    def remove_entry(self, entry_id: int) -> None:
        self._request("DELETE", f"/api/entries/{entry_id}")


def _entry_body(entry: Entry) -> dict:
    return {
        "title": entry.get("title"),
        "notes": entry.get("notes"),
        "photoUrl": entry.get("photoUrl"),
    }

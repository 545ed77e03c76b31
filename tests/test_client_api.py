"""
Journal Client — API Data Module Tests
======================================

What:  JournalClient against an httpx.MockTransport (no server).

What we test:
    ✅ Each method hits the right method + path with the right body
    ✅ The token from sign-in is sent as a bearer header afterwards
    ✅ Non-2xx responses raise ClientHTTPError with the server's message,
       or "HTTP error! Status: N" when there is none
"""

import json

import httpx
import pytest

from journal_client.api import ClientHTTPError, JournalClient

ENTRY = {"entryId": 4, "userId": 1, "title": "Trip", "notes": "Fun", "photoUrl": "http://x/y.jpg"}


class Recorder:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, *responses: httpx.Response):
        self.requests = []
        self._responses = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responses.pop(0)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict:
        return json.loads(self.last.content)


def make_client(recorder: Recorder, token=None) -> JournalClient:
    http = httpx.Client(transport=httpx.MockTransport(recorder), base_url="http://api")
    return JournalClient(token=token, http=http)


class TestAuthCalls:

    def test_sign_in_stores_token_for_later_calls(self):
        recorder = Recorder(
            httpx.Response(200, json={"token": "tok", "user": {"userId": 1, "username": "alice"}}),
            httpx.Response(200, json=[]),
        )
        client = make_client(recorder)

        data = client.sign_in("alice", "pw")
        client.read_entries()

        assert data["user"]["username"] == "alice"
        assert recorder.requests[0].url.path == "/api/auth/sign-in"
        assert json.loads(recorder.requests[0].content) == {"username": "alice", "password": "pw"}
        assert "Authorization" not in recorder.requests[0].headers
        assert recorder.last.headers["Authorization"] == "Bearer tok"

    def test_sign_up_posts_credentials(self):
        recorder = Recorder(httpx.Response(201, json={"userId": 1, "username": "alice"}))
        client = make_client(recorder)

        assert client.sign_up("alice", "pw")["userId"] == 1
        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/api/auth/sign-up"

    def test_sign_out_drops_token(self):
        recorder = Recorder(httpx.Response(401, json={"error": "authentication required"}))
        client = make_client(recorder, token="tok")

        client.sign_out()

        with pytest.raises(ClientHTTPError):
            client.read_entries()
        assert "Authorization" not in recorder.last.headers


class TestEntryCalls:

    def test_read_entries(self):
        recorder = Recorder(httpx.Response(200, json=[ENTRY]))
        client = make_client(recorder, token="tok")

        assert client.read_entries() == [ENTRY]
        assert (recorder.last.method, recorder.last.url.path) == ("GET", "/api/entries")

    def test_read_entry(self):
        recorder = Recorder(httpx.Response(200, json=ENTRY))
        client = make_client(recorder, token="tok")

        assert client.read_entry(4)["title"] == "Trip"
        assert recorder.last.url.path == "/api/entries/4"

    def test_add_entry_sends_only_content_fields(self):
        recorder = Recorder(httpx.Response(201, json=ENTRY))
        client = make_client(recorder, token="tok")

        client.add_entry({"title": "Trip", "notes": "Fun", "photoUrl": "http://x/y.jpg", "userId": 9})

        assert recorder.last.method == "POST"
        assert recorder.last_json() == {"title": "Trip", "notes": "Fun", "photoUrl": "http://x/y.jpg"}

    def test_update_entry_uses_its_id(self):
        recorder = Recorder(httpx.Response(200, json=ENTRY))
        client = make_client(recorder, token="tok")

        client.update_entry(ENTRY)

        assert (recorder.last.method, recorder.last.url.path) == ("PUT", "/api/entries/4")
        assert "entryId" not in recorder.last_json()

    def test_remove_entry_accepts_empty_204(self):
        recorder = Recorder(httpx.Response(204))
        client = make_client(recorder, token="tok")

        assert client.remove_entry(4) is None
        assert (recorder.last.method, recorder.last.url.path) == ("DELETE", "/api/entries/4")


class TestErrors:

    def test_server_error_message_is_surfaced(self):
        recorder = Recorder(httpx.Response(404, json={"error": "entry not found"}))
        client = make_client(recorder, token="tok")

        with pytest.raises(ClientHTTPError) as exc_info:
            client.read_entry(99999)

        assert exc_info.value.status_code == 404
        assert str(exc_info.value) == "entry not found"

    def test_non_json_error_falls_back_to_status(self):
        recorder = Recorder(httpx.Response(502, text="<html>Bad Gateway</html>"))
        client = make_client(recorder, token="tok")

        with pytest.raises(ClientHTTPError) as exc_info:
            client.read_entries()

        assert exc_info.value.message == "HTTP error! Status: 502"

    def test_context_manager_closes_transport(self):
        recorder = Recorder()
        with make_client(recorder) as client:
            pass
        assert client._http.is_closed

"""
Journal Client — Streamlit Entry Point
======================================

Run with:
    journal-client                      (console script)
    streamlit run journal_client/app.py

Each browser session gets its own JournalClient and EntryListState in
st.session_state. On every rerun the list state is synced against the
signed-in user, which fetches on first mount and again whenever the user
changes.
"""

import sys
from pathlib import Path

import streamlit as st

from journal_client.api import JournalClient
from journal_client.config import ClientSettings
from journal_client.state import EntryListState
from journal_client.views import auth_page, entry_form_view, entry_list_view, sign_out


def _session_objects():
    if "client" not in st.session_state:
        settings = ClientSettings()
        client = JournalClient(settings.api_url, timeout=settings.request_timeout)
        st.session_state["client"] = client
        st.session_state["list_state"] = EntryListState(client.read_entries)
    return st.session_state["client"], st.session_state["list_state"]


def main() -> None:
    st.set_page_config(page_title="Journal", page_icon="📔")
    client, list_state = _session_objects()

    user = st.session_state.get("user")
    list_state.sync(user["userId"] if user else None)

    if not user:
        auth_page(client)
        return

    st.sidebar.markdown(f"Signed in as **{user['username']}**")
    if st.sidebar.button("Sign out"):
        sign_out(client)
        st.rerun()

    if "editing" in st.session_state:
        entry_form_view(client, list_state)
    else:
        entry_list_view(list_state)


def run() -> None:
    """Console entry point: launch this file under `streamlit run`."""
    from streamlit.web import cli as stcli

    sys.argv = ["streamlit", "run", str(Path(__file__).resolve())]
    sys.exit(stcli.main())


if __name__ == "__main__":
    main()

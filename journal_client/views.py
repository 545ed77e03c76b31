"""
Journal Client — Streamlit Views
================================

What:  Sign-in/sign-up form, entry list, and entry form (new / edit / delete).
How:   Views read and write st.session_state:
           client      JournalClient holding the session token
           user        {"userId", "username"} of the signed-in user, or absent
           list_state  EntryListState for the entry list
           editing     entryId being edited, "new", or absent (list page)
       Every write invalidates the list so the next render re-fetches it.
"""

import streamlit as st

from journal_client.api import ClientHTTPError, Entry, JournalClient
from journal_client.state import UNKNOWN_ERROR, EntryListState


def _message(error: Exception) -> str:
    return str(error) or UNKNOWN_ERROR


# ── Session ───────────────────────────────────────────────────────────────

def auth_page(client: JournalClient) -> None:
    st.title("📔 Journal")

    if st.session_state.get("show_sign_up"):
        sign_up_form(client)
    else:
        sign_in_form(client)


def sign_in_form(client: JournalClient) -> None:
    with st.form("sign_in_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")

    if submitted:
        try:
            result = client.sign_in(username, password)
        except ClientHTTPError as e:
            st.error(f"Sign-in failed: {_message(e)}")
        else:
            st.session_state["user"] = result["user"]
            st.rerun()

    if st.button("Create an account"):
        st.session_state["show_sign_up"] = True
        st.rerun()


def sign_up_form(client: JournalClient) -> None:
    st.subheader("Create an account")
    with st.form("sign_up_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign up")

    if submitted:
        try:
            client.sign_up(username, password)
        except ClientHTTPError as e:
            st.error(f"Sign-up failed: {_message(e)}")
        else:
            st.success("Account created. Sign in to continue.")
            st.session_state["show_sign_up"] = False

    if st.button("← Back to sign in"):
        st.session_state["show_sign_up"] = False
        st.rerun()


def sign_out(client: JournalClient) -> None:
    client.sign_out()
    st.session_state.pop("user", None)
    st.session_state.pop("editing", None)


# ── Entries ───────────────────────────────────────────────────────────────

def entry_list_view(list_state: EntryListState) -> None:
    header, new_col = st.columns([4, 1])
    header.header("Entries")
    if new_col.button("NEW"):
        st.session_state["editing"] = "new"
        st.rerun()

    if list_state.error:
        st.error(f"Error Loading Entries: {list_state.error}")
        return

    if not list_state.entries:
        st.write("There are no entries.")
        return

    for entry in list_state.entries:
        entry_card(entry)


def entry_card(entry: Entry) -> None:
    image_col, text_col = st.columns(2)
    with image_col:
        if entry.get("photoUrl"):
            st.image(entry["photoUrl"], use_container_width=True)
    with text_col:
        st.subheader(entry.get("title", ""))
        st.write(entry.get("notes", ""))
        if st.button("✏️ Edit", key=f"edit_{entry['entryId']}"):
            st.session_state["editing"] = entry["entryId"]
            st.rerun()
    st.divider()


def entry_form_view(client: JournalClient, list_state: EntryListState) -> None:
    editing = st.session_state.get("editing")
    is_new = editing == "new"

    entry: Entry = {}
    if not is_new:
        try:
            entry = client.read_entry(editing)
        except ClientHTTPError as e:
            st.error(f"Error Loading Entry: {_message(e)}")
            if st.button("← Back"):
                st.session_state.pop("editing", None)
                st.rerun()
            return

    st.header("New Entry" if is_new else "Edit Entry")
    if entry.get("photoUrl"):
        st.image(entry["photoUrl"], use_container_width=True)

    with st.form("entry_form"):
        title = st.text_input("Title", value=entry.get("title", ""))
        photo_url = st.text_input("Photo URL", value=entry.get("photoUrl", ""))
        notes = st.text_area("Notes", value=entry.get("notes", ""))
        saved = st.form_submit_button("SAVE")

    if saved:
        draft: Entry = {"title": title, "notes": notes, "photoUrl": photo_url}
        try:
            if is_new:
                client.add_entry(draft)
            else:
                client.update_entry({**draft, "entryId": editing})
        except ClientHTTPError as e:
            st.error(f"Could not save entry: {_message(e)}")
        else:
            list_state.invalidate()
            st.session_state.pop("editing", None)
            st.rerun()

    cancel_col, delete_col = st.columns(2)
    if cancel_col.button("Cancel"):
        st.session_state.pop("editing", None)
        st.rerun()
    if not is_new and delete_col.button("Delete Entry", type="primary"):
        try:
            client.remove_entry(editing)
        except ClientHTTPError as e:
            st.error(f"Could not delete entry: {_message(e)}")
        else:
            list_state.invalidate()
            st.session_state.pop("editing", None)
            st.rerun()

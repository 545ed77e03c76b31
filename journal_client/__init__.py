"""
Journal Client — Browser UI Package
===================================

What:  The user-facing side of the journal.

    ┌─────────────────────────────────────┐
    │  app.py / views.py (Streamlit UI)   │  ← forms, lists, session handling
    ├─────────────────────────────────────┤
    │  state.py (EntryListState)          │  ← when to re-fetch the list
    ├─────────────────────────────────────┤
    │  api.py (JournalClient)             │  ← one HTTP call per operation
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"

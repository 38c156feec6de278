"""Shared pytest fixtures for the feedback dashboard test suite."""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional

import pytest

from feedback_dashboard.config import Settings
from feedback_dashboard.utils.db_connection import QueryError
from feedback_dashboard.utils.queries import TableQuery


class FakeTableClient:
    """In-memory stand-in for TableQueryClient.

    Rows are kept per table; ``fetch`` applies the query's equality filters
    and records every query it receives. Tables listed in ``failures`` raise
    a QueryError, and a table with a ``gates`` entry blocks until the event
    is set.
    """

    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None) -> None:
        self.tables = tables or {}
        self.failures: Dict[str, Exception] = {}
        self.gates: Dict[str, threading.Event] = {}
        self.started: Dict[str, threading.Event] = {}
        self.queries: List[TableQuery] = []
        self._lock = threading.Lock()

    def fetch(self, query: TableQuery) -> List[Dict[str, Any]]:
        with self._lock:
            self.queries.append(query)
            started = self.started.get(query.table)
            gate = self.gates.get(query.table)
        if started is not None:
            started.set()
        if gate is not None:
            gate.wait(timeout=5)
        if query.table in self.failures:
            raise self.failures[query.table]

        rows = self.tables.get(query.table, [])
        for column, value in query.filters:
            rows = [row for row in rows if row.get(column) == value]
        if query.limit is not None:
            start = query.offset or 0
            rows = rows[start:start + query.limit]
        return [dict(row) for row in rows]

    def queries_for(self, table: str) -> List[TableQuery]:
        return [q for q in self.queries if q.table == table]


USERS = [
    {"user_id": "u-1", "email": "alice@example.com", "created_at": "2024-03-02T10:15:00+00:00"},
    {"user_id": "u-2", "email": "bob@example.com", "created_at": "2024-03-01T08:00:00+00:00"},
    {"user_id": "u-3", "email": "carol@example.com", "created_at": None},
]

FEEDBACK = [
    {
        "id": "f-1",
        "user_id": "u-1",
        "created_at": "2024-03-05T14:30:00+00:00",
        "transcript": "put the keys in the drawer",
        "intent": "store_item",
        "item": "keys",
        "location": "drawer",
        "confidence_score": 0.92,
        "action_type": "store",
        "was_correct": True,
        "corrected_item": None,
        "corrected_location": None,
        "corrected_command": None,
        "note": None,
        "audio_url": "https://cdn.example.com/audio/f-1.webm",
    },
    {
        "id": "f-2",
        "user_id": "u-2",
        "created_at": "2024-03-04T09:00:00+00:00",
        "transcript": "where is my passport",
        "intent": "find_item",
        "item": "passport",
        "location": None,
        "confidence_score": None,
        "action_type": "find",
        "was_correct": False,
        "corrected_item": "passport",
        "corrected_location": "safe",
        "corrected_command": "find passport",
        "note": "misheard location",
        "audio_url": None,
    },
]

ITEMS = [
    {"id": "i-1", "user_id": "u-1", "item_name": "keys", "location": "drawer",
     "notes": "spare set", "created_at": "2024-03-05T14:30:00+00:00"},
    {"id": "i-2", "user_id": "u-2", "item_name": "passport", "location": "safe",
     "notes": None, "created_at": "2024-03-04T09:00:00+00:00"},
]


@pytest.fixture
def fake_client() -> FakeTableClient:
    return FakeTableClient({
        "user_profiles": [dict(row) for row in USERS],
        "transcript_feedback": [dict(row) for row in FEEDBACK],
        "stored_items": [dict(row) for row in ITEMS],
    })


@pytest.fixture
def failing_error() -> QueryError:
    return QueryError("permission denied", table="transcript_feedback", status_code=401, code="42501")


@pytest.fixture
def settings() -> Settings:
    return Settings(supabase_url="https://project.supabase.co", supabase_key="anon-key")


def collect_text(component: Any) -> str:
    """Concatenate every string found in a Dash component tree."""
    if component is None:
        return ""
    if isinstance(component, (str, int, float)):
        return str(component)
    if isinstance(component, (list, tuple)):
        return "".join(collect_text(child) for child in component)
    return collect_text(getattr(component, "children", None))


@pytest.fixture
def text_of():
    return collect_text

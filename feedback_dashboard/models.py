"""
Read-only records mirrored from the remote store
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


def _known_fields(cls, row):
    names = {f.name for f in fields(cls)}
    return {key: value for key, value in row.items() if key in names}


class _Record:
    @classmethod
    def from_row(cls, row: Dict[str, Any]):
        """Build a record from a result row, ignoring columns it does not define"""
        return cls(**_known_fields(cls, row))


@dataclass(frozen=True)
class UserProfile(_Record):
    user_id: str
    email: str
    created_at: Optional[str] = None


@dataclass(frozen=True)
class FeedbackRecord(_Record):
    id: str
    user_id: str
    created_at: Optional[str] = None
    transcript: Optional[str] = None
    intent: Optional[str] = None
    item: Optional[str] = None
    location: Optional[str] = None
    confidence_score: Optional[float] = None
    action_type: Optional[str] = None
    was_correct: Optional[bool] = None
    corrected_item: Optional[str] = None
    corrected_location: Optional[str] = None
    corrected_command: Optional[str] = None
    note: Optional[str] = None
    audio_url: Optional[str] = None


@dataclass(frozen=True)
class StoredItem(_Record):
    id: str
    item_name: str
    location: str
    notes: Optional[str] = None
    created_at: Optional[str] = None
    user_id: Optional[str] = None

"""
Read queries issued by the dashboard
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

USER_PROFILES_TABLE = 'user_profiles'
FEEDBACK_TABLE = 'transcript_feedback'
STORED_ITEMS_TABLE = 'stored_items'

RECENT_USERS_LIMIT = 10


@dataclass(frozen=True)
class TableQuery:
    """A filtered, ordered and optionally limited read against one table"""

    table: str
    columns: str = '*'
    filters: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)
    order_by: Optional[str] = None
    ascending: bool = True
    limit: Optional[int] = None
    offset: Optional[int] = None


def recent_users_query():
    return TableQuery(
        table=USER_PROFILES_TABLE,
        columns='user_id, email, created_at',
        order_by='created_at',
        ascending=False,
        limit=RECENT_USERS_LIMIT,
    )


def all_users_query():
    return TableQuery(
        table=USER_PROFILES_TABLE,
        columns='user_id, email',
        order_by='email',
    )


def _page_bounds(page, page_size):
    if page_size is None:
        return None, None
    return page_size, page * page_size


def feedback_query(user_id, page=0, page_size=None):
    """Feedback for one user, newest first; unbounded unless page_size is given"""
    limit, offset = _page_bounds(page, page_size)
    return TableQuery(
        table=FEEDBACK_TABLE,
        filters=(('user_id', user_id),),
        order_by='created_at',
        ascending=False,
        limit=limit,
        offset=offset,
    )


def items_query(user_id, page=0, page_size=None):
    """Stored items for one user, newest first; unbounded unless page_size is given"""
    limit, offset = _page_bounds(page, page_size)
    return TableQuery(
        table=STORED_ITEMS_TABLE,
        filters=(('user_id', user_id),),
        order_by='created_at',
        ascending=False,
        limit=limit,
        offset=offset,
    )

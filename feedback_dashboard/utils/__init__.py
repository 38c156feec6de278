"""
Utility functions for the feedback dashboard
"""

from .db_connection import (
    QueryError,
    TableQueryClient,
    get_table_client,
)
from .queries import (
    TableQuery,
    all_users_query,
    feedback_query,
    items_query,
    recent_users_query,
)

__all__ = [
    'QueryError',
    'TableQueryClient',
    'get_table_client',
    'TableQuery',
    'all_users_query',
    'feedback_query',
    'items_query',
    'recent_users_query',
]

"""
Reusable dashboard components

Pure functions from controller state to Dash components, shared by the
pages of the dashboard.
"""

from .records import (
    LOADING_TEXT,
    SELECT_PLACEHOLDER,
    feedback_entry,
    feedback_list,
    items_table,
    latest_users_strip,
    status_message,
    user_options,
)

__all__ = [
    'LOADING_TEXT',
    'SELECT_PLACEHOLDER',
    'feedback_entry',
    'feedback_list',
    'items_table',
    'latest_users_strip',
    'status_message',
    'user_options',
]

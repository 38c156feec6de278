"""
Feedback Dashboard Pages
"""

from . import feedback_viewer

__all__ = [
    'feedback_viewer'
]

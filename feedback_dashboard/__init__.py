"""
Transcript Feedback Dashboard
"""

__version__ = '0.1.0'

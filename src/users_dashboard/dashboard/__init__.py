"""
Dashboard Module

Provides the dashboard state, its stores and text rendering.
"""

from .dashboard import Dashboard
from .state import DashboardState, PostRequest
from .stores import PostStore, SelectionController, Session, UserStore

__all__ = [
    "Dashboard",
    "DashboardState",
    "PostRequest",
    "PostStore",
    "SelectionController",
    "Session",
    "UserStore",
]

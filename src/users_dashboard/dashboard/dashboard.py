"""
Dashboard Module

Composition root wiring the user store, selection controller and post
store to one fetch gateway and one shared session state.
"""

import asyncio
import logging
from typing import Optional

from ..api.client import FetchGateway
from .render import render_dashboard
from .state import DashboardState
from .stores import PostStore, SelectionController, Session, UserStore


logger = logging.getLogger(__name__)


class Dashboard:
    """
    Users and posts dashboard.

    Typical use::

        async with FetchGateway() as gateway:
            dashboard = Dashboard(gateway)
            await dashboard.start()
            dashboard.search("bret")
            await dashboard.select(1)
            print(dashboard.render())
    """

    def __init__(self, gateway: FetchGateway):
        self.session = Session()
        self.gateway = gateway
        self.users = UserStore(self.session, gateway)
        self.posts = PostStore(self.session)
        self.selection = SelectionController(self.session, gateway)
        self.pending: Optional["asyncio.Task[None]"] = None
        logger.info("Dashboard initialized")

    @property
    def state(self) -> DashboardState:
        return self.session.state

    async def start(self) -> bool:
        """
        Load the user list.

        Returns:
            True if the users were loaded, False if loading failed.
        """
        await self.users.load_all()
        return self.state.users_loaded

    def search(self, query: str) -> None:
        self.users.apply_filter(query)

    def sort(self, key: str) -> None:
        self.users.apply_sort(key)

    def select(self, user_id: int) -> "asyncio.Task[None]":
        """
        Select a user by id and start loading its posts.

        The returned task may be awaited; it never raises for fetch errors.
        """
        self.pending = self.selection.select_by_id(user_id)
        return self.pending

    async def wait_for_posts(self) -> None:
        """Wait until the latest posts request has completed."""
        if self.pending is not None:
            await self.pending

    def render(self) -> str:
        return render_dashboard(self.state)

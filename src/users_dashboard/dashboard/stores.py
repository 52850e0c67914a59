"""
Dashboard Stores

Thin stateful wrappers around the pure transitions in ``state``. All three
stores share one ``Session`` so they always observe the same state value.
"""

import asyncio
import logging
from typing import FrozenSet, List, Optional, Set, Tuple

from ..api.client import FetchError, FetchGateway
from ..api.models import Post, User
from ..config import config
from . import state as transitions
from .state import DashboardState, PostRequest


logger = logging.getLogger(__name__)


class Session:
    """Holder of the current DashboardState for one dashboard lifetime."""

    def __init__(self, state: Optional[DashboardState] = None):
        self.state = state or DashboardState()


class UserStore:
    """
    Owner of the fetched user set and the filtered/sorted view over it.
    """

    def __init__(self, session: Session, gateway: FetchGateway):
        self._session = session
        self._gateway = gateway
        self._load_started = False

    @property
    def users(self) -> Tuple[User, ...]:
        return self._session.state.users

    @property
    def visible_users(self) -> Tuple[User, ...]:
        return self._session.state.visible_users

    @property
    def loading(self) -> bool:
        return self._session.state.loading_users

    @property
    def error(self) -> Optional[str]:
        return self._session.state.users_error

    async def load_all(self) -> List[User]:
        """
        Fetch the user list once.

        On failure the users error is set and the list stays empty; the
        error is not re-raised and no retry happens. Later calls are
        ignored.

        Returns:
            The fetched users (empty on failure or on a repeated call).
        """
        if self._load_started:
            logger.info("Users already requested; ignoring repeated load")
            return list(self.users)
        self._load_started = True

        self._session.state = transitions.start_loading_users(self._session.state)
        try:
            users = await self._gateway.fetch_users()
        except FetchError as e:
            logger.error(f"Failed to load users: {e}")
            self._session.state = transitions.users_failed(
                self._session.state, config.dashboard.users_error_message
            )
            return []

        self._session.state = transitions.load_users(self._session.state, users)
        logger.info(f"Loaded {len(users)} users")
        return users

    def apply_filter(self, query: str) -> None:
        """Show users whose name or email contains ``query`` (case-insensitive)."""
        self._session.state = transitions.filter_view(self._session.state, query)
        logger.debug(f"Filter {query!r} -> {len(self.visible_users)} users")

    def apply_sort(self, key: str) -> None:
        """Sort the current view by ``key`` (``name`` or ``company.name``)."""
        self._session.state = transitions.sort_view(self._session.state, key)
        logger.debug(f"Sorted view by {key}")


class PostStore:
    """Read-only view of the posts of the selected user."""

    def __init__(self, session: Session):
        self._session = session

    @property
    def posts(self) -> Tuple[Post, ...]:
        return self._session.state.posts

    @property
    def loading(self) -> bool:
        return self._session.state.loading_posts

    @property
    def error(self) -> Optional[str]:
        return self._session.state.posts_error


class SelectionController:
    """
    Tracks the selected user and drives the dependent posts fetch.

    Each selection opens a new request; a response is applied only while
    its request is still the current one, so a slow earlier fetch can never
    overwrite the posts of a later selection.
    """

    def __init__(self, session: Session, gateway: FetchGateway):
        self._session = session
        self._gateway = gateway
        self._tasks: Set["asyncio.Task[None]"] = set()

    @property
    def selected_user_id(self) -> Optional[int]:
        return self._session.state.selected_user_id

    @property
    def selected_user(self) -> Optional[User]:
        return self._session.state.selected_user

    @property
    def in_flight(self) -> FrozenSet["asyncio.Task[None]"]:
        """Posts fetches that have not completed yet."""
        return frozenset(self._tasks)

    def select(self, user: User) -> "asyncio.Task[None]":
        """
        Select ``user`` and start fetching its posts.

        Must be called from a running event loop. Selecting the same user
        again always issues a fresh request.

        Returns:
            The task performing the fetch.
        """
        self._session.state, request = transitions.select(self._session.state, user)
        logger.info(f"Selected user {user.id} (request #{request.number})")
        task = asyncio.get_running_loop().create_task(self._load_posts(request))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def select_by_id(self, user_id: int) -> "asyncio.Task[None]":
        """
        Select a user from the full fetched set by id.

        Raises:
            KeyError: If no fetched user has this id.
        """
        user = transitions.find_user(self._session.state.users, user_id)
        if user is None:
            raise KeyError(user_id)
        return self.select(user)

    async def _load_posts(self, request: PostRequest) -> None:
        try:
            posts = await self._gateway.fetch_posts_by_user(request.user_id)
        except FetchError as e:
            if not transitions.is_current(self._session.state, request):
                logger.debug(f"Dropping stale failure for request #{request.number}")
                return
            logger.warning(f"Failed to load posts for user {request.user_id}: {e}")
            self._session.state = transitions.posts_failed(
                self._session.state, request, config.dashboard.posts_error_message
            )
            return

        if not transitions.is_current(self._session.state, request):
            logger.debug(f"Dropping stale posts for request #{request.number}")
            return
        self._session.state = transitions.posts_resolved(self._session.state, request, posts)
        logger.info(f"Loaded {len(posts)} posts for user {request.user_id}")

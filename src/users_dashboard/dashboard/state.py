"""
Dashboard State

The whole dashboard is one immutable ``DashboardState`` value. Every user
action and every network completion is a pure function from the old state
to a new one, so behaviour can be tested without any rendering surface or
event loop.
"""

import locale
import unicodedata
from dataclasses import dataclass, replace
from typing import Any, Iterable, Optional, Sequence, Tuple

from ..api.models import Post, User
from ..config import config


@dataclass(frozen=True)
class PostRequest:
    """Identity of one posts fetch: the user it was issued for and its sequence number."""
    user_id: int
    number: int


@dataclass(frozen=True)
class DashboardState:
    """Users, view, selection and posts of one dashboard session."""
    # Users
    users: Tuple[User, ...] = ()
    users_loaded: bool = False
    loading_users: bool = False
    users_error: Optional[str] = None

    # View
    query: str = ""
    sort_key: str = config.dashboard.default_sort_key
    visible_users: Tuple[User, ...] = ()

    # Selection
    selected_user_id: Optional[int] = None

    # Posts
    posts: Tuple[Post, ...] = ()
    loading_posts: bool = False
    posts_error: Optional[str] = None
    current_request: Optional[PostRequest] = None
    requests_issued: int = 0

    @property
    def selected_user(self) -> Optional[User]:
        """The selected user, looked up in the full fetched set."""
        if self.selected_user_id is None:
            return None
        return find_user(self.users, self.selected_user_id)


def find_user(users: Iterable[User], user_id: int) -> Optional[User]:
    for user in users:
        if user.id == user_id:
            return user
    return None


def resolve_field(user: Any, path: str) -> str:
    """
    Resolve a dotted field path such as ``company.name``.

    Missing or null links anywhere along the path resolve to ``""``.
    """
    value = user
    for part in path.split("."):
        if value is None:
            return ""
        if isinstance(value, dict):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def collation_key(value: str) -> Tuple[str, str, str]:
    """
    Locale collation key.

    Letters are compared on their base form first, so accents and case only
    break ties ("Émile" sorts with "Emile", before "Zoe").
    """
    folded = value.casefold()
    base = "".join(
        char for char in unicodedata.normalize("NFKD", folded)
        if not unicodedata.combining(char)
    )
    return (locale.strxfrm(base), locale.strxfrm(folded), locale.strxfrm(value))


def user_matches(user: User, query: str) -> bool:
    """Case-insensitive substring match on name or email."""
    needle = query.lower()
    if not needle:
        return True
    for text in (user.name, user.email):
        if isinstance(text, str) and needle in text.lower():
            return True
    return False


def sort_users(users: Sequence[User], key: str) -> Tuple[User, ...]:
    """Sort users by the field at ``key``. The sort is stable."""
    return tuple(sorted(users, key=lambda user: collation_key(resolve_field(user, key))))


# Transitions -----------------------------------------------------------

def start_loading_users(state: DashboardState) -> DashboardState:
    return replace(state, loading_users=True, users_error=None)


def load_users(state: DashboardState, users: Sequence[User]) -> DashboardState:
    """Store the fetched set; the view starts as the full set in API order."""
    fetched = tuple(users)
    return replace(
        state,
        users=fetched,
        users_loaded=True,
        loading_users=False,
        users_error=None,
        visible_users=tuple(u for u in fetched if user_matches(u, state.query)),
    )


def users_failed(state: DashboardState, message: str) -> DashboardState:
    return replace(
        state,
        users=(),
        visible_users=(),
        users_loaded=False,
        loading_users=False,
        users_error=message,
    )


def filter_view(state: DashboardState, query: str) -> DashboardState:
    """Recompute the view from the full set, keeping API order."""
    query = query.lower()
    return replace(
        state,
        query=query,
        visible_users=tuple(u for u in state.users if user_matches(u, query)),
    )


def sort_view(state: DashboardState, key: str) -> DashboardState:
    """
    Sort the current view by ``key``.

    Raises:
        ValueError: If ``key`` is not a supported sort key.
    """
    if key not in config.dashboard.sort_keys:
        raise ValueError(
            f"Unsupported sort key {key!r}; expected one of {config.dashboard.sort_keys}"
        )
    return replace(state, sort_key=key, visible_users=sort_users(state.visible_users, key))


def select(state: DashboardState, user: User) -> Tuple[DashboardState, PostRequest]:
    """
    Select ``user`` and open a new posts request for it.

    Previous posts and any posts error are discarded immediately. The
    returned request becomes the only one whose result will be applied.

    Raises:
        ValueError: If the user is not part of the fetched set.
    """
    if find_user(state.users, user.id) is None:
        raise ValueError(f"User {user.id} is not in the fetched user set")

    request = PostRequest(user_id=user.id, number=state.requests_issued + 1)
    new_state = replace(
        state,
        selected_user_id=user.id,
        posts=(),
        loading_posts=True,
        posts_error=None,
        current_request=request,
        requests_issued=request.number,
    )
    return new_state, request


def is_current(state: DashboardState, request: PostRequest) -> bool:
    """True if ``request`` still belongs to the current selection."""
    return (
        state.current_request == request
        and state.selected_user_id == request.user_id
    )


def posts_resolved(
    state: DashboardState,
    request: PostRequest,
    posts: Sequence[Post]
) -> DashboardState:
    """Apply fetched posts; stale results leave the state untouched."""
    if not is_current(state, request):
        return state
    return replace(state, posts=tuple(posts), loading_posts=False, posts_error=None)


def posts_failed(
    state: DashboardState,
    request: PostRequest,
    message: str
) -> DashboardState:
    """Record a posts failure; stale failures leave the state untouched."""
    if not is_current(state, request):
        return state
    return replace(state, posts=(), loading_posts=False, posts_error=message)

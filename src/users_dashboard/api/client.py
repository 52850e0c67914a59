"""
API Client Module

Async HTTP gateway for the two read operations the dashboard needs:
listing users and listing the posts of one user. Every failure, whether
transport, status code or payload shape, is collapsed into one error kind
per operation.
"""

import logging
from typing import Any, Callable, List, Optional, TypeVar

import httpx

from ..config import config
from .models import Post, User


logger = logging.getLogger(__name__)

T = TypeVar("T")


class FetchError(RuntimeError):
    """Generic failure of a remote read."""


class UsersLoadError(FetchError):
    """The user list could not be loaded."""


class PostsLoadError(FetchError):
    """The posts of a user could not be loaded."""


class FetchGateway:
    """
    HTTP gateway for the JSONPlaceholder API.

    Features:
    - Async requests over a shared httpx.AsyncClient
    - Configurable timeout
    - Single failure kind per operation

    No retries are attempted; the caller decides what a failure means.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the gateway.

        Args:
            base_url: API root (uses config default if None).
            client: Optional pre-built client. A client passed in here is
                owned by the caller and is not closed by ``aclose``.
        """
        self.base_url = (base_url or config.api.base_url).rstrip("/")
        self.timeout = config.api.timeout_seconds
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self.timeout)
        logger.info(f"FetchGateway initialized (base_url: {self.base_url})")

    async def __aenter__(self) -> "FetchGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this gateway created it."""
        if self._owns_client:
            await self._client.aclose()

    async def fetch_users(self) -> List[User]:
        """
        Fetch every user.

        Returns:
            List of User objects in API order.

        Raises:
            UsersLoadError: If the request or parsing fails.
        """
        url = f"{self.base_url}{config.api.users_endpoint}"
        users = await self._get_list(url, None, User.from_json, UsersLoadError)
        logger.info(f"Fetched {len(users)} users successfully")
        return users

    async def fetch_posts_by_user(self, user_id: int) -> List[Post]:
        """
        Fetch the posts written by one user.

        The server already filters by ``userId``; the result is returned
        as-is.

        Args:
            user_id: Id of the user whose posts are wanted.

        Returns:
            List of Post objects.

        Raises:
            PostsLoadError: If the request or parsing fails.
        """
        url = f"{self.base_url}{config.api.posts_endpoint}"
        posts = await self._get_list(
            url, {"userId": user_id}, Post.from_json, PostsLoadError
        )
        logger.info(f"Fetched {len(posts)} posts for user {user_id}")
        return posts

    async def test_connection(self) -> bool:
        """Check that the API answers the users endpoint."""
        try:
            await self.fetch_users()
            return True
        except FetchError as e:
            logger.warning(f"API connection test failed: {e}")
            return False

    async def _get_list(
        self,
        url: str,
        params: Optional[dict],
        parse: Callable[[Any], T],
        error_cls: type
    ) -> List[T]:
        """
        GET a JSON array and parse each element.

        Args:
            url: Endpoint URL.
            params: Query parameters.
            parse: Converter applied to each array element.
            error_cls: FetchError subclass raised on any failure.
        """
        logger.debug(f"GET {url} params={params}")

        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.warning(f"HTTP error fetching {url}: {e}")
            raise error_cls(str(e)) from e
        except ValueError as e:
            logger.warning(f"Malformed JSON from {url}: {e}")
            raise error_cls(f"Malformed response body: {e}") from e

        if not isinstance(data, list):
            logger.warning(f"Unexpected payload from {url}: {type(data).__name__}")
            raise error_cls(f"Unexpected API response format: {type(data).__name__}")

        try:
            return [parse(item) for item in data]
        except (KeyError, TypeError) as e:
            logger.warning(f"Unparseable item from {url}: {e!r}")
            raise error_cls(f"Unexpected item in response: {e!r}") from e

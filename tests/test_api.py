"""
Tests for API Models and Fetch Gateway

HTTP traffic is served by httpx.MockTransport, so no network is needed.
"""

import asyncio
import pytest
import sys
from pathlib import Path

import httpx

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from users_dashboard.api.client import (
    FetchError,
    FetchGateway,
    PostsLoadError,
    UsersLoadError,
)
from users_dashboard.api.models import Post, User
from users_dashboard.config import config


USERS_JSON = [
    {
        "id": 1,
        "name": "Leanne Graham",
        "username": "Bret",
        "email": "Sincere@april.biz",
        "address": {
            "street": "Kulas Light",
            "suite": "Apt. 556",
            "city": "Gwenborough",
            "zipcode": "92998-3874",
            "geo": {"lat": "-37.3159", "lng": "81.1496"},
        },
        "phone": "1-770-736-8031 x56442",
        "website": "hildegard.org",
        "company": {
            "name": "Romaguera-Crona",
            "catchPhrase": "Multi-layered client-server neural-net",
            "bs": "harness real-time e-markets",
        },
    },
    {"id": 2, "name": "Antonette", "email": "x@y.com"},
]

POSTS_JSON = [
    {"id": 10, "userId": 2, "title": "t", "body": "b"},
    {"id": 11, "userId": 2, "title": "second", "body": "more"},
]


def run_with_handler(handler, coro_factory):
    """Run ``coro_factory(gateway)`` against a mocked transport."""
    async def scenario():
        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport) as client:
            gateway = FetchGateway(base_url="https://api.test", client=client)
            return await coro_factory(gateway)

    return asyncio.run(scenario())


class TestModels:
    """Tests for parsing API payloads."""

    def test_user_from_full_json(self):
        """Test that every field of a full user is parsed."""
        user = User.from_json(USERS_JSON[0])

        assert user.id == 1
        assert user.name == "Leanne Graham"
        assert user.username == "Bret"
        assert user.address.city == "Gwenborough"
        assert user.address.format_line() == (
            "Kulas Light, Apt. 556, Gwenborough, 92998-3874"
        )
        assert user.company.name == "Romaguera-Crona"
        assert user.company.catch_phrase == "Multi-layered client-server neural-net"

    def test_user_optional_fields_absent(self):
        """Test that only id is required."""
        user = User.from_json({"id": 7})

        assert user.id == 7
        assert user.name is None
        assert user.email is None
        assert user.address is None
        assert user.company is None

    def test_user_requires_id(self):
        """Test that a user without id is rejected."""
        with pytest.raises(KeyError):
            User.from_json({"name": "No Id"})

    def test_user_is_immutable(self):
        """Test that users cannot be modified after parsing."""
        user = User.from_json(USERS_JSON[1])

        with pytest.raises(AttributeError):
            user.name = "Changed"

    def test_post_from_json(self):
        """Test that posts map userId to user_id."""
        post = Post.from_json(POSTS_JSON[0])

        assert post == Post(id=10, user_id=2, title="t", body="b")


class TestFetchGateway:
    """Tests for the async HTTP gateway."""

    def test_initialization_defaults(self):
        """Test that the gateway uses the configured base URL."""
        async def scenario():
            async with FetchGateway() as gateway:
                return gateway.base_url

        assert asyncio.run(scenario()) == config.api.base_url

    def test_fetch_users(self):
        """Test fetching and parsing the user list."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=USERS_JSON)

        users = run_with_handler(handler, lambda gw: gw.fetch_users())

        assert [u.id for u in users] == [1, 2]
        assert all(isinstance(u, User) for u in users)
        assert seen[0].method == "GET"
        assert str(seen[0].url) == "https://api.test/users"

    def test_fetch_posts_by_user_sends_user_id(self):
        """Test that posts are requested with the userId query parameter."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=POSTS_JSON)

        posts = run_with_handler(handler, lambda gw: gw.fetch_posts_by_user(2))

        assert [p.id for p in posts] == [10, 11]
        assert seen[0].url.path == "/posts"
        assert seen[0].url.params["userId"] == "2"

    def test_posts_are_not_refiltered(self):
        """Test that the gateway returns the server's posts as-is."""
        payload = POSTS_JSON + [{"id": 99, "userId": 5, "title": "x", "body": "y"}]

        posts = run_with_handler(
            lambda request: httpx.Response(200, json=payload),
            lambda gw: gw.fetch_posts_by_user(2),
        )

        assert len(posts) == 3

    @pytest.mark.parametrize("response", [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(404),
        httpx.Response(200, content=b"<html>not json</html>"),
        httpx.Response(200, json={"users": []}),
        httpx.Response(200, json=[{"name": "missing id"}]),
        httpx.Response(200, json=["not an object"]),
    ])
    def test_users_failures_collapse_to_one_error(self, response):
        """Test that status, body and shape problems all raise UsersLoadError."""
        with pytest.raises(UsersLoadError):
            run_with_handler(lambda request: response, lambda gw: gw.fetch_users())

    def test_transport_error_raises_posts_load_error(self):
        """Test that connection failures raise PostsLoadError."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(PostsLoadError) as excinfo:
            run_with_handler(handler, lambda gw: gw.fetch_posts_by_user(1))

        assert isinstance(excinfo.value, FetchError)

    def test_connection_check(self):
        """Test that test_connection reports success and failure as bool."""
        ok = run_with_handler(
            lambda request: httpx.Response(200, json=[]),
            lambda gw: gw.test_connection(),
        )
        failed = run_with_handler(
            lambda request: httpx.Response(503),
            lambda gw: gw.test_connection(),
        )

        assert ok is True
        assert failed is False

    def test_injected_client_is_not_closed(self):
        """Test that aclose leaves a caller-owned client open."""
        async def scenario():
            transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[]))
            async with httpx.AsyncClient(transport=transport) as client:
                gateway = FetchGateway(client=client)
                await gateway.aclose()
                return client.is_closed

        assert asyncio.run(scenario()) is False


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])

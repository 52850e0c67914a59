"""Shared fixtures: sample users and in-memory fetch gateways."""

import asyncio
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from users_dashboard.api.client import PostsLoadError, UsersLoadError
from users_dashboard.api.models import Address, Company, Post, User


class FakeGateway:
    """Gateway answering from memory; every call is recorded."""

    def __init__(self, users=None, posts=None, fail_users=False, fail_posts_for=()):
        self.users = list(users or [])
        self.posts = dict(posts or {})
        self.fail_users = fail_users
        self.fail_posts_for = set(fail_posts_for)
        self.user_calls = 0
        self.post_calls = []
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True

    async def fetch_users(self):
        self.user_calls += 1
        if self.fail_users:
            raise UsersLoadError("network unreachable")
        return list(self.users)

    async def fetch_posts_by_user(self, user_id):
        self.post_calls.append(user_id)
        if user_id in self.fail_posts_for:
            raise PostsLoadError("bad status")
        return list(self.posts.get(user_id, []))


class ControlledGateway(FakeGateway):
    """Gateway whose post fetches complete only when the test releases them."""

    def __init__(self, users=None):
        super().__init__(users=users)
        self._pending = {}

    def _future(self, user_id):
        if user_id not in self._pending:
            self._pending[user_id] = asyncio.get_running_loop().create_future()
        return self._pending[user_id]

    async def fetch_posts_by_user(self, user_id):
        self.post_calls.append(user_id)
        return await self._future(user_id)

    def resolve(self, user_id, posts):
        self._future(user_id).set_result(list(posts))

    def fail(self, user_id):
        self._future(user_id).set_exception(PostsLoadError("timed out"))


@pytest.fixture
def sample_users():
    """Users in API order, including ones with missing optional fields."""
    return [
        User(id=1, name="Bret", email="Sincere@april.biz",
             address=Address("Kulas Light", "Apt. 556", "Gwenborough", "92998-3874"),
             company=Company(name="Romaguera-Crona")),
        User(id=2, name="Antonette", email="x@y.com",
             company=Company(name="Deckow-Crist")),
        User(id=3, name="Clementine", email=None,
             company=Company(name="Abernathy Group")),
        User(id=4, name=None, email="nameless@bret.org"),
        User(id=5, name="patricia", email="p@kory.org",
             company=Company(name=None)),
    ]


@pytest.fixture
def sample_posts():
    return {
        1: [Post(id=1, user_id=1, title="first", body="one")],
        2: [Post(id=10, user_id=2, title="t", body="b")],
    }

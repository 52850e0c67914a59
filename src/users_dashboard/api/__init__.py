"""
API Client Module

Provides the async HTTP gateway for fetching users and posts.
"""

from .client import FetchError, FetchGateway, PostsLoadError, UsersLoadError
from .models import Address, Company, Post, User

__all__ = [
    "Address",
    "Company",
    "FetchError",
    "FetchGateway",
    "Post",
    "PostsLoadError",
    "User",
    "UsersLoadError",
]

"""
API Data Models

Immutable records for the users and posts returned by the API.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Address:
    """Postal address of a user."""
    street: Optional[str] = None
    suite: Optional[str] = None
    city: Optional[str] = None
    zipcode: Optional[str] = None

    def format_line(self) -> str:
        """Format as a single comma separated line."""
        parts = (self.street, self.suite, self.city, self.zipcode)
        return ", ".join(part or "" for part in parts)


@dataclass(frozen=True)
class Company:
    """Employer of a user."""
    name: Optional[str] = None
    catch_phrase: Optional[str] = None
    bs: Optional[str] = None


@dataclass(frozen=True)
class User:
    """Represents a user from the API."""
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    address: Optional[Address] = None
    company: Optional[Company] = None

    @classmethod
    def from_json(cls, item: Dict[str, Any]) -> "User":
        """
        Build a User from one element of the ``/users`` payload.

        Only ``id`` is required; every other field may be absent.

        Raises:
            KeyError: If ``id`` is missing.
            TypeError: If ``item`` is not a mapping.
        """
        if not isinstance(item, dict):
            raise TypeError(f"Expected a JSON object, got {type(item).__name__}")

        address = item.get("address")
        company = item.get("company")

        return cls(
            id=item["id"],
            name=item.get("name"),
            email=item.get("email"),
            username=item.get("username"),
            phone=item.get("phone"),
            website=item.get("website"),
            address=Address(
                street=address.get("street"),
                suite=address.get("suite"),
                city=address.get("city"),
                zipcode=address.get("zipcode"),
            ) if isinstance(address, dict) else None,
            company=Company(
                name=company.get("name"),
                catch_phrase=company.get("catchPhrase"),
                bs=company.get("bs"),
            ) if isinstance(company, dict) else None,
        )


@dataclass(frozen=True)
class Post:
    """Represents a post from the API."""
    id: int
    user_id: int
    title: str
    body: str

    @classmethod
    def from_json(cls, item: Dict[str, Any]) -> "Post":
        """Build a Post from one element of the ``/posts`` payload."""
        if not isinstance(item, dict):
            raise TypeError(f"Expected a JSON object, got {type(item).__name__}")

        return cls(
            id=item["id"],
            user_id=item["userId"],
            title=item.get("title", ""),
            body=item.get("body", ""),
        )

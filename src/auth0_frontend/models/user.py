"""User data models for Auth0 user management."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .parsing import drop_empty, ensure_mapping, parse_datetime, require_field


@dataclass
class UserIdentity:
    """Represents an Auth0 user identity."""

    connection: str
    user_id: str
    provider: str
    is_social: bool = False
    profile_data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_auth0_data(cls, data: dict[str, Any]) -> "UserIdentity":
        data = ensure_mapping(data, "identity")
        return cls(
            connection=require_field(data, "connection", "identity"),
            user_id=str(require_field(data, "user_id", "identity")),
            provider=require_field(data, "provider", "identity"),
            is_social=bool(data.get("isSocial", False)),
            profile_data=data.get("profileData") or {},
        )


@dataclass
class User:
    """Represents an Auth0 user with all relevant data."""

    user_id: str
    email: str | None = None
    connection: str | None = None
    identities: list[UserIdentity] = field(default_factory=list)
    blocked: bool = False
    last_login: datetime | None = None
    last_ip: str | None = None
    logins_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    email_verified: bool = False
    username: str | None = None
    phone_number: str | None = None
    phone_verified: bool = False
    picture: str | None = None
    nickname: str | None = None
    name: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    app_metadata: dict[str, Any] = field(default_factory=dict)
    user_metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_auth0_data(cls, data: dict[str, Any]) -> "User":
        """Create a User instance from Auth0 API response data.

        Args:
            data: Auth0 user data from API response

        Returns:
            User: User instance with parsed data

        Raises:
            ValidationError: If ``user_id`` or an identity field is missing
        """
        data = ensure_mapping(data, "user")
        user_id = require_field(data, "user_id", "user")
        identities = [
            UserIdentity.from_auth0_data(identity)
            for identity in data.get("identities") or []
        ]

        return cls(
            user_id=str(user_id),
            email=data.get("email"),
            connection=identities[0].connection if identities else None,
            identities=identities,
            blocked=bool(data.get("blocked", False)),
            last_login=parse_datetime(data.get("last_login")),
            last_ip=data.get("last_ip"),
            logins_count=data.get("logins_count") or 0,
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
            email_verified=bool(data.get("email_verified", False)),
            username=data.get("username"),
            phone_number=data.get("phone_number"),
            phone_verified=bool(data.get("phone_verified", False)),
            picture=data.get("picture"),
            nickname=data.get("nickname"),
            name=data.get("name"),
            given_name=data.get("given_name"),
            family_name=data.get("family_name"),
            app_metadata=data.get("app_metadata") or {},
            user_metadata=data.get("user_metadata") or {},
        )

    @property
    def display_name(self) -> str:
        return self.name or self.email or self.username or self.user_id


def full_name(given_name: str | None, family_name: str | None) -> str | None:
    """Join given and family names, ignoring blanks."""
    parts = [part for part in (given_name, family_name) if part]
    return " ".join(parts) if parts else None


@dataclass
class CreateUserRequest:
    """Payload for creating a database user.

    ``name`` is derived from the given and family names.
    """

    connection: str
    email: str
    password: str = field(repr=False)
    username: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    verify_email: bool = False

    def to_payload(self) -> dict[str, Any]:
        payload = drop_empty(
            {
                "connection": self.connection,
                "email": self.email,
                "password": self.password,
                "username": self.username,
                "given_name": self.given_name,
                "family_name": self.family_name,
                "name": full_name(self.given_name, self.family_name),
            }
        )
        payload["verify_email"] = self.verify_email
        return payload


@dataclass
class UpdateUserRequest:
    """Partial update of a user; only non-empty fields are sent."""

    email: str | None = None
    username: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    nickname: str | None = None
    phone_number: str | None = None
    picture: str | None = None
    password: str | None = field(default=None, repr=False)
    blocked: bool | None = None

    def to_payload(self) -> dict[str, Any]:
        return drop_empty(
            {
                "email": self.email,
                "username": self.username,
                "given_name": self.given_name,
                "family_name": self.family_name,
                "name": full_name(self.given_name, self.family_name),
                "nickname": self.nickname,
                "phone_number": self.phone_number,
                "picture": self.picture,
                "password": self.password,
                "blocked": self.blocked,
            }
        )


@dataclass
class ListUsersParams:
    """Query for the users list.

    ``q`` is Lucene syntax for the v3 search engine and is passed through
    unchanged.
    """

    q: str | None = None
    connection: str | None = None
    per_page: int = 20
    sort: str = "created_at:-1"
    search_engine: str = "v3"

    def to_query(self) -> dict[str, Any]:
        return drop_empty(
            {
                "q": self.q,
                "connection": self.connection,
                "sort": self.sort,
                "search_engine": self.search_engine,
            }
        )

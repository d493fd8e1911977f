"""Connection data model."""

from dataclasses import dataclass, field
from typing import Any

from .parsing import ensure_mapping, require_field

SOCIAL_STRATEGIES = frozenset(
    {
        "google-oauth2",
        "facebook",
        "github",
        "twitter",
        "linkedin",
        "apple",
        "windowslive",
        "oauth2",
    }
)


@dataclass
class Connection:
    """An identity source configured in the tenant."""

    id: str
    name: str
    strategy: str
    display_name: str | None = None
    enabled_clients: list[str] = field(default_factory=list)
    realms: list[str] = field(default_factory=list)
    is_domain_connection: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_auth0_data(cls, data: dict[str, Any]) -> "Connection":
        data = ensure_mapping(data, "connection")
        return cls(
            id=require_field(data, "id", "connection"),
            name=require_field(data, "name", "connection"),
            strategy=require_field(data, "strategy", "connection"),
            display_name=data.get("display_name"),
            enabled_clients=list(data.get("enabled_clients") or []),
            realms=list(data.get("realms") or []),
            is_domain_connection=bool(data.get("is_domain_connection", False)),
            metadata=data.get("metadata") or {},
        )

    @property
    def is_database(self) -> bool:
        return self.strategy == "auth0"

    @property
    def is_social(self) -> bool:
        return self.strategy in SOCIAL_STRATEGIES

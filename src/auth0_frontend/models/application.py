"""Application (client) data model."""

from dataclasses import dataclass, field
from typing import Any

from .parsing import ensure_mapping, require_field


@dataclass
class Application:
    """An Auth0 application, called a client by the Management API."""

    client_id: str
    name: str
    app_type: str | None = None
    description: str | None = None
    is_first_party: bool = False
    callbacks: list[str] = field(default_factory=list)
    allowed_origins: list[str] = field(default_factory=list)
    grant_types: list[str] = field(default_factory=list)
    logo_uri: str | None = None

    @classmethod
    def from_auth0_data(cls, data: dict[str, Any]) -> "Application":
        data = ensure_mapping(data, "application")
        return cls(
            client_id=require_field(data, "client_id", "application"),
            name=require_field(data, "name", "application"),
            app_type=data.get("app_type"),
            description=data.get("description"),
            is_first_party=bool(data.get("is_first_party", False)),
            callbacks=list(data.get("callbacks") or []),
            allowed_origins=list(data.get("allowed_origins") or []),
            grant_types=list(data.get("grant_types") or []),
            logo_uri=data.get("logo_uri"),
        )

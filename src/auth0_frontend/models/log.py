"""Log event data model and log query parameters."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..core.exceptions import ValidationError
from .parsing import drop_empty, ensure_mapping, parse_datetime, require_field

# Subset of Auth0 log event type codes rendered with a readable label
EVENT_TYPE_LABELS = {
    "s": "Success Login",
    "f": "Failed Login",
    "fp": "Failed Login (Incorrect Password)",
    "fu": "Failed Login (Invalid Email/Username)",
    "ss": "Success Signup",
    "fs": "Failed Signup",
    "slo": "Success Logout",
    "seccft": "Success Exchange (Client Credentials)",
    "feccft": "Failed Exchange (Client Credentials)",
    "sapi": "Success API Operation",
    "fapi": "Failed API Operation",
    "limit_wc": "Blocked Account",
    "scp": "Success Change Password",
    "fcp": "Failed Change Password",
}


@dataclass
class LogEvent:
    """A single tenant log entry."""

    log_id: str
    date: datetime
    type: str
    description: str | None = None
    client_id: str | None = None
    client_name: str | None = None
    connection: str | None = None
    ip: str | None = None
    user_id: str | None = None
    user_name: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_auth0_data(cls, data: dict[str, Any]) -> "LogEvent":
        """Create a LogEvent from a log API entry.

        Raises:
            ValidationError: If ``log_id``, ``date`` or ``type`` is missing
        """
        data = ensure_mapping(data, "log")
        log_id = require_field(data, "log_id", "log")
        raw_date = require_field(data, "date", "log")
        date = parse_datetime(raw_date)
        if date is None:
            raise ValidationError(
                "Malformed log payload: unparseable date", field="date"
            )

        return cls(
            log_id=str(log_id),
            date=date,
            type=require_field(data, "type", "log"),
            description=data.get("description"),
            client_id=data.get("client_id"),
            client_name=data.get("client_name"),
            connection=data.get("connection"),
            ip=data.get("ip"),
            user_id=data.get("user_id"),
            user_name=data.get("user_name"),
            details=data.get("details") or {},
        )

    @property
    def type_label(self) -> str:
        return EVENT_TYPE_LABELS.get(self.type, self.type)


@dataclass
class ListLogsParams:
    """Query for the tenant log search.

    ``q`` uses the provider's log search syntax and is passed through
    unchanged.
    """

    q: str | None = None
    per_page: int = 50
    sort: str = "date:-1"
    fields: str | None = None

    def to_query(self) -> dict[str, Any]:
        return drop_empty({"q": self.q, "sort": self.sort, "fields": self.fields})

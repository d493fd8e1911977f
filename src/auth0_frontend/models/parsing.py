"""Helpers shared by the record parsers."""

from datetime import datetime
from typing import Any

from ..core.exceptions import ValidationError


def ensure_mapping(data: Any, record: str) -> dict[str, Any]:
    """Raise ValidationError unless ``data`` is a JSON object."""
    if not isinstance(data, dict):
        raise ValidationError(
            f"Malformed {record} payload: expected an object, got {type(data).__name__}"
        )
    return data


def require_field(data: dict[str, Any], name: str, record: str) -> Any:
    """Return ``data[name]``; missing, null or empty values are rejected.

    Raises:
        ValidationError: If the field is absent or empty
    """
    value = data.get(name)
    if value is None or value == "":
        raise ValidationError(
            f"Malformed {record} payload: missing required field", field=name
        )
    return value


def parse_datetime(value: Any) -> datetime | None:
    """Parse an Auth0 ISO 8601 timestamp; unparseable values become None."""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def drop_empty(values: dict[str, Any]) -> dict[str, Any]:
    """Remove None and empty-string entries from a request payload."""
    return {key: value for key, value in values.items() if value is not None and value != ""}

"""Access token model."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Token:
    """Management API bearer token.

    Attributes:
        value: The raw access token (excluded from repr)
        expires_at: Unix timestamp at which the provider expires the token
        scope: Space separated scopes granted to the token
        lifetime: Seconds the provider granted at issue time, if known
    """

    value: str = field(repr=False)
    expires_at: float
    scope: str | None = None
    lifetime: float | None = None

    def effective_margin(self, safety_margin: float) -> float:
        """Refresh margin for this token, capped at half its lifetime."""
        if self.lifetime is None:
            return safety_margin
        return min(safety_margin, self.lifetime / 2)

    def is_usable(self, now: float, safety_margin: float) -> bool:
        """Whether the token may still be handed out at ``now``."""
        return self.expires_at - self.effective_margin(safety_margin) > now

    @property
    def scopes(self) -> list[str]:
        return self.scope.split() if self.scope else []

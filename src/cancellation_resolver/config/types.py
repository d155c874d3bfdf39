"""Core configuration data types.

Configuration follows a resolve-once, freeze-then-flow pattern: it is
resolved a single time at startup into a `ResolvedConfig` (with audit
metadata) and then frozen into the `FrozenConfig` that rides on every
command.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, NamedTuple

ConfigOrigin = Literal["programmatic", "env", "env_file", "default"]
SourceMap = Mapping[str, ConfigOrigin]

SECRET_FIELDS = frozenset({"notion_token", "hf_token"})

FIELD_ORDER = (
    "notion_token",
    "hf_token",
    "model",
    "backend_url",
    "notion_base_url",
    "notion_version",
    "service_property",
    "link_property",
    "instructions_property",
    "request_timeout_seconds",
)


def _redacted(value: str | None) -> str | None:
    return "[REDACTED]" if value else None


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources, before freezing."""

    notion_token: str | None
    hf_token: str | None
    model: str
    backend_url: str
    notion_base_url: str
    notion_version: str
    service_property: str
    link_property: str
    instructions_property: str
    request_timeout_seconds: float

    # Audit metadata - tracks where each field value came from
    origin: SourceMap

    def __str__(self) -> str:
        """String representation with redacted tokens for safe logging."""
        return (
            f"ResolvedConfig(notion_token={_redacted(self.notion_token)!r}, "
            f"hf_token={_redacted(self.hf_token)!r}, model={self.model!r}, "
            f"backend_url={self.backend_url!r}, "
            f"request_timeout_seconds={self.request_timeout_seconds!r}, "
            f"origin={dict(self.origin)!r})"
        )

    def __repr__(self) -> str:
        return self.__str__()

    def to_frozen(self) -> "FrozenConfig":
        """Convert to the immutable configuration used by the pipeline."""
        return FrozenConfig(**{name: getattr(self, name) for name in FIELD_ORDER})

    def with_overrides(self, **overrides: object) -> "ResolvedConfig":
        """Create a new ResolvedConfig with programmatic overrides applied.

        Unknown fields are ignored.
        """
        new_values = self._asdict()
        new_origin = dict(self.origin)
        for field, value in overrides.items():
            if field in FIELD_ORDER:
                new_values[field] = value
                new_origin[field] = "programmatic"
        new_values["origin"] = new_origin
        return ResolvedConfig(**new_values)

    def audit(self) -> str:
        """Report the origin of each field without revealing secrets."""
        lines = []
        for field in FIELD_ORDER:
            if field not in self.origin:
                continue
            origin = self.origin[field]
            value = getattr(self, field)
            if field in SECRET_FIELDS:
                display = "<redacted>" if value else "None"
            else:
                display = str(value)
            lines.append(f"{field}: {origin}:{display}")
        return "\n".join(lines)


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration attached to commands in the pipeline."""

    notion_token: str | None
    hf_token: str | None
    model: str
    backend_url: str
    notion_base_url: str
    notion_version: str
    service_property: str
    link_property: str
    instructions_property: str
    request_timeout_seconds: float

    def __str__(self) -> str:
        """String representation with redacted tokens for safe logging."""
        return (
            f"FrozenConfig(notion_token={_redacted(self.notion_token)!r}, "
            f"hf_token={_redacted(self.hf_token)!r}, model={self.model!r}, "
            f"backend_url={self.backend_url!r}, "
            f"notion_base_url={self.notion_base_url!r}, "
            f"request_timeout_seconds={self.request_timeout_seconds!r})"
        )

    def __repr__(self) -> str:
        return self.__str__()

"""Configuration management for the cancellation resolver.

Key components:
- ResolverSettings: Pydantic schema with defaults and coercion
- ResolvedConfig: Post-resolution configuration with audit metadata
- FrozenConfig: Immutable configuration for pipeline execution
"""

from .resolver import ConfigResolver, resolve_config
from .schema import ResolverSettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap
from .validation import require_credentials

__all__ = [
    "ConfigOrigin",
    "ConfigResolver",
    "FrozenConfig",
    "ResolvedConfig",
    "ResolverSettings",
    "SourceMap",
    "require_credentials",
    "resolve_config",
]

"""Configuration resolution with precedence handling.

Sources are merged in this order (later wins):
Defaults < .env file < Environment < Programmatic
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

from .schema import ResolverSettings
from .types import ConfigOrigin, ResolvedConfig

log = logging.getLogger(__name__)

# Environment variable names per field, most preferred first.
ENV_VARS: dict[str, tuple[str, ...]] = {
    "notion_token": ("NOTION_API_KEY", "NOTION_TOKEN"),
    "hf_token": ("HF_TOKEN", "HF_API_KEY"),
    "model": ("CANCEL_RESOLVER_MODEL",),
    "backend_url": ("CANCEL_RESOLVER_BACKEND_URL",),
    "notion_base_url": ("CANCEL_RESOLVER_NOTION_BASE_URL",),
    "notion_version": ("CANCEL_RESOLVER_NOTION_VERSION",),
    "service_property": ("CANCEL_RESOLVER_SERVICE_PROPERTY",),
    "link_property": ("CANCEL_RESOLVER_LINK_PROPERTY",),
    "instructions_property": ("CANCEL_RESOLVER_INSTRUCTIONS_PROPERTY",),
    "request_timeout_seconds": ("CANCEL_RESOLVER_REQUEST_TIMEOUT_SECONDS",),
}


def _pick(values: dict[str, str | None]) -> dict[str, str]:
    """Map raw variables onto fields, honoring the preference order."""
    picked: dict[str, str] = {}
    for field, names in ENV_VARS.items():
        for name in names:
            value = values.get(name)
            if value is not None and value.strip() != "":
                picked[field] = value
                break
    return picked


class ConfigResolver:
    """Resolves configuration from all sources with proper precedence."""

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        env_file: str | Path | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources.

        Args:
            programmatic: Field overrides (highest precedence). Unknown
                fields are ignored.
            env_file: Optional .env file read before the process environment.
                The process environment is never modified.

        Returns:
            ResolvedConfig with merged values and source tracking.

        Raises:
            FileNotFoundError: If `env_file` is given but does not exist.
            ValueError: If the merged configuration fails validation.
        """
        merged: dict[str, Any] = {}
        origin: dict[str, ConfigOrigin] = {}

        # Step 1: schema defaults
        for field, info in ResolverSettings.model_fields.items():
            merged[field] = info.default
            origin[field] = "default"

        # Step 2: optional .env file
        if env_file is not None:
            env_path = Path(env_file)
            if not env_path.is_file():
                raise FileNotFoundError(f"Environment file not found: {env_path}")
            for field, value in _pick(dict(dotenv_values(env_path))).items():
                merged[field] = value
                origin[field] = "env_file"

        # Step 3: process environment
        for field, value in _pick(dict(os.environ)).items():
            merged[field] = value
            origin[field] = "env"

        # Step 4: programmatic overrides
        for field, value in (programmatic or {}).items():
            if field in merged:
                merged[field] = value
                origin[field] = "programmatic"

        # Step 5: validate the merged values
        try:
            settings = ResolverSettings(_env_file=None, **merged)
        except Exception as e:
            raise ValueError(f"Configuration validation failed: {e}") from e

        final = settings.to_dict()
        log.debug("Resolved configuration origins: %s", origin)
        return ResolvedConfig(**final, origin=origin)


_resolver = ConfigResolver()


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    env_file: str | Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration once for the current invocation.

    Example:
        config = resolve_config().to_frozen()
        config = resolve_config({"model": "meta-llama/Llama-3.1-8B-Instruct"})
    """
    return _resolver.resolve(programmatic, env_file=env_file)

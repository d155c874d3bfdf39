"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces configuration
values from the environment, a .env file, or programmatic overrides into the
correct types with proper defaults.
"""

from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL = "openai/gpt-oss-20b"
DEFAULT_BACKEND_URL = "https://router.huggingface.co/v1/chat/completions"
DEFAULT_NOTION_BASE_URL = "https://api.notion.com/v1"
DEFAULT_NOTION_VERSION = "2022-06-28"


class ResolverSettings(BaseSettings):
    """Pydantic settings schema for the resolver.

    Credentials keep the names the hosting platform already exports
    (``NOTION_API_KEY``/``NOTION_TOKEN`` and ``HF_TOKEN``/``HF_API_KEY``);
    every other field uses the ``CANCEL_RESOLVER_`` prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="CANCEL_RESOLVER_",
        env_file=None,  # Only used when explicitly requested
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Credentials ---

    notion_token: str | None = Field(
        default=None,
        description="Notion integration token used for page reads and updates",
        validation_alias=AliasChoices("NOTION_API_KEY", "notion_token"),
    )

    hf_token: str | None = Field(
        default=None,
        description="Hugging Face token for the chat-completions router",
        validation_alias=AliasChoices("hf_token", "HF_API_KEY"),
    )

    # --- Backend ---

    model: str = Field(
        default=DEFAULT_MODEL,
        description="Model identifier sent to the generative backend",
        min_length=1,
    )

    backend_url: str = Field(
        default=DEFAULT_BACKEND_URL,
        description="Chat-completions endpoint",
        min_length=1,
    )

    # --- Record store ---

    notion_base_url: str = Field(default=DEFAULT_NOTION_BASE_URL, min_length=1)
    notion_version: str = Field(default=DEFAULT_NOTION_VERSION, min_length=1)

    service_property: str = Field(
        default="Service",
        description="Page property holding the service name",
        min_length=1,
    )
    link_property: str = Field(
        default="Cancellation Link",
        description="URL-typed page property receiving the cancellation link",
        min_length=1,
    )
    instructions_property: str = Field(
        default="Instructions",
        description="Rich-text page property receiving the instructions",
        min_length=1,
    )

    request_timeout_seconds: float = Field(
        default=60.0,
        description="Per-request timeout for store and backend calls",
        gt=0,
    )

    @field_validator("notion_token", "hf_token", mode="before")
    @classmethod
    def blank_token_is_missing(cls, v: Any) -> Any:
        """Treat empty or whitespace-only tokens as unset."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary keyed by field name."""
        return {name: getattr(self, name) for name in type(self).model_fields}

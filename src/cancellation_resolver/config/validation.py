"""Credential checks performed before any network call."""

from cancellation_resolver.core.exceptions import MisconfigurationError

from .types import FrozenConfig


def require_credentials(config: FrozenConfig, *, needs_store: bool) -> None:
    """Raise `MisconfigurationError` when a required token is missing.

    The backend token is always required. The store token is required only
    when the invocation reads or writes a page.
    """
    missing = []
    if not config.hf_token:
        missing.append("HF_TOKEN (or HF_API_KEY)")
    if needs_store and not config.notion_token:
        missing.append("NOTION_API_KEY (or NOTION_TOKEN)")
    if missing:
        raise MisconfigurationError(
            f"Missing required credentials: {', '.join(missing)}"
        )

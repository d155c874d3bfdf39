"""Protocol for generative text backends."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class GenerationBackend(Protocol):
    """Anything that turns a prompt into a raw, unnormalized payload."""

    async def generate(self, prompt: str, *, model: str) -> Any: ...

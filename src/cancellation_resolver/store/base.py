"""Protocol for record stores the pipeline can read from and write to."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RecordStore(Protocol):
    """Minimal page-oriented store interface."""

    async def retrieve_page(self, page_id: str) -> dict[str, Any]: ...

    async def update_page(
        self, page_id: str, body: dict[str, Any]
    ) -> dict[str, Any]: ...

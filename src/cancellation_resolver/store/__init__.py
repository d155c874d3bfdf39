"""Record store access: the Notion client and the page-update mapping."""

from .base import RecordStore
from .notion import NotionStoreClient
from .updates import MAX_TEXT_CONTENT_LENGTH, build_page_update, rich_text_from_string

__all__ = [
    "MAX_TEXT_CONTENT_LENGTH",
    "NotionStoreClient",
    "RecordStore",
    "build_page_update",
    "rich_text_from_string",
]

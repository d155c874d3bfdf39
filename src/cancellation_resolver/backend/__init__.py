"""Generative text backends."""

from .base import GenerationBackend
from .chat_completions import ChatCompletionsBackend

__all__ = ["ChatCompletionsBackend", "GenerationBackend"]

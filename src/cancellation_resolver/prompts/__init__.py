"""Prompt construction for the generative backend."""

from .builder import RESPONSE_FIELDS, build_prompt

__all__ = ["RESPONSE_FIELDS", "build_prompt"]

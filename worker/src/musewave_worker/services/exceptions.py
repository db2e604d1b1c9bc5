"""Shared service-layer exceptions."""

from __future__ import annotations


class GenerationFailure(Exception):
    """Expected failure of a remote or forwarded generation call."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"AI generation failed: {reason}")
        self.reason = reason

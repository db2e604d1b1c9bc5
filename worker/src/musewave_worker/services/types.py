"""Shared service data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Dict, Optional


@dataclass
class BackendStatus:
    name: str
    ready: bool
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    updated_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "ready": self.ready,
            "updated_at": self.updated_at.isoformat(),
        }
        if self.error is not None:
            payload["error"] = self.error
        if self.details:
            payload["details"] = self.details
        return payload


@dataclass
class LastValueCache:
    """Most recently returned value per suggestion kind."""

    prompt: str = ""
    genres: list[str] = field(default_factory=list)
    artists: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)
    lyrics: str = ""

"""Forward generation calls to another worker over HTTP."""

from __future__ import annotations

from typing import Any, Optional

import httpx
from loguru import logger

from ..app.settings import Settings
from .exceptions import GenerationFailure
from .types import BackendStatus

ENHANCE_PROMPT_PATH = "/api/enhance-prompt"
SUGGEST_GENRES_PATH = "/api/suggest-genres"
SUGGEST_ARTISTS_PATH = "/api/suggest-artists"
SUGGEST_LANGUAGES_PATH = "/api/suggest-languages"
ENHANCE_LYRICS_PATH = "/api/enhance-lyrics"
GENERATE_PLAN_PATH = "/api/generate-plan"
AUDIT_PLAN_PATH = "/api/audit-plan"
CREATIVE_ASSETS_PATH = "/api/creative-assets"


class ForwardingClient:
    """POSTs JSON payloads to a configured base URL and returns the decoded body as sent."""

    def __init__(
        self,
        settings: Settings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = settings.api_base_url
        self._timeout = httpx.Timeout(settings.request_timeout_seconds)
        self._transport = transport

    @property
    def base_url(self) -> Optional[str]:
        return self._base_url

    async def warmup(self) -> BackendStatus:
        if not self._base_url:
            return BackendStatus(name="forward", ready=False, error="API base URL not configured")
        return BackendStatus(name="forward", ready=True, details={"base_url": self._base_url})

    async def post(self, path: str, payload: dict[str, Any]) -> Any:
        if not self._base_url:
            raise GenerationFailure("API base URL not configured")
        url = f"{self._base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("Forwarded call to {} returned {}", url, exc.response.status_code)
            raise GenerationFailure(
                f"{path} responded with HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Forwarded call to {} failed: {}", url, exc)
            raise GenerationFailure(f"{path} request failed ({exc})") from exc
        except ValueError as exc:
            raise GenerationFailure(f"{path} returned malformed JSON") from exc

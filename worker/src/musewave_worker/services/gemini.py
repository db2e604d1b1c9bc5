"""Remote JSON generation through the Google Gemini API."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional

from google import genai
from google.genai import types as genai_types
from loguru import logger

from ..app.settings import Settings
from .exceptions import GenerationFailure
from .types import BackendStatus


class GeminiClient:
    """Issues schema-constrained JSON generations against a Gemini model."""

    def __init__(self, settings: Settings, *, client: Optional[Any] = None) -> None:
        self._api_key = settings.api_key
        self._model_id = settings.model_id
        self._temperature = settings.temperature
        self._client = client
        self._lock = asyncio.Lock()

    @property
    def model_id(self) -> str:
        return self._model_id

    async def warmup(self) -> BackendStatus:
        try:
            await self._ensure_client()
        except GenerationFailure as exc:
            return BackendStatus(name="gemini", ready=False, error=exc.reason)
        return BackendStatus(name="gemini", ready=True, details={"model_id": self._model_id})

    async def generate_json(
        self,
        system_instruction: str,
        user_prompt: str,
        schema: dict[str, Any],
    ) -> Any:
        client = await self._ensure_client()
        config = genai_types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            response_schema=schema,
            temperature=self._temperature,
        )
        try:
            response = await client.aio.models.generate_content(
                model=self._model_id,
                contents=user_prompt,
                config=config,
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("Gemini request to {} failed", self._model_id)
            raise GenerationFailure(str(exc) or exc.__class__.__name__) from exc

        text = getattr(response, "text", None)
        if not text:
            raise GenerationFailure("Received an empty response from the AI.")
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise GenerationFailure(f"response is not valid JSON ({exc.msg})") from exc

    async def _ensure_client(self) -> Any:
        async with self._lock:
            if self._client is not None:
                return self._client
            if not self._api_key:
                raise GenerationFailure("AI client not configured")
            try:
                self._client = genai.Client(api_key=self._api_key)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Gemini client unavailable: {}", exc)
                raise GenerationFailure(f"AI client could not be created ({exc})") from exc
            logger.info("Gemini client ready for model {}", self._model_id)
            return self._client

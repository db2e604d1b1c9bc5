"""Backend selection and dispatch for every MuseWave operation."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

import httpx
from loguru import logger

from ..app.models import (
    ArtistSuggestion,
    AuditReport,
    CreativeAssets,
    GenreSuggestion,
    LanguageSuggestion,
    LyricsSuggestion,
    MusicPlan,
    PlanRequest,
    PromptSuggestion,
    SuggestionContext,
    VideoStyle,
)
from ..app.settings import BackendMode, Settings
from .backends import ForwardingBackend, MuseBackend, OfflineBackend, RemoteBackend
from .exceptions import GenerationFailure
from .forwarding import ForwardingClient
from .gemini import GeminiClient
from .types import BackendStatus


def select_backend(
    settings: Settings,
    offline: OfflineBackend,
    *,
    gemini_client: Optional[GeminiClient] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> MuseBackend:
    """Build the strategy named by the settings; the choice is fixed for the process."""
    mode = settings.resolved_backend()
    if mode == BackendMode.FORWARD:
        if not settings.api_base_url:
            logger.warning("Forward backend requested without an API base URL; calls will fail")
        logger.info("Forwarding generation calls to {}", settings.api_base_url)
        return ForwardingBackend(ForwardingClient(settings, transport=transport))
    if mode == BackendMode.REMOTE:
        if not settings.api_key and gemini_client is None:
            logger.warning("Remote backend requested without an API key; calls will fail")
        logger.info("Using remote model {}", settings.model_id)
        return RemoteBackend(gemini_client or GeminiClient(settings))
    if settings.backend == BackendMode.AUTO:
        logger.warning("API key not configured; using mock offline responses")
    else:
        logger.info("Using offline generator")
    return offline


class MuseOrchestrator:
    """Routes each operation to the selected backend, with optional offline fallback."""

    def __init__(
        self,
        settings: Settings,
        backend: MuseBackend,
        offline: OfflineBackend,
    ) -> None:
        self._backend = backend
        self._offline = offline
        self._fallback = settings.fallback_to_offline and backend is not offline
        self._backend_status: Dict[str, BackendStatus] = {}

    @property
    def backend_name(self) -> str:
        return self._backend.name

    async def warmup(self) -> Dict[str, BackendStatus]:
        status = await self._backend.warmup()
        self._backend_status[self._backend.name] = status
        if self._fallback:
            self._backend_status[self._offline.name] = await self._offline.warmup()
        return dict(self._backend_status)

    def backend_status(self) -> Dict[str, BackendStatus]:
        return dict(self._backend_status)

    async def _dispatch(self, operation: str, *args: Any) -> Any:
        try:
            return await getattr(self._backend, operation)(*args)
        except GenerationFailure as exc:
            if not self._fallback:
                raise
            logger.warning(
                "{} backend failed for {} ({}); answering offline",
                self._backend.name,
                operation,
                exc.reason,
            )
            return await getattr(self._offline, operation)(*args)

    async def enhance_prompt(self, context: SuggestionContext) -> PromptSuggestion:
        return await self._dispatch("enhance_prompt", context)

    async def suggest_genres(self, context: SuggestionContext) -> GenreSuggestion:
        return await self._dispatch("suggest_genres", context)

    async def suggest_artists(self, context: SuggestionContext) -> ArtistSuggestion:
        return await self._dispatch("suggest_artists", context)

    async def suggest_languages(self, context: SuggestionContext) -> LanguageSuggestion:
        return await self._dispatch("suggest_languages", context)

    async def enhance_lyrics(self, context: SuggestionContext) -> LyricsSuggestion:
        return await self._dispatch("enhance_lyrics", context)

    async def generate_plan(self, full_prompt: PlanRequest, creativity_seed: int) -> MusicPlan:
        return await self._dispatch("generate_plan", full_prompt, creativity_seed)

    async def audit_plan(self, plan: MusicPlan, original_request: PlanRequest) -> AuditReport:
        return await self._dispatch("audit_plan", plan, original_request)

    async def creative_assets(
        self,
        plan: MusicPlan,
        video_styles: Iterable[VideoStyle],
        lyrics: str,
    ) -> CreativeAssets:
        return await self._dispatch("creative_assets", plan, list(video_styles), lyrics)

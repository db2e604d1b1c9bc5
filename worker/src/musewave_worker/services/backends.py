"""Generation strategies: offline synthesis, remote model, HTTP forwarding."""

from __future__ import annotations

from typing import Any, Iterable, Protocol, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

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
from . import forwarding, prompts, schemas
from .exceptions import GenerationFailure
from .forwarding import ForwardingClient
from .gemini import GeminiClient
from .planner import OfflinePlanner
from .suggestions import SuggestionEngine
from .types import BackendStatus

ModelT = TypeVar("ModelT", bound=BaseModel)


def _validate(model: type[ModelT], payload: Any, source: str) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        logger.warning("{} returned a payload that does not match {}", source, model.__name__)
        raise GenerationFailure(
            f"{source} response does not match {model.__name__} ({exc.error_count()} errors)"
        ) from exc


class MuseBackend(Protocol):
    name: str

    async def warmup(self) -> BackendStatus: ...

    async def enhance_prompt(self, context: SuggestionContext) -> PromptSuggestion: ...

    async def suggest_genres(self, context: SuggestionContext) -> GenreSuggestion: ...

    async def suggest_artists(self, context: SuggestionContext) -> ArtistSuggestion: ...

    async def suggest_languages(self, context: SuggestionContext) -> LanguageSuggestion: ...

    async def enhance_lyrics(self, context: SuggestionContext) -> LyricsSuggestion: ...

    async def generate_plan(self, full_prompt: PlanRequest, creativity_seed: int) -> MusicPlan: ...

    async def audit_plan(self, plan: MusicPlan, original_request: PlanRequest) -> AuditReport: ...

    async def creative_assets(
        self, plan: MusicPlan, video_styles: Iterable[VideoStyle], lyrics: str
    ) -> CreativeAssets: ...


class OfflineBackend:
    """Answers every call locally from the seeded synthesizers and the plan fixture."""

    name = "offline"

    def __init__(self, engine: SuggestionEngine, planner: OfflinePlanner) -> None:
        self._engine = engine
        self._planner = planner

    async def warmup(self) -> BackendStatus:
        return BackendStatus(name=self.name, ready=True, details={"mode": "offline"})

    async def enhance_prompt(self, context: SuggestionContext) -> PromptSuggestion:
        return self._engine.enhance_prompt(context)

    async def suggest_genres(self, context: SuggestionContext) -> GenreSuggestion:
        return self._engine.suggest_genres(context)

    async def suggest_artists(self, context: SuggestionContext) -> ArtistSuggestion:
        return self._engine.suggest_artists(context)

    async def suggest_languages(self, context: SuggestionContext) -> LanguageSuggestion:
        return self._engine.suggest_languages(context)

    async def enhance_lyrics(self, context: SuggestionContext) -> LyricsSuggestion:
        return self._engine.enhance_lyrics(context)

    async def generate_plan(self, full_prompt: PlanRequest, creativity_seed: int) -> MusicPlan:
        return self._planner.generate_plan(full_prompt, creativity_seed)

    async def audit_plan(self, plan: MusicPlan, original_request: PlanRequest) -> AuditReport:
        return self._planner.audit_plan(plan, original_request)

    async def creative_assets(
        self, plan: MusicPlan, video_styles: Iterable[VideoStyle], lyrics: str
    ) -> CreativeAssets:
        return self._planner.creative_assets(plan, video_styles, lyrics)


class RemoteBackend:
    """Delegates to the remote generative model with schema-constrained JSON output."""

    name = "remote"

    def __init__(self, client: GeminiClient) -> None:
        self._client = client

    async def warmup(self) -> BackendStatus:
        status = await self._client.warmup()
        status.name = self.name
        return status

    async def _generate(
        self,
        model: type[ModelT],
        system_instruction: str,
        user_prompt: str,
        schema: schemas.Schema,
    ) -> ModelT:
        payload = await self._client.generate_json(system_instruction, user_prompt, schema)
        return _validate(model, payload, "remote model")

    async def enhance_prompt(self, context: SuggestionContext) -> PromptSuggestion:
        return await self._generate(
            PromptSuggestion,
            prompts.SUGGESTION_SYSTEM_INSTRUCTION,
            prompts.enhance_prompt_request(context),
            schemas.PROMPT_SCHEMA,
        )

    async def suggest_genres(self, context: SuggestionContext) -> GenreSuggestion:
        return await self._generate(
            GenreSuggestion,
            prompts.SUGGESTION_SYSTEM_INSTRUCTION,
            prompts.suggest_genres_request(context),
            schemas.GENRES_SCHEMA,
        )

    async def suggest_artists(self, context: SuggestionContext) -> ArtistSuggestion:
        return await self._generate(
            ArtistSuggestion,
            prompts.SUGGESTION_SYSTEM_INSTRUCTION,
            prompts.suggest_artists_request(context),
            schemas.ARTISTS_SCHEMA,
        )

    async def suggest_languages(self, context: SuggestionContext) -> LanguageSuggestion:
        return await self._generate(
            LanguageSuggestion,
            prompts.SUGGESTION_SYSTEM_INSTRUCTION,
            prompts.suggest_languages_request(context),
            schemas.LANGUAGES_SCHEMA,
        )

    async def enhance_lyrics(self, context: SuggestionContext) -> LyricsSuggestion:
        return await self._generate(
            LyricsSuggestion,
            prompts.SUGGESTION_SYSTEM_INSTRUCTION,
            prompts.enhance_lyrics_request(context),
            schemas.LYRICS_SCHEMA,
        )

    async def generate_plan(self, full_prompt: PlanRequest, creativity_seed: int) -> MusicPlan:
        return await self._generate(
            MusicPlan,
            prompts.PLAN_SYSTEM_INSTRUCTION,
            prompts.plan_request(full_prompt, creativity_seed),
            schemas.MUSIC_PLAN_SCHEMA,
        )

    async def audit_plan(self, plan: MusicPlan, original_request: PlanRequest) -> AuditReport:
        return await self._generate(
            AuditReport,
            prompts.AUDIT_SYSTEM_INSTRUCTION,
            prompts.audit_request(plan, original_request),
            schemas.AUDIT_SCHEMA,
        )

    async def creative_assets(
        self, plan: MusicPlan, video_styles: Iterable[VideoStyle], lyrics: str
    ) -> CreativeAssets:
        return await self._generate(
            CreativeAssets,
            prompts.ASSETS_SYSTEM_INSTRUCTION,
            prompts.creative_assets_request(plan, list(video_styles), lyrics),
            schemas.CREATIVE_ASSETS_SCHEMA,
        )


class ForwardingBackend:
    """Relays each call to another worker's HTTP API; nothing is computed locally."""

    name = "forward"

    def __init__(self, client: ForwardingClient) -> None:
        self._client = client

    async def warmup(self) -> BackendStatus:
        return await self._client.warmup()

    async def _relay(self, model: type[ModelT], path: str, payload: dict[str, Any]) -> ModelT:
        body = await self._client.post(path, payload)
        return _validate(model, body, path)

    async def _relay_context(
        self, model: type[ModelT], path: str, context: SuggestionContext
    ) -> ModelT:
        return await self._relay(model, path, {"context": context.to_wire()})

    async def enhance_prompt(self, context: SuggestionContext) -> PromptSuggestion:
        return await self._relay_context(PromptSuggestion, forwarding.ENHANCE_PROMPT_PATH, context)

    async def suggest_genres(self, context: SuggestionContext) -> GenreSuggestion:
        return await self._relay_context(GenreSuggestion, forwarding.SUGGEST_GENRES_PATH, context)

    async def suggest_artists(self, context: SuggestionContext) -> ArtistSuggestion:
        return await self._relay_context(ArtistSuggestion, forwarding.SUGGEST_ARTISTS_PATH, context)

    async def suggest_languages(self, context: SuggestionContext) -> LanguageSuggestion:
        return await self._relay_context(
            LanguageSuggestion, forwarding.SUGGEST_LANGUAGES_PATH, context
        )

    async def enhance_lyrics(self, context: SuggestionContext) -> LyricsSuggestion:
        return await self._relay_context(LyricsSuggestion, forwarding.ENHANCE_LYRICS_PATH, context)

    async def generate_plan(self, full_prompt: PlanRequest, creativity_seed: int) -> MusicPlan:
        payload = {"fullPrompt": full_prompt.to_wire(), "creativitySeed": creativity_seed}
        return await self._relay(MusicPlan, forwarding.GENERATE_PLAN_PATH, payload)

    async def audit_plan(self, plan: MusicPlan, original_request: PlanRequest) -> AuditReport:
        payload = {"plan": plan.to_wire(), "originalRequest": original_request.to_wire()}
        return await self._relay(AuditReport, forwarding.AUDIT_PLAN_PATH, payload)

    async def creative_assets(
        self, plan: MusicPlan, video_styles: Iterable[VideoStyle], lyrics: str
    ) -> CreativeAssets:
        payload = {
            "musicPlan": plan.to_wire(),
            "videoStyles": [style.value for style in video_styles],
            "lyrics": lyrics,
        }
        return await self._relay(CreativeAssets, forwarding.CREATIVE_ASSETS_PATH, payload)

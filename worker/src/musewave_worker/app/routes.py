from __future__ import annotations

from typing import Awaitable, TypeVar, cast

from fastapi import APIRouter, HTTPException, Request

from ..services.exceptions import GenerationFailure
from ..services.orchestrator import MuseOrchestrator
from .models import (
    ArtistSuggestion,
    AuditReport,
    CreativeAssets,
    CreativeAssetsRequest,
    GenreSuggestion,
    LanguageSuggestion,
    LyricsSuggestion,
    MusicPlan,
    PlanAuditRequest,
    PlanGenerationRequest,
    PromptSuggestion,
    SuggestionRequest,
)
from .settings import Settings

router = APIRouter()

ResultT = TypeVar("ResultT")


def get_orchestrator(request: Request) -> MuseOrchestrator:
    return cast(MuseOrchestrator, request.app.state.orchestrator)


async def _answer(call: Awaitable[ResultT]) -> ResultT:
    try:
        return await call
    except GenerationFailure as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.get("/health")
async def health(request: Request) -> dict[str, object]:
    settings = cast(Settings, request.app.state.settings)
    orchestrator = get_orchestrator(request)
    backend_status = {
        name: status.as_dict() for name, status in orchestrator.backend_status().items()
    }
    warmup_complete = bool(backend_status) and all(
        value.get("ready") for value in backend_status.values()
    )
    return {
        "status": "ok",
        "backend": orchestrator.backend_name,
        "model_id": settings.model_id,
        "fallback_to_offline": settings.fallback_to_offline,
        "backend_status": backend_status,
        "warmup_complete": warmup_complete,
    }


@router.post("/api/enhance-prompt", response_model=PromptSuggestion)
async def enhance_prompt(payload: SuggestionRequest, request: Request) -> PromptSuggestion:
    return await _answer(get_orchestrator(request).enhance_prompt(payload.context))


@router.post("/api/suggest-genres", response_model=GenreSuggestion)
async def suggest_genres(payload: SuggestionRequest, request: Request) -> GenreSuggestion:
    return await _answer(get_orchestrator(request).suggest_genres(payload.context))


@router.post("/api/suggest-artists", response_model=ArtistSuggestion)
async def suggest_artists(payload: SuggestionRequest, request: Request) -> ArtistSuggestion:
    return await _answer(get_orchestrator(request).suggest_artists(payload.context))


@router.post("/api/suggest-languages", response_model=LanguageSuggestion)
async def suggest_languages(payload: SuggestionRequest, request: Request) -> LanguageSuggestion:
    return await _answer(get_orchestrator(request).suggest_languages(payload.context))


@router.post("/api/enhance-lyrics", response_model=LyricsSuggestion)
async def enhance_lyrics(payload: SuggestionRequest, request: Request) -> LyricsSuggestion:
    return await _answer(get_orchestrator(request).enhance_lyrics(payload.context))


@router.post("/api/generate-plan", response_model=MusicPlan)
async def generate_plan(payload: PlanGenerationRequest, request: Request) -> MusicPlan:
    return await _answer(
        get_orchestrator(request).generate_plan(payload.full_prompt, payload.creativity_seed)
    )


@router.post("/api/audit-plan", response_model=AuditReport)
async def audit_plan(payload: PlanAuditRequest, request: Request) -> AuditReport:
    return await _answer(
        get_orchestrator(request).audit_plan(payload.plan, payload.original_request)
    )


@router.post("/api/creative-assets", response_model=CreativeAssets)
async def creative_assets(payload: CreativeAssetsRequest, request: Request) -> CreativeAssets:
    return await _answer(
        get_orchestrator(request).creative_assets(
            payload.music_plan, payload.video_styles, payload.lyrics
        )
    )

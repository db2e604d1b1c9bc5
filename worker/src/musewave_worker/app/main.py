from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx
from fastapi import FastAPI
from loguru import logger

from ..services.backends import OfflineBackend
from ..services.gemini import GeminiClient
from ..services.orchestrator import MuseOrchestrator, select_backend
from ..services.planner import OfflinePlanner
from ..services.suggestions import SuggestionEngine
from .routes import router
from .settings import Settings, get_settings


def create_app(
    settings: Optional[Settings] = None,
    *,
    gemini_client: Optional[GeminiClient] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Create and configure FastAPI instance."""
    settings = settings or get_settings()
    engine = SuggestionEngine()
    planner = OfflinePlanner()
    offline = OfflineBackend(engine, planner)
    backend = select_backend(
        settings, offline, gemini_client=gemini_client, transport=transport
    )
    orchestrator = MuseOrchestrator(settings, backend, offline)

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            statuses = await orchestrator.warmup()
            app.state.backend_status = statuses
            logger.info(
                "Worker warmup complete: {}",
                {name: status.ready for name, status in statuses.items()},
            )
        except Exception:  # noqa: BLE001
            logger.exception("Worker warmup failed")
        yield

    app = FastAPI(title="MuseWave Worker", version="0.1.0", lifespan=_lifespan)
    app.state.settings = settings
    app.state.suggestion_engine = engine
    app.state.planner = planner
    app.state.orchestrator = orchestrator
    app.state.backend_status = {}
    app.include_router(router)
    return app


app = create_app()

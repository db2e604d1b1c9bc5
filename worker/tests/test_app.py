from __future__ import annotations

from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient

from musewave_worker.app.main import create_app
from musewave_worker.app.settings import BackendMode, Settings
from musewave_worker.services.exceptions import GenerationFailure
from musewave_worker.services.types import BackendStatus


class FailingGeminiClient:
    async def warmup(self) -> BackendStatus:
        return BackendStatus(name="gemini", ready=False, error="AI client not configured")

    async def generate_json(self, *args: Any) -> Any:
        raise GenerationFailure("AI client not configured")


def _offline_settings() -> Settings:
    return Settings(backend=BackendMode.OFFLINE, api_key=None, api_base_url=None)


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(create_app(_offline_settings())) as test_client:
        yield test_client


def test_create_app() -> None:
    app = create_app(_offline_settings())
    assert app.title == "MuseWave Worker"


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["backend"] == "offline"
    assert body["warmup_complete"] is True
    assert body["backend_status"]["offline"]["ready"] is True


def test_suggestion_routes(client: TestClient) -> None:
    context = {"prompt": "midnight rooftop rave", "genres": ["deep house"], "artists": None}
    prompt = client.post("/api/enhance-prompt", json={"context": context})
    assert prompt.status_code == 200
    assert prompt.json()["prompt"].startswith("Forge a deep house")

    first = client.post("/api/suggest-genres", json={"context": context}).json()["genres"]
    second = client.post("/api/suggest-genres", json={"context": context}).json()["genres"]
    assert first != second

    artists = client.post("/api/suggest-artists", json={"context": context})
    assert artists.status_code == 200
    assert artists.json()["artists"]

    languages = client.post("/api/suggest-languages", json={"context": context})
    assert len(languages.json()["languages"]) == 3

    lyrics = client.post("/api/enhance-lyrics", json={"context": context})
    assert lyrics.json()["lyrics"].startswith("Verse 1:\n")


def test_empty_suggestion_body_uses_default_context(client: TestClient) -> None:
    response = client.post("/api/suggest-genres", json={})
    assert response.status_code == 200
    assert 3 <= len(response.json()["genres"]) <= 4


def test_plan_audit_and_assets_routes(client: TestClient) -> None:
    request = {"genres": ["Melodic Techno"], "lyrics": "hold on", "videoStyles": ["lyrical"]}
    response = client.post(
        "/api/generate-plan", json={"fullPrompt": request, "creativitySeed": 31337}
    )
    assert response.status_code == 200
    plan = response.json()
    assert plan["randomSeed"] == 31337
    assert plan["genre"] == "Melodic Techno"
    assert plan["cuePoints"] == {"introEnd": 8.0, "dropStart": 24.0, "outroStart": 40.0}
    assert plan["sections"][1]["leadMelody"]

    audit = client.post("/api/audit-plan", json={"plan": plan, "originalRequest": request})
    assert audit.status_code == 200
    assert audit.json()["passed"] is True
    assert audit.json()["feedback"] == "Offline audit passed."

    assets = client.post(
        "/api/creative-assets",
        json={"musicPlan": plan, "videoStyles": ["lyrical"], "lyrics": "hold on"},
    )
    assert assets.status_code == 200
    assert assets.json() == {
        "lyricsAlignment": [{"time": "0s-20s", "line": "hold on"}],
        "videoStoryboard": {"lyrical": "Placeholder storyboard for lyrical."},
    }


def test_invalid_bodies_are_rejected(client: TestClient) -> None:
    assert client.post("/api/generate-plan", json={"fullPrompt": {}}).status_code == 422
    assert client.post("/api/generate-plan", json={"creativitySeed": -1}).status_code == 422
    bad_context = {"context": {"duration": "forever"}}
    assert client.post("/api/enhance-lyrics", json=bad_context).status_code == 422


def test_long_context_and_duration_are_accepted(client: TestClient) -> None:
    context = {"context": {"lyrics": "la " * 4000, "duration": 3600}}
    response = client.post("/api/enhance-lyrics", json=context)
    assert response.status_code == 200
    assert response.json()["lyrics"]
    plan = client.post(
        "/api/generate-plan",
        json={"fullPrompt": {"prompt": "x" * 5000, "duration": 3600}, "creativitySeed": 1},
    )
    assert plan.status_code == 200


def test_generation_failure_maps_to_bad_gateway() -> None:
    settings = Settings(backend=BackendMode.REMOTE, api_key="k", api_base_url=None)
    app = create_app(settings, gemini_client=FailingGeminiClient())  # type: ignore[arg-type]
    with TestClient(app) as test_client:
        health = test_client.get("/health").json()
        assert health["backend"] == "remote"
        assert health["warmup_complete"] is False
        response = test_client.post("/api/suggest-genres", json={"context": {}})
    assert response.status_code == 502
    assert response.json()["detail"] == "AI generation failed: AI client not configured"

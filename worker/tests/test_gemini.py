from __future__ import annotations

from types import SimpleNamespace
from typing import Any, List, Optional

import pytest

from musewave_worker.app.settings import BackendMode, Settings
from musewave_worker.services import schemas
from musewave_worker.services.exceptions import GenerationFailure
from musewave_worker.services.gemini import GeminiClient


class FakeModels:
    def __init__(self, text: Optional[str] = None, error: Optional[Exception] = None) -> None:
        self._text = text
        self._error = error
        self.calls: List[dict[str, Any]] = []

    async def generate_content(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        if self._error is not None:
            raise self._error
        return SimpleNamespace(text=self._text)


def _fake_sdk(models: FakeModels) -> SimpleNamespace:
    return SimpleNamespace(aio=SimpleNamespace(models=models))


def _settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "backend": BackendMode.REMOTE,
        "api_key": "test-key",
        "api_base_url": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.mark.asyncio
async def test_generate_json_decodes_response() -> None:
    models = FakeModels(text='{"genres": ["trap", "phonk"]}')
    client = GeminiClient(_settings(model_id="gemini-test", temperature=0.3), client=_fake_sdk(models))
    payload = await client.generate_json("system", "user prompt", schemas.GENRES_SCHEMA)
    assert payload == {"genres": ["trap", "phonk"]}
    call = models.calls[0]
    assert call["model"] == "gemini-test"
    assert call["contents"] == "user prompt"
    config = call["config"]
    assert config.system_instruction == "system"
    assert config.response_mime_type == "application/json"
    assert config.temperature == 0.3


@pytest.mark.asyncio
async def test_generate_json_rejects_empty_text() -> None:
    client = GeminiClient(_settings(), client=_fake_sdk(FakeModels(text="")))
    with pytest.raises(GenerationFailure) as excinfo:
        await client.generate_json("system", "prompt", schemas.PROMPT_SCHEMA)
    assert str(excinfo.value) == "AI generation failed: Received an empty response from the AI."


@pytest.mark.asyncio
async def test_generate_json_rejects_malformed_json() -> None:
    client = GeminiClient(_settings(), client=_fake_sdk(FakeModels(text="{not json")))
    with pytest.raises(GenerationFailure) as excinfo:
        await client.generate_json("system", "prompt", schemas.PROMPT_SCHEMA)
    assert "not valid JSON" in excinfo.value.reason


@pytest.mark.asyncio
async def test_generate_json_wraps_sdk_errors() -> None:
    models = FakeModels(error=RuntimeError("quota exhausted"))
    client = GeminiClient(_settings(), client=_fake_sdk(models))
    with pytest.raises(GenerationFailure) as excinfo:
        await client.generate_json("system", "prompt", schemas.PROMPT_SCHEMA)
    assert str(excinfo.value) == "AI generation failed: quota exhausted"
    assert isinstance(excinfo.value.__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_missing_api_key_is_reported() -> None:
    client = GeminiClient(_settings(api_key=None))
    status = await client.warmup()
    assert not status.ready
    assert status.error == "AI client not configured"
    with pytest.raises(GenerationFailure):
        await client.generate_json("system", "prompt", schemas.PROMPT_SCHEMA)


@pytest.mark.asyncio
async def test_warmup_with_injected_client() -> None:
    client = GeminiClient(_settings(), client=_fake_sdk(FakeModels(text="{}")))
    status = await client.warmup()
    assert status.ready
    assert status.details["model_id"] == "gemini-2.5-flash"

from __future__ import annotations

import json

import pytest

from musewave_worker.generate import _parse_args, _run


def test_parse_args_collects_repeatable_options() -> None:
    args = _parse_args(
        ["suggest-artists", "--genre", "techno", "--genre", "trance", "--artist", "Bicep"]
    )
    assert args.command == "suggest-artists"
    assert args.genres == ["techno", "trance"]
    assert args.artists == ["Bicep"]
    assert args.backend is None


def test_parse_args_rejects_unknown_command() -> None:
    with pytest.raises(SystemExit):
        _parse_args(["compose-symphony"])


@pytest.mark.asyncio
async def test_generate_cli_plan(capsys: pytest.CaptureFixture[str]) -> None:
    await _run(
        "plan",
        prompt="warehouse at dawn",
        genres=["techno"],
        lyrics="rise up",
        seed=7,
        backend="offline",
    )
    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    assert payload["randomSeed"] == 7
    assert payload["genre"] == "techno"
    assert payload["cuePoints"]["outroStart"] == 40.0


@pytest.mark.asyncio
async def test_generate_cli_suggestion(capsys: pytest.CaptureFixture[str]) -> None:
    result = await _run("enhance-lyrics", prompt="ocean of static", backend="offline")
    payload = json.loads(capsys.readouterr().out)
    assert payload == {"lyrics": result.lyrics}  # type: ignore[attr-defined]
    assert payload["lyrics"].startswith("Verse 1:\n")

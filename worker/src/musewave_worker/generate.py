"""
CLI entry point to run a single MuseWave operation and print its JSON response.

Example:
    python -m musewave_worker.generate suggest-genres --prompt "midnight rooftop rave"
"""

from __future__ import annotations

import argparse
import asyncio
import json
from typing import Optional, Sequence

from .app.models import PlanRequest, SuggestionContext, WireModel
from .app.settings import BackendMode, Settings
from .services.backends import OfflineBackend
from .services.orchestrator import MuseOrchestrator, select_backend
from .services.planner import OfflinePlanner
from .services.randomness import fingerprint
from .services.suggestions import SuggestionEngine

SUGGESTION_COMMANDS = {
    "enhance-prompt": "enhance_prompt",
    "suggest-genres": "suggest_genres",
    "suggest-artists": "suggest_artists",
    "suggest-languages": "suggest_languages",
    "enhance-lyrics": "enhance_lyrics",
}
PLAN_COMMAND = "plan"


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a MuseWave worker operation.")
    parser.add_argument(
        "command",
        choices=[*SUGGESTION_COMMANDS, PLAN_COMMAND],
        help="Operation to run.",
    )
    parser.add_argument("--prompt", default=None, help="Free-text song prompt.")
    parser.add_argument(
        "--genre",
        dest="genres",
        action="append",
        default=[],
        help="Selected genre (repeatable).",
    )
    parser.add_argument(
        "--artist",
        dest="artists",
        action="append",
        default=[],
        help="Artist influence (repeatable).",
    )
    parser.add_argument(
        "--language",
        dest="languages",
        action="append",
        default=[],
        help="Vocal language (repeatable).",
    )
    parser.add_argument("--lyrics", default=None, help="Lyrics or lyrical theme.")
    parser.add_argument(
        "--duration",
        type=int,
        default=None,
        help="Desired song duration in seconds.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Creativity seed for the plan command (defaults to a hash of the prompt).",
    )
    parser.add_argument(
        "--backend",
        choices=[mode.value for mode in BackendMode],
        default=None,
        help="Override the configured generation backend.",
    )
    return parser.parse_args(argv)


async def _run(
    command: str,
    *,
    prompt: Optional[str] = None,
    genres: Sequence[str] = (),
    artists: Sequence[str] = (),
    languages: Sequence[str] = (),
    lyrics: Optional[str] = None,
    duration: Optional[int] = None,
    seed: Optional[int] = None,
    backend: Optional[str] = None,
) -> WireModel:
    settings_kwargs: dict[str, object] = {}
    if backend is not None:
        settings_kwargs["backend"] = BackendMode(backend)
    settings = Settings(**settings_kwargs)

    offline = OfflineBackend(SuggestionEngine(), OfflinePlanner())
    orchestrator = MuseOrchestrator(settings, select_backend(settings, offline), offline)

    if command == PLAN_COMMAND:
        request = PlanRequest(
            prompt=prompt,
            genres=list(genres),
            artists=list(artists),
            languages=list(languages),
            lyrics=lyrics,
            duration=duration,
        )
        creativity_seed = seed if seed is not None else fingerprint(prompt or "")
        result: WireModel = await orchestrator.generate_plan(request, creativity_seed)
    else:
        context = SuggestionContext(
            prompt=prompt,
            genres=list(genres),
            artists=list(artists),
            languages=list(languages),
            lyrics=lyrics,
            duration=duration,
        )
        result = await getattr(orchestrator, SUGGESTION_COMMANDS[command])(context)

    print(json.dumps(result.to_wire(), indent=2, ensure_ascii=False))
    return result


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    asyncio.run(
        _run(
            args.command,
            prompt=args.prompt,
            genres=args.genres,
            artists=args.artists,
            languages=args.languages,
            lyrics=args.lyrics,
            duration=args.duration,
            seed=args.seed,
            backend=args.backend,
        )
    )


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Quick smoke test for the remote (Gemini) backend.

Runs one suggestion and one plan generation against the configured model and
prints timings plus the responses, so contributors can verify that the API
key and model id work before pointing the worker at them.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
import time
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "worker" / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a standalone remote backend smoke test.")
    parser.add_argument(
        "--prompt",
        default="midnight rooftop rave with glassy arps",
        help="Prompt to feed into the remote model.",
    )
    parser.add_argument(
        "--genre",
        dest="genres",
        action="append",
        default=[],
        help="Selected genre (repeatable).",
    )
    parser.add_argument(
        "--model-id",
        default=None,
        help="Remote model identifier (defaults to worker settings).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=1234,
        help="Creativity seed for the plan request.",
    )
    return parser.parse_args()


async def run_smoke(args: argparse.Namespace) -> None:
    from musewave_worker.app.models import PlanRequest, SuggestionContext
    from musewave_worker.app.settings import BackendMode, Settings
    from musewave_worker.services.backends import RemoteBackend
    from musewave_worker.services.exceptions import GenerationFailure
    from musewave_worker.services.gemini import GeminiClient

    settings_kwargs: dict[str, object] = {"backend": BackendMode.REMOTE}
    if args.model_id is not None:
        settings_kwargs["model_id"] = args.model_id
    settings = Settings(**settings_kwargs)
    if not settings.api_key:
        print("Set MUSEWAVE_API_KEY or GEMINI_API_KEY before running the smoke test.", file=sys.stderr)
        sys.exit(2)

    backend = RemoteBackend(GeminiClient(settings))
    status = await backend.warmup()
    if not status.ready:
        print(f"Remote backend not ready: {status.error}", file=sys.stderr)
        sys.exit(2)

    context = SuggestionContext(prompt=args.prompt, genres=args.genres)
    try:
        start = time.perf_counter()
        genres = await backend.suggest_genres(context)
        suggestion_elapsed = time.perf_counter() - start

        start = time.perf_counter()
        plan = await backend.generate_plan(
            PlanRequest(prompt=args.prompt, genres=args.genres), args.seed
        )
        plan_elapsed = time.perf_counter() - start
    except GenerationFailure as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(3)

    payload = {
        "model_id": settings.model_id,
        "genres": genres.genres,
        "plan_title": plan.title,
        "plan_sections": [section.name for section in plan.sections],
        "cue_points": plan.cue_points.to_wire(),
        "suggestion_seconds": round(suggestion_elapsed, 3),
        "plan_seconds": round(plan_elapsed, 3),
    }
    print(json.dumps(payload, indent=2))
    print("Remote backend answered both calls.", file=sys.stderr)


def main() -> None:
    args = parse_args()
    try:
        asyncio.run(run_smoke(args))
    except KeyboardInterrupt:  # pragma: no cover - operator friendly exit
        print("Cancelled smoke test.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

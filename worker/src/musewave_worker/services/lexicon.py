"""Static candidate pools and keyword rule tables for offline generation."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

_LEXICON_PATH = Path(__file__).resolve().with_name("lexicon.json")

LANGUAGE_RULE_FIELDS = ("prompt", "lyrics", "genres")


@dataclass(frozen=True)
class GenreRule:
    pattern: re.Pattern[str]
    genres: tuple[str, ...]

    def matches(self, corpus: str) -> bool:
        return self.pattern.search(corpus) is not None


@dataclass(frozen=True)
class ArtistRoute:
    terms: tuple[str, ...]
    pool: str

    def matches(self, genre_fold: str) -> bool:
        return any(term in genre_fold for term in self.terms)


@dataclass(frozen=True)
class LanguageRule:
    genre_terms: tuple[str, ...]
    pattern: Optional[re.Pattern[str]]
    fields: tuple[str, ...]
    languages: tuple[str, ...]


@dataclass(frozen=True)
class Pools:
    genres: tuple[str, ...]
    languages: tuple[str, ...]
    prompt_textures: tuple[str, ...]
    prompt_settings: tuple[str, ...]
    prompt_grooves: tuple[str, ...]
    lyric_imagery: tuple[str, ...]
    lyric_motifs: tuple[str, ...]
    lyric_payoffs: tuple[str, ...]


@dataclass(frozen=True)
class Lexicon:
    version: int
    pools: Pools
    artists: dict[str, tuple[str, ...]]
    genre_rules: tuple[GenreRule, ...]
    artist_routes: tuple[ArtistRoute, ...]
    language_rules: tuple[LanguageRule, ...]

    def artist_pool(self, name: str) -> tuple[str, ...]:
        return self.artists.get(name, ())

    @property
    def default_artists(self) -> tuple[str, ...]:
        return self.artists["default"]


def _compile(pattern: str, *, ignore_case: bool = True) -> re.Pattern[str]:
    try:
        return re.compile(pattern, re.IGNORECASE if ignore_case else 0)
    except re.error as exc:  # pragma: no cover - configuration error
        raise ValueError(f"invalid pattern '{pattern}' in lexicon") from exc


def _build_language_rule(entry: dict) -> LanguageRule:
    fields = tuple(entry.get("fields") or ())
    for field in fields:
        if field not in LANGUAGE_RULE_FIELDS:  # pragma: no cover - configuration error
            raise ValueError(f"unknown language rule field '{field}' in lexicon")
    raw_pattern = entry.get("pattern")
    return LanguageRule(
        genre_terms=tuple(term.casefold() for term in entry.get("genre_terms", [])),
        pattern=(
            _compile(raw_pattern, ignore_case=entry.get("ignore_case", True)) if raw_pattern else None
        ),
        fields=fields,
        languages=tuple(entry["languages"]),
    )


def _load_lexicon(path: Path = _LEXICON_PATH) -> Lexicon:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:  # pragma: no cover - configuration error
        raise RuntimeError(f"suggestion lexicon file missing at {path}") from exc

    pools_raw = raw["pools"]
    pools = Pools(
        genres=tuple(pools_raw["genres"]),
        languages=tuple(pools_raw["languages"]),
        prompt_textures=tuple(pools_raw["prompt_textures"]),
        prompt_settings=tuple(pools_raw["prompt_settings"]),
        prompt_grooves=tuple(pools_raw["prompt_grooves"]),
        lyric_imagery=tuple(pools_raw["lyric_imagery"]),
        lyric_motifs=tuple(pools_raw["lyric_motifs"]),
        lyric_payoffs=tuple(pools_raw["lyric_payoffs"]),
    )

    artists = {name: tuple(values) for name, values in raw["artists"].items()}
    if "default" not in artists:  # pragma: no cover - configuration error
        raise ValueError("lexicon is missing the default artist pool")

    artist_routes = []
    for entry in raw["artist_routes"]:
        if entry["pool"] not in artists:  # pragma: no cover - configuration error
            raise ValueError(f"artist route targets unknown pool '{entry['pool']}'")
        artist_routes.append(
            ArtistRoute(
                terms=tuple(term.casefold() for term in entry["terms"]),
                pool=entry["pool"],
            )
        )

    return Lexicon(
        version=int(raw["version"]),
        pools=pools,
        artists=artists,
        genre_rules=tuple(
            GenreRule(pattern=_compile(entry["pattern"]), genres=tuple(entry["genres"]))
            for entry in raw["genre_rules"]
        ),
        artist_routes=tuple(artist_routes),
        language_rules=tuple(_build_language_rule(entry) for entry in raw["language_rules"]),
    )


LEXICON = _load_lexicon()

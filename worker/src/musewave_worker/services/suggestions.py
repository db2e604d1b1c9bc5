"""Offline prompt, genre, artist, language and lyric suggestions.

Every suggestion is drawn from a PRNG seeded by a fingerprint of the
request context, the wall clock and the retry attempt, then passed through
the novelty guard so two consecutive answers of the same kind differ when
the pools allow it.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

from loguru import logger

from ..app.models import (
    ArtistSuggestion,
    GenreSuggestion,
    LanguageSuggestion,
    LyricsSuggestion,
    PromptSuggestion,
    SuggestionContext,
)
from .inference import build_corpus, genre_candidates, language_candidates, route_artist_pool
from .lexicon import LEXICON, Lexicon
from .randomness import SeededRandom, seed_from
from .sampling import capitalise_phrase, ensure_different, normalise_whitespace, pick_unique
from .types import LastValueCache

DEFAULT_LYRIC_THEME = "electric nights"
LYRIC_THEME_WORDS = 6
LYRIC_EXCERPT_CHARS = 80
LANGUAGE_PICKS = 3


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


class SuggestionEngine:
    """Deterministic suggestion synthesizers sharing one last-value cache."""

    def __init__(
        self,
        *,
        lexicon: Lexicon = LEXICON,
        cache: Optional[LastValueCache] = None,
        clock: Callable[[], int] = _now_millis,
    ) -> None:
        self._lexicon = lexicon
        self._cache = cache if cache is not None else LastValueCache()
        self._clock = clock

    @property
    def cache(self) -> LastValueCache:
        return self._cache

    def enhance_prompt(self, context: SuggestionContext) -> PromptSuggestion:
        pools = self._lexicon.pools

        def generate(attempt: int) -> str:
            rng = SeededRandom(
                seed_from(
                    context.prompt,
                    ",".join(context.genres),
                    ",".join(context.artists),
                    context.lyrics,
                    self._clock(),
                    attempt,
                )
            )
            if context.genres:
                genre_focus = " / ".join(context.genres)
            else:
                genre_focus = " / ".join(pick_unique(pools.genres, 2, rng))
            if context.artists:
                artist_line = f"Inspired by {', '.join(context.artists)}"
            else:
                picks = pick_unique(self._lexicon.default_artists, 2, rng)
                artist_line = f"Channeling {' & '.join(picks)}"
            groove = pick_unique(pools.prompt_grooves, 1, rng)[0]
            setting = pick_unique(pools.prompt_settings, 1, rng)[0]
            textures = pick_unique(pools.prompt_textures, 2, rng)
            if context.lyrics:
                theme = f"lyrical themes about {context.lyrics[:LYRIC_EXCERPT_CHARS]}"
            else:
                theme = "wordless vocal atmospherics"
            return (
                f"Forge a {genre_focus} anthem with a {groove}, {artist_line}. "
                f"Set it within a {setting}, weaving {textures[0]} and {textures[1]} "
                f"around {theme}."
            )

        prompt = ensure_different(generate, self._cache.prompt)
        self._cache.prompt = prompt
        return PromptSuggestion(prompt=prompt)

    def suggest_genres(self, context: SuggestionContext) -> GenreSuggestion:
        corpus = build_corpus(context)
        candidates = genre_candidates(corpus, self._lexicon)

        def generate(attempt: int) -> list[str]:
            rng = SeededRandom(seed_from(corpus, self._clock(), attempt))
            desired = 3 + int(rng() * 2)
            picks = pick_unique(candidates, desired, rng, context.genres)
            if not picks:
                picks = pick_unique(self._lexicon.pools.genres, desired, rng, context.genres)
            return [normalise_whitespace(genre) for genre in picks]

        genres = ensure_different(generate, self._cache.genres)
        self._cache.genres = genres
        logger.debug("suggested genres {} for corpus {!r}", genres, corpus.strip())
        return GenreSuggestion(genres=genres)

    def suggest_artists(self, context: SuggestionContext) -> ArtistSuggestion:
        default_pool = self._lexicon.default_artists
        pool = route_artist_pool(context.genres, self._lexicon) or list(default_pool)

        def generate(attempt: int) -> list[str]:
            rng = SeededRandom(
                seed_from(",".join(context.genres), context.prompt, self._clock(), attempt)
            )
            desired = 3 + int(rng() * 2)
            picks = pick_unique(pool, desired, rng, context.artists)
            if not picks:
                picks = pick_unique(default_pool, desired, rng, context.artists)
            return [normalise_whitespace(artist) for artist in picks]

        artists = ensure_different(generate, self._cache.artists)
        self._cache.artists = artists
        return ArtistSuggestion(artists=artists)

    def suggest_languages(self, context: SuggestionContext) -> LanguageSuggestion:
        candidates = language_candidates(context, self._lexicon)

        def generate(attempt: int) -> list[str]:
            rng = SeededRandom(
                seed_from(",".join(context.genres), context.prompt, self._clock(), attempt)
            )
            picks = pick_unique(candidates, LANGUAGE_PICKS, rng, context.languages)
            if not picks:
                picks = pick_unique(
                    self._lexicon.pools.languages, LANGUAGE_PICKS, rng, context.languages
                )
            return [normalise_whitespace(language) for language in picks]

        languages = ensure_different(generate, self._cache.languages)
        self._cache.languages = languages
        return LanguageSuggestion(languages=languages)

    def enhance_lyrics(self, context: SuggestionContext) -> LyricsSuggestion:
        pools = self._lexicon.pools
        theme_source = f"{context.prompt or ''} {context.lyrics or ''}".strip() or DEFAULT_LYRIC_THEME
        theme_words = " ".join(theme_source.split()[:LYRIC_THEME_WORDS]).lower()

        def generate(attempt: int) -> str:
            rng = SeededRandom(
                seed_from(theme_source, ",".join(context.genres), self._clock(), attempt)
            )
            imagery = pick_unique(pools.lyric_imagery, 2, rng)
            motifs = pick_unique(pools.lyric_motifs, 2, rng)
            payoff = capitalise_phrase(pick_unique(pools.lyric_payoffs, 1, rng)[0])
            blocks = [
                (
                    "Verse 1:",
                    f"{capitalise_phrase(imagery[0])} over {theme_words}",
                    f"{capitalise_phrase(motifs[0])}, signals in the rain",
                ),
                (
                    "Chorus:",
                    payoff,
                    f"{capitalise_phrase(motifs[1])}, we glow beyond the fray",
                ),
                (
                    "Bridge:",
                    f"{capitalise_phrase(imagery[1])} whispers in the dark",
                    f"{payoff}, our legacy of sparks",
                ),
            ]
            return "\n\n".join("\n".join(block) for block in blocks)

        lyrics = ensure_different(generate, self._cache.lyrics)
        self._cache.lyrics = lyrics
        return LyricsSuggestion(lyrics=lyrics)

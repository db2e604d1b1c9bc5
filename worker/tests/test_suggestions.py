from __future__ import annotations

import pytest

from musewave_worker.app.models import SuggestionContext
from musewave_worker.services.inference import language_candidates
from musewave_worker.services.lexicon import LEXICON
from musewave_worker.services.suggestions import SuggestionEngine
from musewave_worker.services.types import LastValueCache


def _fixed_clock() -> int:
    return 1_700_000_000_000


@pytest.fixture
def engine() -> SuggestionEngine:
    return SuggestionEngine(clock=_fixed_clock)


def test_enhance_prompt_uses_selected_genres_and_artists(engine: SuggestionEngine) -> None:
    context = SuggestionContext(
        prompt="late night drive",
        genres=["deep house", "uk garage"],
        artists=["Peggy Gou"],
        lyrics="city lights",
    )
    prompt = engine.enhance_prompt(context).prompt
    assert prompt.startswith("Forge a deep house / uk garage anthem with a ")
    assert "Inspired by Peggy Gou" in prompt
    assert "lyrical themes about city lights" in prompt
    assert engine.cache.prompt == prompt


def test_enhance_prompt_fills_in_from_pools(engine: SuggestionEngine) -> None:
    prompt = engine.enhance_prompt(SuggestionContext()).prompt
    assert "Channeling " in prompt
    assert prompt.endswith("around wordless vocal atmospherics.")
    assert any(groove in prompt for groove in LEXICON.pools.prompt_grooves)
    assert any(setting in prompt for setting in LEXICON.pools.prompt_settings)


def test_enhance_prompt_avoids_repeating_itself(engine: SuggestionEngine) -> None:
    context = SuggestionContext(prompt="glacial techno")
    first = engine.enhance_prompt(context).prompt
    second = engine.enhance_prompt(context).prompt
    assert first != second


def test_suggest_genres_differs_on_repeat(engine: SuggestionEngine) -> None:
    context = SuggestionContext(prompt="midnight rooftop rave")
    first = engine.suggest_genres(context).genres
    second = engine.suggest_genres(context).genres
    assert 3 <= len(first) <= 4
    assert 3 <= len(second) <= 4
    assert first != second
    assert engine.cache.genres == second


def test_suggest_genres_excludes_selected(engine: SuggestionEngine) -> None:
    selected = ["Progressive House", "melodic techno", "psytrance"]
    context = SuggestionContext(prompt="festival rave", genres=selected)
    genres = engine.suggest_genres(context).genres
    folded = {genre.casefold() for genre in genres}
    assert not folded & {genre.casefold() for genre in selected}
    assert len(folded) == len(genres)


def test_suggest_artists_routes_deep_house(engine: SuggestionEngine) -> None:
    house = set(LEXICON.artist_pool("house"))
    for _ in range(3):
        artists = engine.suggest_artists(SuggestionContext(genres=["deep house"])).artists
        assert 3 <= len(artists) <= 4
        assert set(artists) <= house


def test_suggest_artists_falls_back_to_default_pool(engine: SuggestionEngine) -> None:
    house = list(LEXICON.artist_pool("house"))
    context = SuggestionContext(genres=["deep house"], artists=house)
    artists = engine.suggest_artists(context).artists
    assert artists
    assert set(artists) <= set(LEXICON.default_artists)


def test_suggest_artists_without_genres_uses_default(engine: SuggestionEngine) -> None:
    artists = engine.suggest_artists(SuggestionContext(prompt="anything")).artists
    assert set(artists) <= set(LEXICON.default_artists)


def test_suggest_languages_prefers_cultural_cues(engine: SuggestionEngine) -> None:
    context = SuggestionContext(prompt="reggaeton summer", languages=["english"])
    languages = engine.suggest_languages(context).languages
    assert len(languages) == 3
    assert "English" not in languages
    assert set(languages) <= set(language_candidates(context))


def test_enhance_lyrics_structure(engine: SuggestionEngine) -> None:
    context = SuggestionContext(prompt="Neon Dreams Over The City Tonight Forever More")
    lyrics = engine.enhance_lyrics(context).lyrics
    blocks = lyrics.split("\n\n")
    assert [block.splitlines()[0] for block in blocks] == ["Verse 1:", "Chorus:", "Bridge:"]
    assert all(len(block.splitlines()) == 3 for block in blocks)
    assert "over neon dreams over the city tonight\n" in lyrics
    assert engine.cache.lyrics == lyrics


def test_enhance_lyrics_default_theme(engine: SuggestionEngine) -> None:
    lyrics = engine.enhance_lyrics(SuggestionContext()).lyrics
    assert " over electric nights\n" in lyrics


def test_engines_do_not_share_cache() -> None:
    shared = LastValueCache()
    first = SuggestionEngine(cache=shared, clock=_fixed_clock)
    second = SuggestionEngine(clock=_fixed_clock)
    context = SuggestionContext(prompt="ambient drone")
    first.suggest_genres(context)
    assert shared.genres
    assert second.cache.genres == []

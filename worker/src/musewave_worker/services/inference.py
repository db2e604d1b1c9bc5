"""Keyword-driven inference of genre, artist and language candidates."""

from __future__ import annotations

from typing import Iterable

from ..app.models import SuggestionContext
from .lexicon import LEXICON, Lexicon


def build_corpus(context: SuggestionContext) -> str:
    return f"{context.prompt or ''} {context.lyrics or ''} {' '.join(context.artists)}"


def infer_genres(corpus: str, lexicon: Lexicon = LEXICON) -> list[str]:
    """Union the genres of every rule matching ``corpus``, in rule order."""
    corpus_fold = corpus.casefold()
    derived: list[str] = []
    for rule in lexicon.genre_rules:
        if rule.matches(corpus_fold):
            derived.extend(rule.genres)
    return _dedupe_casefold(derived)


def genre_candidates(corpus: str, lexicon: Lexicon = LEXICON) -> list[str]:
    return _dedupe_casefold([*infer_genres(corpus, lexicon), *lexicon.pools.genres])


def route_artist_pool(genres: Iterable[str], lexicon: Lexicon = LEXICON) -> list[str]:
    """Concatenate the artist sub-pools routed from each genre tag.

    A tag may feed several sub-pools and the same sub-pool may be appended
    more than once; the concatenation is intentionally left undeduplicated.
    """
    pool: list[str] = []
    for genre in genres:
        genre_fold = genre.casefold()
        for route in lexicon.artist_routes:
            if route.matches(genre_fold):
                pool.extend(lexicon.artist_pool(route.pool))
    return pool


def infer_languages(context: SuggestionContext, lexicon: Lexicon = LEXICON) -> list[str]:
    """Append the languages of every matching cultural cue, in rule order."""
    genre_fold = " ".join(context.genres).casefold()
    fields = {
        "prompt": context.prompt or "",
        "lyrics": context.lyrics or "",
        "genres": ",".join(context.genres),
    }
    languages: list[str] = []
    for rule in lexicon.language_rules:
        genre_hit = any(term in genre_fold for term in rule.genre_terms)
        text_hit = False
        if rule.pattern is not None and rule.fields:
            text = " ".join(fields[name] for name in rule.fields)
            text_hit = rule.pattern.search(text) is not None
        if genre_hit or text_hit:
            languages.extend(rule.languages)
    return languages


def language_candidates(
    context: SuggestionContext,
    lexicon: Lexicon = LEXICON,
) -> list[str]:
    return _dedupe_casefold([*infer_languages(context, lexicon), *lexicon.pools.languages])


def _dedupe_casefold(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        folded = item.casefold()
        if folded not in seen:
            seen.add(folded)
            result.append(item)
    return result

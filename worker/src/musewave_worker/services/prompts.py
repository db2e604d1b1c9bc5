"""System instructions and user prompts for the remote generative model."""

from __future__ import annotations

import json

from ..app.models import MusicPlan, PlanRequest, SuggestionContext, VideoStyle

SUGGESTION_SYSTEM_INSTRUCTION = (
    "You are an expert musicologist and DJ assistant. You know music theory, production "
    "techniques, DJ practice and the global music landscape, from foundational artists to "
    "current and underground scenes. Give specific, inspiring, non-generic suggestions that "
    "are directly relevant to the user's input."
)

PLAN_SYSTEM_INSTRUCTION = (
    "You are an expert composer producing a detailed music plan for a combined audio and "
    "video production.\n"
    "1. Vary chord progressions and mixing effects between sections; never reuse the same "
    "progression or effect values everywhere.\n"
    "2. Use the supplied creativity seed as the source of every creative decision and "
    "embed it in the randomSeed field.\n"
    "3. If lyrics are provided, distribute them over vocal sections and give every section "
    "with lyrics a lead melody whose phrasing fits the syllables. Instrumental sections "
    "have empty lyrics and an empty lead melody.\n"
    "4. Provide DJ-friendly structure: beat-only intro and outro of 8 or 16 bars, clear "
    "build-ups and a drop or breakdown. Report cue points in bars from the start of the "
    "song; every cue must lie within the total bar count.\n"
    "5. Output a single JSON object that matches the schema, with no extra text."
)

AUDIT_SYSTEM_INSTRUCTION = (
    "You are a quality assurance agent auditing a generated music plan against the user's "
    "request. Be strict and objective; if the plan fails, frame the feedback as a root "
    "cause analysis."
)

ASSETS_SYSTEM_INSTRUCTION = (
    "You are a creative director. From a detailed music plan, produce a time-coded lyric "
    "alignment and concise storyboards for the requested video styles."
)


def _join(values: list[str]) -> str:
    return ", ".join(values) or "None"


def enhance_prompt_request(context: SuggestionContext) -> str:
    return f"""
CONTEXT:
- Current Prompt: "{context.prompt or '(empty)'}"
- Selected Genres: {_join(context.genres)}
- Artist Influences: {_join(context.artists)}
- Lyrical Theme: "{context.lyrics or 'None'}"

TASK:
Write a vivid, detailed music generation prompt. If the current prompt is not empty,
rewrite and expand it; otherwise write a new one. Weave in the genres, artists and
lyrical theme when given. Return a JSON object with a single key "prompt".
"""


def suggest_genres_request(context: SuggestionContext) -> str:
    return f"""
CONTEXT:
- Current Prompt: "{context.prompt or ''}"
- Artist Influences: {_join(context.artists)}
- Lyrical Theme: "{context.lyrics or 'None'}"
- Already Selected: {_join(context.genres)}

TASK:
Suggest 3-5 relevant genres that are not already selected. Return a JSON object with a
single key "genres" holding an array of strings.
"""


def suggest_artists_request(context: SuggestionContext) -> str:
    return f"""
CONTEXT:
- Current Prompt: "{context.prompt or ''}"
- Selected Genres: {_join(context.genres)}
- Lyrical Theme: "{context.lyrics or 'None'}"
- Already Selected: {_join(context.artists)}

TASK:
Suggest 3-5 artist influences mixing foundational and currently trending artists.
Return a JSON object with a single key "artists" holding an array of strings.
"""


def suggest_languages_request(context: SuggestionContext) -> str:
    return f"""
CONTEXT:
- Current Prompt: "{context.prompt or ''}"
- Selected Genres: {_join(context.genres)}
- Artist Inspirations: {_join(context.artists)}
- Existing Languages: {_join(context.languages)}
- Lyrics Provided: {'Yes' if context.lyrics else 'No'}

TASK:
Recommend 1-3 vocal languages suiting the genre, cultural tone and artists. Include
English if crossover appeal is likely. Return a JSON object with key "languages".
"""


def enhance_lyrics_request(context: SuggestionContext) -> str:
    duration = context.duration if context.duration is not None else "unspecified"
    return f"""
CONTEXT:
- Current Prompt: "{context.prompt or ''}"
- Selected Genres: {_join(context.genres)}
- Artist Influences: {_join(context.artists)}
- Current Lyrics: "{context.lyrics or 'None'}"
- Desired Duration (seconds): {duration}

TASK:
Expand or rewrite the current lyrics into a complete lyrical theme for a song of that
duration, structured in labelled sections (e.g. Verse 1, Chorus). Return a JSON object
with a single key "lyrics".
"""


def plan_request(full_prompt: PlanRequest, creativity_seed: int) -> str:
    payload = json.dumps(full_prompt.to_wire(), indent=2, ensure_ascii=False)
    return (
        f"Creativity seed: {creativity_seed}\n"
        f"Generate a complete music plan for the following request:\n{payload}"
    )


def audit_request(plan: MusicPlan, original_request: PlanRequest) -> str:
    request_json = json.dumps(original_request.to_wire(), indent=2, ensure_ascii=False)
    plan_json = json.dumps(plan.to_wire(), indent=2, ensure_ascii=False)
    return f"""
Original User Request:
{request_json}

Generated Music Plan to Audit:
{plan_json}

AUDIT CHECKLIST (a boolean for each):
1. lyricsSung: requested lyrics are assigned to vocal sections, each with a lead melody.
2. isUnique: chords, structure and effects vary creatively and the random seed was used.
3. styleFaithful: instrumentation, BPM and mood match the requested genres and artists.
4. djStructure: clear intro/outro and a drop or breakdown.
5. masteringApplied: reverb, compression and stereo width are specified per section.

Set "passed" to true only if every check holds, and summarise in "feedback".
"""


def creative_assets_request(plan: MusicPlan, video_styles: list[VideoStyle], lyrics: str) -> str:
    plan_json = json.dumps(plan.to_wire(), indent=2, ensure_ascii=False)
    styles = ", ".join(style.value for style in video_styles) or "None"
    return f"""
Music Plan:
{plan_json}

Requested Video Styles: {styles}
Lyrics Provided: "{lyrics or 'None'}"

TASK:
1. Align the lyric lines to time ranges in seconds derived from the section lengths and
   BPM. Return an empty array when no lyrics were provided.
2. For each requested video style write one concise sentence describing the visual
   concept. Only include keys for requested styles.
"""

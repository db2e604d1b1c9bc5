"""Response-shape descriptors handed to the remote generative model."""

from __future__ import annotations

from typing import Any, Dict

from ..app.models import Ornamentation, SectionType, SynthPattern, SynthTimbre, VideoStyle

Schema = Dict[str, Any]


def _string(description: str | None = None, **extra: Any) -> Schema:
    schema: Schema = {"type": "STRING", **extra}
    if description:
        schema["description"] = description
    return schema


def _number(description: str | None = None, **extra: Any) -> Schema:
    schema: Schema = {"type": "NUMBER", **extra}
    if description:
        schema["description"] = description
    return schema


def _array(items: Schema, **extra: Any) -> Schema:
    return {"type": "ARRAY", "items": items, **extra}


def _object(properties: Dict[str, Schema], *, required: list[str] | None = None, **extra: Any) -> Schema:
    schema: Schema = {"type": "OBJECT", "properties": properties, **extra}
    schema["required"] = list(properties) if required is None else required
    return schema


def _enum(values: type) -> list[str]:
    return [member.value for member in values]


def _single_field(name: str, value: Schema) -> Schema:
    return _object({name: value})


PROMPT_SCHEMA = _single_field("prompt", _string())
GENRES_SCHEMA = _single_field("genres", _array(_string()))
ARTISTS_SCHEMA = _single_field("artists", _array(_string()))
LANGUAGES_SCHEMA = _single_field("languages", _array(_string()))
LYRICS_SCHEMA = _single_field("lyrics", _string())

_BEAT_OFFSETS = _array(_number(), nullable=True)

SECTION_SCHEMA = _object(
    {
        "name": _string(),
        "sectionType": _string(enum=_enum(SectionType)),
        "durationBars": _number(),
        "chordProgression": _array(_string()),
        "drumPattern": _object({"kick": _BEAT_OFFSETS, "snare": _BEAT_OFFSETS, "hihat": _BEAT_OFFSETS}),
        "synthLine": _object(
            {
                "pattern": _string(enum=_enum(SynthPattern)),
                "timbre": _string(enum=_enum(SynthTimbre)),
            }
        ),
        "leadMelody": _array(
            _object(
                {
                    "note": _string(),
                    "duration": _number(),
                    "ornamentation": _string(enum=_enum(Ornamentation)),
                }
            )
        ),
        "effects": _object(
            {
                "reverb": _number("Reverb amount between 0 and 1."),
                "compressionThreshold": _number("Compressor threshold in dB, between -60 and 0."),
                "stereoWidth": _number("Stereo width between 0 and 1."),
            }
        ),
        "lyrics": _string(
            "The lyrics for this section. Leave empty for instrumental sections.",
            nullable=True,
        ),
    },
    required=[
        "name",
        "sectionType",
        "durationBars",
        "chordProgression",
        "drumPattern",
        "synthLine",
        "leadMelody",
        "effects",
    ],
)

MUSIC_PLAN_SCHEMA = _object(
    {
        "title": _string("A creative title for the song."),
        "genre": _string("The primary genre of the song, derived from user input."),
        "bpm": _number("The tempo of the song in beats per minute (e.g., 120)."),
        "key": _string("The musical key of the song (e.g., 'C Minor', 'F# Major')."),
        "overallStructure": _string("A brief description of the arrangement and energy flow."),
        "vocalStyle": _string("A description of the synthesized vocal style."),
        "lyrics": _string("The full lyrics to be sung in the song."),
        "randomSeed": _number("The creativity seed used for this plan."),
        "sections": _array(SECTION_SCHEMA),
        "stems": _object(
            {
                "vocals": {"type": "BOOLEAN"},
                "drums": {"type": "BOOLEAN"},
                "bass": {"type": "BOOLEAN"},
                "instruments": {"type": "BOOLEAN"},
            }
        ),
        "cuePoints": _object(
            {
                "introEnd": _number("Bar at which the intro ends."),
                "dropStart": _number("Bar at which the drop or main peak begins."),
                "outroStart": _number("Bar at which the outro begins."),
            }
        ),
    }
)

AUDIT_SCHEMA = _object(
    {
        "lyricsSung": {"type": "BOOLEAN"},
        "isUnique": {"type": "BOOLEAN"},
        "styleFaithful": {"type": "BOOLEAN"},
        "djStructure": {"type": "BOOLEAN"},
        "masteringApplied": {"type": "BOOLEAN"},
        "passed": {"type": "BOOLEAN"},
        "feedback": _string(),
    }
)

CREATIVE_ASSETS_SCHEMA = _object(
    {
        "lyricsAlignment": _array(
            _object(
                {
                    "time": _string("Time range for the line (e.g., '0s-10s')."),
                    "line": _string("The lyric line."),
                }
            ),
            description="Time-coded lyric alignment; empty when no lyrics were provided.",
        ),
        "videoStoryboard": _object(
            {
                style.value: _string(f"Storyboard for the {style.value} video.", nullable=True)
                for style in VideoStyle
            },
            required=[],
            description="One storyboard sentence per requested video style.",
        ),
    }
)

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model serialising to the camelCase field names used on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class SectionType(str, Enum):
    INTRO = "intro"
    VERSE = "verse"
    CHORUS = "chorus"
    BRIDGE = "bridge"
    BREAKDOWN = "breakdown"
    DROP = "drop"
    OUTRO = "outro"


class SynthPattern(str, Enum):
    PADS = "pads"
    ARPEGGIO_UP = "arpeggio-up"
    ARPEGGIO_DOWN = "arpeggio-down"


class SynthTimbre(str, Enum):
    WARM = "warm"
    BRIGHT = "bright"
    DARK = "dark"
    GLASSY = "glassy"


class Ornamentation(str, Enum):
    NONE = "none"
    LIGHT = "light"
    HEAVY = "heavy"


class VideoStyle(str, Enum):
    LYRICAL = "lyrical"
    OFFICIAL = "official"
    ABSTRACT = "abstract"


class SuggestionContext(WireModel):
    prompt: Optional[str] = None
    genres: list[str] = Field(default_factory=list)
    artists: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    lyrics: Optional[str] = None
    duration: Optional[int] = None

    @field_validator("genres", "artists", "languages", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class PromptSuggestion(WireModel):
    prompt: str


class GenreSuggestion(WireModel):
    genres: list[str]


class ArtistSuggestion(WireModel):
    artists: list[str]


class LanguageSuggestion(WireModel):
    languages: list[str]


class LyricsSuggestion(WireModel):
    lyrics: str


class DrumPattern(WireModel):
    kick: Optional[list[float]] = None
    snare: Optional[list[float]] = None
    hihat: Optional[list[float]] = None


class SynthLine(WireModel):
    pattern: SynthPattern
    timbre: SynthTimbre


class MelodyNote(WireModel):
    note: str = Field(..., min_length=1, max_length=8)
    duration: float = Field(..., gt=0.0)
    ornamentation: Ornamentation = Ornamentation.NONE


class SectionEffects(WireModel):
    reverb: float = Field(..., ge=0.0, le=1.0)
    compression_threshold: float = Field(..., ge=-60.0, le=0.0)
    stereo_width: float = Field(..., ge=0.0, le=1.0)


class Section(WireModel):
    name: str = Field(..., min_length=1, max_length=64)
    section_type: SectionType
    duration_bars: int = Field(..., ge=1, le=256)
    chord_progression: list[str] = Field(default_factory=list)
    drum_pattern: DrumPattern = Field(default_factory=DrumPattern)
    synth_line: SynthLine
    lead_melody: list[MelodyNote] = Field(default_factory=list)
    effects: SectionEffects
    lyrics: str = ""

    @field_validator("lead_melody", mode="before")
    @classmethod
    def _melody_none_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("lyrics", mode="before")
    @classmethod
    def _lyrics_none_as_empty(cls, value: object) -> object:
        return "" if value is None else value


class StemAvailability(WireModel):
    vocals: bool
    drums: bool
    bass: bool
    instruments: bool


class CuePoints(WireModel):
    """Cue positions measured in bars from the start of the song."""

    intro_end: float = Field(..., ge=0.0)
    drop_start: float = Field(..., ge=0.0)
    outro_start: float = Field(..., ge=0.0)


class MusicPlan(WireModel):
    title: str
    genre: str
    bpm: float = Field(..., gt=0.0, le=400.0)
    key: str
    overall_structure: str
    vocal_style: str
    lyrics: str
    random_seed: int
    sections: list[Section]
    stems: StemAvailability
    cue_points: CuePoints

    @property
    def total_bars(self) -> int:
        return sum(section.duration_bars for section in self.sections)


class PlanRequest(WireModel):
    prompt: Optional[str] = None
    genres: list[str] = Field(default_factory=list)
    artists: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    lyrics: Optional[str] = None
    duration: Optional[int] = None
    video_styles: list[VideoStyle] = Field(default_factory=list)

    @property
    def primary_genre(self) -> Optional[str]:
        return self.genres[0] if self.genres else None


class AuditReport(WireModel):
    lyrics_sung: bool
    is_unique: bool
    style_faithful: bool
    dj_structure: bool
    mastering_applied: bool
    passed: bool
    feedback: str


class LyricAlignment(WireModel):
    time: str
    line: str


class CreativeAssets(WireModel):
    lyrics_alignment: list[LyricAlignment] = Field(default_factory=list)
    video_storyboard: dict[VideoStyle, Optional[str]] = Field(default_factory=dict)

    @field_validator("video_storyboard", mode="before")
    @classmethod
    def _drop_empty_storyboards(cls, value: object) -> object:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {style: text for style, text in value.items() if text is not None}
        return value


class SuggestionRequest(WireModel):
    context: SuggestionContext = Field(default_factory=SuggestionContext)


class PlanGenerationRequest(WireModel):
    full_prompt: PlanRequest = Field(default_factory=PlanRequest)
    creativity_seed: int = Field(..., ge=0)


class PlanAuditRequest(WireModel):
    plan: MusicPlan
    original_request: PlanRequest = Field(default_factory=PlanRequest)


class CreativeAssetsRequest(WireModel):
    music_plan: MusicPlan
    video_styles: list[VideoStyle] = Field(default_factory=list)
    lyrics: str = ""

"""Offline music plan fixture, structural audit and creative assets."""

from __future__ import annotations

from typing import Iterable, List

from ..app.models import (
    AuditReport,
    CreativeAssets,
    CuePoints,
    DrumPattern,
    LyricAlignment,
    MelodyNote,
    MusicPlan,
    Ornamentation,
    PlanRequest,
    Section,
    SectionEffects,
    SectionType,
    StemAvailability,
    SynthLine,
    SynthPattern,
    SynthTimbre,
    VideoStyle,
)

OFFLINE_PLAN_TITLE = "Mock Plan"
DEFAULT_GENRE = "electronic"
DEFAULT_PLAN_LYRICS = "Instrumental focus with atmospheric chants."
DEFAULT_VERSE_LYRICS = "Electronic dreams in the night sky, dancing with the stars above"
DEFAULT_CHORUS_LYRICS = "We are the future, we are the light, shining bright in the digital age"
OFFLINE_ALIGNMENT_WINDOW = "0s-20s"

_AMBIENT_DRUMS = DrumPattern(kick=[1.0], snare=[0.0], hihat=[0.5, 1.0, 1.5])
_DRIVING_DRUMS = DrumPattern(kick=[1.0, 1.5], snare=[2.0], hihat=[0.5, 1.0, 1.5, 2.0])


def _melody(*notes: tuple[str, float, Ornamentation]) -> List[MelodyNote]:
    return [
        MelodyNote(note=note, duration=duration, ornamentation=ornamentation)
        for note, duration, ornamentation in notes
    ]


def _fixture_sections(verse_lyrics: str, chorus_lyrics: str) -> List[Section]:
    light = Ornamentation.LIGHT
    return [
        Section(
            name="Intro",
            section_type=SectionType.INTRO,
            duration_bars=8,
            chord_progression=["Cm7", "Abmaj7"],
            drum_pattern=_AMBIENT_DRUMS.model_copy(deep=True),
            synth_line=SynthLine(pattern=SynthPattern.PADS, timbre=SynthTimbre.WARM),
            lead_melody=[],
            effects=SectionEffects(reverb=0.4, compression_threshold=-12.0, stereo_width=0.6),
            lyrics="",
        ),
        Section(
            name="Verse",
            section_type=SectionType.VERSE,
            duration_bars=16,
            chord_progression=["Cm7", "Abmaj7", "Fm7", "Bb7"],
            drum_pattern=_DRIVING_DRUMS.model_copy(deep=True),
            synth_line=SynthLine(pattern=SynthPattern.ARPEGGIO_UP, timbre=SynthTimbre.GLASSY),
            lead_melody=_melody(
                ("C5", 0.5, light), ("D5", 0.5, light), ("E5", 0.5, light), ("F5", 0.5, light)
            ),
            effects=SectionEffects(reverb=0.5, compression_threshold=-10.0, stereo_width=0.85),
            lyrics=verse_lyrics,
        ),
        Section(
            name="Chorus",
            section_type=SectionType.CHORUS,
            duration_bars=16,
            chord_progression=["Abmaj7", "Fm7", "Cm7", "Bb7"],
            drum_pattern=_DRIVING_DRUMS.model_copy(deep=True),
            synth_line=SynthLine(pattern=SynthPattern.ARPEGGIO_UP, timbre=SynthTimbre.GLASSY),
            lead_melody=_melody(
                ("C5", 0.5, light),
                ("G5", 0.5, Ornamentation.HEAVY),
                ("F5", 0.5, light),
                ("E5", 0.5, light),
            ),
            effects=SectionEffects(reverb=0.5, compression_threshold=-10.0, stereo_width=0.85),
            lyrics=chorus_lyrics,
        ),
        Section(
            name="Outro",
            section_type=SectionType.OUTRO,
            duration_bars=8,
            chord_progression=["Cm7", "Abmaj7"],
            drum_pattern=_AMBIENT_DRUMS.model_copy(deep=True),
            synth_line=SynthLine(pattern=SynthPattern.PADS, timbre=SynthTimbre.WARM),
            lead_melody=_melody(("C5", 2.0, light)),
            effects=SectionEffects(reverb=0.6, compression_threshold=-8.0, stereo_width=0.9),
            lyrics="",
        ),
    ]


def _section_start(sections: Iterable[Section], index: int) -> int:
    return sum(section.duration_bars for section in list(sections)[:index])


def _sections_vary(sections: list[Section]) -> bool:
    if len(sections) < 2:
        return False
    progressions = {tuple(section.chord_progression) for section in sections}
    effects = {
        (
            section.effects.reverb,
            section.effects.compression_threshold,
            section.effects.stereo_width,
        )
        for section in sections
    }
    return len(progressions) > 1 and len(effects) > 1


def plan_consistency_issues(plan: MusicPlan) -> list[str]:
    """Describe every structural rule the plan breaks; empty when consistent."""
    issues: list[str] = []
    if not plan.sections:
        issues.append("plan contains no sections")
    for section in plan.sections:
        if section.lyrics.strip() and not section.lead_melody:
            issues.append(f"section '{section.name}' has lyrics but no lead melody")
    cues = plan.cue_points
    if not cues.intro_end <= cues.drop_start <= cues.outro_start:
        issues.append("cue points are out of order")
    if cues.outro_start > plan.total_bars:
        issues.append(
            f"outro cue at bar {cues.outro_start:g} lies beyond the {plan.total_bars} bar arrangement"
        )
    return issues


class OfflinePlanner:
    """Produces the canonical offline music plan and its companion artifacts."""

    def generate_plan(self, request: PlanRequest, creativity_seed: int) -> MusicPlan:
        lyrics = request.lyrics or ""
        sections = _fixture_sections(
            verse_lyrics=lyrics or DEFAULT_VERSE_LYRICS,
            chorus_lyrics=lyrics or DEFAULT_CHORUS_LYRICS,
        )
        chorus_index = next(
            index
            for index, section in enumerate(sections)
            if section.section_type == SectionType.CHORUS
        )
        return MusicPlan(
            title=OFFLINE_PLAN_TITLE,
            genre=request.primary_genre or DEFAULT_GENRE,
            bpm=122.0,
            key="C Minor",
            overall_structure=" - ".join(section.name for section in sections),
            vocal_style="Ethereal female lead with vocoder harmonies",
            lyrics=lyrics or DEFAULT_PLAN_LYRICS,
            random_seed=creativity_seed,
            sections=sections,
            stems=StemAvailability(vocals=True, drums=True, bass=True, instruments=True),
            cue_points=CuePoints(
                intro_end=float(sections[0].duration_bars),
                drop_start=float(_section_start(sections, chorus_index)),
                outro_start=float(_section_start(sections, len(sections) - 1)),
            ),
        )

    def audit_plan(self, plan: MusicPlan, original_request: PlanRequest) -> AuditReport:
        issues = plan_consistency_issues(plan)
        lyric_sections = [section for section in plan.sections if section.lyrics.strip()]
        lyrics_sung = all(section.lead_melody for section in lyric_sections)
        if original_request.lyrics and not lyric_sections:
            lyrics_sung = False
            issues.append("requested lyrics are not assigned to any section")
        dj_structure = bool(plan.sections) and (
            plan.sections[0].section_type == SectionType.INTRO
            and plan.sections[-1].section_type == SectionType.OUTRO
        )
        if not dj_structure:
            issues.append("plan does not open with an intro and close with an outro")
        mastering_applied = bool(plan.sections)
        is_unique = _sections_vary(plan.sections)
        if not is_unique:
            issues.append("chord progressions and effects do not vary between sections")
        style_faithful = not original_request.genres or any(
            genre.casefold() == plan.genre.casefold() for genre in original_request.genres
        )
        if not style_faithful:
            issues.append(f"plan genre '{plan.genre}' is not among the requested genres")
        passed = (
            lyrics_sung
            and is_unique
            and dj_structure
            and mastering_applied
            and style_faithful
            and not issues
        )
        feedback = "Offline audit passed." if passed else "Offline audit failed: " + "; ".join(issues)
        return AuditReport(
            lyrics_sung=lyrics_sung,
            is_unique=is_unique,
            style_faithful=style_faithful,
            dj_structure=dj_structure,
            mastering_applied=mastering_applied,
            passed=passed,
            feedback=feedback,
        )

    def creative_assets(
        self,
        plan: MusicPlan,
        video_styles: Iterable[VideoStyle],
        lyrics: str,
    ) -> CreativeAssets:
        alignment = [LyricAlignment(time=OFFLINE_ALIGNMENT_WINDOW, line=lyrics)] if lyrics else []
        storyboard = {
            style: f"Placeholder storyboard for {style.value}." for style in video_styles
        }
        return CreativeAssets(lyrics_alignment=alignment, video_storyboard=storyboard)

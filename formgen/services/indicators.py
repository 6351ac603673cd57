# formgen/services/indicators.py
import re
from typing import List

from ..config import DEFAULT_CONFIG, EngineConfig
from ..models.field_models import IndicatorKind, IndicatorSegment

GLYPH_PATTERNS = (
    (re.compile(r"☐"), IndicatorKind.checkbox),
    (re.compile(r"□"), IndicatorKind.checkbox),
    (re.compile(r"\[\s*\]"), IndicatorKind.checkbox),
    (re.compile(r"\(\s*\)"), IndicatorKind.radio),
)

def _embedded(text: str, start: int, end: int, count: int, config: EngineConfig) -> bool:
    # "file__name": a short run glued to word characters on both sides
    return (
        config.skip_embedded_runs and count <= config.embedded_run_max
        and start > 0 and end + 1 < len(text)
        and text[start - 1].isalnum() and text[end + 1].isalnum()
    )

def find_underscore_runs(text: str, config: EngineConfig = DEFAULT_CONFIG) -> List[IndicatorSegment]:
    """
    Split `text` into blank-entry runs.

    A run starts at an underscore and carries on through underscores and short
    space gaps (at most `run_space_tolerance` in a row). Any other character,
    comma included, or a longer gap closes it. The run ends at its last
    underscore and only counts when it holds at least `min_underscores`.
    """
    segments: List[IndicatorSegment] = []
    n = len(text)
    i = 0
    while i < n:
        if text[i] != "_":
            i += 1
            continue

        start = last = i
        count = 1
        gap = 0
        j = i + 1
        while j < n:
            ch = text[j]
            if ch == "_":
                count += 1
                last = j
                gap = 0
            elif ch == " " and gap < config.run_space_tolerance:
                gap += 1
            else:
                break
            j += 1

        if count >= config.min_underscores and not _embedded(text, start, last, count, config):
            segments.append(IndicatorSegment(
                kind=IndicatorKind.underscore_run,
                start_offset=start,
                end_offset=last,
                length=last - start + 1,
                symbol=text[start:last + 1],
                underscore_count=count,
            ))
        i = last + 1
    return segments

def find_glyphs(text: str) -> List[IndicatorSegment]:
    found: List[IndicatorSegment] = []
    for regex, kind in GLYPH_PATTERNS:
        for m in regex.finditer(text):
            found.append(IndicatorSegment(
                kind=kind,
                start_offset=m.start(),
                end_offset=m.end() - 1,
                length=m.end() - m.start(),
                symbol=m.group(0),
            ))
    found.sort(key=lambda s: s.start_offset)
    return found

def detect_indicators(text: str, config: EngineConfig = DEFAULT_CONFIG) -> List[IndicatorSegment]:
    """Both scans merged, ordered by offset."""
    if not text:
        return []
    segments = find_glyphs(text) + find_underscore_runs(text, config)
    segments.sort(key=lambda s: s.start_offset)
    return segments

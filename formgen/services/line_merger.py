# formgen/services/line_merger.py
import logging
from typing import Iterable, List, Optional

from ..config import DEFAULT_CONFIG, INDICATOR_GLYPHS, EngineConfig
from ..models.extract_models import MergedFragment, TextFragment

log = logging.getLogger("formgen")

def is_candidate(text: str) -> bool:
    """Only fragments carrying an underscore or a checkbox/radio glyph take part in detection."""
    return "_" in text or any(ch in INDICATOR_GLYPHS for ch in text)

def _join(left: str, right: str) -> str:
    if not left or not right or left[-1].isspace() or right[0].isspace():
        return left + right
    return left + " " + right

def _union(a: List[float], b: List[float]) -> List[float]:
    return [min(a[0], b[0]), min(a[1], b[1]), max(a[2], b[2]), max(a[3], b[3])]

def _can_merge(acc: MergedFragment, frag: TextFragment, config: EngineConfig) -> bool:
    if frag.page != acc.page:
        return False
    dy = abs(frag.bounds[1] - acc.bounds[1])
    dx = frag.bounds[0] - acc.bounds[2]
    return dy < config.merge_max_dy and config.merge_min_dx <= dx < config.merge_max_dx

def _open(frag: TextFragment) -> MergedFragment:
    return MergedFragment(
        text=frag.text,
        bounds=list(frag.bounds),
        page=frag.page,
        font_name=frag.font_name,
        font_size=frag.font_size,
    )

def merge_fragments(fragments: Iterable[TextFragment], config: EngineConfig = DEFAULT_CONFIG) -> List[MergedFragment]:
    """
    Stitch extraction fragments that continue each other on the same line.
    Prose fragments without blank-entry indicators are dropped from the working set
    and close any open merge.
    """
    merged: List[MergedFragment] = []
    current: Optional[MergedFragment] = None
    seen = 0

    for frag in fragments:
        seen += 1
        text = frag.text
        if not isinstance(text, str) or not text.strip() or frag.bounds is None or not is_candidate(text):
            if current is not None:
                merged.append(current)
                current = None
            continue

        if current is not None and _can_merge(current, frag, config):
            current.text = _join(current.text, text)
            current.bounds = _union(current.bounds, frag.bounds)
            current.source_count += 1
            continue

        if current is not None:
            merged.append(current)
        current = _open(frag)

    if current is not None:
        merged.append(current)

    log.info(f"[merge] {seen} elements -> {len(merged)} merged")
    return merged

# formgen/services/detector.py
import logging
from typing import Iterable, List, Tuple

from ..config import DEFAULT_CONFIG, EngineConfig
from ..models.extract_models import MergedFragment, TextFragment
from ..models.field_models import DetectionResult, DetectionStats, FieldRegion
from .char_positions import positions
from .classifier import extract_context, field_type_for
from .field_namer import field_name
from .indicators import detect_indicators
from .line_merger import merge_fragments

log = logging.getLogger("formgen")

def emit_regions(frag: MergedFragment, next_id: int, config: EngineConfig = DEFAULT_CONFIG) -> Tuple[List[FieldRegion], int]:
    """
    Regions for one merged fragment, numbered from `next_id`.
    Returns the regions and the id to continue from.
    """
    text = frag.text
    segments = detect_indicators(text, config)
    if not segments:
        return [], next_id

    xs = positions(text, frag.bounds[0], frag.font_name, frag.font_size)
    out: List[FieldRegion] = []
    for k, seg in enumerate(segments):
        lower = segments[k - 1].end_offset + 1 if k > 0 else 0
        upper = segments[k + 1].start_offset if k + 1 < len(segments) else None
        context = extract_context(text, seg.start_offset, seg.end_offset, config, lower, upper)
        field_type = field_type_for(seg, context, text, config)

        x = xs[seg.start_offset]
        if seg.is_glyph:
            width = height = frag.font_size * config.glyph_size_factor
            font_size = frag.font_size
        else:
            width = max(xs[seg.end_offset] - x, config.min_field_width)
            height = max(frag.height, config.min_field_height)
            font_size = frag.font_size * config.text_font_scale
        if width <= 0 or height <= 0:
            log.warning(f"[detect] page={frag.page} offset={seg.start_offset} degenerate {seg.kind.value}, skipped")
            continue

        out.append(FieldRegion(
            id=next_id,
            name=field_name(context, next_id, field_type, config),
            page=frag.page,
            x=x,
            y=frag.bounds[1],
            width=width,
            height=height,
            field_type=field_type,
            font_size=font_size,
            context=context,
            underscore_length=None if seg.is_glyph else seg.length,
        ))
        next_id += 1
    return out, next_id

def detect_fields(fragments: Iterable[TextFragment], config: EngineConfig = DEFAULT_CONFIG) -> DetectionResult:
    config.validate()
    fragments = list(fragments)
    merged = merge_fragments(fragments, config)

    regions: List[FieldRegion] = []
    next_id = 1
    for frag in merged:
        found, next_id = emit_regions(frag, next_id, config)
        regions.extend(found)

    stats = DetectionStats.from_types([r.field_type for r in regions])
    log.info(f"[detect] elements={len(fragments)} merged={len(merged)} areas={stats.total} by_type={stats.by_type}")
    return DetectionResult(
        element_count=len(fragments),
        merged_count=len(merged),
        regions=regions,
        stats=stats,
    )

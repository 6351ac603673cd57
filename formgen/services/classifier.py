# formgen/services/classifier.py
from typing import Optional

from ..config import DEFAULT_CONFIG, EngineConfig
from ..models.field_models import FieldContext, FieldType, IndicatorKind, IndicatorSegment

def extract_context(
    text: str,
    start: int,
    end: int,
    config: EngineConfig = DEFAULT_CONFIG,
    lower_bound: int = 0,
    upper_bound: Optional[int] = None,
) -> FieldContext:
    """
    Text around text[start:end + 1], at most `context_window` characters each side.
    lower_bound/upper_bound clip the window at the neighbouring indicators.
    """
    window = config.context_window
    lo = min(max(lower_bound, start - window, 0), start)
    hi = len(text) if upper_bound is None else min(upper_bound, len(text))
    hi = max(min(hi, end + 1 + window), end + 1)
    return FieldContext(before=text[lo:start].strip(), after=text[end + 1:hi].strip())

def _first_hit(haystack: str, config: EngineConfig) -> Optional[FieldType]:
    for field_type, keywords in config.keyword_table:
        if any(k in haystack for k in keywords):
            return field_type
    return None

def classify(context: FieldContext, full_text: str = "", config: EngineConfig = DEFAULT_CONFIG) -> FieldType:
    """
    Keyword classification, priority order of the keyword table.
    The surrounding context is searched first; the whole fragment only when it is silent.
    """
    near = f"{context.before} {context.after}".lower()
    hit = _first_hit(near, config)
    if hit is None and full_text:
        hit = _first_hit(full_text.lower(), config)
    return hit or FieldType.text

def field_type_for(
    segment: IndicatorSegment,
    context: FieldContext,
    full_text: str = "",
    config: EngineConfig = DEFAULT_CONFIG,
) -> FieldType:
    # glyph types are fixed by the detector
    if segment.kind is IndicatorKind.checkbox:
        return FieldType.checkbox
    if segment.kind is IndicatorKind.radio:
        return FieldType.radio
    return classify(context, full_text, config)

# formgen/services/field_namer.py
import re

from ..config import DEFAULT_CONFIG, EngineConfig
from ..models.field_models import GLYPH_TYPES, FieldContext, FieldType

_NON_WORD = re.compile(r"[^a-zA-Z0-9_]")

def label_slug(before: str, config: EngineConfig = DEFAULT_CONFIG) -> str:
    words = [w for w in before.split() if len(w) >= config.name_min_word_len]
    if config.name_slug_words <= 0:
        return ""
    cleaned = (_NON_WORD.sub("", w) for w in words[-config.name_slug_words:])
    return "_".join(w for w in cleaned if w)

def field_name(context: FieldContext, index: int, field_type: FieldType, config: EngineConfig = DEFAULT_CONFIG) -> str:
    """`{type}_{index}[_{slug}]`. Only the index keeps names unique within a run."""
    prefix = f"{field_type.value}_{index}"
    if field_type in GLYPH_TYPES:
        return prefix
    slug = label_slug(context.before, config)
    return f"{prefix}_{slug}" if slug else prefix

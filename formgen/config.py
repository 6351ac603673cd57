from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from formgen.models.field_models import FieldType


# Ordered (field type, keywords) table: first type with a keyword hit wins.
# Signature must stay above currency/date, signature blocks usually carry both.
KEYWORD_TABLE: Tuple[Tuple[FieldType, Tuple[str, ...]], ...] = (
    (FieldType.signature, ("sign", "signature", "signed by", "initial")),
    (FieldType.currency, ("$", "amount", "sum of", "price", "deposit", "earnest money")),
    (FieldType.date, ("date", "day", "month", "year")),
    (FieldType.name, ("name",)),
    (FieldType.address, ("address",)),
    (FieldType.phone, ("phone", "tel")),
    (FieldType.email, ("email", "e-mail")),
)

# Glyphs that make a fragment a merge candidate besides "_".
INDICATOR_GLYPHS = frozenset("☐□[]()")


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """
    Tunables of the field-inference pipeline.

    All values are empirically tuned against extracted contracts and forms,
    not derived from font metrics.
    """

    # Line merger: same visual line or an immediately adjacent one.
    merge_max_dy: float = 20.0
    merge_min_dx: float = -5.0  # slight overlap from extraction jitter
    merge_max_dx: float = 100.0

    # Underscore runs
    min_underscores: int = 2
    run_space_tolerance: int = 1  # consecutive spaces allowed inside a run
    skip_embedded_runs: bool = True  # snake__case identifiers are not blanks
    embedded_run_max: int = 3  # longer glued runs are still blanks

    # Context / naming
    context_window: int = 100
    name_slug_words: int = 3
    name_min_word_len: int = 3

    # Geometry
    min_field_width: float = 30.0
    glyph_size_factor: float = 0.9
    text_font_scale: float = 0.7
    min_field_height: float = 1.0

    keyword_table: Tuple[Tuple[FieldType, Tuple[str, ...]], ...] = field(default=KEYWORD_TABLE)

    def validate(self) -> None:
        if self.merge_max_dy <= 0:
            raise ValueError("merge_max_dy must be > 0")
        if self.merge_min_dx >= self.merge_max_dx:
            raise ValueError("merge_min_dx must be < merge_max_dx")
        if self.min_underscores < 1:
            raise ValueError("min_underscores must be >= 1")
        if self.run_space_tolerance < 0:
            raise ValueError("run_space_tolerance must be >= 0")
        if self.embedded_run_max < 0:
            raise ValueError("embedded_run_max must be >= 0")
        if self.context_window < 0:
            raise ValueError("context_window must be >= 0")
        if self.name_slug_words < 0:
            raise ValueError("name_slug_words must be >= 0")
        if self.min_field_width <= 0 or self.min_field_height <= 0:
            raise ValueError("minimum field size must be > 0")
        if not (0.0 < self.glyph_size_factor <= 2.0):
            raise ValueError("glyph_size_factor must be within (0, 2]")
        if self.text_font_scale <= 0:
            raise ValueError("text_font_scale must be > 0")
        for field_type, keywords in self.keyword_table:
            if field_type in (FieldType.checkbox, FieldType.radio, FieldType.text):
                raise ValueError(f"{field_type.value} cannot be keyword-classified")
            if not keywords:
                raise ValueError(f"empty keyword set for {field_type.value}")


DEFAULT_CONFIG = EngineConfig()

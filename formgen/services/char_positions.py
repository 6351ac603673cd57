# formgen/services/char_positions.py
from typing import List, Optional

# Average glyph advance as a fraction of the font size. Bold variants come
# before their family so the substring match picks the most specific entry.
FONT_WIDTH_FACTORS = (
    ("Helvetica-Bold", 0.58),
    ("Helvetica", 0.55),
    ("Times-Bold", 0.52),
    ("Times", 0.48),
    ("Courier", 0.60),
    ("Arial-Bold", 0.58),
    ("Arial,Bold", 0.58),
    ("Arial", 0.55),
)
DEFAULT_WIDTH_FACTOR = 0.55

# Narrow characters advance by a fraction of the base width.
NARROW_CHARS = {
    " ": 0.3,
    "_": 0.5,
    "(": 0.38, ")": 0.38, "[": 0.38, "]": 0.38,
    ".": 0.28, ",": 0.28, ":": 0.28, ";": 0.28, "'": 0.28, "!": 0.28, "|": 0.28,
    "$": 0.6,
}

def font_width_factor(font_name: Optional[str]) -> float:
    if font_name:
        for key, factor in FONT_WIDTH_FACTORS:
            if key in font_name:
                return factor
    return DEFAULT_WIDTH_FACTOR

def char_advance(ch: str, base_width: float) -> float:
    return base_width * NARROW_CHARS.get(ch, 1.0)

def positions(text: str, start_x: float, font_name: Optional[str], font_size: float) -> List[float]:
    """
    x coordinate of the left edge of every character of `text`.
    An approximation of proportional metrics, good enough to find a blank run.
    """
    base = max(font_size, 0.0) * font_width_factor(font_name)
    out: List[float] = []
    x = float(start_x)
    for ch in text:
        out.append(x)
        x += char_advance(ch, base)
    return out

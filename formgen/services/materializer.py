# formgen/services/materializer.py
import logging
from typing import Dict, List, Optional, Tuple

import fitz  # PyMuPDF
from pydantic import BaseModel

from ..models.field_models import GLYPH_TYPES, CreatedField, FieldRegion, FieldType

log = logging.getLogger("formgen")

MIN_WIDGET_WIDTH = 10.0
MIN_WIDGET_HEIGHT = 5.0
MIN_SIGNATURE_HEIGHT = 30.0

Color = Tuple[float, float, float]

# border, fill (None = transparent)
DEFAULT_STYLE: Tuple[Color, Optional[Color]] = ((0.7, 0.7, 0.7), (1, 1, 1))
FIELD_STYLES: Dict[FieldType, Tuple[Color, Optional[Color]]] = {
    FieldType.signature: ((0, 0, 1), (0.95, 0.95, 1)),
    FieldType.currency:  ((0, 0.6, 0), (0.95, 1, 0.95)),
    FieldType.date:      ((0.5, 0, 0.5), (0.98, 0.95, 1)),
    FieldType.checkbox:  ((0, 0, 0), None),
    FieldType.radio:     ((0, 0, 0), None),
}

class DocumentOpenError(RuntimeError):
    pass

class RegionPlacementError(ValueError):
    pass

class MaterializeResult(BaseModel):
    pdf_bytes: bytes
    created: List[CreatedField] = []
    errors: List[str] = []

    @property
    def success_count(self) -> int:
        return len(self.created)

    @property
    def error_count(self) -> int:
        return len(self.errors)

def style_for(field_type: FieldType) -> Tuple[Color, Optional[Color]]:
    return FIELD_STYLES.get(field_type, DEFAULT_STYLE)

def clamp_region(region: FieldRegion, page_width: float, page_height: float) -> Tuple[float, float, float, float]:
    """Fit a region into the page. Returns x, y, width, height in the region's bottom-left space."""
    if page_width < MIN_WIDGET_WIDTH or page_height < MIN_WIDGET_HEIGHT:
        raise RegionPlacementError(f"degenerate rectangle on {page_width}x{page_height} page")
    x = max(0.0, min(region.x, page_width - MIN_WIDGET_WIDTH))
    y = max(0.0, min(region.y, page_height - MIN_WIDGET_HEIGHT))
    w = max(MIN_WIDGET_WIDTH, min(region.width, page_width - x))
    h = max(MIN_WIDGET_HEIGHT, min(region.height, page_height - y))
    if region.field_type == FieldType.signature:
        # signatures need room to write in
        h = min(max(h, MIN_SIGNATURE_HEIGHT), page_height - y)
    return x, y, w, h

def _build_widget(region: FieldRegion, rect: fitz.Rect) -> fitz.Widget:
    border, fill = style_for(region.field_type)
    widget = fitz.Widget()
    widget.field_name = region.name
    widget.rect = rect
    widget.border_width = 1
    widget.border_color = border
    if fill is not None:
        widget.fill_color = fill

    if region.field_type == FieldType.checkbox:
        widget.field_type = fitz.PDF_WIDGET_TYPE_CHECKBOX
        widget.field_value = False
    elif region.field_type == FieldType.radio:
        # one widget = a radio group with a single option
        widget.field_type = fitz.PDF_WIDGET_TYPE_RADIOBUTTON
        widget.field_value = False
    else:
        widget.field_type = fitz.PDF_WIDGET_TYPE_TEXT
        widget.text_font = "Helv"
        widget.text_fontsize = max(6.0, min(rect.height * 0.6, 12.0))
        widget.text_color = (0, 0, 0)
        widget.field_value = ""
        if region.context.before or region.context.after:
            widget.field_label = region.context.full[:100]
    return widget

def place_region(doc: fitz.Document, region: FieldRegion) -> CreatedField:
    if region.page < 0 or region.page >= doc.page_count:
        raise RegionPlacementError(f"Page {region.page} not found")
    page = doc[region.page]
    page_width, page_height = page.rect.width, page.rect.height

    x, y, w, h = clamp_region(region, page_width, page_height)
    # PyMuPDF puts the origin top-left
    rect = fitz.Rect(x, page_height - (y + h), x + w, page_height - y)
    page.add_widget(_build_widget(region, rect))

    return CreatedField(
        id=region.id,
        name=region.name,
        type=region.field_type,
        page=region.page,
        bounds=[x, y, x + w, y + h],
        context="" if region.field_type in GLYPH_TYPES else region.context.full[:100],
    )

def materialize(pdf_bytes: bytes, regions: List[FieldRegion]) -> MaterializeResult:
    """
    Embed one widget per region. A region that cannot be placed is recorded
    as an error and the rest of the batch carries on.
    """
    try:
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    except Exception as e:
        raise DocumentOpenError(f"Cannot open as PDF: {e}") from e

    created: List[CreatedField] = []
    errors: List[str] = []
    try:
        for region in regions:
            try:
                created.append(place_region(doc, region))
            except Exception as e:
                errors.append(f"{region.name}: {e}")
                log.error(f"[widget] ✗ {region.name}: {e}")
                continue
            n = len(created)
            if n <= 10 or n % 50 == 0:
                log.info(f"[widget] ✓ [{n}/{len(regions)}] {region.name} ({region.field_type.value})")
        out = doc.tobytes(garbage=1, deflate=True)
    finally:
        doc.close()

    log.info(f"[widget] created {len(created)}/{len(regions)} errors={len(errors)}")
    return MaterializeResult(pdf_bytes=out, created=created, errors=errors)

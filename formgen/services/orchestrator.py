# formgen/services/orchestrator.py
import base64, logging
from typing import Callable, List, Optional

from ..config import DEFAULT_CONFIG, EngineConfig
from ..models.api_models import (
    CreateFieldsRequest, DetectRequest, DetectResponse, ProcessRequest, ProcessResponse, ProcessStats,
)
from ..models.field_models import DetectionStats, FieldRegion
from .detector import detect_fields
from .materializer import materialize
from .pdf_fetch import fetch_pdf_bytes

log = logging.getLogger("formgen")

MAX_ERROR_DETAILS = 10
NO_FIELDS_MESSAGE = "No form fields found in PDF"

Fetcher = Callable[[str], bytes]

def detect_pipeline(req: DetectRequest, *, config: EngineConfig = DEFAULT_CONFIG) -> DetectResponse:
    result = detect_fields(req.extract_elements, config)
    return DetectResponse(
        total_areas=len(result.regions),
        fillable_areas=result.regions,
        statistics=result.stats,
    )

def _apply(pdf_url: str, regions: List[FieldRegion], fetch: Optional[Fetcher]) -> ProcessResponse:
    if not regions:
        log.info("[process] nothing to place, skipping download")
        return ProcessResponse(pdf_base64=None, statistics=ProcessStats(), fields=[], message=NO_FIELDS_MESSAGE)

    # 1) source bytes
    raw = (fetch or fetch_pdf_bytes)(pdf_url)

    # 2) regions -> widgets
    placed = materialize(raw, regions)

    # 3) summary, counted over what actually got created
    created = DetectionStats.from_types([f.type for f in placed.created])
    stats = ProcessStats(
        detected_areas=len(regions),
        created_fields=placed.success_count,
        errors=placed.error_count,
        text_fields=created.text_fields,
        signature_fields=created.signature_fields,
        checkboxes=created.checkboxes,
        radio_buttons=created.radio_buttons,
        by_type=created.by_type,
    )
    log.info(f"[process] created={stats.created_fields}/{stats.detected_areas} errors={stats.errors}")
    return ProcessResponse(
        pdf_base64=base64.b64encode(placed.pdf_bytes).decode("ascii"),
        statistics=stats,
        fields=placed.created,
        error_details=placed.errors[:MAX_ERROR_DETAILS] if placed.errors else None,
    )

def process_pipeline(req: ProcessRequest, *, fetch: Optional[Fetcher] = None,
                     config: EngineConfig = DEFAULT_CONFIG) -> ProcessResponse:
    """detect -> download -> embed widgets -> base64"""
    result = detect_fields(req.extract_elements, config)
    return _apply(req.pdf_url, result.regions, fetch)

def create_fields_pipeline(req: CreateFieldsRequest, *, fetch: Optional[Fetcher] = None) -> ProcessResponse:
    """Embed widgets for regions a caller already holds (e.g. an edited /detect-underscores result)."""
    return _apply(req.pdf_url, req.fillable_areas, fetch)

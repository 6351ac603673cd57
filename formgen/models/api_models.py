# formgen/models/api_models.py
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from .extract_models import TextFragment
from .field_models import CreatedField, DetectionStats, FieldRegion

# === requests ===
class DetectRequest(BaseModel):
    extract_elements: List[TextFragment]

class ProcessRequest(BaseModel):
    pdf_url: str = Field(..., min_length=1)
    extract_elements: List[TextFragment]

class CreateFieldsRequest(BaseModel):
    pdf_url: str = Field(..., min_length=1)
    fillable_areas: List[FieldRegion]

# === responses ===
class DetectResponse(BaseModel):
    success: bool = True
    total_areas: int
    fillable_areas: List[FieldRegion]
    statistics: DetectionStats

class ProcessStats(BaseModel):
    detected_areas: int = 0
    created_fields: int = 0
    errors: int = 0
    text_fields: int = 0
    signature_fields: int = 0
    checkboxes: int = 0
    radio_buttons: int = 0
    by_type: Dict[str, int] = {}

class ProcessResponse(BaseModel):
    success: bool = True
    pdf_base64: Optional[str] = None
    statistics: ProcessStats
    fields: List[CreatedField] = []
    error_details: Optional[List[str]] = None
    message: Optional[str] = None

class ErrorResponse(BaseModel):
    success: bool = False
    error: str

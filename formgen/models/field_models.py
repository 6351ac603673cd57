# formgen/models/field_models.py
from enum import Enum
from pydantic import BaseModel, Field
from typing import Dict, List, Optional

class FieldType(str, Enum):
    text      = "text"
    date      = "date"
    name      = "name"
    address   = "address"
    phone     = "phone"
    email     = "email"
    currency  = "currency"
    signature = "signature"
    checkbox  = "checkbox"
    radio     = "radio"

GLYPH_TYPES = (FieldType.checkbox, FieldType.radio)

class IndicatorKind(str, Enum):
    underscore_run = "underscore_run"
    checkbox       = "checkbox"
    radio          = "radio"

class IndicatorSegment(BaseModel):
    kind: IndicatorKind
    start_offset: int
    end_offset: int            # inclusive
    length: int                # character span, end - start + 1
    symbol: str = ""
    underscore_count: int = 0

    @property
    def is_glyph(self) -> bool:
        return self.kind is not IndicatorKind.underscore_run

class FieldContext(BaseModel):
    before: str = ""
    after: str = ""

    @property
    def full(self) -> str:
        return f"{self.before} _____ {self.after}"

class FieldRegion(BaseModel):
    id: int
    name: str
    page: int
    x: float
    y: float
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    field_type: FieldType
    font_size: float
    context: FieldContext = Field(default_factory=FieldContext)
    underscore_length: Optional[int] = None

class CreatedField(BaseModel):
    id: int
    name: str
    type: FieldType
    page: int
    bounds: List[float]  # clamped [x0,y0,x1,y1], bottom-left origin
    context: str = ""

class DetectionStats(BaseModel):
    total: int = 0
    by_type: Dict[str, int] = Field(default_factory=dict)
    text_fields: int = 0
    signature_fields: int = 0
    checkboxes: int = 0
    radio_buttons: int = 0

    @classmethod
    def from_types(cls, types: List[FieldType]) -> "DetectionStats":
        by_type: Dict[str, int] = {}
        for t in types:
            by_type[t.value] = by_type.get(t.value, 0) + 1
        special = {FieldType.checkbox, FieldType.radio, FieldType.signature}
        return cls(
            total=len(types),
            by_type=by_type,
            text_fields=sum(1 for t in types if t not in special),
            signature_fields=by_type.get(FieldType.signature.value, 0),
            checkboxes=by_type.get(FieldType.checkbox.value, 0),
            radio_buttons=by_type.get(FieldType.radio.value, 0),
        )

class DetectionResult(BaseModel):
    element_count: int
    merged_count: int
    regions: List[FieldRegion]
    stats: DetectionStats

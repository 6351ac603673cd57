# formgen/models/extract_models.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

DEFAULT_FONT_NAME = "Arial"
DEFAULT_FONT_SIZE = 12.0

class FontInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    family_name: Optional[str] = None
    size: Optional[float] = None

class TextFragment(BaseModel):
    """One element of an upstream extraction (Adobe PDF Extract element shape)."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    text: Optional[str] = Field(None, alias="Text")
    bounds: Optional[List[float]] = Field(None, alias="Bounds", description="[x0,y0,x1,y1]")
    page: int = Field(0, alias="Page")
    font: Optional[FontInfo] = Field(None, alias="Font")
    text_size: Optional[float] = Field(None, alias="TextSize")

    @field_validator("text", mode="before")
    @classmethod
    def _text_or_none(cls, v):
        # figures/tables carry no usable text; the merger drops them
        return v if isinstance(v, str) else None

    @field_validator("bounds")
    @classmethod
    def _four_floats(cls, v):
        if v is not None and len(v) != 4:
            raise ValueError("Bounds must be [x0, y0, x1, y1]")
        return v

    @field_validator("page", mode="before")
    @classmethod
    def _page_default(cls, v):
        # Extract output sometimes carries "Page": null
        return 0 if v is None else v

    @property
    def font_name(self) -> str:
        if self.font is not None:
            return self.font.name or self.font.family_name or DEFAULT_FONT_NAME
        return DEFAULT_FONT_NAME

    @property
    def font_size(self) -> float:
        if self.font is not None and self.font.size:
            return float(self.font.size)
        return float(self.text_size or DEFAULT_FONT_SIZE)

class MergedFragment(BaseModel):
    text: str
    bounds: List[float] = Field(..., description="[x0,y0,x1,y1]")
    page: int
    font_name: str = DEFAULT_FONT_NAME
    font_size: float = DEFAULT_FONT_SIZE
    source_count: int = 1

    @property
    def height(self) -> float:
        return self.bounds[3] - self.bounds[1]

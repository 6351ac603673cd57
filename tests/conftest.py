"""Shared fixtures: Adobe Extract style elements and in-memory PDFs."""

import fitz
import pytest

from formgen.models.extract_models import TextFragment


def _element(text, bounds, page=0, font="Arial", size=12.0):
    el = {"Bounds": list(bounds), "Page": page, "Font": {"name": font, "family_name": font, "size": size}}
    if text is not None:
        el["Text"] = text
    return el


@pytest.fixture
def make_element():
    """Factory for raw element dicts as posted by clients."""
    return _element


@pytest.fixture
def make_fragment():
    """Factory for validated TextFragment records."""

    def _make(text, bounds, page=0, font="Arial", size=12.0):
        return TextFragment.model_validate(_element(text, bounds, page, font, size))

    return _make


@pytest.fixture
def blank_pdf():
    """Two US letter pages, no content."""
    doc = fitz.open()
    doc.new_page(width=612, height=792)
    doc.new_page(width=612, height=792)
    data = doc.tobytes()
    doc.close()
    return data

import pytest

from formgen.config import EngineConfig
from formgen.models.field_models import FieldContext, FieldType, IndicatorKind, IndicatorSegment
from formgen.services.classifier import classify, extract_context, field_type_for
from formgen.services.field_namer import field_name, label_slug


# ---- context window ----

def test_context_is_trimmed_and_bounded():
    text = "x" * 150 + " Name: ____ (print) " + "y" * 150
    start = text.index("_")
    end = start + 3
    ctx = extract_context(text, start, end)
    assert ctx.before.endswith("Name:")
    assert len(ctx.before) <= 100
    assert ctx.after.startswith("(print)")
    assert len(ctx.after) <= 100


def test_context_window_is_configurable():
    ctx = extract_context("Full legal name: ____", 17, 20, EngineConfig(context_window=6))
    assert ctx.before == "name:"


def test_context_is_clipped_at_neighbouring_indicators():
    text = "Signature: ________  Date: ___"
    ctx = extract_context(text, 27, 29, lower_bound=19)
    assert ctx.before == "Date:"
    ctx = extract_context(text, 11, 18, upper_bound=27)
    assert ctx.after == "Date:"


def test_context_at_text_edges():
    ctx = extract_context("____", 0, 3)
    assert ctx == FieldContext(before="", after="")
    assert ctx.full == " _____ "


# ---- classification ----

def test_signature_outranks_currency():
    ctx = FieldContext(before="Signature", after="$100")
    assert classify(ctx) == FieldType.signature


@pytest.mark.parametrize(
    "before, expected",
    [
        ("Initial here", FieldType.signature),
        ("Earnest Money deposit of", FieldType.currency),
        ("Deposit due date", FieldType.currency),
        ("Date", FieldType.date),
        ("Month and Year", FieldType.date),
        ("Tenant Name:", FieldType.name),
        ("Mailing Address:", FieldType.address),
        ("Phone:", FieldType.phone),
        ("Tel.", FieldType.phone),
        ("E-mail:", FieldType.email),
        ("Comments:", FieldType.text),
    ],
)
def test_keyword_priority(before, expected):
    assert classify(FieldContext(before=before)) == expected


def test_full_text_is_only_a_fallback():
    assert classify(FieldContext(before="Date:"), "Signature: ____ Date: ____") == FieldType.date
    assert classify(FieldContext(before="", after=""), "Contact Email ____") == FieldType.email
    assert classify(FieldContext(), "") == FieldType.text


def test_keyword_table_is_data():
    cfg = EngineConfig(keyword_table=((FieldType.phone, ("fax",)),))
    assert classify(FieldContext(before="Fax:"), config=cfg) == FieldType.phone
    assert classify(FieldContext(before="Signature:"), config=cfg) == FieldType.text


def test_glyphs_bypass_keywords():
    box = IndicatorSegment(kind=IndicatorKind.checkbox, start_offset=0, end_offset=0, length=1, symbol="☐")
    radio = IndicatorSegment(kind=IndicatorKind.radio, start_offset=0, end_offset=2, length=3, symbol="( )")
    ctx = FieldContext(after="Signature on file")
    assert field_type_for(box, ctx, "☐ Signature on file") == FieldType.checkbox
    assert field_type_for(radio, ctx, "( ) Signature on file") == FieldType.radio


# ---- naming ----

def test_name_uses_last_words_of_label():
    ctx = FieldContext(before="Please enter your full legal name:")
    assert field_name(ctx, 7, FieldType.name) == "name_7_full_legal_name"


def test_name_skips_short_and_symbol_words():
    assert label_slug("a --- :: of") == ""
    assert field_name(FieldContext(before="a --- ::"), 5, FieldType.text) == "text_5"
    assert field_name(FieldContext(before="Tenant's e-mail"), 2, FieldType.email) == "email_2_Tenants_email"


def test_glyph_names_have_no_slug():
    ctx = FieldContext(before="Pets allowed?", after="Yes")
    assert field_name(ctx, 3, FieldType.checkbox) == "checkbox_3"
    assert field_name(ctx, 4, FieldType.radio) == "radio_4"


def test_names_are_deterministic_and_index_unique():
    ctx = FieldContext(before="Landlord Signature")
    a = field_name(ctx, 1, FieldType.signature)
    assert a == field_name(ctx, 1, FieldType.signature)
    assert a != field_name(ctx, 2, FieldType.signature)
    assert a == "signature_1_Landlord_Signature"


def test_slug_word_count_is_configurable():
    ctx = FieldContext(before="Name of the primary tenant")
    assert field_name(ctx, 1, FieldType.name, EngineConfig(name_slug_words=2)) == "name_1_primary_tenant"

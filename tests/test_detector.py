import pytest

from formgen.config import EngineConfig
from formgen.models.field_models import FieldType
from formgen.services.char_positions import positions
from formgen.services.detector import detect_fields


def test_labelled_blank_becomes_a_name_field(make_fragment):
    frag = make_fragment("Name: _____", [100, 700, 250, 715], font="Arial", size=12)
    result = detect_fields([frag])

    assert len(result.regions) == 1
    region = result.regions[0]
    assert region.id == 1
    assert region.field_type == FieldType.name
    assert region.name == "name_1_Name"
    assert region.x == pytest.approx(positions("Name: _____", 100, "Arial", 12)[6])
    assert region.x == pytest.approx(130.228)
    assert region.y == 700
    assert region.width >= 30
    assert region.height == pytest.approx(15)
    assert region.font_size == pytest.approx(12 * 0.7)
    assert region.underscore_length == 5
    assert region.context.before == "Name:"


def test_signature_and_date_on_one_line(make_fragment):
    frag = make_fragment("Signature: ________  Date: ___", [72, 100, 400, 112])
    regions = detect_fields([frag]).regions

    assert [r.field_type for r in regions] == [FieldType.signature, FieldType.date]
    assert [r.id for r in regions] == [1, 2]
    assert [r.name for r in regions] == ["signature_1_Signature", "date_2_Date"]
    assert regions[0].x < regions[1].x


def test_checkbox_is_a_square(make_fragment):
    frag = make_fragment("☐ I agree", [50, 300, 120, 310], size=10)
    regions = detect_fields([frag]).regions

    assert len(regions) == 1
    box = regions[0]
    assert box.field_type == FieldType.checkbox
    assert box.name == "checkbox_1"
    assert box.x == 50
    assert box.width == box.height == pytest.approx(9.0)
    assert box.underscore_length is None


def test_mixed_line_is_emitted_in_offset_order(make_fragment):
    frag = make_fragment("( ) Yes ( ) No  ☐ Other: ____", [50, 300, 300, 312])
    regions = detect_fields([frag]).regions
    assert [r.field_type for r in regions] == [
        FieldType.radio, FieldType.radio, FieldType.checkbox, FieldType.text,
    ]
    assert regions[-1].name == "text_4_Other"


def test_ids_run_across_fragments_and_pages(make_fragment):
    frags = [
        make_fragment("Tenant Name: ______", [72, 700, 300, 712], page=0),
        make_fragment("This Lease is made on the first day.", [72, 680, 400, 692], page=0),
        make_fragment("Phone: _____", [72, 700, 300, 712], page=1),
        make_fragment("Email: _____", [72, 650, 300, 662], page=1),
    ]
    result = detect_fields(frags)
    assert [(r.id, r.page, r.field_type) for r in result.regions] == [
        (1, 0, FieldType.name),
        (2, 1, FieldType.phone),
        (3, 1, FieldType.email),
    ]
    assert result.element_count == 4
    assert result.merged_count == 3


def test_statistics_count_by_type(make_fragment):
    frags = [
        make_fragment("Signature ____ Amount $____", [72, 100, 400, 112]),
        make_fragment("[ ] Yes ( ) No", [72, 60, 200, 72]),
    ]
    stats = detect_fields(frags).stats
    assert stats.total == 4
    assert stats.by_type == {"signature": 1, "currency": 1, "checkbox": 1, "radio": 1}
    assert stats.signature_fields == 1
    assert stats.checkboxes == 1
    assert stats.radio_buttons == 1
    assert stats.text_fields == 1


def test_nothing_to_detect(make_fragment):
    assert detect_fields([]).regions == []
    prose = [make_fragment("No blanks in this paragraph.", [72, 700, 400, 712])]
    result = detect_fields(prose)
    assert result.regions == []
    assert result.stats.total == 0
    assert result.merged_count == 0


def test_short_runs_are_ignored(make_fragment):
    frag = make_fragment("file_name and __", [72, 700, 300, 712])
    regions = detect_fields([frag]).regions
    assert len(regions) == 1
    regions = detect_fields([frag], EngineConfig(min_underscores=3)).regions
    assert regions == []


def test_degenerate_glyphs_are_not_emitted(make_fragment):
    # a zero size falls back to 12pt, a negative one survives validation
    frag = make_fragment("☐ Yes  Name: ____", [72, 700, 300, 700], size=-1)
    regions = detect_fields([frag]).regions
    # the checkbox collapses and is dropped, the blank keeps its minimum size
    assert [(r.id, r.field_type) for r in regions] == [(1, FieldType.name)]
    assert regions[0].width == 30
    assert regions[0].height == 1


def test_detection_is_deterministic(make_fragment):
    frags = [
        make_fragment("Buyer Signature: ______ Date: ____", [72, 100, 400, 112]),
        make_fragment("☐ Cash ☐ Financing", [72, 80, 300, 92]),
    ]
    first = detect_fields(frags).model_dump()
    second = detect_fields(frags).model_dump()
    assert first == second


def test_blank_glued_between_words_is_emitted(make_fragment):
    frags = [
        make_fragment("Tenant__________________Landlord", [72, 700, 400, 712]),
        make_fragment("see file__name for details", [72, 650, 400, 662]),
    ]
    regions = detect_fields(frags).regions
    assert len(regions) == 1
    assert regions[0].underscore_length == 18
    assert regions[0].y == 700

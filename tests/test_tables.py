import pytest

from result_templates.elements import Element, ElementMetadata
from result_templates.render_data import RenderData
from result_templates.tables import (
    CHECKMARK,
    EMPTY_CELL,
    HEADER_HEIGHT,
    column_widths,
    match_component_score,
    render_table,
    subject_cell,
)

# -------------------------------
# Fixtures & helper functions
# -------------------------------


def table(x=0, y=0, width=300, height=122, style=None, **metadata):
    return Element.from_dict({
        "type": "table",
        "x": x, "y": y, "width": width, "height": height,
        "style": style or {},
        "metadata": metadata,
    })


def cell_texts(surface):
    return [command.args["text"] for command in surface.ops("text_cell")]


# -------------------------------
# Column widths
# -------------------------------


def test_column_widths_are_normalised_weights():
    widths = column_widths(ElementMetadata(column_widths=(2.0, 1.0, 1.0)), 400, 3)
    assert widths == (200, 100, 100)
    assert sum(widths) == pytest.approx(400)


def test_column_weights_are_relative():
    assert column_widths(ElementMetadata(column_widths=(1.0, 1.0, 1.0)), 300, 3) == column_widths(
        ElementMetadata(column_widths=(10.0, 10.0, 10.0)), 300, 3
    )


@pytest.mark.parametrize("weights", [None, (1.0, 1.0), (0.0, 0.0, 0.0)])
def test_column_widths_fall_back_to_equal_split(weights):
    widths = column_widths(ElementMetadata(column_widths=weights), 300, 3)
    assert widths == (100, 100, 100)


def test_column_widths_with_no_columns():
    assert column_widths(ElementMetadata(), 300, 0) == ()


# -------------------------------
# Cell values
# -------------------------------


def test_component_match_is_bidirectional_and_first_wins():
    scores = [
        {"component": {"name": "1st CA"}, "score": 10},
        {"component": {"name": "CA"}, "score": 20},
        {"component": {"name": "Exam"}, "score": 55},
    ]
    assert match_component_score("EXAM", scores) == "55"
    # "CA" is contained in "1ST CA", which comes first
    assert match_component_score("CA", scores) == "10"
    # the header contains the component name
    assert match_component_score("EXAM SCORE", scores) == "55"
    assert match_component_score("PROJECT", scores) == EMPTY_CELL
    assert match_component_score("CA1", [{"component": {"name": "Continuous Assessment 1"}, "score": 9}]) == EMPTY_CELL
    assert match_component_score("EXAM", []) == EMPTY_CELL


def test_component_with_missing_score_shows_placeholder():
    assert match_component_score("EXAM", [{"component": {"name": "Exam"}, "score": None}]) == EMPTY_CELL


def test_component_entries_without_a_name_are_skipped():
    scores = [None, "CA1", {"score": 5}, {"component": {"name": ""}, "score": 7},
              {"component": {"name": "CA1"}, "score": 9}]
    assert match_component_score("CA1", scores) == "9"
    assert match_component_score("EXAM", scores) == EMPTY_CELL


def test_subject_cells():
    result = {
        "subject": {"name": "Physics"},
        "total": 92,
        "grade": "A+",
        "remark": "Outstanding",
        "componentScores": [{"component": {"name": "CA1"}, "score": 14}],
    }
    assert subject_cell("SUBJECTS", 0, result) == ("Physics", False)
    assert subject_cell("Total", 4, result) == ("92", True)
    assert subject_cell("Grade", 5, result) == ("A+", False)
    assert subject_cell("Remarks", 6, result) == ("Outstanding", False)
    assert subject_cell("ca1", 1, result) == ("14", False)
    assert subject_cell("TOTAL", 4, {"subject": {"name": "Art"}}) == ("0", True)
    assert subject_cell("GRADE", 5, {}) == (EMPTY_CELL, False)


# -------------------------------
# Rendering
# -------------------------------


def test_subjects_table_fills_every_cell(surface):
    data = RenderData.from_dict({
        "results": [
            {
                "subject": {"name": "Mathematics"},
                "total": 88,
                "grade": "A",
                "componentScores": [
                    {"component": {"name": "CA1"}, "score": 15},
                    {"component": {"name": "CA2"}, "score": 13},
                    {"component": {"name": "Exam"}, "score": 60},
                ],
            },
            {
                "subject": {"name": "English"},
                "total": 75,
                "grade": "B",
                "componentScores": [
                    {"component": {"name": "CA1"}, "score": 12},
                    {"component": {"name": "CA2"}, "score": 13},
                    {"component": {"name": "Exam"}, "score": 50},
                ],
            },
        ],
    })
    element = table(tableType="subjects", rows=2, cols=6,
                    headers=["Subject", "CA1", "CA2", "Exam", "Total", "Grade"])

    render_table(surface, element, data)

    texts = cell_texts(surface)
    assert texts[:6] == ["SUBJECT", "CA1", "CA2", "EXAM", "TOTAL", "GRADE"]
    assert texts[6:] == ["Mathematics", "15", "13", "60", "88", "A", "English", "12", "13", "50", "75", "B"]
    assert EMPTY_CELL not in texts


def test_malformed_component_scores_still_draw_the_row(surface):
    data = RenderData.from_dict({
        "results": [{
            "subject": {"name": "Biology"},
            "total": 70,
            "componentScores": [None, {"score": 30}, {"component": {"name": "Exam"}, "score": 40}],
        }],
    })
    element = table(tableType="subjects", rows=1, cols=4, headers=["Subject", "CA1", "Exam", "Total"])

    render_table(surface, element, data)

    assert cell_texts(surface)[4:] == ["Biology", EMPTY_CELL, "40", "70"]
    assert surface.ops("stroke_rect")


def test_total_column_is_bold(surface, sample_data):
    render_table(surface, table(tableType="subjects", rows=1, cols=2, headers=["SUBJECT", "TOTAL"]), sample_data)
    total_cell = [c for c in surface.ops("text_cell") if c.args["text"] == "88"][0]
    assert total_cell.args["font_name"] == "Helvetica-Bold"


def test_affective_checkbox_columns(surface):
    data = RenderData.from_dict({"results": [{"affectiveTraits": {"Punctuality": "2", "Neatness": "3"}}]})
    element = table(tableType="affective", rows=3, cols=4, headers=["Trait", "1", "2", "3"],
                    traits=["Punctuality", "Neatness", "Honesty"])

    layout = render_table(surface, element, data)

    marks = [c for c in surface.ops("text_cell") if c.args["text"] == CHECKMARK]
    assert len(marks) == 2
    # Punctuality is the first body row and "2" is the third column
    punctuality = marks[0].args
    assert punctuality["y"] == pytest.approx(layout.top + layout.header_height)
    assert punctuality["x"] == pytest.approx(2 * 75 + 2)
    assert "Honesty" in cell_texts(surface)


def test_two_column_trait_table_prints_rating(surface, sample_data):
    element = table(tableType="psychomotor", rows=2, cols=2, headers=["SKILL", "RATING"],
                    skills=["Handwriting", "Drawing"])
    render_table(surface, element, sample_data)
    assert cell_texts(surface) == ["SKILL", "RATING", "Handwriting", "3", "Drawing"]


def test_psychomotor_prefers_skills_over_traits(surface, sample_data):
    element = table(tableType="psychomotor", rows=1, cols=2, headers=["", ""],
                    traits=["Punctuality"], skills=["Handwriting"])
    render_table(surface, element, sample_data)
    assert cell_texts(surface) == ["Handwriting", "3"]


def test_blank_headers_skip_header_band(surface, sample_data):
    element = table(tableType="subjects", rows=2, cols=2, height=100, headers=["", "  "])
    layout = render_table(surface, element, sample_data)

    assert layout.header_height == 0
    assert layout.row_height == 50
    assert not surface.ops("fill_rect")


def test_header_band_height_follows_scale(surface, sample_data):
    element = table(tableType="subjects", rows=1, cols=1, height=100, headers=["SUBJECT"])
    layout = render_table(surface, element, sample_data, scale=0.75)
    assert layout.header_height == HEADER_HEIGHT * 0.75
    assert layout.row_height == pytest.approx(100 - HEADER_HEIGHT * 0.75)
    header_fill = surface.ops("fill_rect")[0].args
    assert header_fill["color"] == "#1e293b"


def test_rows_beyond_data_stay_empty(surface, sample_data):
    element = table(tableType="subjects", rows=5, cols=2, height=122, headers=["SUBJECT", "GRADE"])
    layout = render_table(surface, element, sample_data)
    assert cell_texts(surface) == ["SUBJECT", "GRADE", "Mathematics", "A", "English Language", "B"]
    assert layout.bottom == pytest.approx(122)


def test_alternate_rows_are_shaded(surface, sample_data):
    element = table(tableType="subjects", rows=4, cols=1, headers=["SUBJECT"], style={"altRowColor": "#f1f5f9"})
    render_table(surface, element, sample_data)
    shaded = [c for c in surface.ops("fill_rect") if c.args["color"] == "#f1f5f9"]
    assert len(shaded) == 2


@pytest.mark.parametrize("rows, cols", [(0, 3), (3, 0), (0, 0)])
def test_zero_rows_or_columns_do_not_fail(surface, sample_data, rows, cols):
    element = table(tableType="subjects", rows=rows, cols=cols, headers=["SUBJECT", "TOTAL", "GRADE"])
    layout = render_table(surface, element, sample_data)
    assert layout.row_height == 0
    assert "Mathematics" not in cell_texts(surface)


def test_unknown_table_type_draws_empty_grid(surface, sample_data):
    element = table(tableType="finance", rows=2, cols=2, headers=["A", "B"])
    render_table(surface, element, sample_data)
    assert cell_texts(surface) == ["A", "B"]
    assert surface.ops("stroke_rect")


def test_missing_grid_uses_defaults(surface, sample_data):
    element = table(tableType="subjects")
    layout = render_table(surface, element, sample_data)
    assert len(layout.column_widths) == 3
    assert layout.row_height == pytest.approx(122 / 3)

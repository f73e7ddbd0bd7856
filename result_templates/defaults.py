"""
Built-in report card templates.

Schools start from one of these and adjust it in the template editor.
All of them are laid out on the A4 authoring canvas (794 x 1123 units).
The period variants reuse a base layout and only swap the columns of
the subjects table.
"""
import copy

A4_CANVAS = {"width": 794, "height": 1123}

AFFECTIVE_TRAITS = [
    "Punctuality", "Neatness", "Politeness", "Honesty",
    "Cooperation", "Attentiveness", "Obedience", "Self-Control",
]
PSYCHOMOTOR_SKILLS = [
    "Handwriting", "Drawing/Painting", "Sports/Games",
    "Musical Skills", "Crafts", "Verbal Fluency",
]


# -------------------------------
# Element builders
# -------------------------------

def _element(element_type, element_id, x, y, width, height, style=None, metadata=None, content=None):
    element = {
        "id": element_id,
        "type": element_type,
        "x": x,
        "y": y,
        "width": width,
        "height": height,
        "style": style or {},
        "metadata": metadata or {},
    }
    if content is not None:
        element["content"] = content
    return element


def _shape(element_id, x, y, width, height, **style):
    return _element("shape", element_id, x, y, width, height, style)


def _text(element_id, x, y, width, height, content, **style):
    return _element("text", element_id, x, y, width, height, style, content=content)


def _dynamic(element_id, x, y, width, height, field, display_type=None, **style):
    metadata = {"field": field}
    if display_type:
        metadata["displayType"] = display_type
    return _element("dynamic", element_id, x, y, width, height, style, metadata)


def _image(element_id, x, y, width, height, field):
    return _element("image", element_id, x, y, width, height, metadata={"field": field, "isPlaceholder": True})


def _table(element_id, x, y, width, height, style, **metadata):
    return _element("table", element_id, x, y, width, height, style, metadata)


def _labelled_field(element_id, x, y, label, field, color, label_width=110, value_width=150):
    """A bold label followed by the dynamic value it describes."""
    return [
        _text(f"{element_id}_label", x, y, label_width, 16, label, fontSize=10, fontWeight="bold", color=color),
        _dynamic(f"{element_id}_value", x + label_width, y, value_width, 16, field, fontSize=10, color="#111827"),
    ]


def _report_card(palette, subjects, trait_cols):
    """
    Lay out a full report card page.

    Args:
        palette: Dict with "primary", "accent" and "alt_row" colors.
        subjects: Metadata for the subjects table (rows, cols, headers, columnWidths).
        trait_cols: 2 for "trait / rating" tables, 6 for 1-5 checkbox tables.
    """
    primary = palette["primary"]
    accent = palette["accent"]
    trait_headers = ["TRAITS", "RATING"] if trait_cols == 2 else ["TRAITS", "1", "2", "3", "4", "5"]
    skill_headers = ["SKILLS", "RATING"] if trait_cols == 2 else ["SKILLS", "1", "2", "3", "4", "5"]
    table_style = {
        "borderColor": primary,
        "borderWidth": 1,
        "fontSize": 9,
        "headerBgColor": primary,
        "headerTextColor": "#ffffff",
        "altRowColor": palette["alt_row"],
    }
    side_style = dict(table_style, fontSize=8)

    elements = [
        # ========== HEADER ==========
        _shape("header_band", 0, 0, 794, 110, backgroundColor=primary),
        _shape("header_rule", 0, 110, 794, 6, backgroundColor=accent),
        _image("school_logo", 30, 15, 80, 80, "school_logo"),
        _dynamic("school_name", 130, 18, 534, 30, "school_name",
                 fontSize=24, fontWeight="bold", color="#ffffff", textAlign="center"),
        _dynamic("school_address", 130, 52, 534, 16, "school_address",
                 fontSize=11, color="#e0e7ff", textAlign="center"),
        _dynamic("school_motto", 130, 72, 534, 16, "school_motto",
                 fontSize=10, fontStyle="italic", color="#e0e7ff", textAlign="center"),
        _image("student_photo", 684, 15, 80, 90, "student_photo"),
        _text("title", 20, 125, 754, 24, "STUDENT'S TERMINAL REPORT",
              fontSize=16, fontWeight="bold", color=primary, textAlign="center"),
        _dynamic("term_banner", 20, 150, 754, 16, "term_name", fontSize=11, color="#374151", textAlign="center"),

        # ========== STUDENT INFORMATION ==========
        _shape("info_panel", 20, 175, 754, 100, borderColor=primary, borderWidth=1),
    ]
    elements += _labelled_field("student_name", 30, 185, "NAME:", "student_name", primary, value_width=250)
    elements += _labelled_field("admission_number", 420, 185, "ADM. NO:", "admission_number", primary)
    elements += _labelled_field("class_name", 30, 207, "CLASS:", "class_name", primary)
    elements += _labelled_field("academic_session", 420, 207, "SESSION:", "academic_session", primary)
    elements += _labelled_field("gender", 30, 229, "GENDER:", "gender", primary)
    elements += _labelled_field("students_in_class", 420, 229, "NO. IN CLASS:", "students_in_class", primary)
    elements += _labelled_field("position", 30, 251, "POSITION:", "position", primary)
    elements += _labelled_field("average_score", 420, 251, "AVERAGE:", "average_score", primary)

    elements += [
        # ========== RESULTS ==========
        _table("subjects_table", 20, 300, 550, 400, table_style, tableType="subjects", **subjects),

        _text("affective_title", 585, 282, 185, 16, "AFFECTIVE DOMAIN",
              fontSize=10, fontWeight="bold", color=primary, textAlign="center"),
        _table("affective_table", 585, 300, 185, 180, side_style, tableType="affective", rows=9,
               cols=trait_cols, headers=trait_headers, traits=AFFECTIVE_TRAITS),

        _text("psychomotor_title", 585, 497, 185, 16, "PSYCHOMOTOR DOMAIN",
              fontSize=10, fontWeight="bold", color=primary, textAlign="center"),
        _table("psychomotor_table", 585, 515, 185, 140, side_style, tableType="psychomotor", rows=7,
               cols=trait_cols, headers=skill_headers, skills=PSYCHOMOTOR_SKILLS),

        _shape("grading_panel", 585, 665, 185, 110, borderColor=primary, borderWidth=1),
        _text("grading_title", 590, 670, 175, 14, "GRADING SCALE", fontSize=9, fontWeight="bold", color=primary),
        _dynamic("grading_scale", 590, 686, 175, 85, "grading_scale", display_type="list",
                 fontSize=8, color="#374151"),
    ]

    elements += _labelled_field("total_score", 20, 710, "TOTAL SCORE:", "total_score", primary, value_width=60)
    elements += _labelled_field("total_obtainable", 200, 710, "OBTAINABLE:", "total_obtainable", primary,
                                label_width=90, value_width=60)
    elements += _labelled_field("overall_grade", 360, 710, "GRADE:", "overall_grade", primary,
                                label_width=60, value_width=50)

    elements += [
        # ========== REMARKS ==========
        _shape("teacher_comment_box", 20, 735, 550, 45, borderColor="#d1d5db", borderWidth=1),
        _text("teacher_comment_label", 28, 740, 200, 14, "CLASS TEACHER'S REMARK:",
              fontSize=9, fontWeight="bold", color=primary),
        _dynamic("teacher_comment", 28, 756, 534, 20, "teacher_comment", fontSize=10, fontStyle="italic"),
        _shape("admin_comment_box", 20, 790, 550, 45, borderColor="#d1d5db", borderWidth=1),
        _text("admin_comment_label", 28, 795, 200, 14, "PRINCIPAL'S REMARK:",
              fontSize=9, fontWeight="bold", color=primary),
        _dynamic("admin_comment", 28, 811, 534, 20, "admin_comment", fontSize=10, fontStyle="italic"),
    ]

    # ========== ATTENDANCE ==========
    elements.append(_text("attendance_title", 585, 785, 185, 14, "ATTENDANCE",
                          fontSize=9, fontWeight="bold", color=primary))
    elements += _labelled_field("days_present", 585, 801, "Present:", "days_present", primary,
                                label_width=90, value_width=95)
    elements += _labelled_field("days_absent", 585, 819, "Absent:", "days_absent", primary,
                                label_width=90, value_width=95)
    elements += _labelled_field("attendance_percentage", 585, 837, "Attendance:", "attendance_percentage",
                                primary, label_width=90, value_width=95)

    elements += [
        _text("next_term_label", 20, 845, 150, 16, "NEXT TERM BEGINS:", fontSize=10, fontWeight="bold", color=primary),
        _dynamic("next_term_date", 170, 845, 150, 16, "next_term_date", fontSize=10),

        # ========== SIGNATURES ==========
        _image("principal_signature", 380, 870, 150, 45, "principal_signature"),
        _shape("teacher_signature_line", 40, 920, 200, 1, borderBottom="1px solid #111827"),
        _text("teacher_signature_label", 40, 925, 200, 14, "Class Teacher's Signature",
              fontSize=9, color="#374151", textAlign="center"),
        _shape("principal_signature_line", 355, 920, 200, 1, borderBottom="1px solid #111827"),
        _text("principal_signature_label", 355, 925, 200, 14, "Principal's Signature",
              fontSize=9, color="#374151", textAlign="center"),
        _image("school_stamp", 620, 875, 110, 110, "school_stamp"),

        # ========== FOOTER ==========
        _shape("footer_band", 0, 1090, 794, 33, backgroundColor=primary),
        _dynamic("footer_contact", 20, 1097, 754, 12, "school_email",
                 fontSize=8, color="#ffffff", textAlign="center"),
        _dynamic("footer_website", 20, 1109, 754, 12, "school_website",
                 fontSize=8, color=accent, textAlign="center"),
    ]
    return elements


def _template(name, description, level, elements):
    return {
        "name": name,
        "description": description,
        "level": level,
        "canvasSize": dict(A4_CANVAS),
        "elements": elements,
    }


def with_subject_columns(template, name, description, headers, column_widths, level="all"):
    """
    Copy ``template`` with different subjects-table columns.

    Every other element, including the table's position and style, is
    kept as is.
    """
    elements = copy.deepcopy(template["elements"])
    for element in elements:
        metadata = element.get("metadata") or {}
        if element.get("type") == "table" and metadata.get("tableType") == "subjects":
            metadata.update(headers=list(headers), cols=len(headers), columnWidths=list(column_widths))
    return _template(name, description, level, elements)


# ========== TEMPLATES ==========

PRIMARY_SCHOOL_TEMPLATE = _template(
    "Primary School Report Card",
    "A colorful, easy-to-read template designed for primary school students (Primary 1-6)",
    "primary",
    _report_card(
        {"primary": "#1e40af", "accent": "#fbbf24", "alt_row": "#f1f5f9"},
        {
            "rows": 12,
            "cols": 9,
            "headers": ["SUBJECTS", "1ST CA", "2ND CA", "EXAM", "TOTAL", "GRADE", "POS.", "HIGH", "LOW"],
            "columnWidths": [120, 45, 45, 50, 50, 45, 40, 45, 45],
        },
        trait_cols=2,
    ),
)

SECONDARY_SCHOOL_TEMPLATE = _template(
    "Secondary School Report Card",
    "A professional, detailed template for secondary school students (JSS1-SS3)",
    "junior_secondary",
    _report_card(
        {"primary": "#7c2d12", "accent": "#fef3c7", "alt_row": "#fef3c7"},
        {
            "rows": 15,
            "cols": 10,
            "headers": ["SUBJECTS", "1ST CA", "2ND CA", "3RD CA", "EXAM", "TOTAL", "GRADE", "POS.", "HIGHEST",
                        "REMARK"],
            "columnWidths": [100, 42, 42, 42, 50, 48, 40, 35, 50, 70],
        },
        trait_cols=6,
    ),
)

FIRST_TERM_TEMPLATE = with_subject_columns(
    PRIMARY_SCHOOL_TEMPLATE,
    "Periodic (First Term Only)",
    "Standard report card for a single term without cumulative calculations",
    ["SUBJECTS", "CA 1", "CA 2", "EXAM", "TOTAL", "GRADE", "REMARK"],
    [180, 60, 60, 70, 70, 50, 60],
)

MID_YEAR_TEMPLATE = with_subject_columns(
    SECONDARY_SCHOOL_TEMPLATE,
    "Cumulative (First & Second Term)",
    "Professional template with comparison between first and second term performance",
    ["SUBJECTS", "1st TERM", "CA", "EXAM", "2nd TERM", "TOTAL", "AVG", "GRADE"],
    [140, 60, 50, 60, 60, 60, 60, 50],
)

ANNUAL_TEMPLATE = with_subject_columns(
    SECONDARY_SCHOOL_TEMPLATE,
    "Full Academic Year (Annual)",
    "Comprehensive annual report with 1st, 2nd, and 3rd term cumulative performance",
    ["SUBJECTS", "1st TERM", "2nd TERM", "3rd TERM", "ANNUAL AVG", "GRADE", "RESULT"],
    [160, 70, 70, 70, 90, 60, 70],
)

DEFAULT_TEMPLATES = [
    PRIMARY_SCHOOL_TEMPLATE,
    SECONDARY_SCHOOL_TEMPLATE,
    FIRST_TERM_TEMPLATE,
    MID_YEAR_TEMPLATE,
    ANNUAL_TEMPLATE,
]

PRIMARY_LEVELS = ("primary", "nursery", "kindergarten")


def get_template_for_level(level):
    """Return a fresh copy of the default template for a school level."""
    if (level or "").strip().lower() in PRIMARY_LEVELS:
        return copy.deepcopy(PRIMARY_SCHOOL_TEMPLATE)
    return copy.deepcopy(SECONDARY_SCHOOL_TEMPLATE)

"""
Dynamic field resolution.

A ``dynamic`` element names a field symbol (``student_name``,
``average_score``, ...) that is filled in from the render data at
generation time. Every symbol maps to exactly one derivation; unknown
symbols resolve to an empty string.
"""
from decimal import Decimal
from typing import NamedTuple

from .elements import Choice
from .render_data import dig


class DynamicField(Choice):
    # Student
    STUDENT_NAME = "student_name"
    ADMISSION_NUMBER = "admission_number"
    GENDER = "gender"
    DATE_OF_BIRTH = "date_of_birth"
    # School
    SCHOOL_NAME = "school_name"
    SCHOOL_ADDRESS = "school_address"
    SCHOOL_MOTTO = "school_motto"
    SCHOOL_PHONE = "school_phone"
    SCHOOL_EMAIL = "school_email"
    SCHOOL_WEBSITE = "school_website"
    # Period
    CLASS_NAME = "class_name"
    CLASS_SECTION = "class_section"
    ACADEMIC_SESSION = "academic_session"
    TERM_NAME = "term_name"
    STUDENTS_IN_CLASS = "students_in_class"
    NEXT_TERM_DATE = "next_term_date"
    # Result
    TOTAL_SCORE = "total_score"
    TOTAL_OBTAINABLE = "total_obtainable"
    AVERAGE_SCORE = "average_score"
    OVERALL_GRADE = "overall_grade"
    POSITION = "position"
    TEACHER_COMMENT = "teacher_comment"
    ADMIN_COMMENT = "admin_comment"
    GRADING_SCALE = "grading_scale"
    # Attendance
    DAYS_PRESENT = "days_present"
    DAYS_ABSENT = "days_absent"
    TOTAL_DAYS = "total_days"
    ATTENDANCE_PERCENTAGE = "attendance_percentage"
    # Cumulative
    CUMULATIVE_TOTAL = "cumulative_total"
    CUMULATIVE_AVERAGE = "cumulative_average"
    TERM_COUNT = "term_count"


NOT_AVAILABLE = "N/A"
MAX_SCORE_PER_SUBJECT = 100


# -------------------------------
# Formatting helpers
# -------------------------------

def format_number(value):
    """
    Plain decimal formatting: no grouping, integral floats without ".0".

        >>> format_number(255.0), format_number(84.5), format_number("85.0")
        ('255', '84.5', '85.0')
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def format_date(value):
    if hasattr(value, "strftime"):
        return value.strftime("%d/%m/%Y")
    return str(value)


def _or_na(value):
    return format_number(value) if value not in (None, "") else NOT_AVAILABLE


def _to_float(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def grading_scale_text(data, as_list=False):
    """
    Render the grading bands either inline ("A: 70-100, B: 60-69") or as one
    band per line with remarks ("A: 70-100% (Excellent)").
    """
    if as_list:
        return "\n".join(
            f"{band.get('grade', '')}: {format_number(band.get('minScore'))}-"
            f"{format_number(band.get('maxScore'))}% ({band.get('remark', '')})"
            for band in data.grading_scale
        )
    return ", ".join(
        f"{band.get('grade', '')}: {format_number(band.get('minScore'))}-{format_number(band.get('maxScore'))}"
        for band in data.grading_scale
    )


# -------------------------------
# Derivations
# -------------------------------

def _cumulative_total(data):
    previous = _to_float(dig(data.cumulative, "previousTotal", default=0))
    current = _to_float(dig(data.summary, "totalScore", default=0))
    return format_number(previous + current)


def _attendance_percentage(data):
    total = _to_float(dig(data.attendance, "totalDays", default=0))
    if total <= 0:
        return NOT_AVAILABLE
    present = _to_float(dig(data.attendance, "daysPresent", default=0))
    return f"{round(present / total * 100)}%"


def _average(data):
    average = dig(data.summary, "average")
    return f"{format_number(average)}%" if average not in (None, "") else ""


def _position(data):
    position = dig(data.summary, "position")
    return format_number(position) if position not in (None, "", 0) else NOT_AVAILABLE


_RESOLVERS = {
    DynamicField.STUDENT_NAME: lambda d: format_number(dig(d.student, "user", "name", default="")),
    DynamicField.ADMISSION_NUMBER: lambda d: _or_na(
        dig(d.student, "admissionNumber") or dig(d.student_class, "rollNumber")
    ),
    DynamicField.GENDER: lambda d: _or_na(dig(d.student, "gender")),
    DynamicField.DATE_OF_BIRTH: lambda d: (
        format_date(dig(d.student, "dateOfBirth")) if dig(d.student, "dateOfBirth") else NOT_AVAILABLE
    ),
    DynamicField.SCHOOL_NAME: lambda d: format_number(dig(d.school, "name", default="")),
    DynamicField.SCHOOL_ADDRESS: lambda d: format_number(dig(d.school, "address", default="")),
    DynamicField.SCHOOL_MOTTO: lambda d: format_number(dig(d.school, "motto", default="")),
    DynamicField.SCHOOL_PHONE: lambda d: format_number(dig(d.school, "phone", default="")),
    DynamicField.SCHOOL_EMAIL: lambda d: format_number(dig(d.school, "email", default="")),
    DynamicField.SCHOOL_WEBSITE: lambda d: format_number(dig(d.school, "website", default="")),
    DynamicField.CLASS_NAME: lambda d: _or_na(dig(d.student_class, "class", "name")),
    DynamicField.CLASS_SECTION: lambda d: _or_na(dig(d.student_class, "class", "section")),
    DynamicField.ACADEMIC_SESSION: lambda d: _or_na(dig(d.academic_session, "name")),
    DynamicField.TERM_NAME: lambda d: _or_na(dig(d.period, "name")),
    DynamicField.STUDENTS_IN_CLASS: lambda d: _or_na(dig(d.summary, "studentsInClass")),
    DynamicField.NEXT_TERM_DATE: lambda d: (
        format_date(dig(d.period, "nextTermBegins")) if dig(d.period, "nextTermBegins") else "TBD"
    ),
    DynamicField.TOTAL_SCORE: lambda d: format_number(dig(d.summary, "totalScore")),
    DynamicField.TOTAL_OBTAINABLE: lambda d: str(len(d.results) * MAX_SCORE_PER_SUBJECT),
    DynamicField.AVERAGE_SCORE: _average,
    DynamicField.OVERALL_GRADE: lambda d: format_number(dig(d.summary, "overallGrade", default="")),
    DynamicField.POSITION: _position,
    DynamicField.TEACHER_COMMENT: lambda d: format_number(dig(d.first_result, "teacherComment", default="")),
    DynamicField.ADMIN_COMMENT: lambda d: format_number(dig(d.first_result, "adminComment", default="")),
    DynamicField.GRADING_SCALE: grading_scale_text,
    DynamicField.DAYS_PRESENT: lambda d: _or_na(dig(d.attendance, "daysPresent")),
    DynamicField.DAYS_ABSENT: lambda d: _or_na(dig(d.attendance, "daysAbsent")),
    DynamicField.TOTAL_DAYS: lambda d: _or_na(dig(d.attendance, "totalDays")),
    DynamicField.ATTENDANCE_PERCENTAGE: _attendance_percentage,
    DynamicField.CUMULATIVE_TOTAL: _cumulative_total,
    DynamicField.CUMULATIVE_AVERAGE: lambda d: f"{format_number(dig(d.cumulative, 'average') or '0')}%",
    DynamicField.TERM_COUNT: lambda d: format_number(dig(d.cumulative, "termCount", default=1)),
}


def resolve(field, data, display_type=None):
    """
    Resolve a dynamic field symbol against the render data.

    Args:
        field: Field symbol or DynamicField member.
        data: RenderData bundle.
        display_type: "list" switches grading_scale to its one-band-per-line form.

    Returns:
        The display string; "" for unknown symbols.
    """
    member = DynamicField.parse(field)
    if member is None:
        return ""
    if member is DynamicField.GRADING_SCALE and display_type == "list":
        return grading_scale_text(data, as_list=True)
    return _RESOLVERS[member](data)


# -------------------------------
# Field catalog
# -------------------------------

class FieldDefinition(NamedTuple):
    key: str
    label: str
    category: str
    description: str
    example: str


FIELD_DEFINITIONS = [
    FieldDefinition("student_name", "Student Name", "student", "Full name of the student", "Ifunanya Kelemade"),
    FieldDefinition("admission_number", "Admission Number", "student",
                    "Unique student admission/registration number", "STU/2020/1004"),
    FieldDefinition("gender", "Gender", "student", "Student's gender", "Female"),
    FieldDefinition("date_of_birth", "Date of Birth", "student", "Student's birth date", "15/03/2012"),
    FieldDefinition("student_photo", "Student Photo", "student", "Passport photograph of the student", "[Photo]"),
    FieldDefinition("school_name", "School Name", "school", "Official name of the school",
                    "Step to Success Demo School"),
    FieldDefinition("school_address", "School Address", "school", "Physical address of the school",
                    "5 Blessing Okoh Way, Benin City"),
    FieldDefinition("school_motto", "School Motto", "school", "School's motto or tagline", "Excellence Personified"),
    FieldDefinition("school_logo", "School Logo", "school", "School's official logo/emblem", "[Logo]"),
    FieldDefinition("school_phone", "School Phone", "school", "School's contact phone number", "08012345678"),
    FieldDefinition("school_email", "School Email", "school", "School's official email address",
                    "info@school.edu.ng"),
    FieldDefinition("school_website", "School Website", "school", "School's website URL", "www.school.edu.ng"),
    FieldDefinition("school_stamp", "School Stamp", "school", "Official school stamp/seal", "[Stamp]"),
    FieldDefinition("principal_signature", "Principal's Signature", "school", "Principal's signature", "[Signature]"),
    FieldDefinition("academic_session", "Academic Session", "period", "Current academic year/session", "2024/2025"),
    FieldDefinition("term_name", "Term Name", "period", "Current term (First, Second, Third)", "First Term"),
    FieldDefinition("class_name", "Class Name", "period", "Student's current class", "Primary 4"),
    FieldDefinition("class_section", "Class Section/Arm", "period", "Class section or arm (e.g., A, B, Gold)", "A"),
    FieldDefinition("students_in_class", "Number in Class", "period", "Total number of students in the class", "35"),
    FieldDefinition("next_term_date", "Next Term Date", "period", "Expected date for next term", "10/01/2025"),
    FieldDefinition("total_score", "Total Score", "result", "Sum of all subject scores", "752"),
    FieldDefinition("total_obtainable", "Total Obtainable", "result", "Maximum possible total score", "1000"),
    FieldDefinition("average_score", "Average Score", "result", "Average of all subject scores", "75.2%"),
    FieldDefinition("overall_grade", "Overall Grade", "result", "Final grade based on average", "A"),
    FieldDefinition("position", "Class Position", "result", "Student's rank/position in class", "2nd"),
    FieldDefinition("teacher_comment", "Teacher's Comment", "result", "Class teacher's remark",
                    "A very promising child"),
    FieldDefinition("admin_comment", "Principal's Comment", "result", "Principal/Head Master's remark",
                    "Excellent performance"),
    FieldDefinition("grading_scale", "Grading Scale", "result", "School's grading scale/legend",
                    "A: 70-100, B: 60-69..."),
    FieldDefinition("days_present", "Days Present", "attendance", "Number of days student was present", "85"),
    FieldDefinition("days_absent", "Days Absent", "attendance", "Number of days student was absent", "17"),
    FieldDefinition("total_days", "Total Days in Term", "attendance", "Total number of school days in term", "102"),
    FieldDefinition("attendance_percentage", "Attendance Percentage", "attendance", "Percentage of attendance",
                    "83%"),
    FieldDefinition("cumulative_total", "Cumulative Total", "computed", "Total across all terms so far", "1497"),
    FieldDefinition("cumulative_average", "Cumulative Average", "computed", "Average across multiple terms",
                    "72.5%"),
    FieldDefinition("term_count", "Terms Counted", "computed", "Number of terms in the cumulative figures", "2"),
]


def get_fields_by_category(category):
    return [definition for definition in FIELD_DEFINITIONS if definition.category == category]


def get_field_by_key(key):
    for definition in FIELD_DEFINITIONS:
        if definition.key == key:
            return definition
    return None

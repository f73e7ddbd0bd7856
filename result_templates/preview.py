"""
Sample render data for template previews.

The template editor previews a layout before any real results exist, so
it renders against this fixed student while still showing the school's
own branding.
"""
import copy
from collections.abc import Mapping

from .defaults import AFFECTIVE_TRAITS, PSYCHOMOTOR_SKILLS

BRANDING_FIELDS = ("name", "logo", "address", "phone", "email", "motto", "website")

PREVIEW_DATA = {
    "student": {
        "user": {"name": "John Doe", "image": None},
        "admissionNumber": "ADM-2026-001",
        "gender": "Male",
    },
    "school": {
        "name": "Sample School",
        "logo": None,
        "address": "No address provided",
        "motto": "",
        "phone": "",
        "email": "",
    },
    "studentClass": {
        "class": {"name": "Grade 10", "section": "A"},
        "rollNumber": "10",
    },
    "academicSession": {"name": "2025/2026 Academic Session"},
    "period": {"name": "First Term"},
    "results": [
        {
            "subject": {"name": "Mathematics"},
            "total": 88,
            "grade": "A",
            "remark": "Excellent",
            "componentScores": [
                {"component": {"name": "CA1"}, "score": 15},
                {"component": {"name": "CA2"}, "score": 13},
                {"component": {"name": "EXAM"}, "score": 60},
                {"component": {"name": "1st Term"}, "score": 85},
                {"component": {"name": "2nd Term"}, "score": 88},
            ],
            "affectiveTraits": dict(zip(AFFECTIVE_TRAITS, ["5", "4", "5", "4", "5", "4", "5", "4"])),
            "psychomotorSkills": dict(zip(PSYCHOMOTOR_SKILLS, ["4", "3", "5", "4", "5", "4"])),
            "teacherComment": "A brilliant student. Keep it up!",
            "adminComment": "Excellent performance.",
        },
        {
            "subject": {"name": "English Language"},
            "total": 75,
            "grade": "B",
            "remark": "Very Good",
            "componentScores": [
                {"component": {"name": "CA1"}, "score": 12},
                {"component": {"name": "CA2"}, "score": 13},
                {"component": {"name": "EXAM"}, "score": 50},
                {"component": {"name": "1st Term"}, "score": 72},
                {"component": {"name": "2nd Term"}, "score": 75},
            ],
        },
        {
            "subject": {"name": "Physics"},
            "total": 92,
            "grade": "A+",
            "remark": "Outstanding",
            "componentScores": [
                {"component": {"name": "CA1"}, "score": 14},
                {"component": {"name": "CA2"}, "score": 15},
                {"component": {"name": "EXAM"}, "score": 63},
            ],
        },
    ],
    "gradingScale": [
        {"grade": "A", "minScore": 80, "maxScore": 100, "remark": "Distinction"},
        {"grade": "B", "minScore": 70, "maxScore": 79, "remark": "Credit"},
        {"grade": "C", "minScore": 60, "maxScore": 69, "remark": "Pass"},
        {"grade": "F", "minScore": 0, "maxScore": 49, "remark": "Fail"},
    ],
    "summary": {
        "totalScore": 255,
        "average": "85.0",
        "overallGrade": "A",
        "position": "1st",
        "studentsInClass": 25,
    },
    "cumulative": {
        "previousTotal": 742,
        "termCount": 1,
        "average": "84.5",
    },
    "attendance": {
        "daysPresent": 58,
        "daysAbsent": 2,
        "totalDays": 60,
    },
}


def _branding_value(school, name):
    if isinstance(school, Mapping):
        return school.get(name)
    value = getattr(school, name, None)
    # File and image fields expose their location through .url
    if value is not None and hasattr(value, "url"):
        return value.url if value else None
    return value


def build_preview_data(school=None):
    """
    Return a preview payload, optionally branded with a real school.

    Args:
        school: Mapping or model instance with name, logo, address, phone,
            email, motto and website. Missing or empty values keep the
            sample defaults.

    Returns:
        dict in the camelCase shape accepted by RenderData.from_dict
    """
    data = copy.deepcopy(PREVIEW_DATA)
    if school is None:
        return data

    for name in BRANDING_FIELDS:
        value = _branding_value(school, name)
        if value:
            data["school"][name] = value
    return data

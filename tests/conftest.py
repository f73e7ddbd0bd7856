import io

import httpx
import pytest
from PIL import Image
from reportlab.lib.pagesizes import A4

from result_templates.images import ImageFetcher
from result_templates.render_data import RenderData
from result_templates.surface import RecordingSurface

# -------------------------------
# Fixtures & helper functions
# -------------------------------


def make_png(width=4, height=2, color=(30, 64, 175)):
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def public_root(tmp_path, settings):
    root = tmp_path / "public"
    root.mkdir()
    settings.RESULT_TEMPLATE_PUBLIC_ROOT = root
    return root


@pytest.fixture
def surface():
    return RecordingSurface(A4)


@pytest.fixture
def unit_surface():
    """A surface exactly as wide as the authoring canvas, so the scale factor is 1."""
    return RecordingSurface((794, 1123))


@pytest.fixture
def offline_fetcher(public_root):
    def refuse(request):
        return httpx.Response(404)

    return ImageFetcher(public_root=public_root, timeout=2, transport=httpx.MockTransport(refuse))


@pytest.fixture
def sample_payload():
    return {
        "student": {
            "user": {"name": "Ada Obi", "image": None},
            "admissionNumber": "ADM/001",
            "gender": "Female",
        },
        "school": {"name": "Hilltop Academy", "address": "1 School Road", "motto": "Knowledge is light"},
        "studentClass": {"class": {"name": "JSS 2", "section": "Gold"}, "rollNumber": "7"},
        "academicSession": {"name": "2025/2026"},
        "period": {"name": "Second Term"},
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
                ],
                "affectiveTraits": {"Punctuality": "5", "Neatness": "4"},
                "psychomotorSkills": {"Handwriting": "3"},
                "teacherComment": "Hardworking.",
                "adminComment": "Keep it up.",
            },
            {
                "subject": {"name": "English Language"},
                "total": 75,
                "grade": "B",
                "remark": "Very Good",
                "componentScores": [
                    {"component": {"name": "CA1"}, "score": 12},
                    {"component": {"name": "EXAM"}, "score": 50},
                ],
            },
        ],
        "gradingScale": [
            {"grade": "A", "minScore": 80, "maxScore": 100, "remark": "Distinction"},
            {"grade": "B", "minScore": 70, "maxScore": 79, "remark": "Credit"},
        ],
        "summary": {
            "totalScore": 163,
            "average": "81.5",
            "overallGrade": "A",
            "position": 2,
            "studentsInClass": 30,
        },
        "cumulative": {"previousTotal": 150, "termCount": 2, "average": "78.25"},
        "attendance": {"daysPresent": 45, "daysAbsent": 5, "totalDays": 50},
    }


@pytest.fixture
def sample_data(sample_payload):
    return RenderData.from_dict(sample_payload)

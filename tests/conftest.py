"""
Pytest Configuration and Fixtures

Provides common fixtures for all tests including:
- Filled intake forms and submitted records
- Report settings pointing at a temporary output directory
- A fake rasterizer so PDF tests run without WeasyPrint system libraries
"""

import sys
from datetime import date
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

# Add project root and src to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from result_card.config import ReportSettings
from result_card.core.form import (
    initial_form_state,
    set_marks,
    set_progress,
    set_text,
    submit,
)
from result_card.core.models import PROGRESS_CATEGORIES, SUBJECTS

ISSUE_DATE = date(2024, 6, 14)


def fill_form(marks, progress_label="A", **text_overrides):
    """Build a submitted-ready form; marks is {subject: (term, exam)}"""
    text = {
        "name": "Ayesha Khan",
        "class_name": "5",
        "section": "B",
        "roll_no": "17",
        "age": "10",
        "campus_name": "North Campus",
        "academic_year": "2024",
        "clubs_comments": "Active member of the science club.",
        "values_comments": "Kind and respectful.",
        "class_teacher_comments": "Keep it up.",
        "school_head_comments": "Well done.",
        "class_teacher": "Mrs. Saima Ali",
        "head_of_school": "Mr. Imran Qureshi",
    }
    text.update(text_overrides)

    state = initial_form_state()
    for field, value in text.items():
        state = set_text(state, field, value)
    for subject, (term, exam) in marks.items():
        state = set_marks(state, subject, "term_marks", term)
        state = set_marks(state, subject, "exam_marks", exam)
    for category in PROGRESS_CATEGORIES:
        state = set_progress(state, category, progress_label)
    return state


@pytest.fixture
def uniform_marks():
    """Every subject term=80, exam=90"""
    return {subject: (80, 90) for subject in SUBJECTS}


@pytest.fixture
def mixed_marks():
    """Marks spanning every grade band; overall average 71 (B)"""
    pairs = [(92, 88), (75, 70), (60, 55), (40, 35), (85, 85), (69, 70), (50, 49), (100, 99)]
    return dict(zip(SUBJECTS, pairs))


@pytest.fixture
def form_factory():
    return fill_form


@pytest.fixture
def sample_form(mixed_marks):
    return fill_form(mixed_marks)


@pytest.fixture
def sample_record(sample_form):
    return submit(sample_form)


@pytest.fixture
def uniform_record(uniform_marks):
    return submit(fill_form(uniform_marks))


@pytest.fixture
def settings(tmp_path):
    return ReportSettings(output_dir=tmp_path / "output")


@pytest.fixture
def issue_date():
    return ISSUE_DATE


class FakeRasterizer:
    """Stands in for WeasyPrint: returns a striped snapshot of fixed size"""

    def __init__(self, width=420, height=1500):
        self.width = width
        self.height = height
        self.calls = []

    def __call__(self, html, base_url):
        self.calls.append((html, base_url))
        image = Image.new("RGB", (self.width, self.height), "white")
        draw = ImageDraw.Draw(image)
        for y in range(0, self.height, 20):
            draw.line([(0, y), (self.width - 1, y)], fill=(0, 0, 0))
        return image


@pytest.fixture
def fake_rasterizer():
    return FakeRasterizer()

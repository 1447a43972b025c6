"""
Unit Tests for Grade Calculator

Tests for:
- Letter grade boundaries
- Subject average rounding
- Overall average rounding and empty input
- Full record calculation
- Custom grading scale
"""

import pytest

from result_card.core.calculators.grades import (
    GradeCalculator,
    letter_grade,
    overall_average,
    round_half_up,
    subject_average,
)
from result_card.core.models import Grade, GradeResult, GradingScale, SUBJECTS
from result_card.core.form import submit
from result_card.errors import InvalidInputError


class TestLetterGrade:
    """Tests for letter_grade boundaries"""

    @pytest.mark.parametrize(
        "score, expected",
        [
            (100, Grade.A),
            (85, Grade.A),
            (84, Grade.B),
            (70, Grade.B),
            (69, Grade.S),
            (50, Grade.S),
            (49, Grade.NI),
            (0, Grade.NI),
        ],
    )
    def test_boundaries(self, score, expected):
        assert letter_grade(score) == expected

    def test_custom_scale(self):
        """Test thresholds from a custom grading scale"""
        scale = GradingScale(a_threshold=90, b_threshold=75, s_threshold=40)

        assert letter_grade(89, scale) == Grade.B
        assert letter_grade(90, scale) == Grade.A
        assert letter_grade(40, scale) == Grade.S
        assert letter_grade(39, scale) == Grade.NI

    def test_scale_rejects_unordered_thresholds(self):
        with pytest.raises(ValueError):
            GradingScale(a_threshold=70, b_threshold=80, s_threshold=50)


class TestRounding:
    """Half-up rounding pins grade boundaries"""

    def test_half_rounds_up(self):
        assert round_half_up(69.5) == 70
        assert round_half_up(84.5) == 85  # round() would give 84
        assert round_half_up(49.5) == 50

    def test_below_half_rounds_down(self):
        assert round_half_up(69.4) == 69
        assert round_half_up(0.25) == 0


class TestSubjectAverage:
    def test_exact_average(self):
        assert subject_average(80, 90) == 85
        assert letter_grade(subject_average(80, 90)) == Grade.A

    def test_low_average(self):
        assert subject_average(40, 40) == 40
        assert letter_grade(subject_average(40, 40)) == Grade.NI

    def test_half_point_average(self):
        """round(69.5) must be 70, which is a B"""
        assert subject_average(69, 70) == 70
        assert letter_grade(subject_average(69, 70)) == Grade.B


class TestOverallAverage:
    def test_mean_of_averages(self):
        assert overall_average([85] * 8) == 85

    def test_half_point_rounds_up(self):
        # 396 / 8 = 49.5
        assert overall_average([50] * 7 + [46]) == 50

    def test_empty_input_is_invalid(self):
        with pytest.raises(InvalidInputError):
            overall_average([])


class TestGradeCalculator:
    """Tests for GradeCalculator class"""

    def test_uniform_record(self, uniform_record):
        """All subjects term=80, exam=90 -> everything 85 / A"""
        result = GradeCalculator().calculate(uniform_record)

        assert isinstance(result, GradeResult)
        assert len(result.subjects) == 8
        assert all(r.average == 85 for r in result.subjects)
        assert all(r.grade == Grade.A for r in result.subjects)
        assert result.overall_average == 85
        assert result.overall_grade == Grade.A

    def test_mixed_record(self, sample_record):
        result = GradeCalculator().calculate(sample_record)

        averages = [r.average for r in result.subjects]
        grades = [r.grade for r in result.subjects]
        assert averages == [90, 73, 58, 38, 85, 70, 50, 100]
        assert grades == ["A", "B", "S", "NI", "A", "B", "S", "A"]
        # 564 / 8 = 70.5
        assert result.overall_average == 71
        assert result.overall_grade == Grade.B

    def test_overall_exactly_fifty_is_s(self, form_factory):
        """Overall average landing on 50 must be S, not NI"""
        marks = {subject: (60, 60) for subject in SUBJECTS[:4]}
        marks.update({subject: (40, 40) for subject in SUBJECTS[4:]})
        record = submit(form_factory(marks))

        result = GradeCalculator().calculate(record)

        assert result.overall_average == 50
        assert result.overall_grade == Grade.S

    def test_overall_half_point_below_fifty_is_s(self, form_factory):
        marks = {subject: (50, 50) for subject in SUBJECTS[:7]}
        marks[SUBJECTS[7]] = (46, 46)
        record = submit(form_factory(marks))

        result = GradeCalculator().calculate(record)

        assert result.overall_average == 50
        assert result.overall_grade == Grade.S

    def test_subject_order_is_fixed(self, sample_record):
        result = GradeCalculator().calculate(sample_record)
        assert [r.subject for r in result.subjects] == SUBJECTS

    def test_result_not_written_back(self, sample_record):
        before = sample_record.model_dump()
        GradeCalculator().calculate(sample_record)
        assert sample_record.model_dump() == before

    def test_get_subject(self, sample_record):
        result = GradeCalculator().calculate(sample_record)
        assert result.get_subject("Islamiyat").average == 70
        with pytest.raises(KeyError):
            result.get_subject("Chemistry")

    def test_custom_grading_scale(self, uniform_record):
        calculator = GradeCalculator(GradingScale(a_threshold=90, b_threshold=80, s_threshold=60))
        result = calculator.calculate(uniform_record)

        assert result.overall_average == 85
        assert result.overall_grade == Grade.B

    def test_calculation_log(self, sample_record):
        """Test that calculation log is populated"""
        calculator = GradeCalculator()
        calculator.calculate(sample_record)

        log = calculator.get_calculation_log()
        assert len(log) > 0
        assert any("Calculating grades" in entry for entry in log)
        assert any("Overall Average: 71" in entry for entry in log)

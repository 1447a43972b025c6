from result_card.core.calculators.grades import (
    GradeCalculator,
    letter_grade,
    overall_average,
    round_half_up,
    subject_average,
)

__all__ = [
    "GradeCalculator",
    "letter_grade",
    "overall_average",
    "round_half_up",
    "subject_average",
]

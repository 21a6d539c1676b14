from .expression import Evaluation, ExpressionError, evaluate, evaluate_strict
from .calculator import ImpactCalculator, calculate_impact, extract_profile_variables
from .headline import generate_explanation, generate_headline
from .report import ImpactReport, build_report
from .result import (
    CannotComputeImpact,
    ComputedImpact,
    ImpactResult,
    is_cannot_compute,
    is_computed,
)

__all__ = [
    "Evaluation",
    "ExpressionError",
    "evaluate",
    "evaluate_strict",
    "ImpactCalculator",
    "calculate_impact",
    "extract_profile_variables",
    "generate_headline",
    "generate_explanation",
    "ImpactReport",
    "build_report",
    "ComputedImpact",
    "CannotComputeImpact",
    "ImpactResult",
    "is_computed",
    "is_cannot_compute",
]

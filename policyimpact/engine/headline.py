"""User-facing phrasing for impact results."""

from __future__ import annotations

from policyimpact.engine.calculator import round_half_up
from policyimpact.engine.result import ImpactResult, is_cannot_compute
from policyimpact.models.enums import ImpactDirection, ImpactUnit

CANNOT_COMPUTE_HEADLINE = "Unable to calculate personal impact"
MINIMAL_IMPACT_HEADLINE = "Minimal impact on your finances"

_DOLLAR_UNITS = {
    ImpactUnit.DOLLARS_ANNUAL,
    ImpactUnit.DOLLARS_MONTHLY,
    ImpactUnit.DOLLARS_ONE_TIME,
}


def format_magnitude(value: float, unit: ImpactUnit) -> str:
    """Whole-number magnitude with thousands separators, e.g. $1,600 or 5%."""
    magnitude = round_half_up(abs(value), 0)
    if unit in _DOLLAR_UNITS:
        return f"${magnitude:,.0f}"
    if unit == ImpactUnit.PERCENTAGE:
        return f"{magnitude:,.0f}%"
    return f"{magnitude:,.0f}"


def _suffix(unit: ImpactUnit) -> str:
    return "/year" if unit == ImpactUnit.DOLLARS_ANNUAL else ""


def generate_headline(result: ImpactResult) -> str:
    if is_cannot_compute(result):
        return CANNOT_COMPUTE_HEADLINE

    amount = format_magnitude(result.primary_impact_value, result.impact_unit)
    suffix = _suffix(result.impact_unit)

    if result.impact_direction == ImpactDirection.POSITIVE:
        return f"You could save {amount}{suffix}"
    if result.impact_direction == ImpactDirection.NEGATIVE:
        return f"This could cost you {amount}{suffix}"
    return MINIMAL_IMPACT_HEADLINE


def generate_explanation(result: ImpactResult) -> str:
    """One plain-language sentence describing the result."""
    if is_cannot_compute(result):
        return result.reason

    if result.impact_direction == ImpactDirection.NEUTRAL:
        return "Based on your profile, this policy would have minimal effect on your finances."

    kind = "savings" if result.impact_direction == ImpactDirection.POSITIVE else "additional costs"
    amount = format_magnitude(result.primary_impact_value, result.impact_unit)
    period = " per year" if result.impact_unit == ImpactUnit.DOLLARS_ANNUAL else ""
    return (
        f"Based on your profile, this policy would result in {kind} "
        f"of approximately {amount}{period}."
    )


def confidence_statement(result: ImpactResult) -> str:
    if is_cannot_compute(result):
        return "Not enough information to estimate your impact"
    if not result.caveats:
        return "Based on your complete profile"
    if any(c.affects_confidence for c in result.caveats):
        return "Estimate relies on assumptions about your profile"
    return "Based on your profile; some policy details are still uncertain"

"""Tests for headline, explanation and confidence phrasing."""

import pytest

from policyimpact.engine.calculator import ImpactCalculator
from policyimpact.engine.headline import (
    confidence_statement,
    format_magnitude,
    generate_explanation,
    generate_headline,
)
from policyimpact.engine.result import CannotComputeImpact
from policyimpact.models.enums import ImpactSemantics, ImpactUnit, OutputUnit
from policyimpact.models.policy import PolicyParameters
from tests.conftest import make_formula


def _run(expression, semantics=ImpactSemantics.BENEFIT, unit=OutputUnit.DOLLARS, parameters=None):
    formula = make_formula(expression, [], semantics=semantics, unit=unit)
    return ImpactCalculator().calculate({}, parameters, [formula])


class TestHeadline:
    def test_cannot_compute(self):
        result = CannotComputeImpact(reason="No formulas")
        assert generate_headline(result) == "Unable to calculate personal impact"

    def test_savings(self):
        assert generate_headline(_run("1600")) == "You could save $1,600/year"

    def test_cost_uses_magnitude(self):
        result = _run("2400.4", semantics=ImpactSemantics.BURDEN)
        assert generate_headline(result) == "This could cost you $2,400/year"

    def test_negative_benefit_is_cost(self):
        assert generate_headline(_run("-12500")) == "This could cost you $12,500/year"

    def test_neutral(self):
        assert generate_headline(_run("0")) == "Minimal impact on your finances"

    def test_percentage_has_no_year_suffix(self):
        result = _run("3", unit=OutputUnit.PERCENTAGE)
        assert generate_headline(result) == "You could save 3%"

    def test_idempotent(self):
        result = _run("987.65")
        assert generate_headline(result) == generate_headline(result)


class TestFormatting:
    @pytest.mark.parametrize(
        "value,unit,expected",
        [
            (1600, ImpactUnit.DOLLARS_ANNUAL, "$1,600"),
            (-1234567.5, ImpactUnit.DOLLARS_ONE_TIME, "$1,234,568"),
            (0.4, ImpactUnit.DOLLARS_MONTHLY, "$0"),
            (12.5, ImpactUnit.PERCENTAGE, "13%"),
            (7, ImpactUnit.QUALITATIVE, "7"),
        ],
    )
    def test_format_magnitude(self, value, unit, expected):
        assert format_magnitude(value, unit) == expected


class TestExplanation:
    def test_savings_sentence(self):
        assert generate_explanation(_run("1600")) == (
            "Based on your profile, this policy would result in savings "
            "of approximately $1,600 per year."
        )

    def test_cost_sentence(self):
        explanation = generate_explanation(_run("900", semantics=ImpactSemantics.BURDEN))
        assert "additional costs of approximately $900 per year" in explanation

    def test_cannot_compute_uses_reason(self):
        result = CannotComputeImpact(reason="Missing required profile information: Age")
        assert generate_explanation(result) == result.reason


class TestConfidenceStatement:
    def test_complete(self):
        result = _run("100", parameters=PolicyParameters(effective_date="2027-01-01"))
        assert confidence_statement(result) == "Based on your complete profile"

    def test_policy_uncertainty_only(self):
        assert "uncertain" in confidence_statement(_run("100"))

    def test_cannot_compute(self):
        result = CannotComputeImpact(reason="x")
        assert confidence_statement(result) == "Not enough information to estimate your impact"

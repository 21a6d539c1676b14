"""Regression tests for reference households -- guards against calculation drift."""

from policyimpact.engine.calculator import ImpactCalculator
from policyimpact.engine.headline import generate_headline
from policyimpact.models.enums import ImpactDirection, ImpactSemantics, OutputUnit
from policyimpact.models.policy import PolicyParameters
from tests.conftest import make_formula


class TestHouseholdRegression:
    """Baselines for the reference $80k renter household."""

    def _run(self, profile, formulas, effective_date="2027-01-01"):
        engine = ImpactCalculator()
        return engine.calculate(
            profile, PolicyParameters(effective_date=effective_date), formulas
        )

    def test_renters_credit_with_monthly_dimension(self, household_80k):
        credit = make_formula(
            "min(annual_housing_payment * 0.1, 2000)",
            ["annual_housing_payment"],
            formula_id="renters_credit",
            name="Renters credit",
        )
        monthly = make_formula(
            "renters_credit / 12",
            ["renters_credit"],
            formula_id="renters_credit_monthly",
            name="Monthly renters credit",
        )
        result = self._run(household_80k, [credit, monthly])

        assert result.primary_impact_value == 2000
        assert result.impact_direction == ImpactDirection.POSITIVE
        assert result.additional_dimensions[0].value == 166.67
        assert result.context.percent_of_household_income == 2.5
        assert result.context.months_of_housing_payment == 1.0
        assert generate_headline(result) == "You could save $2,000/year"

    def test_payroll_tax_increase(self, household_80k):
        tax = make_formula(
            "max(0, household_income - 60000) * 0.012",
            ["household_income"],
            name="Payroll surtax",
            semantics=ImpactSemantics.BURDEN,
        )
        result = self._run(household_80k, [tax])

        assert result.primary_impact_value == 240
        assert result.impact_direction == ImpactDirection.NEGATIVE
        assert generate_headline(result) == "This could cost you $240/year"

    def test_rate_change_percentage(self, household_80k):
        rate = make_formula(
            "(0.22 - 0.24) * 100",
            [],
            name="Marginal rate change",
            unit=OutputUnit.PERCENTAGE,
            semantics=ImpactSemantics.BURDEN,
        )
        result = self._run(household_80k, [rate])

        assert result.primary_impact_value == -2
        assert result.impact_direction == ImpactDirection.POSITIVE
        assert generate_headline(result) == "You could save 2%"

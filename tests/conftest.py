"""Shared test fixtures for the policy impact test suite."""

import pytest

from policyimpact.models.enums import ImpactSemantics, OutputUnit
from policyimpact.models.policy import Formula, PolicyParameters
from policyimpact.models.profile import UserProfile


def make_formula(
    expression,
    required_inputs,
    formula_id="primary",
    name="Primary impact",
    unit=OutputUnit.DOLLARS,
    semantics=ImpactSemantics.BENEFIT,
):
    """Helper to create a Formula with minimal boilerplate."""
    return Formula(
        formula_id=formula_id,
        name=name,
        description=f"Computes {name.lower()}",
        expression=expression,
        required_inputs=required_inputs,
        output_unit=unit,
        impact_semantics=semantics,
    )


@pytest.fixture
def household_80k() -> UserProfile:
    """Renter household on $80k, the reference profile."""
    return UserProfile(
        age=38,
        state="CA",
        household_size=3,
        household_income=80_000,
        individual_income=55_000,
        tax_filing_status="married_filing_jointly",
        employment_status="employed_full_time",
        rent_vs_own="rent",
        annual_housing_payment=24_000,
    )


@pytest.fixture
def individual_only() -> UserProfile:
    """Profile with individual income but no household income."""
    return UserProfile(age=27, state="NY", individual_income=48_000)


@pytest.fixture
def dated_policy() -> PolicyParameters:
    return PolicyParameters(effective_date="2027-01-01")


@pytest.fixture
def credit_formula() -> Formula:
    """A 2% household income credit."""
    return make_formula(
        "household_income * 0.02",
        ["household_income"],
        formula_id="credit",
        name="Household credit",
    )

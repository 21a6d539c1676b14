from __future__ import annotations

from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import (
    EmploymentStatus,
    HousingStatus,
    InstitutionType,
    InsuranceStatus,
    InsuranceType,
    MaritalStatus,
    StudentStatus,
    TaxFilingStatus,
)

# Human-readable labels for profile fields, used when asking the user for
# missing information. Unmapped fields fall back to the raw field name.
FIELD_LABELS: dict[str, str] = {
    "household_income": "Household Income",
    "individual_income": "Individual Income",
    "age": "Age",
    "state": "State",
    "household_size": "Household Size",
    "tax_filing_status": "Tax Filing Status",
    "employment_status": "Employment Status",
    "insurance_status": "Insurance Status",
    "student_status": "Student Status",
    "rent_vs_own": "Housing Status",
    "annual_housing_payment": "Annual Housing Payment",
    "student_loan_balance": "Student Loan Balance",
}


def field_label(field_name: str) -> str:
    return FIELD_LABELS.get(field_name, field_name)


class CurrentBenefits(BaseModel):
    """Programs the user is already enrolled in."""

    snap: Optional[bool] = None
    medicaid: Optional[bool] = None
    medicare: Optional[bool] = None
    pell_grant: Optional[bool] = None
    child_tax_credit: Optional[bool] = None
    earned_income_tax_credit: Optional[bool] = None
    other_programs: Optional[list[str]] = None


class UserProfile(BaseModel):
    """Flat record of the user's self-reported circumstances.

    Field names are the variable names formula expressions refer to.
    Unknown extra fields are kept so upstream extraction can introduce
    new numeric, string or boolean attributes without a schema change.
    """

    model_config = ConfigDict(extra="allow", use_enum_values=True)

    id: Optional[str] = None

    # Demographics
    age: Optional[int] = Field(default=None, ge=0, le=150)
    state: Optional[str] = Field(default=None, min_length=2, max_length=2)
    city: Optional[str] = Field(default=None, max_length=100)
    zip_code: Optional[str] = Field(default=None, max_length=10)
    household_size: Optional[int] = Field(default=None, ge=1)
    marital_status: Optional[MaritalStatus] = None

    # Income & employment
    employment_status: Optional[EmploymentStatus] = None
    individual_income: Optional[float] = Field(default=None, ge=0)
    household_income: Optional[float] = Field(default=None, ge=0)
    tax_filing_status: Optional[TaxFilingStatus] = None
    industry: Optional[str] = Field(default=None, max_length=100)

    # Housing & finances
    rent_vs_own: Optional[HousingStatus] = None
    annual_housing_payment: Optional[float] = Field(default=None, ge=0)
    student_loan_balance: Optional[float] = Field(default=None, ge=0)
    other_debts: Optional[float] = Field(default=None, ge=0)

    # Healthcare
    insurance_status: Optional[InsuranceStatus] = None
    insurance_type: Optional[InsuranceType] = None
    dependents_covered: Optional[int] = Field(default=None, ge=0)

    # Education
    student_status: Optional[StudentStatus] = None
    institution_type: Optional[InstitutionType] = None
    in_state_vs_out_of_state: Optional[str] = None

    current_benefits: Optional[CurrentBenefits] = None

    NON_DATA_FIELDS: ClassVar[set[str]] = {"id"}

    def values(self) -> dict[str, Any]:
        """Return every populated field, including extras, as plain values."""
        return {
            name: value
            for name, value in self.model_dump().items()
            if name not in self.NON_DATA_FIELDS and value is not None
        }

    def available_fields(self) -> list[str]:
        """Return names of all fields that hold a non-empty value."""
        return [name for name, value in self.values().items() if value != ""]

    def completeness_score(self) -> float:
        """Returns 0.0-1.0 indicating how many declared fields are populated."""
        declared = [f for f in type(self).model_fields if f not in self.NON_DATA_FIELDS]
        if not declared:
            return 0.0
        available = set(self.available_fields())
        filled = sum(1 for name in declared if name in available)
        return filled / len(declared)

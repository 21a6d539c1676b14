"""Pydantic models for extracted policy parameters and calculation formulas.

These arrive from the upstream extraction step as camelCase JSON. The
structure is validated here; the content of formula expressions is not
trusted and is only ever run through the safe expression evaluator.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .enums import ImpactSemantics, OutputUnit, PolicyType, TaxType


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Formula(_CamelModel):
    """A named calculation unit produced by policy extraction."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    formula_id: str = Field(min_length=1)
    name: str
    description: str
    expression: str = Field(description='e.g. "household_income * 0.02 - current_credit"')
    required_inputs: list[str] = Field(description="Profile fields the expression needs")
    output_unit: OutputUnit
    impact_semantics: ImpactSemantics = ImpactSemantics.BENEFIT


class IncomeBracket(_CamelModel):
    min_income: float
    max_income: Optional[float] = Field(default=None, description="None = no upper limit")
    current_rate: Optional[float] = Field(default=None, ge=0, le=1.0)
    new_rate: Optional[float] = Field(default=None, ge=0, le=1.0)
    change_amount: Optional[float] = None

    @model_validator(mode="after")
    def max_not_below_min(self) -> IncomeBracket:
        if self.max_income is not None and self.max_income < self.min_income:
            raise ValueError(
                f"max_income ({self.max_income}) must be >= min_income ({self.min_income})"
            )
        return self


class EligibilityCriterion(_CamelModel):
    field: str
    operator: Literal[
        "equals",
        "not_equals",
        "less_than",
        "less_than_or_equal",
        "greater_than",
        "greater_than_or_equal",
        "in",
        "not_in",
    ]
    value: Union[str, float, list[Union[str, float]]]


class Eligibility(_CamelModel):
    criteria: list[EligibilityCriterion]
    logic: Literal["all", "any"] = "all"


class PolicyParameters(_CamelModel):
    """Structured policy details. Only the effective date feeds the calculator."""

    effective_date: Optional[str] = None
    sunset_date: Optional[str] = None

    income_brackets: Optional[list[IncomeBracket]] = None
    tax_type: Optional[TaxType] = None

    eligibility: Optional[Eligibility] = None
    benefit_amount: Optional[float] = None
    benefit_formula: Optional[str] = None

    compliance_cost: Optional[float] = None
    affected_population: Optional[str] = None

    implementation_cost: Optional[float] = None
    projected_revenue: Optional[float] = None
    projected_savings: Optional[float] = None


class ExtractedPolicy(_CamelModel):
    extraction_status: Literal["extracted"] = "extracted"
    policy_type: PolicyType
    parameters: PolicyParameters = Field(default_factory=PolicyParameters)
    calculation_formulas: list[Formula] = Field(default_factory=list)
    source_sentences: Optional[list[Annotated[int, Field(ge=0)]]] = None


class InsufficientDetailPolicy(_CamelModel):
    extraction_status: Literal["insufficient_detail"] = "insufficient_detail"
    reason: str
    missing_information: list[str] = Field(default_factory=list)
    partial_parameters: Optional[PolicyParameters] = None


class NotApplicablePolicy(_CamelModel):
    extraction_status: Literal["not_applicable"] = "not_applicable"
    reason: str


PolicyParameterResult = Annotated[
    Union[ExtractedPolicy, InsufficientDetailPolicy, NotApplicablePolicy],
    Field(discriminator="extraction_status"),
]

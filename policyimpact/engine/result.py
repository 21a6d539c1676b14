"""Immutable result and breakdown data structures.

An impact calculation ends in exactly one of two shapes, ``ComputedImpact``
or ``CannotComputeImpact``. Both serialize to the camelCase dict that the
presentation and persistence layers consume.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Union

from policyimpact.models.enums import (
    CalculationStatus,
    CaveatSeverity,
    CaveatType,
    ImpactDirection,
    ImpactUnit,
)


@dataclass(frozen=True)
class CalculationStep:
    """Execution record for a single formula."""

    step_number: int
    description: str
    formula: str
    inputs: dict[str, float]
    result: float
    unit: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "stepNumber": self.step_number,
            "description": self.description,
            "formula": self.formula,
            "inputs": dict(self.inputs),
            "result": self.result,
            "unit": self.unit,
        }


@dataclass(frozen=True)
class Caveat:
    type: CaveatType
    description: str
    severity: CaveatSeverity
    affects_confidence: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "description": self.description,
            "severity": self.severity.value,
            "affectsConfidence": self.affects_confidence,
        }


@dataclass(frozen=True)
class MissingInput:
    """A required profile field the user has not filled in."""

    field: str
    field_label: str
    reason: str
    impact: str
    is_required: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "fieldLabel": self.field_label,
            "reason": self.reason,
            "impact": self.impact,
            "isRequired": self.is_required,
        }


@dataclass(frozen=True)
class AdditionalDimension:
    """Result of a secondary formula, reported beside the primary value."""

    formula_id: str
    name: str
    value: float
    unit: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "formulaId": self.formula_id,
            "name": self.name,
            "value": self.value,
            "unit": self.unit,
            "description": self.description,
        }


@dataclass(frozen=True)
class ImpactContext:
    """Ratios that put the primary value in perspective."""

    monthly_equivalent: float
    percent_of_household_income: Optional[float] = None
    months_of_housing_payment: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "monthlyEquivalent": self.monthly_equivalent,
            "percentOfHouseholdIncome": self.percent_of_household_income,
            "monthsOfHousingPayment": self.months_of_housing_payment,
        }


@dataclass(frozen=True)
class CalculationBreakdown:
    steps: list[CalculationStep]
    inputs_used: dict[str, Any]
    formula_used: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "steps": [s.to_dict() for s in self.steps],
            "inputsUsed": dict(self.inputs_used),
            "formulaUsed": self.formula_used,
        }


@dataclass(frozen=True)
class ComputedImpact:
    primary_impact_value: float
    impact_unit: ImpactUnit
    impact_direction: ImpactDirection
    breakdown: CalculationBreakdown
    caveats: list[Caveat]
    confidence_level: float
    context: ImpactContext
    additional_dimensions: list[AdditionalDimension] = field(default_factory=list)
    calculation_status: Literal[CalculationStatus.COMPUTED] = CalculationStatus.COMPUTED

    def to_dict(self) -> dict[str, Any]:
        return {
            "calculationStatus": self.calculation_status.value,
            "primaryImpactValue": self.primary_impact_value,
            "impactUnit": self.impact_unit.value,
            "impactDirection": self.impact_direction.value,
            "calculationBreakdown": self.breakdown.to_dict(),
            "caveats": [c.to_dict() for c in self.caveats],
            "confidenceLevel": self.confidence_level,
            "context": self.context.to_dict(),
            "additionalDimensions": [d.to_dict() for d in self.additional_dimensions],
        }


@dataclass(frozen=True)
class CannotComputeImpact:
    reason: str
    missing_inputs: list[MissingInput] = field(default_factory=list)
    partial_analysis: Optional[str] = None
    calculation_status: Literal[CalculationStatus.CANNOT_COMPUTE] = CalculationStatus.CANNOT_COMPUTE

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "calculationStatus": self.calculation_status.value,
            "reason": self.reason,
            "missingInputs": [m.to_dict() for m in self.missing_inputs],
        }
        if self.partial_analysis is not None:
            data["partialAnalysis"] = self.partial_analysis
        return data


ImpactResult = Union[ComputedImpact, CannotComputeImpact]


def is_computed(result: ImpactResult) -> bool:
    return isinstance(result, ComputedImpact)


def is_cannot_compute(result: ImpactResult) -> bool:
    return isinstance(result, CannotComputeImpact)

"""Personal impact calculation engine.

Takes a user profile + extracted policy formulas -> produces an ImpactResult
with a full step-by-step breakdown.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from policyimpact.config.settings import Settings
from policyimpact.engine.confidence import (
    build_caveats,
    classify_direction,
    confidence_level,
    is_present,
)
from policyimpact.engine.expression import Evaluation, evaluate
from policyimpact.engine.result import (
    AdditionalDimension,
    CalculationBreakdown,
    CalculationStep,
    CannotComputeImpact,
    ComputedImpact,
    ImpactContext,
    ImpactResult,
    MissingInput,
)
from policyimpact.models.enums import ImpactUnit, OutputUnit
from policyimpact.models.policy import Formula, PolicyParameters
from policyimpact.models.profile import UserProfile, field_label

logger = logging.getLogger(__name__)

Evaluator = Callable[[str, Mapping[str, float]], Evaluation]
ProfileLike = Union[UserProfile, Mapping[str, Any]]

_UNIT_MAP = {
    OutputUnit.DOLLARS: ImpactUnit.DOLLARS_ANNUAL,
    OutputUnit.PERCENTAGE: ImpactUnit.PERCENTAGE,
    OutputUnit.BOOLEAN: ImpactUnit.QUALITATIVE,
}


def round_half_up(value: float, places: int = 2) -> float:
    """Round halves toward +infinity, the way currency amounts are displayed.

    Values too large to scale are returned unrounded.
    """
    factor = 10**places
    scaled = value * factor + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / factor


def profile_values(profile: ProfileLike) -> dict[str, Any]:
    """Flatten a profile into plain field -> value pairs."""
    if isinstance(profile, UserProfile):
        return profile.values()
    return {k: v for k, v in profile.items() if k != "id" and v is not None}


def extract_profile_variables(profile: ProfileLike) -> dict[str, Union[float, str]]:
    """Build the variable set formulas are evaluated against.

    Numbers become floats, booleans become 1.0/0.0 and non-empty strings are
    kept as strings (they are never resolvable in arithmetic). Enrolled
    benefit flags are lifted to top-level variables.
    """
    variables: dict[str, Union[float, str]] = {}
    for name, value in profile_values(profile).items():
        if isinstance(value, Mapping):
            for key, nested in value.items():
                if isinstance(nested, bool):
                    variables[key] = 1.0 if nested else 0.0
            continue
        if isinstance(value, bool):
            variables[name] = 1.0 if value else 0.0
        elif isinstance(value, (int, float)):
            variables[name] = float(value)
        elif isinstance(value, str) and value:
            variables[name] = value
    return variables


def presence_view(profile: ProfileLike) -> dict[str, Any]:
    """Profile values plus lifted benefit flags, for required-input checks."""
    return {**profile_values(profile), **extract_profile_variables(profile)}


def check_required_inputs(
    values: Mapping[str, Any], required_inputs: Sequence[str]
) -> list[MissingInput]:
    return [
        MissingInput(
            field=name,
            field_label=field_label(name),
            reason="Required for impact calculation",
            impact="Cannot compute accurate impact without this information",
            is_required=True,
        )
        for name in required_inputs
        if not is_present(values.get(name))
    ]


class ImpactCalculator:
    """Stateless engine that runs personal impact calculations."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        evaluator: Evaluator = evaluate,
    ):
        self.settings = settings or Settings()
        self.evaluator = evaluator

    def calculate(
        self,
        profile: ProfileLike,
        policy_parameters: Union[PolicyParameters, Mapping[str, Any], None],
        formulas: Sequence[Union[Formula, Mapping[str, Any]]],
    ) -> ImpactResult:
        """Evaluate the formulas in order against the profile."""
        # Structural problems surface as pydantic.ValidationError
        formulas = [
            f if isinstance(f, Formula) else Formula.model_validate(f)
            for f in formulas or []
        ]
        if isinstance(policy_parameters, Mapping):
            policy_parameters = PolicyParameters.model_validate(policy_parameters)

        if not formulas:
            return CannotComputeImpact(
                reason="No calculation formulas available for this policy",
            )

        primary = formulas[0]
        values = profile_values(profile)

        missing = check_required_inputs(presence_view(profile), primary.required_inputs)
        if missing:
            logger.info(
                "Cannot compute %s: missing %s",
                primary.formula_id,
                [m.field for m in missing],
            )
            return CannotComputeImpact(
                reason="Missing required profile information: "
                + ", ".join(m.field_label for m in missing),
                missing_inputs=missing,
                partial_analysis="This policy calculation requires: "
                + ", ".join(primary.required_inputs),
            )

        variables = extract_profile_variables(profile)
        numeric = {k: v for k, v in variables.items() if isinstance(v, float)}

        steps: list[CalculationStep] = []
        for index, formula in enumerate(formulas):
            evaluation = self.evaluator(formula.expression, numeric)
            if not evaluation.ok:
                logger.warning(
                    "Formula %s failed to evaluate (%r): %s",
                    formula.formula_id,
                    formula.expression,
                    evaluation.error,
                )
                return CannotComputeImpact(
                    reason=f"Failed to evaluate formula: {formula.name}",
                )

            result = evaluation.value
            steps.append(
                CalculationStep(
                    step_number=index + 1,
                    description=formula.description,
                    formula=formula.expression,
                    inputs={name: numeric[name] for name in evaluation.referenced},
                    result=result,
                    unit=formula.output_unit.value,
                )
            )
            # Later formulas may refer to this one by id
            numeric[formula.formula_id] = result

        primary_value = steps[0].result
        caveats = build_caveats(values, policy_parameters)

        return ComputedImpact(
            primary_impact_value=round_half_up(primary_value),
            impact_unit=_UNIT_MAP[primary.output_unit],
            impact_direction=classify_direction(primary_value, primary.impact_semantics),
            breakdown=CalculationBreakdown(
                steps=steps,
                inputs_used={
                    name: value
                    for name, value in variables.items()
                    if name in primary.required_inputs
                },
                formula_used=primary.expression,
            ),
            caveats=caveats,
            confidence_level=confidence_level(
                caveats,
                complete=self.settings.confidence_complete,
                with_caveats=self.settings.confidence_with_caveats,
            ),
            context=self._build_context(primary_value, values),
            additional_dimensions=[
                AdditionalDimension(
                    formula_id=formula.formula_id,
                    name=formula.name,
                    value=round_half_up(step.result),
                    unit=formula.output_unit.value,
                    description=formula.description,
                )
                for formula, step in zip(formulas[1:], steps[1:])
            ],
        )

    @staticmethod
    def _build_context(value: float, values: Mapping[str, Any]) -> ImpactContext:
        household_income = values.get("household_income")
        housing_payment = values.get("annual_housing_payment")

        percent_of_income: Optional[float] = None
        if _positive_number(household_income):
            percent_of_income = _finite_or_none(value / household_income * 100)

        months_of_housing: Optional[float] = None
        if _positive_number(housing_payment) and housing_payment / 12 > 0:
            months_of_housing = _finite_or_none(value / (housing_payment / 12))

        return ImpactContext(
            monthly_equivalent=round_half_up(value / 12),
            percent_of_household_income=percent_of_income,
            months_of_housing_payment=months_of_housing,
        )


def _positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _finite_or_none(ratio: float) -> Optional[float]:
    # A ratio that overflows is treated as unknown
    if not math.isfinite(ratio):
        return None
    return round_half_up(ratio)


def calculate_impact(
    profile: ProfileLike,
    policy_parameters: Union[PolicyParameters, Mapping[str, Any], None],
    formulas: Sequence[Union[Formula, Mapping[str, Any]]],
) -> ImpactResult:
    """Run a calculation with default settings."""
    return ImpactCalculator().calculate(profile, policy_parameters, formulas)

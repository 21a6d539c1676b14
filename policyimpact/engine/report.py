"""Assemble a displayable impact report for one profile and one policy.

The extraction step upstream may have found formulas, found too little
detail, or decided the article has no quantifiable policy at all. Each case
produces a report; only the first one runs the calculator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from policyimpact.engine.calculator import ImpactCalculator, ProfileLike, presence_view
from policyimpact.engine.confidence import is_present
from policyimpact.engine.headline import (
    CANNOT_COMPUTE_HEADLINE,
    confidence_statement,
    generate_explanation,
    generate_headline,
)
from policyimpact.engine.result import CannotComputeImpact, ImpactResult
from policyimpact.models.policy import (
    ExtractedPolicy,
    Formula,
    InsufficientDetailPolicy,
    NotApplicablePolicy,
    PolicyParameterResult,
)
from policyimpact.models.profile import UserProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImpactReport:
    result: ImpactResult
    headline: str
    explanation: str
    confidence_statement: str
    profile_completeness: float
    missing_fields_for_better_estimate: list[str] = field(default_factory=list)
    policy_type: Optional[str] = None
    missing_information: Optional[list[str]] = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            **self.result.to_dict(),
            "headline": self.headline,
            "explanation": self.explanation,
            "confidenceStatement": self.confidence_statement,
            "profileCompleteness": self.profile_completeness,
            "missingFieldsForBetterEstimate": list(self.missing_fields_for_better_estimate),
            "policyType": self.policy_type,
        }
        if self.missing_information is not None:
            data["missingInformation"] = list(self.missing_information)
        return data


def missing_fields_for_better_estimate(
    profile: ProfileLike, formulas: list[Formula]
) -> list[str]:
    """Inputs any formula needs that the profile lacks, in first-seen order."""
    values = presence_view(profile)
    formula_ids = {f.formula_id for f in formulas}
    missing: list[str] = []
    for formula in formulas:
        for name in formula.required_inputs:
            if name in formula_ids or name in missing:
                continue
            if not is_present(values.get(name)):
                missing.append(name)
    return missing


def _completeness(profile: ProfileLike) -> float:
    if not isinstance(profile, UserProfile):
        profile = UserProfile.model_validate(dict(profile))
    return round(profile.completeness_score() * 100, 1)


def build_report(
    profile: ProfileLike,
    policy: Optional[PolicyParameterResult],
    calculator: Optional[ImpactCalculator] = None,
) -> ImpactReport:
    completeness = _completeness(profile)

    if policy is None:
        result = CannotComputeImpact(
            reason="No policy parameters available for this article",
        )
        return ImpactReport(
            result=result,
            headline=CANNOT_COMPUTE_HEADLINE,
            explanation=(
                "This article has not been analyzed for policy parameters yet, "
                "or no quantifiable policy was found."
            ),
            confidence_statement=confidence_statement(result),
            profile_completeness=completeness,
        )

    if isinstance(policy, NotApplicablePolicy):
        result = CannotComputeImpact(reason=policy.reason)
        return ImpactReport(
            result=result,
            headline="No quantifiable policy impact",
            explanation=(
                "This article discusses policy topics but does not contain specific "
                "changes that would affect your finances."
            ),
            confidence_statement=confidence_statement(result),
            profile_completeness=completeness,
        )

    if isinstance(policy, InsufficientDetailPolicy):
        result = CannotComputeImpact(reason=policy.reason)
        return ImpactReport(
            result=result,
            headline="Incomplete policy information",
            explanation=(
                "The article mentions policy changes but lacks the specific details "
                "needed to calculate personal impact."
            ),
            confidence_statement=confidence_statement(result),
            profile_completeness=completeness,
            missing_information=list(policy.missing_information),
        )

    if not isinstance(policy, ExtractedPolicy):
        raise TypeError(f"Unsupported policy result: {type(policy).__name__}")

    calculator = calculator or ImpactCalculator()
    result = calculator.calculate(profile, policy.parameters, policy.calculation_formulas)
    logger.info(
        "Impact for %s policy: %s",
        policy.policy_type.value,
        result.calculation_status.value,
    )

    return ImpactReport(
        result=result,
        headline=generate_headline(result),
        explanation=generate_explanation(result),
        confidence_statement=confidence_statement(result),
        profile_completeness=completeness,
        missing_fields_for_better_estimate=missing_fields_for_better_estimate(
            profile, policy.calculation_formulas
        ),
        policy_type=policy.policy_type.value,
    )

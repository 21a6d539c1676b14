"""Direction classification, caveats and the confidence heuristic."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from policyimpact.engine.result import Caveat
from policyimpact.models.enums import (
    CaveatSeverity,
    CaveatType,
    ImpactDirection,
    ImpactSemantics,
)
from policyimpact.models.policy import PolicyParameters

# Below this magnitude a result is immaterial, in the formula's own units.
MATERIALITY_THRESHOLD = 100.0


def is_present(value: Any) -> bool:
    """A profile value counts as supplied unless it is None or an empty string."""
    return value is not None and value != ""


def classify_direction(
    value: float,
    semantics: ImpactSemantics = ImpactSemantics.BENEFIT,
) -> ImpactDirection:
    """Map a signed result onto what it means for the user.

    benefit: positive -> positive, burden: positive -> negative. Exactly zero
    is neutral. Immaterial results (|value| <= MATERIALITY_THRESHOLD) keep
    their sign, so they classify the same way as material ones.
    """
    if abs(value) <= MATERIALITY_THRESHOLD:
        if value == 0:
            return ImpactDirection.NEUTRAL
        favourable = (value > 0) == (semantics == ImpactSemantics.BENEFIT)
    elif semantics == ImpactSemantics.BENEFIT:
        favourable = value > 0
    else:
        favourable = value <= 0

    return ImpactDirection.POSITIVE if favourable else ImpactDirection.NEGATIVE


def build_caveats(
    profile_values: Mapping[str, Any],
    parameters: Optional[PolicyParameters],
) -> list[Caveat]:
    caveats: list[Caveat] = []

    if not is_present(profile_values.get("household_income")) and is_present(
        profile_values.get("individual_income")
    ):
        caveats.append(
            Caveat(
                type=CaveatType.ASSUMPTION,
                description="Household income estimated from individual income",
                severity=CaveatSeverity.MEDIUM,
                affects_confidence=True,
            )
        )

    if parameters is None or not parameters.effective_date:
        caveats.append(
            Caveat(
                type=CaveatType.POLICY_UNCERTAINTY,
                description="Policy effective date not specified",
                severity=CaveatSeverity.LOW,
                affects_confidence=False,
            )
        )

    return caveats


def confidence_level(
    caveats: list[Caveat],
    complete: float = 0.9,
    with_caveats: float = 0.7,
) -> float:
    """Two-valued heuristic: any caveat at all lowers confidence."""
    return complete if not caveats else with_caveats

"""Audit hooks: record impact calculations for the provenance trail."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from policyimpact.engine.result import ImpactResult, is_computed

logger = logging.getLogger(__name__)


def log_calculation(
    result: ImpactResult,
    inputs: dict[str, Any] | None = None,
    duration_ms: Optional[float] = None,
) -> dict[str, Any]:
    """Record an impact calculation in the audit log.

    Returns the audit entry dict for downstream persistence.
    """
    computed = is_computed(result)
    entry = {
        "entity_type": "impact_calculation",
        "action": "calculated",
        "description": "Impact calculation completed",
        "input_data": inputs or {},
        "output_data": {
            "calculation_status": result.calculation_status.value,
            "impact_value": result.primary_impact_value if computed else None,
            "impact_direction": result.impact_direction.value if computed else None,
        },
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        "duration_ms": duration_ms,
    }
    logger.info("Calculation audit: impact_calculation -> %s", result.calculation_status.value)
    return entry

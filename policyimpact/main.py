"""FastAPI application for personal policy impact."""

from __future__ import annotations

import logging
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from policyimpact.config.settings import Settings
from policyimpact.engine.calculator import ImpactCalculator
from policyimpact.engine.expression import evaluate
from policyimpact.engine.report import build_report
from policyimpact.hooks.audit_hooks import log_calculation
from policyimpact.models.policy import PolicyParameterResult
from policyimpact.models.profile import UserProfile

settings = Settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Policy Impact API", version="0.1.0")

# CORS: allow the front-end dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ImpactRequest(BaseModel):
    profile: UserProfile
    policy: Optional[PolicyParameterResult] = None


class EvaluateRequest(BaseModel):
    expression: str
    variables: dict[str, float] = Field(default_factory=dict)


class EvaluateResponse(BaseModel):
    ok: bool
    value: Optional[float] = None
    error: Optional[str] = None
    referenced: list[str] = Field(default_factory=list)


@app.post("/api/impact")
async def calculate_impact(body: ImpactRequest):
    """Calculate the personal impact of an extracted policy on a profile."""
    start = time.perf_counter()
    try:
        report = build_report(
            body.profile,
            body.policy,
            calculator=ImpactCalculator(settings=settings),
        )
    except Exception as e:
        logger.exception("Impact calculation failed")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to calculate impact", "details": str(e)},
        )

    duration_ms = round((time.perf_counter() - start) * 1000, 2)
    audit = log_calculation(
        report.result,
        inputs={
            "profile_id": body.profile.id,
            "extraction_status": body.policy.extraction_status if body.policy else None,
        },
        duration_ms=duration_ms,
    )
    return {**report.to_dict(), "audit": audit, "durationMs": duration_ms}


@app.post("/api/expressions/evaluate", response_model=EvaluateResponse)
async def evaluate_expression(body: EvaluateRequest):
    """Dry-run an expression against explicit variables."""
    evaluation = evaluate(body.expression, body.variables)
    return EvaluateResponse(
        ok=evaluation.ok,
        value=evaluation.value,
        error=evaluation.error,
        referenced=list(evaluation.referenced),
    )


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(
        "policyimpact.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )

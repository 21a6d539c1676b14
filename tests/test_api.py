"""Tests for FastAPI endpoints: impact, expression dry-run, CORS and health."""

import pytest
from httpx import ASGITransport, AsyncClient

from policyimpact.main import app

CREDIT_POLICY = {
    "extractionStatus": "extracted",
    "policyType": "tax_credit",
    "parameters": {"effectiveDate": "2027-01-01"},
    "calculationFormulas": [
        {
            "formulaId": "credit",
            "name": "Household credit",
            "description": "2% of household income",
            "expression": "household_income * 0.02",
            "requiredInputs": ["household_income"],
            "outputUnit": "dollars",
            "impactSemantics": "benefit",
        }
    ],
}


def _client():
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestImpactEndpoint:
    @pytest.mark.asyncio
    async def test_computed(self):
        async with _client() as client:
            resp = await client.post(
                "/api/impact",
                json={"profile": {"household_income": 80000}, "policy": CREDIT_POLICY},
            )
        assert resp.status_code == 200
        body = resp.json()
        assert body["calculationStatus"] == "computed"
        assert body["primaryImpactValue"] == 1600
        assert body["impactDirection"] == "positive"
        assert body["context"]["monthlyEquivalent"] == 133.33
        assert body["headline"] == "You could save $1,600/year"
        assert body["audit"]["output_data"]["calculation_status"] == "computed"
        assert "durationMs" in body

    @pytest.mark.asyncio
    async def test_missing_inputs(self):
        async with _client() as client:
            resp = await client.post(
                "/api/impact",
                json={"profile": {"individual_income": 40000}, "policy": CREDIT_POLICY},
            )
        body = resp.json()
        assert resp.status_code == 200
        assert body["calculationStatus"] == "cannot_compute"
        assert body["missingInputs"][0]["field"] == "household_income"
        assert body["missingInputs"][0]["fieldLabel"] == "Household Income"

    @pytest.mark.asyncio
    async def test_no_policy(self):
        async with _client() as client:
            resp = await client.post("/api/impact", json={"profile": {}})
        body = resp.json()
        assert body["calculationStatus"] == "cannot_compute"
        assert body["reason"] == "No policy parameters available for this article"

    @pytest.mark.asyncio
    async def test_malformed_formula_rejected(self):
        policy = {**CREDIT_POLICY, "calculationFormulas": [{"formulaId": "x"}]}
        async with _client() as client:
            resp = await client.post("/api/impact", json={"profile": {}, "policy": policy})
        assert resp.status_code == 422


class TestEvaluateEndpoint:
    @pytest.mark.asyncio
    async def test_success(self):
        async with _client() as client:
            resp = await client.post(
                "/api/expressions/evaluate",
                json={"expression": "income * 0.02", "variables": {"income": 50000}},
            )
        assert resp.json() == {
            "ok": True,
            "value": 1000.0,
            "error": None,
            "referenced": ["income"],
        }

    @pytest.mark.asyncio
    async def test_failure_is_not_http_error(self):
        async with _client() as client:
            resp = await client.post("/api/expressions/evaluate", json={"expression": "1 / 0"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["ok"] is False
        assert body["value"] is None
        assert body["error"] == "Division by zero"


class TestPlumbing:
    @pytest.mark.asyncio
    async def test_cors_allows_localhost_3000(self):
        """OPTIONS request with Origin: http://localhost:3000 is allowed."""
        async with _client() as client:
            resp = await client.options(
                "/api/impact",
                headers={
                    "Origin": "http://localhost:3000",
                    "Access-Control-Request-Method": "POST",
                },
            )
        assert resp.headers.get("access-control-allow-origin") == "http://localhost:3000"

    @pytest.mark.asyncio
    async def test_health_check_endpoint(self):
        """GET /health returns 200 with status ok."""
        async with _client() as client:
            resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

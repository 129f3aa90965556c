"""POST /v1/valuation/estimate - comparable-sales valuation endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from listing_analytics.api.v1.schemas import (
    ValuationFactorSchema,
    ValuationRequest,
    ValuationResponse,
)
from listing_analytics.api.dependencies import get_policy, get_request_id
from listing_analytics.domain.valuation import estimate_value
from listing_analytics.domain.models import ComparableSale, SubjectProperty
from listing_analytics.domain.exceptions import InsufficientComparablesError
from listing_analytics.domain.policy import EnginePolicy
from listing_analytics.infrastructure.observability.metrics import record_computation
from listing_analytics.infrastructure.observability.logging import log_computation
from listing_analytics.utils.money import format_currency

router = APIRouter()

OPERATION = "valuation"


@router.post("/valuation/estimate", response_model=ValuationResponse)
def estimate_property_value(
    request_body: ValuationRequest,
    request: Request,
    policy: EnginePolicy = Depends(get_policy),
):
    """
    Estimate fair value for a subject property from comparable sales.

    Returns:
        Estimated value, confidence and the adjustments applied
    """
    start_time = time.time()
    request_id = get_request_id(request)

    subject = SubjectProperty(**request_body.subject.model_dump())
    comparables = [ComparableSale(**c.model_dump()) for c in request_body.comparables]

    try:
        valuation = estimate_value(
            subject,
            comparables,
            current_year=request_body.current_year,
            policy=policy,
        )

    except InsufficientComparablesError as e:
        record_computation(OPERATION, "insufficient_data")
        logging.warning(f"Insufficient comparables: {e}", extra={"request_id": request_id})
        raise HTTPException(
            status_code=422,
            detail="Not enough comparable sales to estimate value",
        )

    except Exception as e:
        record_computation(OPERATION, "error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_computation(OPERATION)
    log_computation(
        request_id,
        OPERATION,
        "ok",
        duration_ms,
        comparable_count=len(comparables),
        estimated_value=format_currency(valuation.estimated_value),
    )

    return ValuationResponse(
        estimated_value=valuation.estimated_value,
        confidence=valuation.confidence,
        factors=[
            ValuationFactorSchema(factor=f.factor, impact=f.impact.value, weight=f.weight)
            for f in valuation.factors
        ],
    )

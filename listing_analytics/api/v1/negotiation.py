"""POST /v1/negotiation/suggest-counter - negotiation advice endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from listing_analytics.api.v1.schemas import NegotiationRequest, NegotiationResponse
from listing_analytics.api.dependencies import get_policy, get_request_id
from listing_analytics.domain.negotiation import suggest_strategy
from listing_analytics.domain.models import SalePrice
from listing_analytics.domain.exceptions import InsufficientComparablesError, InvalidInputError
from listing_analytics.domain.policy import EnginePolicy
from listing_analytics.infrastructure.observability.metrics import record_computation, record_suggestion
from listing_analytics.infrastructure.observability.logging import log_computation

router = APIRouter()

OPERATION = "negotiation"


@router.post("/negotiation/suggest-counter", response_model=NegotiationResponse)
def suggest_counter(
    request_body: NegotiationRequest,
    request: Request,
    policy: EnginePolicy = Depends(get_policy),
):
    """
    Recommend a response to an offer on a listing.

    Flow:
    1. Average the comparable sale prices
    2. Compare the offer against market and asking price
    3. Return the first matching rule's suggestion
    """
    start_time = time.time()
    request_id = get_request_id(request)

    comparable_sales = [SalePrice(price=s.price, date=s.date) for s in request_body.comparable_sales]

    try:
        suggestion = suggest_strategy(
            request_body.listing_price,
            request_body.offer_amount,
            comparable_sales,
            request_body.days_on_market,
            policy=policy,
        )

    except InsufficientComparablesError as e:
        record_computation(OPERATION, "insufficient_data")
        logging.warning(f"Insufficient comparables: {e}", extra={"request_id": request_id})
        raise HTTPException(
            status_code=422,
            detail="Not enough comparable sales to suggest a negotiation strategy",
        )

    except InvalidInputError as e:
        record_computation(OPERATION, "invalid_input")
        logging.warning(f"Invalid negotiation input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        record_computation(OPERATION, "error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_computation(OPERATION)
    record_suggestion(suggestion.type.value)
    log_computation(
        request_id,
        OPERATION,
        "ok",
        duration_ms,
        suggestion_type=suggestion.type.value,
        days_on_market=request_body.days_on_market,
    )

    return NegotiationResponse(
        type=suggestion.type.value,
        reasoning=suggestion.reasoning,
        suggested_amount=suggestion.suggested_amount,
        confidence=suggestion.confidence,
    )

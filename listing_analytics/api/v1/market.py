"""POST /v1/market/trend - market trend snapshot endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from listing_analytics.api.v1.schemas import MarketTrendRequest, MarketTrendResponse
from listing_analytics.api.dependencies import get_policy, get_request_id
from listing_analytics.domain.market import analyze_market_trend
from listing_analytics.domain.models import MarketDataPoint
from listing_analytics.domain.exceptions import InsufficientDataError, InvalidInputError
from listing_analytics.domain.policy import EnginePolicy
from listing_analytics.infrastructure.observability.metrics import record_computation, record_trend
from listing_analytics.infrastructure.observability.logging import log_computation

router = APIRouter()

OPERATION = "market_trend"


@router.post("/market/trend", response_model=MarketTrendResponse)
def market_trend(
    request_body: MarketTrendRequest,
    request: Request,
    policy: EnginePolicy = Depends(get_policy),
):
    """
    Classify recent sale prices for an area as rising, falling or stable.

    Callers pre-filter the series to the relevant area and time window.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    series = [
        MarketDataPoint(price=p.price, days_on_market=p.days_on_market, date=p.date)
        for p in request_body.series
    ]

    try:
        snapshot = analyze_market_trend(
            series,
            assumed_average_square_footage=request_body.assumed_average_square_footage,
            policy=policy,
        )

    except InsufficientDataError as e:
        record_computation(OPERATION, "insufficient_data")
        logging.warning(f"Insufficient data: {e}", extra={"request_id": request_id})
        raise HTTPException(
            status_code=422,
            detail="Not enough historical sales to analyze the market trend",
        )

    except InvalidInputError as e:
        record_computation(OPERATION, "invalid_input")
        logging.warning(f"Invalid market input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        record_computation(OPERATION, "error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_computation(OPERATION)
    record_trend(snapshot.trend.value)
    log_computation(
        request_id,
        OPERATION,
        "ok",
        duration_ms,
        area=request_body.area,
        trend=snapshot.trend.value,
        inventory_count=snapshot.inventory_count,
    )

    return MarketTrendResponse(
        area=request_body.area,
        property_type=request_body.property_type,
        median_price=snapshot.median_price,
        average_days_on_market=snapshot.average_days_on_market,
        price_per_square_foot=snapshot.price_per_square_foot,
        inventory_count=snapshot.inventory_count,
        trend=snapshot.trend.value,
    )

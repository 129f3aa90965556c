"""POST /v1/mortgage/calculate - financing cost breakdown endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from listing_analytics.api.v1.schemas import (
    AmortizationPaymentSchema,
    MortgageRequest,
    MortgageResponse,
)
from listing_analytics.api.dependencies import get_policy, get_request_id
from listing_analytics.domain.amortization import (
    build_cost_breakdown,
    generate_amortization_schedule,
    minimum_down_payment,
)
from listing_analytics.domain.exceptions import InvalidInputError
from listing_analytics.domain.policy import EnginePolicy
from listing_analytics.infrastructure.observability.metrics import record_computation
from listing_analytics.infrastructure.observability.logging import log_computation
from listing_analytics.utils.money import format_currency

router = APIRouter()

OPERATION = "cost_breakdown"


@router.post("/mortgage/calculate", response_model=MortgageResponse)
def calculate_mortgage(
    request_body: MortgageRequest,
    request: Request,
    policy: EnginePolicy = Depends(get_policy),
):
    """
    Compute monthly payment, closing costs and total cost for a purchase.

    Optionally includes the month-by-month amortization schedule.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        breakdown = build_cost_breakdown(
            request_body.purchase_price,
            request_body.down_payment,
            interest_rate=request_body.interest_rate,
            loan_term_years=request_body.loan_term_years,
            policy=policy,
        )
        schedule = None
        if request_body.include_schedule:
            schedule = [
                AmortizationPaymentSchema(
                    period=p.period,
                    payment=p.payment,
                    principal=p.principal,
                    interest=p.interest,
                    balance=p.balance,
                )
                for p in generate_amortization_schedule(
                    breakdown.loan_amount,
                    breakdown.interest_rate,
                    breakdown.loan_term_years * 12,
                )
            ]

    except InvalidInputError as e:
        record_computation(OPERATION, "invalid_input")
        logging.warning(f"Invalid mortgage input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        record_computation(OPERATION, "error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    required_down = minimum_down_payment(breakdown.purchase_price, policy)

    duration_ms = (time.time() - start_time) * 1000
    record_computation(OPERATION)
    log_computation(
        request_id,
        OPERATION,
        "ok",
        duration_ms,
        monthly_payment=format_currency(breakdown.monthly_payment),
    )

    return MortgageResponse(
        purchase_price=breakdown.purchase_price,
        down_payment=breakdown.down_payment,
        loan_amount=breakdown.loan_amount,
        interest_rate=breakdown.interest_rate,
        loan_term_years=breakdown.loan_term_years,
        monthly_payment=breakdown.monthly_payment,
        closing_costs=breakdown.closing_costs,
        total_cost=breakdown.total_cost,
        minimum_down_payment=required_down,
        meets_minimum_down_payment=breakdown.down_payment >= required_down,
        schedule=schedule,
    )

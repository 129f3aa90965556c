"""FastAPI application factory"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from listing_analytics.api.dependencies import get_request_id
from listing_analytics.api.middleware import RequestContextMiddleware
from listing_analytics.api.v1 import market, mortgage, negotiation, valuation
from listing_analytics.domain.exceptions import DomainException, InsufficientDataError
from listing_analytics.infrastructure.observability.logging import setup_logging
from listing_analytics.config import settings

setup_logging(settings.log_level)

V1_ROUTERS = (
    (mortgage.router, "mortgage"),
    (market.router, "market"),
    (valuation.router, "valuation"),
    (negotiation.router, "negotiation"),
)


async def domain_error_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Last-resort mapping for engine errors a router did not translate"""
    status_code = 422 if isinstance(exc, InsufficientDataError) else 400
    logging.warning(f"Unhandled domain error: {exc}", extra={"request_id": get_request_id(request)})
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Build the listing analytics API"""
    app = FastAPI(
        title="Listing Analytics",
        description="Financing, valuation, market trend and negotiation analytics for listings",
        version="0.1.0",
    )

    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(DomainException, domain_error_handler)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    for router, tag in V1_ROUTERS:
        app.include_router(router, prefix="/v1", tags=[tag])

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn"""
    import uvicorn

    uvicorn.run("listing_analytics.api.main:app", host="0.0.0.0", port=8000)

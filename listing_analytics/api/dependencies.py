"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from listing_analytics.config import settings
from listing_analytics.domain.policy import EnginePolicy


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_policy() -> EnginePolicy:
    """Provide the engine policy built from settings"""
    return settings.to_policy()

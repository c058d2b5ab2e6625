"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from solvability_gateway.config import settings
from solvability_gateway.domain.policy import ScoringPolicy


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_scoring_policy() -> ScoringPolicy:
    """Default scoring policy with the configured thresholds applied"""
    return ScoringPolicy(
        income_ratio_full_marks=settings.income_ratio_full_marks,
        income_ratio_floor=settings.income_ratio_floor,
        ocr_income_tolerance=settings.ocr_income_tolerance,
    )

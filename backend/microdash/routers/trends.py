"""
Trends Router
=============
POST /api/v1/trends/summary — Summarise a caller-supplied emotion series.

Intensities are range-checked by the request schema (0-100) before the
series reaches the TrendService; anything the schema accepts produces a
summary, including an empty series.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from microdash.models.emotion import SeriesRequest, TrendSummary
from microdash.services.trends import get_trend_service

router = APIRouter(prefix="/api/v1/trends", tags=["trends"])


@router.post(
    "/summary",
    response_model=TrendSummary,
    status_code=status.HTTP_200_OK,
    summary="Summarise an emotion series",
    description=(
        "Returns per-category averages, the dominant category, a 1-10 stability "
        "index and a description of significant shifts for the supplied series. "
        "An empty series returns zero averages and dominant='No data'."
    ),
    responses={
        200: {"description": "Summary returned"},
        422: {"description": "Validation error (intensity outside 0-100, bad date, etc.)"},
    },
)
async def summarize_series(body: SeriesRequest) -> TrendSummary:
    """Summarise the posted series."""
    service = get_trend_service()
    return service.summarize(body.series)

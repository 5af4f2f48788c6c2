"""
Recommendations Router
======================
POST /api/v1/recommendations/analyze — Treatment recommendations for a series.

Calls the RecommendationEngine which:
  1. Averages each emotion category over the supplied series
  2. Evaluates the fixed threshold rules in order
  3. Returns one recommendation per firing rule

Nothing is stored. Calling twice with the same series returns the same
advice with new ids and timestamps.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from microdash.models.emotion import SeriesRequest
from microdash.models.recommendation import RecommendationResponse
from microdash.services.recommendation import get_recommendation_engine

router = APIRouter(prefix="/api/v1/recommendations", tags=["recommendations"])


@router.post(
    "/analyze",
    response_model=RecommendationResponse,
    status_code=status.HTTP_200_OK,
    summary="Get treatment recommendations for an emotion series",
    description=(
        "Applies threshold rules to the series' category averages. Returns "
        "has_recommendations=false with an empty list when no rule fires."
    ),
    responses={
        200: {"description": "Recommendations returned (list may be empty)"},
        422: {"description": "Validation error (intensity outside 0-100, bad date, etc.)"},
    },
)
async def analyze_series(body: SeriesRequest) -> RecommendationResponse:
    """Evaluate recommendation rules for the posted series."""
    engine = get_recommendation_engine()
    recommendations = engine.analyze(body.series)

    return RecommendationResponse(
        recommendations=recommendations,
        has_recommendations=bool(recommendations),
    )

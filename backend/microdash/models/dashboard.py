"""
Dashboard Schemas
=================
Response envelope for the one-call dashboard endpoint, so the frontend can
render cards, charts and the advisory list in a single round-trip.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from microdash.models.emotion import EmotionCard, EmotionSnapshot, TrendSummary
from microdash.models.recommendation import DISCLAIMER, Recommendation


class DashboardResponse(BaseModel):
    """Full dashboard payload for one date range."""

    start: date
    end: date
    days_analyzed: int = Field(..., description="Whole days between start and end.")
    series: list[EmotionSnapshot]
    cards: list[EmotionCard]
    summary: TrendSummary
    recommendations: list[Recommendation]
    disclaimer: str = DISCLAIMER

"""
Recommendation Schemas
======================
Pydantic models for treatment recommendations returned to the dashboard,
plus the treatment-history record shape the frontend stores alongside them.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

RecommendationType = Literal["Therapy", "Activity", "Medication"]
Priority = Literal["Low", "Medium", "High"]

DISCLAIMER = "Recommendations are advisory and must be reviewed by a qualified professional."


class Recommendation(BaseModel):
    """A single advisory record produced by the recommendation engine."""

    id: str = Field(..., description="Opaque unique identifier, fresh per call.")
    type: RecommendationType
    description: str
    priority: Priority
    based_on: list[str] = Field(
        ...,
        min_length=1,
        description="Emotion categories whose averages triggered this recommendation.",
    )
    date_created: datetime


class RecommendationResponse(BaseModel):
    """Response envelope returned by POST /api/v1/recommendations/analyze."""

    recommendations: list[Recommendation]
    has_recommendations: bool = Field(
        ...,
        description="False when no rule fired for the supplied series.",
    )
    disclaimer: str = Field(
        default=DISCLAIMER,
        description="Must always be shown alongside recommendations.",
    )


class TreatmentRecord(BaseModel):
    """A treatment that was actually administered.

    Not produced or read by the analysis code; the frontend keeps these
    next to recommendations so clinicians can compare advice with history.
    """

    id: str
    date: date
    type: str
    notes: str = ""
    outcome: Optional[str] = None

"""
Emotion Series Schemas
======================
Pydantic models for emotion-intensity snapshots and the trend summaries
derived from them. These are the contract between the dashboard frontend
and the backend.

Key design decisions:
- ``EmotionSnapshot.emotions`` is an open mapping. The six canonical
  categories are the only ones the analysis reads, but unknown keys are
  kept so newer capture devices don't break older backends.
- ``EmotionSnapshot`` itself does not range-check intensities; the
  request wrapper ``SnapshotIn`` does, so bad client data is rejected at
  the HTTP boundary and never reaches the aggregation code.
- ``TrendSummary`` is derived on every query and never stored.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Allowed values
# ---------------------------------------------------------------------------

# Canonical order matters: it is the tie-break order for the dominant
# category and the column order for cards and CSV export.
CATEGORIES: tuple[str, ...] = (
    "Anger",
    "Disgust",
    "Fear",
    "Happiness",
    "Sadness",
    "Surprise",
)

NO_DATA = "No data"
NO_SIGNIFICANT_CHANGES = "No significant changes"

Intensity = Annotated[float, Field(ge=0.0, le=100.0)]


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------

class EmotionSnapshot(BaseModel):
    """One dated observation: an intensity per emotion category."""

    date: date
    emotions: dict[str, float] = Field(
        default_factory=dict,
        description="Category name → intensity, nominally 0-100.",
    )


class SnapshotIn(EmotionSnapshot):
    """Snapshot as accepted from a client. Intensities must be within 0-100."""

    emotions: dict[str, Intensity] = Field(
        default_factory=dict,
        description="Category name → intensity. Values outside 0-100 are rejected.",
    )


class SeriesRequest(BaseModel):
    """Payload for endpoints that analyse a caller-supplied series."""

    series: list[SnapshotIn] = Field(
        default_factory=list,
        description="Time-ordered snapshots. An empty list is valid.",
    )


# ---------------------------------------------------------------------------
# Derived
# ---------------------------------------------------------------------------

class CategoryChange(BaseModel):
    """A shift in mean intensity between the leading and trailing windows."""

    category: str
    leading_average: float
    trailing_average: float
    delta: float
    p_value: Optional[float] = Field(
        default=None,
        description="Welch t-test p-value, or null when undefined (tiny or flat windows).",
    )

    @property
    def direction(self) -> str:
        return "increased" if self.delta >= 0 else "decreased"

    def describe(self) -> str:
        return (
            f"{self.category} {self.direction} by {abs(self.delta):.1f} points "
            f"({self.leading_average:.1f} → {self.trailing_average:.1f})"
        )


class TrendSummary(BaseModel):
    """Per-category statistics for one series."""

    averages: dict[str, float]
    dominant: str = Field(..., description=f"Highest-average category, or '{NO_DATA}'.")
    stability_index: int = Field(
        ...,
        ge=1,
        le=10,
        description="Advisory volatility score. 10 = perfectly stable.",
    )
    significant_changes: str
    changes: list[CategoryChange] = Field(default_factory=list)
    snapshot_count: int = 0


class EmotionCard(BaseModel):
    """Display data for one category tile on the dashboard."""

    category: str
    average: float
    emoji: str
    intensity_label: str
    trend_label: str

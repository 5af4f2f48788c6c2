"""
Dashboard Router
================
GET /api/v1/dashboard        — Everything the dashboard renders for a range.
GET /api/v1/dashboard/export — The same range's series as a CSV download.

Returns, in one call:

  series:           one snapshot per day in [start, end]
  cards:            per-category average with emoji and intensity wording
  summary:          TrendSummary (dominant, stability, significant changes)
  recommendations:  engine output for the same series
  days_analyzed:    end - start in whole days

Data currently comes from the synthetic source. The range is guarded here
so the generator never receives a reversed or unbounded span.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from microdash.config import Settings, get_settings
from microdash.models.dashboard import DashboardResponse
from microdash.services.display import build_cards
from microdash.services.export import series_to_csv
from microdash.services.recommendation import get_recommendation_engine
from microdash.services.synthetic import get_synthetic_source
from microdash.services.trends import get_trend_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _require_data_source(settings: Settings) -> None:
    """Raise 503 when no data source is enabled."""
    if not settings.enable_synthetic_source:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"message": "No emotion data source is configured", "code": "data_source_unavailable"},
        )


def _resolve_range(
    start: Optional[date],
    end: Optional[date],
    settings: Settings,
) -> tuple[date, date]:
    """Fill in defaults and validate the requested range.

    Missing ``end`` means today (UTC); missing ``start`` means
    ``default_range_days`` before ``end``. Raises HTTPException 422 for a
    reversed range or one wider than ``max_range_days``.
    """
    end = end or datetime.now(timezone.utc).date()
    start = start or end - timedelta(days=settings.default_range_days)

    if start > end:
        raise HTTPException(
            status_code=422,
            detail={
                "message": f"start ({start}) is after end ({end})",
                "code": "invalid_range",
            },
        )

    span = (end - start).days
    if span > settings.max_range_days:
        raise HTTPException(
            status_code=422,
            detail={
                "message": f"Range of {span} days exceeds the {settings.max_range_days}-day maximum",
                "code": "range_too_large",
                "max_range_days": settings.max_range_days,
            },
        )

    return start, end


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=DashboardResponse,
    status_code=status.HTTP_200_OK,
    summary="Get the emotion dashboard for a date range",
    description=(
        "Returns the daily emotion series, per-category cards, trend summary and "
        "treatment recommendations for [start, end]. Defaults to the last 30 days."
    ),
    responses={
        200: {"description": "Dashboard returned"},
        422: {"description": "Invalid or oversized date range"},
        503: {"description": "No emotion data source configured"},
    },
)
async def get_dashboard(
    start: Optional[date] = Query(default=None, description="First day (inclusive), YYYY-MM-DD"),
    end: Optional[date] = Query(default=None, description="Last day (inclusive), YYYY-MM-DD"),
) -> DashboardResponse:
    """Build the full dashboard payload."""
    settings = get_settings()
    _require_data_source(settings)
    start, end = _resolve_range(start, end, settings)

    series = get_synthetic_source(settings).generate(start, end)

    summary = get_trend_service().summarize(series)
    recommendations = get_recommendation_engine().analyze(series)

    logger.info(
        "Dashboard %s → %s: %d snapshots, %d recommendation(s)",
        start, end, len(series), len(recommendations),
    )

    return DashboardResponse(
        start=start,
        end=end,
        days_analyzed=(end - start).days,
        series=series,
        cards=build_cards(summary.averages),
        summary=summary,
        recommendations=recommendations,
    )


@router.get(
    "/export",
    status_code=status.HTTP_200_OK,
    summary="Export the emotion series as CSV",
    response_class=Response,
    responses={
        200: {"content": {"text/csv": {}}, "description": "CSV file"},
        422: {"description": "Invalid or oversized date range"},
        503: {"description": "No emotion data source configured"},
    },
)
async def export_dashboard(
    start: Optional[date] = Query(default=None, description="First day (inclusive), YYYY-MM-DD"),
    end: Optional[date] = Query(default=None, description="Last day (inclusive), YYYY-MM-DD"),
) -> Response:
    """Download the range's series as CSV."""
    settings = get_settings()
    _require_data_source(settings)
    start, end = _resolve_range(start, end, settings)

    series = get_synthetic_source(settings).generate(start, end)
    filename = f"emotions_{start.isoformat()}_{end.isoformat()}.csv"

    return Response(
        content=series_to_csv(series),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

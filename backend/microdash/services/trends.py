"""
Trend Service
=============
Reduces a time-ordered series of emotion snapshots into per-category
summary statistics for the dashboard cards and insight tiles.

Answers: "Which emotion dominates this period, how volatile was it, and
did anything shift between the start and the end of the range?"

    averages      arithmetic mean per canonical category; a snapshot
                  missing a category contributes 0 but still counts
    dominant      highest average, ties to the first in canonical order
    stability     coefficient of variation per category, mapped to 1-10
    changes       leading vs trailing window means, flagged when the
                  shift reaches the configured threshold (Welch p-value
                  attached for context)

Everything here is a pure function of the input series. Degenerate input
(empty series, single snapshot, all-zero data) gives well-defined output
and never raises.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

import numpy as np
import pandas as pd
from scipy.stats import ttest_ind

from microdash.config import Settings, get_settings
from microdash.models.emotion import (
    CATEGORIES,
    NO_DATA,
    NO_SIGNIFICANT_CHANGES,
    CategoryChange,
    EmotionSnapshot,
    TrendSummary,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_CHANGE_WINDOW_DAYS = 7
DEFAULT_CHANGE_THRESHOLD = 15.0
MAX_STABILITY = 10
MIN_STABILITY = 1


# ---------------------------------------------------------------------------
# Averages
# ---------------------------------------------------------------------------

def compute_average(series: Sequence[EmotionSnapshot], category: str) -> float:
    """Mean intensity of *category* across *series*; 0.0 for an empty series."""
    if not series:
        return 0.0
    total = sum(float(s.emotions.get(category, 0.0)) for s in series)
    return total / len(series)


def compute_all_averages(series: Sequence[EmotionSnapshot]) -> dict[str, float]:
    return {category: compute_average(series, category) for category in CATEGORIES}


def dominant_category(series: Sequence[EmotionSnapshot]) -> str:
    """Category with the highest average, or ``NO_DATA`` for an empty series.

    ``max`` keeps the first maximal element, so ties resolve to canonical order.
    """
    if not series:
        return NO_DATA
    averages = compute_all_averages(series)
    return max(CATEGORIES, key=averages.__getitem__)


# ---------------------------------------------------------------------------
# Volatility and change detection
# ---------------------------------------------------------------------------

def _to_frame(series: Sequence[EmotionSnapshot]) -> pd.DataFrame:
    """One row per snapshot, one column per canonical category, gaps as 0."""
    frame = pd.DataFrame(
        [s.emotions for s in series],
        columns=list(CATEGORIES),
        dtype=float,
    )
    return frame.fillna(0.0)


def stability_index(series: Sequence[EmotionSnapshot]) -> int:
    """Advisory 1-10 stability score; 10 means no variation at all.

    Mean coefficient of variation over categories with a positive mean,
    capped at 1.0 and mapped linearly onto 10..1. Categories that never
    register are ignored rather than counted as perfectly stable.
    """
    if not series:
        return MAX_STABILITY

    frame = _to_frame(series)
    means = frame.mean()
    active = means > 0
    if not active.any():
        return MAX_STABILITY

    cv = (frame.std(ddof=0)[active] / means[active]).mean()
    cv = min(float(cv), 1.0)
    score = int(round(MAX_STABILITY - (MAX_STABILITY - MIN_STABILITY) * cv))
    return max(MIN_STABILITY, min(MAX_STABILITY, score))


def _welch_p_value(leading: pd.Series, trailing: pd.Series) -> Optional[float]:
    # Undefined for single-point windows or when neither window varies
    if len(leading) < 2 or len(trailing) < 2:
        return None
    if np.std(leading) == 0 and np.std(trailing) == 0:
        return None
    _, p = ttest_ind(leading, trailing, equal_var=False)
    p = float(p)
    return p if np.isfinite(p) else None


def detect_changes(
    series: Sequence[EmotionSnapshot],
    window_days: int = DEFAULT_CHANGE_WINDOW_DAYS,
    threshold: float = DEFAULT_CHANGE_THRESHOLD,
) -> list[CategoryChange]:
    """Compare the first and last *window_days* snapshots per category.

    The window is clamped to half the series so the two never overlap.
    Returns changes in canonical category order; ``[]`` for fewer than
    two snapshots.
    """
    n = len(series)
    if n <= 1:
        return []

    window = max(1, min(window_days, n // 2))
    frame = _to_frame(series)
    leading = frame.iloc[:window]
    trailing = frame.iloc[-window:]

    changes: list[CategoryChange] = []
    for category in CATEGORIES:
        leading_avg = float(leading[category].mean())
        trailing_avg = float(trailing[category].mean())
        delta = trailing_avg - leading_avg

        if abs(delta) < threshold:
            continue

        changes.append(CategoryChange(
            category=category,
            leading_average=leading_avg,
            trailing_average=trailing_avg,
            delta=delta,
            p_value=_welch_p_value(leading[category], trailing[category]),
        ))

    logger.debug(
        "Change detection over %d snapshots (window=%d, threshold=%.1f): %d flagged",
        n, window, threshold, len(changes),
    )
    return changes


def describe_changes(changes: Sequence[CategoryChange]) -> str:
    if not changes:
        return NO_SIGNIFICANT_CHANGES
    return "; ".join(change.describe() for change in changes)


def significant_change_summary(
    series: Sequence[EmotionSnapshot],
    window_days: int = DEFAULT_CHANGE_WINDOW_DAYS,
    threshold: float = DEFAULT_CHANGE_THRESHOLD,
) -> str:
    """Human-readable description of significant shifts across *series*."""
    return describe_changes(detect_changes(series, window_days, threshold))


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class TrendService:
    """Builds TrendSummary values using the configured change-detection knobs."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def summarize(self, series: Sequence[EmotionSnapshot]) -> TrendSummary:
        changes = detect_changes(
            series,
            window_days=self._settings.change_window_days,
            threshold=self._settings.change_threshold,
        )
        summary = TrendSummary(
            averages=compute_all_averages(series),
            dominant=dominant_category(series),
            stability_index=stability_index(series),
            significant_changes=describe_changes(changes),
            changes=changes,
            snapshot_count=len(series),
        )
        logger.info(
            "Summarised %d snapshots: dominant=%s stability=%d changes=%d",
            summary.snapshot_count, summary.dominant,
            summary.stability_index, len(changes),
        )
        return summary


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_default_service: TrendService | None = None


def get_trend_service() -> TrendService:
    global _default_service
    if _default_service is None:
        _default_service = TrendService()
    return _default_service

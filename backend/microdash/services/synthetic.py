"""
Synthetic Emotion Source
========================
Generates demo emotion series for the dashboard until a real capture
feed is connected: one snapshot per calendar day, each canonical
category drawn uniformly from [0, 100).

Seeded sources are reproducible, which the tests and demo screenshots
rely on. Unseeded sources draw fresh entropy per instance.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

import numpy as np

from microdash.config import Settings, get_settings
from microdash.models.emotion import CATEGORIES, EmotionSnapshot

logger = logging.getLogger(__name__)

MAX_INTENSITY = 100.0


class SyntheticEmotionSource:
    """Random-uniform emotion series over an inclusive date range."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._seed = seed

    def generate(self, start: date, end: date) -> list[EmotionSnapshot]:
        """Return one snapshot per day from *start* to *end* inclusive.

        A reversed range yields an empty series rather than an error.
        """
        if start > end:
            return []

        num_days = (end - start).days + 1
        rng = np.random.default_rng(self._seed)
        values = rng.uniform(0.0, MAX_INTENSITY, size=(num_days, len(CATEGORIES)))

        series = [
            EmotionSnapshot(
                date=start + timedelta(days=offset),
                emotions={c: float(v) for c, v in zip(CATEGORIES, row)},
            )
            for offset, row in enumerate(values)
        ]
        logger.debug("Generated %d synthetic snapshots (%s → %s)", num_days, start, end)
        return series


def get_synthetic_source(settings: Settings | None = None) -> SyntheticEmotionSource:
    settings = settings or get_settings()
    return SyntheticEmotionSource(seed=settings.synthetic_seed)

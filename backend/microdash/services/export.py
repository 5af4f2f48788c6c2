"""
Series Export
=============
Serialises an emotion series to CSV for the dashboard's "Exportar Datos"
button. Columns are ``date`` followed by the canonical categories; a
category missing from a snapshot is written as 0, matching how the
averages treat it.
"""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from microdash.models.emotion import CATEGORIES, EmotionSnapshot

EXPORT_COLUMNS: list[str] = ["date", *CATEGORIES]


def series_to_frame(series: Sequence[EmotionSnapshot]) -> pd.DataFrame:
    rows = [
        {"date": s.date.isoformat(), **{c: s.emotions.get(c, 0.0) for c in CATEGORIES}}
        for s in series
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def series_to_csv(series: Sequence[EmotionSnapshot]) -> str:
    """CSV text with a header row; header only for an empty series."""
    return series_to_frame(series).to_csv(index=False, float_format="%.2f")

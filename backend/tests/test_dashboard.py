"""
Tests for GET /api/v1/dashboard and GET /api/v1/dashboard/export
================================================================
Covers:
- Happy path: explicit range → series per day, six cards, summary, days_analyzed
- Seeded source → identical payloads across calls
- Cards, summary and recommendations agree with the returned series
- Default range: last 30 days ending today (UTC); start-only / end-only defaults
- Range guards: reversed → 422 invalid_range; oversized → 422 range_too_large
- Malformed date query → 422
- Data source disabled → 503 data_source_unavailable
- Export: CSV content type, attachment filename, header + one row per day

Run: pytest tests/test_dashboard.py -v
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from microdash.config import Settings
from microdash.models.emotion import CATEGORIES, EmotionSnapshot
from microdash.services.recommendation import RecommendationEngine
from microdash.services.trends import compute_all_averages, dominant_category

_URL = "/api/v1/dashboard"
_EXPORT_URL = "/api/v1/dashboard/export"
_RANGE = {"start": "2024-01-01", "end": "2024-01-31"}

_SEEDED = Settings(synthetic_seed=42)


def _get(url: str, params: dict | None = None, settings: Settings = _SEEDED):
    with patch("microdash.routers.dashboard.get_settings", return_value=settings):
        from microdash.main import app
        client = TestClient(app)
        return client.get(url, params=params or {})


class TestHappyPath:

    def test_explicit_range(self):
        resp = _get(_URL, _RANGE)

        assert resp.status_code == 200
        data = resp.json()
        assert data["start"] == "2024-01-01"
        assert data["end"] == "2024-01-31"
        assert data["days_analyzed"] == 30
        assert len(data["series"]) == 31
        assert data["summary"]["snapshot_count"] == 31
        assert [c["category"] for c in data["cards"]] == list(CATEGORIES)
        assert data["disclaimer"]

    def test_seeded_source_is_reproducible(self):
        first = _get(_URL, _RANGE).json()
        second = _get(_URL, _RANGE).json()
        assert first["series"] == second["series"]
        assert first["summary"] == second["summary"]

    def test_single_day_range(self):
        data = _get(_URL, {"start": "2024-01-01", "end": "2024-01-01"}).json()
        assert data["days_analyzed"] == 0
        assert len(data["series"]) == 1
        assert data["summary"]["significant_changes"] == "No significant changes"


class TestConsistency:

    def _series(self, data: dict) -> list[EmotionSnapshot]:
        return [EmotionSnapshot(**row) for row in data["series"]]

    def test_cards_match_series_averages(self):
        data = _get(_URL, _RANGE).json()
        averages = compute_all_averages(self._series(data))
        for card in data["cards"]:
            assert card["average"] == pytest.approx(averages[card["category"]])

    def test_summary_dominant_matches_series(self):
        data = _get(_URL, _RANGE).json()
        assert data["summary"]["dominant"] == dominant_category(self._series(data))

    def test_recommendations_match_engine(self):
        data = _get(_URL, _RANGE).json()
        expected = RecommendationEngine().analyze(self._series(data))
        assert [(r["type"], r["based_on"]) for r in data["recommendations"]] == [
            (r.type, r.based_on) for r in expected
        ]


class TestDefaultRange:

    def test_defaults_to_last_thirty_days(self):
        data = _get(_URL).json()
        today = datetime.now(timezone.utc).date()

        assert data["end"] == today.isoformat()
        assert data["days_analyzed"] == 30
        assert len(data["series"]) == 31

    def test_end_only_defaults_start(self):
        data = _get(_URL, {"end": "2024-06-30"}).json()
        assert data["start"] == (date(2024, 6, 30) - timedelta(days=30)).isoformat()

    def test_configured_default_span(self):
        data = _get(_URL, {"end": "2024-06-30"}, settings=Settings(default_range_days=7)).json()
        assert data["days_analyzed"] == 7


class TestRangeGuards:

    def test_reversed_range(self):
        resp = _get(_URL, {"start": "2024-02-01", "end": "2024-01-01"})
        assert resp.status_code == 422
        assert resp.json()["detail"]["code"] == "invalid_range"

    def test_range_too_large(self):
        resp = _get(_URL, {"start": "2020-01-01", "end": "2024-01-01"})
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail["code"] == "range_too_large"
        assert detail["max_range_days"] == 366

    def test_range_at_maximum_allowed(self):
        resp = _get(_URL, {"start": "2023-01-01", "end": "2023-12-31"})
        assert resp.status_code == 200

    def test_malformed_date(self):
        resp = _get(_URL, {"start": "01/01/2024"})
        assert resp.status_code == 422


class TestDataSourceDisabled:

    @pytest.mark.parametrize("url", [_URL, _EXPORT_URL])
    def test_returns_503(self, url: str):
        resp = _get(url, _RANGE, settings=Settings(enable_synthetic_source=False))
        assert resp.status_code == 503
        assert resp.json()["detail"]["code"] == "data_source_unavailable"


class TestExport:

    def test_csv_download(self):
        resp = _get(_EXPORT_URL, _RANGE)

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert resp.headers["content-disposition"] == (
            'attachment; filename="emotions_2024-01-01_2024-01-31.csv"'
        )
        lines = resp.text.splitlines()
        assert lines[0] == "date,Anger,Disgust,Fear,Happiness,Sadness,Surprise"
        assert len(lines) == 32
        assert lines[1].startswith("2024-01-01,")

    def test_export_matches_dashboard_series(self):
        series = _get(_URL, _RANGE).json()["series"]
        lines = _get(_EXPORT_URL, _RANGE).text.splitlines()
        first = lines[1].split(",")
        assert float(first[1]) == pytest.approx(series[0]["emotions"]["Anger"], abs=0.01)

    def test_export_reversed_range(self):
        resp = _get(_EXPORT_URL, {"start": "2024-02-01", "end": "2024-01-01"})
        assert resp.status_code == 422

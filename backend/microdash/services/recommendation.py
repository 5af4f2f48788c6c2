"""
Recommendation Service
======================
Turns an emotion series into treatment recommendations using fixed
threshold rules over category averages.

Decision logic:
    1. Average each canonical category over the full series (missing
       categories count as 0, an empty series averages to 0 everywhere).
    2. Evaluate every rule in RULES order. Rules are independent; a series
       can trigger none, some or all of them.
    3. Each firing rule emits one Recommendation with a fresh id and the
       evaluation timestamp.

The engine reads the raw series, not a TrendSummary, so it can be called
without building the rest of the dashboard. Id generation and the clock
are injected so tests can pin both.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from microdash.models.emotion import EmotionSnapshot
from microdash.models.recommendation import Recommendation
from microdash.services.trends import compute_all_averages

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]
Clock = Callable[[], datetime]


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Rule:
    name: str
    type: str
    priority: str
    description: str
    based_on: tuple[str, ...]
    condition: Callable[[Mapping[str, float]], bool]

    def applies(self, averages: Mapping[str, float]) -> bool:
        return self.condition(averages)


# All comparisons are strict: an average sitting exactly on a threshold
# does not fire.
RULES: tuple[Rule, ...] = (
    Rule(
        name="anger_management",
        type="Therapy",
        priority="High",
        description="Consider anger management therapy sessions",
        based_on=("Anger",),
        condition=lambda avg: avg["Anger"] > 70,
    ),
    Rule(
        name="anxiety_activity",
        type="Activity",
        priority="Medium",
        description="Daily meditation and breathing exercises recommended",
        based_on=("Fear",),
        condition=lambda avg: avg["Fear"] > 60,
    ),
    Rule(
        name="depression_risk",
        type="Therapy",
        priority="High",
        description="Schedule consultation with mental health professional",
        based_on=("Sadness", "Happiness"),
        condition=lambda avg: avg["Sadness"] > 65 and avg["Happiness"] < 30,
    ),
)


def _new_id() -> str:
    return str(uuid.uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class RecommendationEngine:
    """Evaluates RULES against a series and emits Recommendations."""

    def __init__(
        self,
        id_factory: IdFactory | None = None,
        clock: Clock | None = None,
        rules: Sequence[Rule] = RULES,
    ) -> None:
        self._id_factory = id_factory or _new_id
        self._clock = clock or _utc_now
        self._rules = tuple(rules)

    def analyze(self, series: Sequence[EmotionSnapshot]) -> list[Recommendation]:
        """Return recommendations for *series* in rule order; ``[]`` if none fire."""
        averages = compute_all_averages(series)
        now = self._clock()

        recommendations: list[Recommendation] = []
        for rule in self._rules:
            if not rule.applies(averages):
                continue
            logger.debug("Rule '%s' fired on %s", rule.name, list(rule.based_on))
            recommendations.append(Recommendation(
                id=self._id_factory(),
                type=rule.type,
                description=rule.description,
                priority=rule.priority,
                based_on=list(rule.based_on),
                date_created=now,
            ))

        logger.info(
            "Analysed %d snapshots: %d recommendation(s)",
            len(series), len(recommendations),
        )
        return recommendations


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_default_engine: RecommendationEngine | None = None


def get_recommendation_engine() -> RecommendationEngine:
    global _default_engine
    if _default_engine is None:
        _default_engine = RecommendationEngine()
    return _default_engine

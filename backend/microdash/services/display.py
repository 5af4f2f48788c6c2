"""
Display Lookups
===============
Read-only mappings from emotion category and intensity to the labels the
dashboard shows on each card. Labels are the literal Spanish strings the
frontend was built with.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from microdash.models.emotion import CATEGORIES, EmotionCard

EMOTION_EMOJI: Mapping[str, str] = MappingProxyType({
    "Anger": "😠",
    "Disgust": "🤢",
    "Fear": "😨",
    "Happiness": "😊",
    "Sadness": "😢",
    "Surprise": "😲",
})
DEFAULT_EMOJI = "😐"

NEGATIVE_CATEGORIES = frozenset({"Anger", "Disgust", "Fear", "Sadness"})

# (lower bound, label), checked top-down; the last bound catches everything
_NEGATIVE_BANDS: tuple[tuple[float, str], ...] = (
    (70, "Intensidad severa"),
    (50, "Intensidad moderada"),
    (30, "Intensidad leve"),
    (float("-inf"), "Intensidad baja"),
)
_POSITIVE_BANDS: tuple[tuple[float, str], ...] = (
    (70, "Altamente positivo"),
    (50, "Moderadamente positivo"),
    (30, "Ligeramente positivo"),
    (float("-inf"), "Neutral"),
)

TREND_RISING = "Aumentando"
TREND_STABLE = "Estable"


def emotion_emoji(category: str) -> str:
    return EMOTION_EMOJI.get(category, DEFAULT_EMOJI)


def intensity_label(category: str, value: float) -> str:
    """Severity wording for negative emotions, positivity wording otherwise."""
    bands = _NEGATIVE_BANDS if category in NEGATIVE_CATEGORIES else _POSITIVE_BANDS
    for lower, label in bands:
        if value >= lower:
            return label
    return bands[-1][1]


def trend_label(value: float) -> str:
    return TREND_RISING if value > 50 else TREND_STABLE


def build_cards(averages: Mapping[str, float]) -> list[EmotionCard]:
    """One card per canonical category, in canonical order."""
    cards = []
    for category in CATEGORIES:
        average = float(averages.get(category, 0.0))
        cards.append(EmotionCard(
            category=category,
            average=average,
            emoji=emotion_emoji(category),
            intensity_label=intensity_label(category, average),
            trend_label=trend_label(average),
        ))
    return cards

"""Lightweight color harmony helpers for deterministic outfit ranking."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

logger = logging.getLogger(__name__)

BASE_SCORE = 50
COMPLEMENTARY_BONUS = 20
MATCHING_BONUS = 15
NEUTRAL_BONUS = 10
CLASH_PENALTY = 5

COMPLEMENTARY_PAIRS: Tuple[Tuple[str, str], ...] = (
    ("red", "green"),
    ("blue", "orange"),
    ("yellow", "purple"),
    ("black", "white"),
    ("brown", "beige"),
    ("navy", "tan"),
    ("pink", "mint"),
    ("coral", "teal"),
    ("lavender", "yellow"),
    ("red", "navy"),
    ("blue", "brown"),
    ("green", "burgundy"),
    ("orange", "blue"),
    ("purple", "yellow"),
    ("pink", "green"),
    ("red", "white"),
    ("black", "red"),
    ("white", "navy"),
    ("beige", "brown"),
    ("gray", "pink"),
    ("navy", "white"),
)

NEUTRAL_COLORS = frozenset({"black", "white", "gray", "grey", "beige", "tan", "navy", "brown"})


@dataclass(frozen=True)
class HarmonyResult:
    """Represents the outcome of a harmony evaluation."""

    score: int
    raw_score: int
    pair_rules: List[Tuple[str, str, str]]


def _normalise_colors(colors: Iterable[str | None]) -> List[str]:
    return [color.strip().lower() for color in colors if color and color.strip()]


def complementary(color1: str | None, color2: str | None) -> bool:
    """Return True when the colors form a complementary pair.

    Pairs match exactly in either direction, or by substring containment so
    compound names such as ``"dark red"`` still pair with ``"green"``.
    """

    if not color1 or not color2:
        return False
    c1, c2 = color1.strip().lower(), color2.strip().lower()
    if not c1 or not c2:
        return False
    for first, second in COMPLEMENTARY_PAIRS:
        if (c1 == first and c2 == second) or (c1 == second and c2 == first):
            return True
        if (first in c1 and second in c2) or (second in c1 and first in c2):
            return True
    return False


def is_neutral(color: str | None) -> bool:
    return bool(color) and color.strip().lower() in NEUTRAL_COLORS


def _pair_rule(c1: str, c2: str) -> str:
    if complementary(c1, c2):
        return "complementary"
    if c1 == c2:
        return "matching"
    if is_neutral(c1) or is_neutral(c2):
        return "neutral"
    return "clash"


_RULE_DELTAS = {
    "complementary": COMPLEMENTARY_BONUS,
    "matching": MATCHING_BONUS,
    "neutral": NEUTRAL_BONUS,
    "clash": -CLASH_PENALTY,
}


def evaluate_harmony(colors: Sequence[str | None]) -> HarmonyResult:
    """Score every unordered pair of colors and clamp the total to [0, 100]."""

    normalised = _normalise_colors(colors)
    raw_score = BASE_SCORE
    pair_rules: List[Tuple[str, str, str]] = []
    for i in range(len(normalised)):
        for j in range(i + 1, len(normalised)):
            rule = _pair_rule(normalised[i], normalised[j])
            raw_score += _RULE_DELTAS[rule]
            pair_rules.append((normalised[i], normalised[j], rule))
    score = max(0, min(100, raw_score))
    logger.debug("harmony for %s -> raw=%s clamped=%s", normalised, raw_score, score)
    return HarmonyResult(score=score, raw_score=raw_score, pair_rules=pair_rules)


def color_harmony_score(colors: Sequence[str | None]) -> int:
    """Return the clamped 0-100 harmony score for a list of colors."""

    return evaluate_harmony(colors).score


__all__ = [
    "COMPLEMENTARY_PAIRS",
    "NEUTRAL_COLORS",
    "HarmonyResult",
    "complementary",
    "is_neutral",
    "evaluate_harmony",
    "color_harmony_score",
]

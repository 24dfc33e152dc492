"""Athlete star rating engine.

Turns five category sub-scores into a composite score, a half-star rating
and a tier label:

    clamp each sub-score to [0, 100]
    → weighted sum (weights in :mod:`recruit_api.core.rating_config`)
    → round to cents                       (composite score, 0-100)
    → descending threshold lookup          (star rating, 1.0-5.0)
    → label lookup                         (tier)

Every function here is total over float input.  Out-of-range sub-scores
are corrected by clamping, never rejected.  Clamping happens per category
before weighting, and rounding happens once, on the final composite.  The
per-category contributions in a breakdown are therefore unrounded and may
differ from the composite by a cent-level epsilon.

NaN passes through :func:`clamp` and :func:`calculate_composite_score`
unchanged and falls through every threshold in
:func:`calculate_star_rating`, landing on the 1.0 floor.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict

from recruit_api.core.rating_config import (
    CATEGORIES,
    DEFAULT_TIER_LABEL,
    FLOOR_STAR_RATING,
    RATING_WEIGHTS,
    SCORE_MAX,
    SCORE_MIN,
    STAR_THRESHOLDS,
    TIER_LABELS,
)


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RatingInput:
    """The five raw sub-scores.  Any float is accepted; see :func:`clamp`."""

    performance: float
    physical: float
    academic: float
    social: float
    evaluation: float

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in CATEGORIES}


@dataclass(frozen=True)
class ComponentScore:
    score: float         # clamped sub-score
    weight: float        # percentage, 0-100
    contribution: float  # score × weight / 100, unrounded

    def to_dict(self) -> Dict[str, float]:
        return {
            "score": self.score,
            "weight": self.weight,
            "contribution": self.contribution,
        }


@dataclass(frozen=True)
class RatingBreakdown:
    """Full rating result as shown on the athlete's breakdown screen.

    ``to_dict()`` produces the wire shape consumed by the mobile and web
    clients; its keys must not change.
    """

    composite_score: float
    star_rating: float
    components: Dict[str, ComponentScore] = field(default_factory=dict)
    tier: str = DEFAULT_TIER_LABEL

    def to_dict(self) -> dict:
        return {
            "compositeScore": self.composite_score,
            "starRating": self.star_rating,
            "components": {
                name: component.to_dict()
                for name, component in self.components.items()
            },
            "tier": self.tier,
        }


# ---------------------------------------------------------------------------
# Pure functions
# ---------------------------------------------------------------------------


def clamp(value: float) -> float:
    """Constrain *value* to [0, 100].  NaN is returned unchanged."""
    if math.isnan(value):
        return value
    if value < SCORE_MIN:
        return SCORE_MIN
    if value > SCORE_MAX:
        return SCORE_MAX
    return value


def _clamp_all(scores: RatingInput) -> Dict[str, float]:
    return {name: clamp(value) for name, value in scores.as_dict().items()}


def _weighted_sum(clamped: Dict[str, float]) -> float:
    weights = RATING_WEIGHTS.as_dict()
    return sum(clamped[name] * weights[name] for name in CATEGORIES)


def _round_cents(value: float) -> float:
    # Round half up on the cent value.  Python's round() is half-to-even.
    if math.isnan(value):
        return value
    return math.floor(value * 100 + 0.5) / 100


def calculate_composite_score(scores: RatingInput) -> float:
    """
    Weighted 0-100 composite of the five sub-scores, rounded to 2 decimals.

    Example:
        85, 90, 75, 80, 70  →  34 + 18 + 11.25 + 12 + 7  =  82.25
    """
    return _round_cents(_weighted_sum(_clamp_all(scores)))


def calculate_star_rating(composite_score: float) -> float:
    """Map a composite score to one of the nine half-star buckets."""
    for minimum, stars in STAR_THRESHOLDS:
        if composite_score >= minimum:
            return stars
    return FLOOR_STAR_RATING


def get_tier_label(star_rating: float) -> str:
    return TIER_LABELS.get(star_rating, DEFAULT_TIER_LABEL)


def get_rating_breakdown(scores: RatingInput) -> RatingBreakdown:
    """
    Compute the full breakdown for one athlete.

    Each sub-score is clamped once; the clamped value is used both for the
    displayed ``score`` and for the contribution and composite math, so the
    displayed components always add up to the displayed composite (to
    within the final rounding).
    """
    clamped = _clamp_all(scores)
    composite = _round_cents(_weighted_sum(clamped))
    stars = calculate_star_rating(composite)

    weights = RATING_WEIGHTS.as_dict()
    percentages = RATING_WEIGHTS.as_percentages()
    components = {
        name: ComponentScore(
            score=clamped[name],
            weight=percentages[name],
            contribution=clamped[name] * weights[name],
        )
        for name in CATEGORIES
    }

    return RatingBreakdown(
        composite_score=composite,
        star_rating=stars,
        components=components,
        tier=get_tier_label(stars),
    )

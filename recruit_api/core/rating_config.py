"""Rating constants: every number the star rating depends on, in one place.

:class:`RatingWeights` is a frozen dataclass carrying the five category
weights.  The weights are fractions that must sum to exactly 1.0 so the
composite score stays on the same 0-100 scale as the sub-scores.

The star thresholds are checked in descending order; the first threshold
the composite score reaches wins.  Anything below the last threshold is
:data:`FLOOR_STAR_RATING`.

Typical usage::

    from recruit_api.core.rating_config import RATING_WEIGHTS

    RATING_WEIGHTS.performance   # 0.40
    RATING_WEIGHTS.as_percentages()["academic"]   # 15.0
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Final, Tuple

#: Category names in display order.  Also the keys of the breakdown's
#: ``components`` mapping on the wire.
CATEGORIES: Final[Tuple[str, ...]] = (
    "performance",
    "physical",
    "academic",
    "social",
    "evaluation",
)

SCORE_MIN: Final[float] = 0.0
SCORE_MAX: Final[float] = 100.0


@dataclass(frozen=True)
class RatingWeights:
    """Immutable weight table for the composite score.

    Attributes:
        performance: Game and stat performance.  Largest single driver.
        physical: Measurables (speed, strength, size).
        academic: GPA and test scores.
        social: Social reach, used for NIL valuation.
        evaluation: Coach and scout evaluations.
    """

    performance: float = 0.40
    physical: float = 0.20
    academic: float = 0.15
    social: float = 0.15
    evaluation: float = 0.10

    def __post_init__(self) -> None:
        total = sum(getattr(self, f.name) for f in fields(self))
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Rating weights must sum to 1.0, got {total}")

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in CATEGORIES}

    def as_percentages(self) -> Dict[str, float]:
        """Weights on the 0-100 scale shown to clients (40, 20, 15, 15, 10)."""
        return {name: weight * 100 for name, weight in self.as_dict().items()}


RATING_WEIGHTS: Final[RatingWeights] = RatingWeights()

#: (minimum composite score, star rating), highest first.  Lower bounds
#: are inclusive: a composite of exactly 90.0 is five stars.
STAR_THRESHOLDS: Final[Tuple[Tuple[float, float], ...]] = (
    (90.0, 5.0),
    (80.0, 4.5),
    (70.0, 4.0),
    (60.0, 3.5),
    (50.0, 3.0),
    (40.0, 2.5),
    (30.0, 2.0),
    (20.0, 1.5),
)

FLOOR_STAR_RATING: Final[float] = 1.0

#: Every value ``calculate_star_rating`` can return.
CANONICAL_STAR_RATINGS: Final[Tuple[float, ...]] = (
    1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0, 4.5, 5.0,
)

TIER_LABELS: Final[Dict[float, str]] = {
    5.0: "Elite NIL Prospect",
    4.5: "Power 5 Ready",
    4.0: "D1 Potential",
    3.5: "High D1/Mid-Major",
    3.0: "Solid College Athlete",
    2.5: "D2/D3 Prospect",
    2.0: "Developmental",
    1.5: "Emerging Talent",
}

# 1.0 has no entry of its own; it shares the fallback label.
DEFAULT_TIER_LABEL: Final[str] = "Early Stage"

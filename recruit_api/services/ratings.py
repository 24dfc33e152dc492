"""
Star rating orchestration.

Bridges the pure engine in ``recruit_api.core.rating_engine`` and the athlete
store.  ``update_athlete_rating`` is the only code path that writes an
athlete's ``star_rating``; every sub-score write goes through
``update_sub_scores``, which recomputes synchronously before returning so a
client reading right after a write never sees a stale rating.

Sub-scores and the rating they produce are written by one save.
Read-modify-write is still not atomic across requests: concurrent updates
to the same athlete resolve last-write-wins; ``recalculate_all_ratings``
repairs any drift.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from recruit_api.core.athlete_store import (
    STAR_RATING_FIELD,
    SUB_SCORE_FIELDS,
    AthleteRepository,
)
from recruit_api.core.rating_engine import (
    RatingBreakdown,
    RatingInput,
    calculate_composite_score,
    calculate_star_rating,
    get_rating_breakdown,
)

logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    """Raised when the referenced athlete record does not exist."""

    def __init__(self, athlete_id: str):
        super().__init__(f"Athlete not found: {athlete_id}")
        self.athlete_id = athlete_id


def rating_input_for(athlete: Any) -> RatingInput:
    """Read the five stored sub-scores off an athlete record."""
    values = {}
    for category, attr in SUB_SCORE_FIELDS.items():
        raw = getattr(athlete, attr)
        # NUMERIC columns come back as Decimal; unset columns as None
        values[category] = float(raw) if raw is not None else 0.0
    return RatingInput(**values)


def _load(repo: AthleteRepository, athlete_id: str) -> Any:
    athlete = repo.find_by_id(athlete_id)
    if athlete is None:
        logger.warning("Athlete %s not found", athlete_id)
        raise NotFoundError(athlete_id)
    return athlete


def _apply_rating(athlete: Any) -> float:
    composite = calculate_composite_score(rating_input_for(athlete))
    stars = calculate_star_rating(composite)
    previous = getattr(athlete, STAR_RATING_FIELD, None)
    setattr(athlete, STAR_RATING_FIELD, stars)
    logger.info(
        "Rating for athlete %s: composite %.2f, stars %s -> %s",
        athlete.id, composite, previous, stars,
    )
    return stars


def update_athlete_rating(
    repo: AthleteRepository,
    athlete_id: str,
    athlete: Optional[Any] = None,
) -> Any:
    """
    Recompute and persist the star rating from the stored sub-scores.

    Pass *athlete* when the caller already holds the record with unsaved
    changes (new profile, edited sub-scores); those changes and the rating
    are then written by a single save.  Otherwise the record is loaded by
    *athlete_id*.

    Raises NotFoundError if the athlete does not exist.  Storage errors
    propagate without retry.
    """
    if athlete is None:
        athlete = _load(repo, athlete_id)
    _apply_rating(athlete)
    return repo.save(athlete)


def update_sub_scores(
    repo: AthleteRepository,
    athlete_id: str,
    scores: Mapping[str, float],
) -> Any:
    """
    Write any subset of the five sub-scores, then recompute the rating.

    *scores* is keyed by category name (``"performance"``, ...).  Unknown
    keys are a caller bug and raise KeyError before anything is written.
    """
    unknown = set(scores) - set(SUB_SCORE_FIELDS)
    if unknown:
        raise KeyError(f"Unknown rating categories: {sorted(unknown)}")

    athlete = _load(repo, athlete_id)
    for category, value in scores.items():
        setattr(athlete, SUB_SCORE_FIELDS[category], value)

    athlete = update_athlete_rating(repo, athlete_id, athlete)
    logger.info(
        "Sub-scores updated for athlete %s: %s", athlete_id, sorted(scores)
    )
    return athlete


def get_athlete_breakdown(athlete: Any) -> RatingBreakdown:
    """Breakdown for an already-loaded athlete (no writes)."""
    return get_rating_breakdown(rating_input_for(athlete))


def is_rating_stale(athlete: Any) -> bool:
    """True if the stored star rating differs from what the sub-scores give."""
    stored = getattr(athlete, STAR_RATING_FIELD, None)
    if stored is None:
        return True
    expected = calculate_star_rating(
        calculate_composite_score(rating_input_for(athlete))
    )
    return float(stored) != expected


def recalculate_all_ratings(repo: AthleteRepository) -> Dict[str, int]:
    """
    Consistency sweep: recompute every athlete and save only the ones whose
    stored star rating disagrees with the engine.
    """
    checked = 0
    changed = 0
    for athlete in repo.iter_all():
        checked += 1
        if not is_rating_stale(athlete):
            continue
        _apply_rating(athlete)
        repo.save(athlete)
        changed += 1

    logger.info("Rating sweep: %d athletes checked, %d changed", checked, changed)
    return {"athletes_checked": checked, "ratings_changed": changed}

"""
Athlete profile lifecycle: creation and visibility.

Owners may set their five sub-scores only when the profile is created;
after that only an administrator changes them (see services.ratings).
The star rating is never taken from input.
"""

import logging
from typing import Any, Mapping, Optional

from sqlalchemy.exc import IntegrityError

from recruit_api.core.athlete_store import SUB_SCORE_FIELDS, AthleteRepository
from recruit_api.models import Athlete, new_athlete_id
from recruit_api.services.ratings import update_athlete_rating

logger = logging.getLogger(__name__)

# Profile columns a user may set; rating fields are deliberately absent
PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "primary_sport",
    "positions",
    "hometown",
    "high_school",
    "graduation_year",
    "bio",
    "is_public",
)


class DuplicateProfileError(ValueError):
    """The user already owns an athlete profile."""


def create_athlete(
    repo: AthleteRepository,
    user_id: str,
    profile: Mapping[str, Any],
    scores: Optional[Mapping[str, float]] = None,
) -> Athlete:
    """
    Create *user_id*'s athlete profile and compute its initial star rating.

    Keys of *profile* outside PROFILE_FIELDS are dropped.  *scores* is keyed
    by category name; missing categories default to 0.  The profile and its
    rating are inserted by one save.  Raises DuplicateProfileError if the
    user already owns a profile, including when a concurrent request wins
    the insert.
    """
    if repo.find_by_owner(user_id) is not None:
        raise DuplicateProfileError("User already has an athlete profile")

    fields = {k: v for k, v in profile.items() if k in PROFILE_FIELDS and v is not None}
    athlete = Athlete(id=new_athlete_id(), user_id=user_id, **fields)
    for category, attr in SUB_SCORE_FIELDS.items():
        value = (scores or {}).get(category)
        setattr(athlete, attr, value if value is not None else 0.0)

    try:
        athlete = update_athlete_rating(repo, athlete.id, athlete)
    except IntegrityError as exc:
        # Another request created a profile for this user after the check above
        logger.warning("Duplicate athlete profile insert for %s: %s", user_id, exc)
        raise DuplicateProfileError("User already has an athlete profile") from exc

    logger.info("Athlete profile %s created for %s", athlete.id, user_id)
    return athlete


def can_view(athlete: Any, user: Optional[str], is_admin: bool) -> bool:
    """Public profiles are visible to anyone; private ones to owner and admins."""
    if athlete.is_public:
        return True
    if is_admin:
        return True
    return user is not None and athlete.user_id == user

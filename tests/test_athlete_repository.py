"""Tests for the SQLAlchemy repository and write paths on in-memory SQLite."""

import pytest
from sqlalchemy.exc import OperationalError

from recruit_api.models import Athlete
from recruit_api.services.athlete_repository import SqlAlchemyAthleteRepository
from recruit_api.services.athletes import DuplicateProfileError, create_athlete
from recruit_api.services.ratings import is_rating_stale, update_sub_scores

PROFILE = {"first_name": "John", "last_name": "Doe", "primary_sport": "Football"}
ALL_HUNDREDS = {"performance": 100, "physical": 100, "academic": 100, "social": 100, "evaluation": 100}
ALL_ZEROS = {"performance": 0, "physical": 0, "academic": 0, "social": 0, "evaluation": 0}


class FailingCommitRepository(SqlAlchemyAthleteRepository):
    """Fails the *fail_on_save*-th save after its write reached the database."""

    def __init__(self, db, fail_on_save):
        super().__init__(db)
        self.fail_on_save = fail_on_save
        self.saves = 0

    def save(self, athlete):
        self.saves += 1
        if self.saves == self.fail_on_save:
            self.db.add(athlete)
            self.db.flush()
            self.db.rollback()
            raise OperationalError("COMMIT", {}, Exception("connection lost"))
        return super().save(athlete)


class UnseenOwnerRepository(SqlAlchemyAthleteRepository):
    """Never sees an existing profile, as when two creates race."""

    def find_by_owner(self, user_id):
        return None


def _stored(session_factory):
    db = session_factory()
    try:
        return db.query(Athlete).all()
    finally:
        db.close()


def _seed(session_factory, user_id="user2", scores=ALL_HUNDREDS):
    db = session_factory()
    try:
        return create_athlete(SqlAlchemyAthleteRepository(db), user_id, PROFILE, scores).id
    finally:
        db.close()


# ---------------------------------------------------------------------------
# Basic persistence
# ---------------------------------------------------------------------------

def test_find_by_id_and_owner(session_factory):
    athlete_id = _seed(session_factory)
    db = session_factory()
    repo = SqlAlchemyAthleteRepository(db)
    try:
        assert repo.find_by_id(athlete_id).user_id == "user2"
        assert repo.find_by_owner("user2").id == athlete_id
        assert repo.find_by_id("ghost") is None
        assert repo.find_by_owner("user9") is None
    finally:
        db.close()


def test_new_row_defaults_to_floor_rating(session_factory):
    db = session_factory()
    try:
        db.add(Athlete(user_id="user5", first_name="Ana", last_name="Ruiz", primary_sport="Soccer"))
        db.commit()
    finally:
        db.close()

    (athlete,) = _stored(session_factory)
    assert athlete.star_rating == 1.0
    assert athlete.performance_score == 0.0
    assert not is_rating_stale(athlete)


# ---------------------------------------------------------------------------
# Failed writes leave no half-committed rows
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("fail_on_save", [1, 2])
def test_failed_create_leaves_no_inconsistent_row(session_factory, fail_on_save):
    db = session_factory()
    repo = FailingCommitRepository(db, fail_on_save)
    try:
        try:
            create_athlete(repo, "user2", PROFILE, ALL_HUNDREDS)
            failed = False
        except OperationalError:
            failed = True
    finally:
        db.close()

    stored = _stored(session_factory)
    if failed:
        assert stored == []
    for athlete in stored:
        assert athlete.star_rating == 5.0
        assert not is_rating_stale(athlete)


@pytest.mark.parametrize("fail_on_save", [1, 2])
def test_failed_update_keeps_scores_and_rating_together(session_factory, fail_on_save):
    athlete_id = _seed(session_factory)

    db = session_factory()
    repo = FailingCommitRepository(db, fail_on_save)
    try:
        try:
            update_sub_scores(repo, athlete_id, ALL_ZEROS)
            failed = False
        except OperationalError:
            failed = True
    finally:
        db.close()

    (athlete,) = _stored(session_factory)
    assert not is_rating_stale(athlete)
    if failed:
        assert athlete.performance_score == 100.0
        assert athlete.star_rating == 5.0
    else:
        assert athlete.performance_score == 0.0
        assert athlete.star_rating == 1.0


def test_update_commits_scores_and_rating(session_factory):
    athlete_id = _seed(session_factory)
    db = session_factory()
    try:
        update_sub_scores(SqlAlchemyAthleteRepository(db), athlete_id, {"performance": 0})
    finally:
        db.close()

    (athlete,) = _stored(session_factory)
    assert athlete.performance_score == 0.0
    # 0 + 20 + 15 + 15 + 10 = 60 → 3.5
    assert athlete.star_rating == 3.5


# ---------------------------------------------------------------------------
# Duplicate profiles
# ---------------------------------------------------------------------------

def test_concurrent_duplicate_create_raises_duplicate_profile(session_factory):
    _seed(session_factory)

    db = session_factory()
    try:
        with pytest.raises(DuplicateProfileError, match="already has"):
            create_athlete(UnseenOwnerRepository(db), "user2", PROFILE, ALL_ZEROS)
        # Session is usable again after the rollback
        assert SqlAlchemyAthleteRepository(db).find_by_owner("user2") is not None
    finally:
        db.close()

    stored = _stored(session_factory)
    assert len(stored) == 1
    assert stored[0].star_rating == 5.0

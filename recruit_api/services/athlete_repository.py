"""SQLAlchemy-backed athlete repository."""

from typing import Iterator, Optional

from sqlalchemy.orm import Session

from recruit_api.core.athlete_store import AthleteRepository
from recruit_api.models import Athlete


class SqlAlchemyAthleteRepository(AthleteRepository):
    """
    AthleteRepository over a single SQLAlchemy session.

    ``save`` commits immediately; there is no version column, so two
    concurrent writers to the same athlete resolve last-write-wins.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, athlete_id: str) -> Optional[Athlete]:
        return self.db.query(Athlete).filter(Athlete.id == athlete_id).first()

    def find_by_owner(self, user_id: str) -> Optional[Athlete]:
        return self.db.query(Athlete).filter(Athlete.user_id == user_id).first()

    def save(self, athlete: Athlete) -> Athlete:
        self.db.add(athlete)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(athlete)
        return athlete

    def iter_all(self) -> Iterator[Athlete]:
        # Materialised up front: save() commits mid-iteration during a sweep
        athletes = self.db.query(Athlete).order_by(Athlete.created_at.asc()).all()
        return iter(athletes)

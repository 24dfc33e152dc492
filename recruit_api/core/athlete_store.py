"""Persistence contract for athlete records.

Rating orchestration talks to storage only through :class:`AthleteRepository`
so it can be exercised without a database:

* **Production**: :class:`~recruit_api.services.athlete_repository.SqlAlchemyAthleteRepository`
  wraps a SQLAlchemy session.
* **Unit tests**: a ``MagicMock`` or any small in-memory subclass.

The repository hands back athlete objects that the rating code treats as
opaque carriers: it reads the five sub-score attributes named in
:data:`SUB_SCORE_FIELDS` and writes ``star_rating``.  Nothing else on the
record matters to it.

:class:`AthleteRepository` is an ABC rather than a ``typing.Protocol`` so
implementations must inherit and read the contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Final, Iterator, Optional

#: Category name → attribute on the athlete record.
SUB_SCORE_FIELDS: Final[Dict[str, str]] = {
    "performance": "performance_score",
    "physical": "physical_score",
    "academic": "academic_score",
    "social": "social_score",
    "evaluation": "evaluation_score",
}

STAR_RATING_FIELD: Final[str] = "star_rating"


class AthleteRepository(ABC):
    """Narrow read/write interface over the athlete record store."""

    @abstractmethod
    def find_by_id(self, athlete_id: str) -> Optional[Any]:
        """Return the athlete with *athlete_id*, or ``None``."""

    @abstractmethod
    def find_by_owner(self, user_id: str) -> Optional[Any]:
        """Return the athlete profile owned by *user_id*, or ``None``."""

    @abstractmethod
    def save(self, athlete: Any) -> Any:
        """Persist *athlete* (insert or update) and return the stored record.

        Implementations do not retry; storage errors propagate.
        """

    @abstractmethod
    def iter_all(self) -> Iterator[Any]:
        """Yield every athlete record.  Used by the consistency sweep."""

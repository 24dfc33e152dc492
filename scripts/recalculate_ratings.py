"""
recalculate_ratings.py - Recompute stored star ratings from sub-scores.

Star ratings are a denormalized cache of the rating engine's output.  They
can drift if two sub-score updates for the same athlete race (last write
wins) or if rows were edited directly in the database.  This script finds
and repairs them through the same code path the API uses.

Usage
-----
  python scripts/recalculate_ratings.py              # dry-run (lists stale rows)
  python scripts/recalculate_ratings.py --execute    # rewrite stale ratings
  python scripts/recalculate_ratings.py --athlete <id> --execute
"""

import argparse
import logging
import sys
from pathlib import Path

# Ensure the project root (one level up from scripts/) is on sys.path so that
# `from recruit_api.xxx import ...` resolves when run directly.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Recompute athlete star ratings from stored sub-scores."
    )
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Actually write ratings.  Without this flag the script runs dry.",
    )
    parser.add_argument(
        "--athlete",
        metavar="ID",
        help="Only recompute this athlete.",
    )
    args = parser.parse_args()

    from recruit_api.models import SessionLocal
    from recruit_api.services.athlete_repository import SqlAlchemyAthleteRepository
    from recruit_api.services.ratings import (
        NotFoundError,
        is_rating_stale,
        recalculate_all_ratings,
        update_athlete_rating,
    )

    db = SessionLocal()
    repo = SqlAlchemyAthleteRepository(db)
    try:
        if args.athlete:
            if not args.execute:
                athlete = repo.find_by_id(args.athlete)
                if athlete is None:
                    print(f"Athlete {args.athlete} not found")
                    sys.exit(1)
                state = "stale" if is_rating_stale(athlete) else "up to date"
                print(f"[DRY RUN] {athlete.id} {athlete.full_name}: {athlete.star_rating} ({state})")
                return
            try:
                athlete = update_athlete_rating(repo, args.athlete)
            except NotFoundError as exc:
                print(str(exc))
                sys.exit(1)
            print(f"{athlete.id} {athlete.full_name}: {athlete.star_rating} stars")
            return

        if not args.execute:
            stale = [a for a in repo.iter_all() if is_rating_stale(a)]
            print(f"[DRY RUN] {len(stale)} stale rating(s)")
            for athlete in stale:
                print(f"  {athlete.id} {athlete.full_name}: stored {athlete.star_rating}")
            print("Re-run with --execute to rewrite them.")
            return

        results = recalculate_all_ratings(repo)
        print(
            f"Checked {results['athletes_checked']} athlete(s), "
            f"rewrote {results['ratings_changed']} rating(s)."
        )
    finally:
        db.close()


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Database initialization script
Creates all tables and optionally seeds demo athletes
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Load .env file
from dotenv import load_dotenv
load_dotenv()

from recruit_api.models import Base, engine, SessionLocal
from recruit_api.services.athlete_repository import SqlAlchemyAthleteRepository
from recruit_api.services.athletes import DuplicateProfileError, create_athlete
import logging
from sqlalchemy import text, inspect

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEMO_ATHLETES = [
    (
        "demo_qb",
        {"first_name": "John", "last_name": "Doe", "primary_sport": "Football",
         "positions": ["Quarterback"], "hometown": "Dallas, TX", "graduation_year": 2026},
        {"performance": 85, "physical": 80, "academic": 75, "social": 70, "evaluation": 80},
    ),
    (
        "demo_pg",
        {"first_name": "Jane", "last_name": "Smith", "primary_sport": "Basketball",
         "positions": ["Point Guard"], "hometown": "Austin, TX", "graduation_year": 2027},
        {"performance": 95, "physical": 92, "academic": 88, "social": 90, "evaluation": 93},
    ),
    (
        "demo_mid",
        {"first_name": "Carlos", "last_name": "Reyes", "primary_sport": "Soccer",
         "positions": ["Midfielder"], "hometown": "El Paso, TX", "graduation_year": 2026},
        {"performance": 55, "physical": 50, "academic": 52, "social": 48, "evaluation": 53},
    ),
]


def init_database(drop_existing: bool = False):
    """
    Initialize database tables

    Args:
        drop_existing: If True, drops all tables first (DANGER: data loss!)
    """
    logger.info("🔧 Initializing recruiting database...")

    if drop_existing:
        logger.warning("⚠️  Dropping all existing tables!")
        response = input("Are you sure? This will delete all data. Type 'yes' to confirm: ")
        if response.lower() != 'yes':
            logger.info("Aborted.")
            return

        Base.metadata.drop_all(bind=engine)
        logger.info("✅ Existing tables dropped")

    Base.metadata.create_all(bind=engine)
    logger.info("✅ Database tables created successfully")

    inspector = inspect(engine)
    tables = inspector.get_table_names()
    logger.info("📋 Tables: %s", ", ".join(tables))

    return True


def seed_test_data():
    """Add demo athlete profiles for development"""
    logger.info("🌱 Seeding demo athletes...")

    db = SessionLocal()
    repo = SqlAlchemyAthleteRepository(db)

    try:
        for owner, profile, scores in DEMO_ATHLETES:
            try:
                athlete = create_athlete(repo, owner, profile, scores)
            except DuplicateProfileError:
                logger.info("Skipping %s: profile exists", owner)
                continue
            logger.info("Seeded %s (%.1f stars)", athlete.full_name, athlete.star_rating)

        logger.info("✅ Demo data seeded")

    except Exception as e:
        logger.error("❌ Error seeding data: %s", e)
        db.rollback()

    finally:
        db.close()


def check_connection():
    """Test database connection"""
    try:
        db = SessionLocal()
        db.execute(text("SELECT 1"))
        db.close()
        logger.info("✅ Database connection successful")
        return True
    except Exception as e:
        logger.error("❌ Database connection failed: %s", e)
        return False


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Initialize recruiting database")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables (DANGER!)")
    parser.add_argument("--seed", action="store_true", help="Seed demo athletes")
    parser.add_argument("--check", action="store_true", help="Only check connection")

    args = parser.parse_args()

    if args.check:
        check_connection()
    else:
        if check_connection():
            init_database(drop_existing=args.drop)

            if args.seed:
                seed_test_data()

            logger.info("🎉 Database initialization complete!")
        else:
            logger.error("Cannot initialize database - connection failed")
            sys.exit(1)

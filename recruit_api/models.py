"""
Database models for the athlete recruiting backend
SQLAlchemy ORM with PostgreSQL
"""

import os
import uuid
from datetime import datetime

from dotenv import load_dotenv
from sqlalchemy import (
    create_engine,
    Column,
    Integer,
    String,
    Float,
    DateTime,
    Boolean,
    JSON,
    Text,
)
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker

from recruit_api.core.rating_config import FLOOR_STAR_RATING

# Load .env before reading DATABASE_URL
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "postgresql://postgres@127.0.0.1:5432/recruit")

# pool_pre_ping=True drops dead connections from the pool before use
engine = create_engine(DATABASE_URL, pool_pre_ping=True, echo=False)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# Dependency for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def new_athlete_id() -> str:
    return str(uuid.uuid4())


class Athlete(Base):
    """Athlete profile with rating sub-scores and the derived star rating"""

    __tablename__ = "athletes"

    id = Column(String(36), primary_key=True, default=new_athlete_id)
    user_id = Column(String(64), nullable=False, unique=True, index=True)  # Profile owner

    # Profile
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    primary_sport = Column(String(50), nullable=False, index=True)
    positions = Column(JSON, default=list)
    hometown = Column(String(100))
    high_school = Column(String(100))
    graduation_year = Column(Integer)
    bio = Column(Text)

    # Rating sub-scores (0-100 nominal; the engine clamps anything else)
    performance_score = Column(Float, nullable=False, default=0.0)
    physical_score = Column(Float, nullable=False, default=0.0)
    academic_score = Column(Float, nullable=False, default=0.0)
    social_score = Column(Float, nullable=False, default=0.0)
    evaluation_score = Column(Float, nullable=False, default=0.0)

    # Derived star rating (1.0-5.0 in half steps).  Written only by
    # services.ratings.update_athlete_rating; 0 until first computed.
    star_rating = Column(Float, nullable=False, default=FLOOR_STAR_RATING, index=True)

    is_public = Column(Boolean, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


# Create all tables
def init_db():
    """Initialize database tables"""
    Base.metadata.create_all(bind=engine)
    print("✅ Database tables created")


if __name__ == "__main__":
    init_db()

"""
FastAPI application for the athlete recruiting backend
Athlete profiles, star rating updates and breakdowns, rating consistency sweep
"""

from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional
import logging
import os
import time

from recruit_api.models import get_db, SessionLocal
from recruit_api.auth import (
    is_admin,
    optional_api_key,
    verify_api_key,
    verify_admin_api_key,
)
from recruit_api.core.athlete_store import AthleteRepository
from recruit_api.services.athlete_repository import SqlAlchemyAthleteRepository
from recruit_api.services.athletes import DuplicateProfileError, can_view, create_athlete
from recruit_api.services.ratings import (
    NotFoundError,
    get_athlete_breakdown,
    recalculate_all_ratings,
    update_athlete_rating,
    update_sub_scores,
)
from recruit_api.schemas import (
    AthleteCreate,
    AthleteEnvelope,
    AthleteResponse,
    BreakdownEnvelope,
    RatingBreakdownResponse,
    RatingUpdate,
    RatingUpdateResponse,
    SweepResponse,
)

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Scheduler instance
scheduler = BackgroundScheduler()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info("Starting recruiting API")

    sweep_enabled = os.getenv("RATING_SWEEP_ENABLED", "false").lower() == "true"
    if sweep_enabled:
        interval_hours = int(os.getenv("RATING_SWEEP_INTERVAL_HOURS", "24"))
        scheduler.add_job(
            _rating_sweep_job,
            IntervalTrigger(hours=interval_hours),
            id="rating_sweep",
            name="Star Rating Consistency Sweep",
            replace_existing=True,
        )
        scheduler.start()
        logger.info("Scheduler started: rating sweep every %dh", interval_hours)

    yield

    logger.info("Shutting down recruiting API")
    if scheduler.running:
        scheduler.shutdown()


app = FastAPI(
    title="Athlete Recruiting API",
    description="Athlete profiles and composite star ratings",
    version="1.0",
    lifespan=lifespan,
)

_cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in _cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_athlete_repository(db: Session = Depends(get_db)) -> AthleteRepository:
    return SqlAlchemyAthleteRepository(db)


# ============================================================================
# SCHEDULED JOB
# ============================================================================

def _rating_sweep_job():
    """Recompute stale star ratings; runs every RATING_SWEEP_INTERVAL_HOURS."""
    db = SessionLocal()
    try:
        results = recalculate_all_ratings(SqlAlchemyAthleteRepository(db))
        logger.info("Rating sweep complete: %s", results)
    except Exception as exc:
        logger.error("Rating sweep job failed: %s", exc, exc_info=True)
    finally:
        db.close()


# ============================================================================
# PUBLIC ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    """Health check"""
    return {
        "app": "Athlete Recruiting API",
        "version": "1.0",
        "status": "operational",
        "timestamp": datetime.utcnow().isoformat(),
    }


@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint"""
    health = {"status": "healthy", "database": "connected"}

    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Health check database error: %s", e)
        health["status"] = "degraded"
        health["database"] = f"error: {str(e)}"

    health["scheduler"] = "running" if scheduler.running else "idle"
    return health


# ============================================================================
# ATHLETE PROFILES
# ============================================================================

@app.post("/api/v1/athletes", response_model=AthleteEnvelope, status_code=201)
async def create_athlete_profile(
    payload: AthleteCreate,
    user: str = Depends(verify_api_key),
    repo: AthleteRepository = Depends(get_athlete_repository),
):
    """Create the caller's athlete profile and compute its initial rating."""
    try:
        athlete = create_athlete(repo, user, payload.profile(), payload.sub_scores())
    except DuplicateProfileError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return AthleteEnvelope(athlete=AthleteResponse.model_validate(athlete))


@app.get("/api/v1/athletes/{athlete_id}", response_model=AthleteEnvelope)
async def get_athlete(
    athlete_id: str,
    user: Optional[str] = Depends(optional_api_key),
    repo: AthleteRepository = Depends(get_athlete_repository),
):
    """Public profiles are visible to anyone; private ones to owner and admins."""
    athlete = repo.find_by_id(athlete_id)
    if athlete is None:
        raise NotFoundError(athlete_id)
    if not can_view(athlete, user, is_admin(user)):
        raise HTTPException(status_code=403, detail="This profile is private")

    return AthleteEnvelope(athlete=AthleteResponse.model_validate(athlete))


# ============================================================================
# RATINGS
# ============================================================================

# Fixed path before the dynamic {athlete_id} routes
@app.post("/api/v1/ratings/calculate/{athlete_id}", response_model=RatingUpdateResponse)
async def recalculate_rating(
    athlete_id: str,
    user: str = Depends(verify_admin_api_key),
    repo: AthleteRepository = Depends(get_athlete_repository),
):
    """Recompute an athlete's star rating from stored sub-scores (admin only)."""
    logger.info("Rating recalculation for %s triggered by %s", athlete_id, user)
    athlete = update_athlete_rating(repo, athlete_id)
    return RatingUpdateResponse(
        athlete=AthleteResponse.model_validate(athlete),
        message="Rating recalculated successfully",
    )


@app.get("/api/v1/ratings/{athlete_id}/breakdown", response_model=BreakdownEnvelope)
async def get_rating_breakdown(
    athlete_id: str,
    user: Optional[str] = Depends(optional_api_key),
    repo: AthleteRepository = Depends(get_athlete_repository),
):
    """Rating breakdown: composite, stars, per-category contributions, tier."""
    athlete = repo.find_by_id(athlete_id)
    if athlete is None:
        raise NotFoundError(athlete_id)
    if not can_view(athlete, user, is_admin(user)):
        raise HTTPException(status_code=403, detail="This profile is private")

    breakdown = get_athlete_breakdown(athlete)
    return BreakdownEnvelope(
        athlete_id=athlete.id,
        athlete_name=athlete.full_name,
        breakdown=RatingBreakdownResponse.model_validate(breakdown.to_dict()),
    )


@app.put("/api/v1/ratings/{athlete_id}", response_model=RatingUpdateResponse)
async def update_rating(
    athlete_id: str,
    payload: RatingUpdate,
    user: str = Depends(verify_api_key),
    repo: AthleteRepository = Depends(get_athlete_repository),
):
    """
    Update any of the five sub-scores and recompute the star rating.

    Admins only.  Owners set sub-scores when creating the profile and get
    a 403 here.
    """
    athlete = repo.find_by_id(athlete_id)
    if athlete is None:
        raise NotFoundError(athlete_id)
    if not is_admin(user):
        detail = (
            "Sub-scores can only be changed by an administrator after profile creation"
            if athlete.user_id == user
            else "Insufficient permissions"
        )
        raise HTTPException(status_code=403, detail=detail)

    athlete = update_sub_scores(repo, athlete_id, payload.sub_scores())
    logger.info(
        "Rating for %s updated by %s: %.1f stars", athlete_id, user, athlete.star_rating
    )
    return RatingUpdateResponse(
        athlete=AthleteResponse.model_validate(athlete),
        message="Rating updated successfully",
    )


# ============================================================================
# ADMIN ENDPOINTS
# ============================================================================

@app.post("/admin/ratings/recalculate-all", response_model=SweepResponse)
async def recalculate_all(
    user: str = Depends(verify_admin_api_key),
    repo: AthleteRepository = Depends(get_athlete_repository),
):
    """Run the rating consistency sweep now (admin only)."""
    logger.info("Manual rating sweep triggered by %s", user)
    start = time.monotonic()
    results = recalculate_all_ratings(repo)
    return SweepResponse(
        message="Rating sweep complete",
        duration_seconds=round(time.monotonic() - start, 3),
        **results,
    )


@app.get("/admin/scheduler/status")
async def get_scheduler_status(user: str = Depends(verify_admin_api_key)):
    """Get scheduler job status"""
    jobs = []
    for job in scheduler.get_jobs():
        jobs.append({
            "id": job.id,
            "name": job.name,
            "next_run": job.next_run_time.isoformat() if job.next_run_time else None,
        })

    return {
        "running": scheduler.running,
        "jobs": jobs,
    }


# ============================================================================
# ERROR HANDLERS
# ============================================================================

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": "Athlete not found"})


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Catch-all exception handler"""
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "type": type(exc).__name__}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

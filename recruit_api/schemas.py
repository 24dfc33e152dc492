"""
Pydantic request/response schemas for the recruiting API.

Client-facing payloads use camelCase on the wire (the mobile and web clients
were built against that shape); Python code uses snake_case.  No request
schema carries ``starRating``: it is derived, never written by a client.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------------------------------------------------
# Sub-scores
# ---------------------------------------------------------------------------

_SCORE_SUFFIX = "_score"


class SubScoresMixin(CamelModel):
    """The five rating sub-scores, each optional and bounded to [0, 100]."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )

    performance_score: Optional[float] = Field(None, ge=0, le=100)
    physical_score: Optional[float] = Field(None, ge=0, le=100)
    academic_score: Optional[float] = Field(None, ge=0, le=100)
    social_score: Optional[float] = Field(None, ge=0, le=100)
    evaluation_score: Optional[float] = Field(None, ge=0, le=100)

    def sub_scores(self) -> Dict[str, float]:
        """Supplied sub-scores keyed by category name (``"performance"``, ...)."""
        supplied = self.model_dump(
            include={name for name in type(self).model_fields if name.endswith(_SCORE_SUFFIX)},
            exclude_none=True,
        )
        return {name[: -len(_SCORE_SUFFIX)]: value for name, value in supplied.items()}


class RatingUpdate(SubScoresMixin):
    """
    Payload for PUT /api/v1/ratings/{athlete_id}.

    Any subset of the five sub-scores; omitted ones keep their stored value.
    The star rating is recomputed from the result.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
        json_schema_extra={
            "example": {"performanceScore": 85, "evaluationScore": 70}
        },
    )


# ---------------------------------------------------------------------------
# Athlete profiles
# ---------------------------------------------------------------------------

class AthleteCreate(SubScoresMixin):
    """
    Payload for POST /api/v1/athletes.

    This is the only request where a profile owner may supply sub-scores.
    """

    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)
    primary_sport: str = Field(..., min_length=2, max_length=50)
    positions: Optional[List[str]] = None
    hometown: Optional[str] = Field(None, max_length=100)
    high_school: Optional[str] = Field(None, max_length=100)
    graduation_year: Optional[int] = Field(None, ge=1900, le=2100)
    bio: Optional[str] = Field(None, max_length=1000)
    is_public: bool = True

    @field_validator("first_name", "last_name", "primary_sport")
    @classmethod
    def strip_names(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("must be at least 2 characters")
        return v

    def profile(self) -> dict:
        return self.model_dump(
            exclude={name for name in type(self).model_fields if name.endswith(_SCORE_SUFFIX)},
        )


class AthleteResponse(CamelModel):
    id: str
    user_id: str
    first_name: str
    last_name: str
    primary_sport: str
    positions: Optional[List[str]] = None
    hometown: Optional[str] = None
    high_school: Optional[str] = None
    graduation_year: Optional[int] = None
    bio: Optional[str] = None
    is_public: bool
    performance_score: float
    physical_score: float
    academic_score: float
    social_score: float
    evaluation_score: float
    star_rating: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AthleteEnvelope(CamelModel):
    athlete: AthleteResponse


class RatingUpdateResponse(CamelModel):
    """Response for the rating update and recalculate endpoints."""
    athlete: AthleteResponse
    message: str


# ---------------------------------------------------------------------------
# Breakdown
# ---------------------------------------------------------------------------

class ComponentScoreResponse(BaseModel):
    score: float
    weight: float
    contribution: float


class RatingBreakdownResponse(CamelModel):
    """Wire shape of a rating breakdown.  Field names are a client contract."""
    composite_score: float
    star_rating: float
    components: Dict[str, ComponentScoreResponse]
    tier: str


class BreakdownEnvelope(CamelModel):
    """Structure for GET /api/v1/ratings/{athlete_id}/breakdown."""
    athlete_id: str
    athlete_name: str
    breakdown: RatingBreakdownResponse


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------

class SweepResponse(BaseModel):
    """Response from /admin/ratings/recalculate-all."""
    message: str
    athletes_checked: int
    ratings_changed: int
    duration_seconds: float

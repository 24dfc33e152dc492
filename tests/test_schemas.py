"""Tests for request schema validation."""

import pytest
from pydantic import ValidationError

from recruit_api.schemas import AthleteCreate, RatingBreakdownResponse, RatingUpdate
from recruit_api.core.rating_engine import RatingInput, get_rating_breakdown


def test_rating_update_accepts_camel_case_subset():
    payload = RatingUpdate.model_validate({"performanceScore": 85, "evaluationScore": 70.5})
    assert payload.sub_scores() == {"performance": 85, "evaluation": 70.5}


def test_rating_update_empty():
    assert RatingUpdate.model_validate({}).sub_scores() == {}


@pytest.mark.parametrize("value", [-0.1, 100.5, float("nan"), float("inf")])
def test_rating_update_rejects_out_of_range(value):
    with pytest.raises(ValidationError):
        RatingUpdate.model_validate({"socialScore": value})


def test_rating_update_ignores_star_rating():
    payload = RatingUpdate.model_validate({"starRating": 5.0, "physicalScore": 10})
    assert payload.sub_scores() == {"physical": 10}
    assert not hasattr(payload, "star_rating")


def test_athlete_create_splits_profile_and_scores():
    payload = AthleteCreate.model_validate({
        "firstName": "John",
        "lastName": "Doe",
        "primarySport": "Football",
        "positions": ["Quarterback", "Safety"],
        "performanceScore": 85,
    })
    assert payload.sub_scores() == {"performance": 85}
    profile = payload.profile()
    assert profile["first_name"] == "John"
    assert profile["positions"] == ["Quarterback", "Safety"]
    assert "performance_score" not in profile


@pytest.mark.parametrize("field, value", [
    ("firstName", "J"),
    ("firstName", "  J  "),
    ("primarySport", "x" * 51),
    ("graduationYear", 1850),
])
def test_athlete_create_validation(field, value):
    body = {"firstName": "John", "lastName": "Doe", "primarySport": "Football"}
    body[field] = value
    with pytest.raises(ValidationError):
        AthleteCreate.model_validate(body)


def test_breakdown_response_round_trips_wire_shape():
    breakdown = get_rating_breakdown(RatingInput(85, 90, 75, 80, 70))
    model = RatingBreakdownResponse.model_validate(breakdown.to_dict())
    data = model.model_dump(by_alias=True)
    assert data["compositeScore"] == 82.25
    assert data["starRating"] == 4.5
    assert data["tier"] == "Power 5 Ready"
    assert data["components"]["academic"]["contribution"] == pytest.approx(11.25)

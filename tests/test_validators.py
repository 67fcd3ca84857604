from datetime import datetime, timedelta, timezone

from app.core.validator import Validator
from app.domains.comments.entities import Comment
from app.domains.comments.validators import validate_comment
from app.domains.identity.entities import User
from app.domains.recommendations.entities import Recommendation
from app.domains.recommendations.validators import validate_recommendation
from app.domains.reservations.entities import Reservation
from app.domains.reservations.validators import validate_reservation

OWNER = User(id=7, name="Alice", username="alice")
START = datetime(2024, 5, 1, 18, 0, tzinfo=timezone.utc)


def check(validate, entity) -> dict:
    v = Validator()
    validate(v, entity)
    return v.errors


def test_validator_keeps_first_message_per_field():
    v = Validator()
    v.check(False, "title", "must be provided")
    v.check(False, "title", "must not be more than 128 bytes long")
    assert v.errors == {"title": "must be provided"}
    assert not v.valid()


def test_valid_recommendation_passes():
    recommendation = Recommendation.create_recommendation(
        OWNER, artist="Nina Simone", title="Sinnerman", yt_link="https://youtu.be/x"
    )
    assert check(validate_recommendation, recommendation) == {}


def test_recommendation_requires_a_link():
    recommendation = Recommendation.create_recommendation(OWNER, artist="Nina Simone", title="Sinnerman")
    assert check(validate_recommendation, recommendation) == {"yt_link|spotify_link": "must be provided"}


def test_recommendation_title_limit_counts_bytes():
    # 64 кириллических символа = 128 байт, 65 уже слишком много
    ok = Recommendation.create_recommendation(OWNER, artist="Кино", title="я" * 64, spotify_link="s")
    too_long = Recommendation.create_recommendation(OWNER, artist="Кино", title="я" * 65, spotify_link="s")

    assert check(validate_recommendation, ok) == {}
    assert check(validate_recommendation, too_long) == {"title": "must not be more than 128 bytes long"}


def test_recommendation_without_owner_is_invalid():
    recommendation = Recommendation(artist=" ", title="Sinnerman", spotify_link="s")
    errors = check(validate_recommendation, recommendation)
    assert errors == {"artist": "must be provided", "created_by": "must be provided"}


def test_reservation_end_must_follow_start():
    reservation = Reservation.create_reservation(OWNER, title="Rehearsal", start_time=START, end_time=START)
    assert check(validate_reservation, reservation) == {"end_time": "must be after start_time"}


def test_reservation_requires_times_and_valid_color():
    reservation = Reservation.create_reservation(
        OWNER, title="Rehearsal", start_time=None, end_time=None, color="green"
    )
    assert check(validate_reservation, reservation) == {
        "start_time": "must be provided",
        "end_time": "must be provided",
        "color": "must be a hex color like #1DB954",
    }


def test_reservation_cannot_be_its_own_parent():
    reservation = Reservation.create_reservation(
        OWNER, title="Rehearsal", start_time=START, end_time=START + timedelta(hours=2),
        parent_reservation_id=3,
    )
    reservation.id = 3
    assert check(validate_reservation, reservation) == {
        "parent_reservation_id": "must not reference the reservation itself"
    }


def test_reservation_duration_mixes_naive_and_aware_times():
    reservation = Reservation.create_reservation(
        OWNER, title="Rehearsal", start_time=START.replace(tzinfo=None), end_time=START + timedelta(minutes=90)
    )
    assert reservation.duration_minutes == 90


def test_comment_content_must_be_under_1024_bytes():
    short = Comment.create_comment(1, "a" * 1023, OWNER)
    long = Comment.create_comment(1, "a" * 1024, OWNER)

    assert check(validate_comment, short) == {}
    assert check(validate_comment, long) == {"content": "must not be more than 1024 bytes long"}


def test_comment_requires_recommendation_and_content():
    comment = Comment.create_comment(0, "   ", OWNER)
    assert check(validate_comment, comment) == {
        "recommendation_id": "must be provided",
        "content": "must be provided",
    }

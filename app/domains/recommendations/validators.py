from app.core.validator import Validator, byte_length
from app.domains.recommendations.entities import Recommendation


def validate_recommendation(v: Validator, recommendation: Recommendation) -> None:
    v.check(recommendation.artist.strip() != "", "artist", "must be provided")
    v.check(byte_length(recommendation.artist) <= 128, "artist", "must not be more than 128 bytes long")

    v.check(recommendation.title.strip() != "", "title", "must be provided")
    v.check(byte_length(recommendation.title) <= 128, "title", "must not be more than 128 bytes long")

    v.check(recommendation.user_id != 0, "created_by", "must be provided")

    v.check(recommendation.has_link(), "yt_link|spotify_link", "must be provided")

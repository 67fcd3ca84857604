from app.core.validator import Validator, byte_length
from app.domains.comments.entities import Comment


def validate_comment(v: Validator, comment: Comment) -> None:
    v.check(comment.user_id != 0, "created_by", "must be provided")

    v.check(comment.recommendation_id > 0, "recommendation_id", "must be provided")

    v.check(comment.content.strip() != "", "content", "must be provided")
    v.check(byte_length(comment.content) < 1024, "content", "must not be more than 1024 bytes long")

from app.domains.comments.entities import Comment
from app.domains.comments.schemas import (
    CommentCreate, CommentUpdate, CommentResponse, CommentEnvelope, CommentListResponse
)

__all__ = [
    "Comment",
    "CommentCreate", "CommentUpdate", "CommentResponse", "CommentEnvelope", "CommentListResponse"
]

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import relationship

from app.db.base import BaseModel


class Recommendation(BaseModel):
    __tablename__ = "recommendations"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    artist = Column(String(128), nullable=False)
    title = Column(String(128), nullable=False)
    cover_url = Column(Text, nullable=True)
    yt_link = Column(Text, nullable=True)
    spotify_link = Column(Text, nullable=True)
    comment = Column(Text, nullable=True)
    is_public = Column(Boolean, nullable=False, default=False)

    # Relationships
    owner = relationship("User")
    comments = relationship("Comment", back_populates="recommendation", passive_deletes=True)

    __table_args__ = (
        # Полнотекстовый индекс нужен только PostgreSQL
        Index(
            "recommendations_title_idx",
            text("to_tsvector('simple', title)"),
            postgresql_using="gin",
        ).ddl_if(dialect="postgresql"),
        {"sqlite_autoincrement": True},
    )

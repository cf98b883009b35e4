"""Database models for saved words."""
from sqlalchemy import (
    Column,
    Date,
    Integer,
    String,
    UniqueConstraint,
)

from lexireview.models.base import Base, TimestampMixin


class SavedWord(Base, TimestampMixin):
    """A word saved to a user's vocabulary."""

    __tablename__ = "words"
    __table_args__ = (
        UniqueConstraint("user_id", "word_key", name="uq_words_user_word"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    word = Column(String, nullable=False)
    word_key = Column(String, nullable=False)  # lower-cased word for uniqueness
    meaning = Column(String, nullable=False)
    eli5 = Column(String, nullable=False, default="")
    example = Column(String, nullable=False, default="")
    difficulty = Column(String, nullable=False, default="normal")  # normal, difficult
    correct_count = Column(Integer, nullable=False, default=0)
    wrong_count = Column(Integer, nullable=False, default=0)
    last_reviewed = Column(Date, nullable=True)
    date_added = Column(Date, nullable=False)

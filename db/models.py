import enum
from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, Enum, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from db import database


class Difficulty(str, enum.Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class DailyChallenge(database.Base):
    """One word puzzle for one (date, language) pair."""
    __tablename__ = "daily_challenges"

    id = Column(Integer, primary_key=True, index=True)
    # Not unique: the active lookup returns the first match
    challenge_date = Column(Date, index=True, nullable=False)
    language = Column(String, nullable=False, default="en")
    word = Column(String, nullable=False)

    # Disclosed only after solving
    definition = Column(Text, nullable=True)
    example_sentence = Column(Text, nullable=True)
    hint = Column(Text, nullable=True)

    difficulty = Column(
        Enum(Difficulty, name="challenge_difficulty", native_enum=False),
        nullable=False,
        default=Difficulty.medium,
    )
    meta = Column(JSON, nullable=True)  # partOfSpeech, phonetics, ...
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    attempts = relationship("DailyChallengeAttempt", back_populates="challenge")


class DailyChallengeAttempt(database.Base):
    __tablename__ = "daily_challenge_attempts"

    id = Column(Integer, primary_key=True, index=True)
    challenge_id = Column(Integer, ForeignKey("daily_challenges.id"), nullable=False, index=True)
    user_id = Column(String, nullable=False, index=True)
    guess = Column(Text, nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)
    # Supplied by the client, not checked for monotonicity
    attempt_number = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=datetime.utcnow)

    challenge = relationship("DailyChallenge", back_populates="attempts")


class UserChallengeStats(database.Base):
    __tablename__ = "user_challenge_stats"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, unique=True, index=True, nullable=False)

    total_played = Column(Integer, nullable=False, default=0)
    total_solved = Column(Integer, nullable=False, default=0)
    current_streak = Column(Integer, nullable=False, default=0)
    best_streak = Column(Integer, nullable=False, default=0)

    last_played_date = Column(Date, nullable=True)
    last_solved_date = Column(Date, nullable=True)

    # Bumped on every write; guards the compare-and-swap update
    version = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime, default=datetime.utcnow)

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from db.models import Difficulty


class ChallengeCreate(BaseModel):
    challenge_date: date
    language: Optional[str] = None
    word: str = Field(min_length=1)
    definition: Optional[str] = None
    example_sentence: Optional[str] = None
    hint: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    meta: Optional[Any] = None
    is_active: Optional[bool] = None


class ChallengeUpdate(BaseModel):
    challenge_date: Optional[date] = None
    language: Optional[str] = None
    word: Optional[str] = Field(default=None, min_length=1)
    definition: Optional[str] = None
    example_sentence: Optional[str] = None
    hint: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    meta: Optional[Any] = None
    is_active: Optional[bool] = None


class Challenge(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    challenge_date: date
    language: str
    word: str
    definition: Optional[str] = None
    example_sentence: Optional[str] = None
    hint: Optional[str] = None
    difficulty: Difficulty
    meta: Optional[Any] = None
    is_active: bool
    created_at: Optional[datetime] = None


class ChallengeResponse(BaseModel):
    challenge: Challenge


class AttemptRequest(BaseModel):
    challenge_id: int
    # Empty guesses are rejected by the recorder so they get the domain error
    guess: str
    is_correct: Optional[bool] = None
    attempt_number: Optional[int] = None


class Attempt(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    challenge_id: int
    user_id: str
    guess: str
    is_correct: bool
    attempt_number: int
    created_at: datetime


class AttemptResponse(BaseModel):
    attempt: Attempt


class AttemptList(BaseModel):
    attempts: list[Attempt] = []


class UserStats(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    total_played: int
    total_solved: int
    current_streak: int
    best_streak: int
    last_played_date: Optional[date] = None
    last_solved_date: Optional[date] = None
    updated_at: Optional[datetime] = None


class StatsResponse(BaseModel):
    stats: Optional[UserStats] = None

from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from config import settings
from dependencies import CurrentUser, get_current_user, get_db
from repository import attempts_repo, daily_challenge_repo, stats_repo
from schemas import daily_challenge_schema
from utils.errors import ChallengeNotFound
from utils.limiter import limiter

router = APIRouter(
    prefix="/daily-challenge",
    tags=["Daily Challenge"]
)


@router.post(
    "/challenges",
    response_model=daily_challenge_schema.ChallengeResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_challenge(
    data: daily_challenge_schema.ChallengeCreate,
    db: Annotated[Session, Depends(get_db)],
):
    challenge = daily_challenge_repo.create_challenge(db, data)
    return {"challenge": challenge}


@router.patch("/challenges/{challenge_id}", response_model=daily_challenge_schema.ChallengeResponse)
def update_challenge(
    challenge_id: int,
    data: daily_challenge_schema.ChallengeUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    challenge = daily_challenge_repo.update_challenge(db, challenge_id, data)
    return {"challenge": challenge}


@router.get("/challenges/{challenge_id}", response_model=daily_challenge_schema.ChallengeResponse)
def get_challenge(challenge_id: int, db: Annotated[Session, Depends(get_db)]):
    challenge = daily_challenge_repo.get_challenge(db, challenge_id)
    if not challenge:
        raise ChallengeNotFound()
    return {"challenge": challenge}


@router.get("/active", response_model=daily_challenge_schema.ChallengeResponse)
def get_active_challenge(
    db: Annotated[Session, Depends(get_db)],
    challenge_date: Optional[date] = Query(default=None),
    language: Optional[str] = Query(default=None),
):
    challenge = daily_challenge_repo.get_active_challenge_for_date(db, challenge_date, language)
    return {"challenge": challenge}


@router.post(
    "/attempts",
    response_model=daily_challenge_schema.AttemptResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.ATTEMPTS_RATE_LIMIT)
def record_attempt(
    request: Request,
    data: daily_challenge_schema.AttemptRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    attempt = attempts_repo.record_attempt(
        db,
        user.id,
        data.challenge_id,
        data.guess,
        is_correct=data.is_correct,
        attempt_number=data.attempt_number,
    )
    return {"attempt": attempt}


@router.get("/attempts", response_model=daily_challenge_schema.AttemptList)
def list_attempts(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    challenge_id: Optional[int] = Query(default=None),
):
    return {"attempts": attempts_repo.list_attempts(db, user.id, challenge_id)}


@router.get("/stats/me", response_model=daily_challenge_schema.StatsResponse)
def get_my_stats(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    return {"stats": stats_repo.get_stats(db, user.id)}

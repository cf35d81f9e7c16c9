# -*- coding: utf-8 -*-
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from db import models
from repository import daily_challenge_repo, stats_repo
from repository.unit_of_work import run_for_user
from utils.errors import AuthorizationError, ChallengeNotFound, ValidationFailure

logger = logging.getLogger(__name__)


def record_attempt(
    db: Session,
    user_id: Optional[str],
    challenge_id: int,
    guess: Optional[str],
    is_correct: Optional[bool] = None,
    attempt_number: Optional[int] = None,
) -> models.DailyChallengeAttempt:
    """
    Stores one guess and folds its outcome into the user's stats.

    The client decides whether the guess is correct and which attempt it
    is; both are stored as given. The attempt row and the stats write are
    committed together or not at all.
    """
    if not user_id:
        raise AuthorizationError("You must be signed in to perform this action.")
    if not guess or not guess.strip():
        raise ValidationFailure("Guess is required.")

    is_correct = bool(is_correct)
    attempt_number = attempt_number if attempt_number is not None else 1
    if attempt_number < 1:
        raise ValidationFailure("attempt_number must be a positive integer.")

    def work():
        challenge = daily_challenge_repo.get_challenge(db, challenge_id)
        if not challenge or not challenge.is_active:
            raise ChallengeNotFound("Challenge not available.")

        attempt = models.DailyChallengeAttempt(
            challenge_id=challenge.id,
            user_id=user_id,
            guess=guess,
            is_correct=is_correct,
            attempt_number=attempt_number,
            created_at=datetime.utcnow(),
        )
        db.add(attempt)
        db.flush()

        stats_repo.apply_outcome(db, user_id, challenge.challenge_date, is_correct)
        return attempt

    attempt = run_for_user(db, user_id, work)
    logger.info(
        "Attempt %s recorded for user %s on challenge %s (correct=%s)",
        attempt.id, user_id, challenge_id, is_correct,
    )
    return attempt


def list_attempts(db: Session, user_id: str, challenge_id: Optional[int] = None) -> list[models.DailyChallengeAttempt]:
    query = db.query(models.DailyChallengeAttempt).filter(models.DailyChallengeAttempt.user_id == user_id)
    if challenge_id is not None:
        query = query.filter(models.DailyChallengeAttempt.challenge_id == challenge_id)
    return query.order_by(models.DailyChallengeAttempt.created_at.asc(), models.DailyChallengeAttempt.id.asc()).all()

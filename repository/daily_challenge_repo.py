import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import settings
from db import models
from schemas import daily_challenge_schema
from utils.errors import ChallengeNotFound, StorageError, ValidationFailure

logger = logging.getLogger(__name__)


def get_challenge(db: Session, challenge_id: int) -> Optional[models.DailyChallenge]:
    return db.query(models.DailyChallenge).filter(models.DailyChallenge.id == challenge_id).first()


def get_active_challenge_for_date(
    db: Session,
    challenge_date: Optional[date],
    language: Optional[str] = None,
) -> models.DailyChallenge:
    """
    Returns the first challenge for (date, language).
    Nothing stops two rows sharing the pair, so the lowest id wins.
    An inactive first match counts as not found.
    """
    if not challenge_date:
        raise ValidationFailure("Date is required.")

    challenge = (
        db.query(models.DailyChallenge)
        .filter(
            models.DailyChallenge.challenge_date == challenge_date,
            models.DailyChallenge.language == (language or settings.DEFAULT_LANGUAGE),
        )
        .order_by(models.DailyChallenge.id.asc())
        .first()
    )
    if not challenge or not challenge.is_active:
        raise ChallengeNotFound()
    return challenge


def create_challenge(db: Session, data: daily_challenge_schema.ChallengeCreate) -> models.DailyChallenge:
    challenge = models.DailyChallenge(
        challenge_date=data.challenge_date,
        language=data.language or settings.DEFAULT_LANGUAGE,
        word=data.word,
        definition=data.definition,
        example_sentence=data.example_sentence,
        hint=data.hint,
        difficulty=data.difficulty or models.Difficulty.medium,
        meta=data.meta,
        is_active=data.is_active if data.is_active is not None else True,
        created_at=datetime.utcnow(),
    )
    db.add(challenge)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Could not create challenge for %s", data.challenge_date, exc_info=True)
        raise StorageError("Could not save challenge.") from e
    db.refresh(challenge)
    return challenge


def update_challenge(
    db: Session, challenge_id: int, data: daily_challenge_schema.ChallengeUpdate
) -> models.DailyChallenge:
    existing = get_challenge(db, challenge_id)
    if not existing:
        raise ChallengeNotFound()

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        # Nothing to change: hand back the row as it is
        return existing

    for key, value in changes.items():
        setattr(existing, key, value)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Could not update challenge %s", challenge_id, exc_info=True)
        raise StorageError("Could not save challenge.") from e
    db.refresh(existing)
    return existing

# -*- coding: utf-8 -*-
import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db.models import UserChallengeStats
from repository.unit_of_work import run_for_user
from utils.errors import StatsWriteConflict

logger = logging.getLogger(__name__)


def next_stats(prior: Optional[UserChallengeStats], played_date: date, is_correct: bool) -> dict:
    """
    Stats after one more outcome.

    The streak grows on every correct outcome whatever the gap since the
    last play; only an incorrect outcome resets it.
    """
    if prior is None:
        return {
            "total_played": 1,
            "total_solved": 1 if is_correct else 0,
            "current_streak": 1 if is_correct else 0,
            "best_streak": 1 if is_correct else 0,
            "last_played_date": played_date,
            "last_solved_date": played_date if is_correct else None,
        }

    if is_correct:
        current = prior.current_streak + 1
        return {
            "total_played": prior.total_played + 1,
            "total_solved": prior.total_solved + 1,
            "current_streak": current,
            "best_streak": max(prior.best_streak, current),
            "last_played_date": played_date,
            "last_solved_date": played_date,
        }

    return {
        "total_played": prior.total_played + 1,
        "total_solved": prior.total_solved,
        "current_streak": 0,
        "best_streak": prior.best_streak,
        "last_played_date": played_date,
        "last_solved_date": prior.last_solved_date,
    }


def apply_outcome(db: Session, user_id: str, played_date: date, is_correct: bool) -> UserChallengeStats:
    """
    Read-modify-write of the user's stats row. Does not commit.

    The write replaces every field at once and only matches the version it
    read; losing the race raises StatsWriteConflict.
    """
    prior = db.query(UserChallengeStats).filter(UserChallengeStats.user_id == user_id).first()
    fields = next_stats(prior, played_date, is_correct)
    now = datetime.utcnow()

    if prior is None:
        stats = UserChallengeStats(user_id=user_id, version=1, updated_at=now, **fields)
        db.add(stats)
        try:
            db.flush()
        except IntegrityError:
            # Another writer created the row first
            raise StatsWriteConflict(user_id)
        return stats

    result = db.execute(
        update(UserChallengeStats)
        .where(
            UserChallengeStats.id == prior.id,
            UserChallengeStats.version == prior.version,
        )
        .values(version=prior.version + 1, updated_at=now, **fields)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise StatsWriteConflict(user_id)

    db.refresh(prior)
    return prior


def apply_outcome_and_commit(db: Session, user_id: str, played_date: date, is_correct: bool) -> UserChallengeStats:
    stats = run_for_user(db, user_id, lambda: apply_outcome(db, user_id, played_date, is_correct))
    logger.info("Stats updated for user %s (played=%s)", user_id, stats.total_played)
    return stats


def get_stats(db: Session, user_id: str) -> Optional[UserChallengeStats]:
    return db.query(UserChallengeStats).filter(UserChallengeStats.user_id == user_id).first()

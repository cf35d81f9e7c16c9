# -*- coding: utf-8 -*-
import logging
from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import settings
from utils.errors import DailyChallengeError, StatsWriteConflict, StorageError
from utils.user_locks import user_locks

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_for_user(db: Session, user_id: str, work: Callable[[], T], max_retries: Optional[int] = None) -> T:
    """
    Runs `work` and commits, as one transaction, under the user's lock.

    A StatsWriteConflict rolls everything back and runs `work` again from
    scratch, so `work` must read what it needs itself. Any other database
    failure is rolled back and raised as StorageError.
    """
    retries = max_retries or settings.STATS_MAX_RETRIES

    with user_locks.hold(user_id):
        for attempt in range(1, retries + 1):
            try:
                result = work()
                db.commit()
                return result
            except StatsWriteConflict:
                db.rollback()
                logger.warning("Stats conflict for user %s (try %d/%d), retrying", user_id, attempt, retries)
            except DailyChallengeError:
                db.rollback()
                raise
            except SQLAlchemyError as e:
                db.rollback()
                logger.error("Storage failure for user %s", user_id, exc_info=True)
                raise StorageError("Storage unavailable, please retry.") from e
            except Exception:
                db.rollback()
                raise

    logger.error("Giving up on stats update for user %s after %d tries", user_id, retries)
    raise StorageError("Too many concurrent updates, please retry.")

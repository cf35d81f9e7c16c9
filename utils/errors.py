# -*- coding: utf-8 -*-
"""
Domain errors for the daily challenge.

Repositories raise these; main.py turns them into the JSON error envelope.
Each kind is distinguishable by `error_kind` so clients know whether a
retry makes sense.
"""


class DailyChallengeError(Exception):
    status_code = 500
    error_kind = "internal"
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthorizationError(DailyChallengeError):
    status_code = 401
    error_kind = "unauthorized"


class ChallengeNotFound(DailyChallengeError):
    status_code = 404
    error_kind = "not_found"

    def __init__(self, message: str = "Challenge not found."):
        super().__init__(message)


class ValidationFailure(DailyChallengeError):
    status_code = 422
    error_kind = "validation"


class StorageError(DailyChallengeError):
    status_code = 503
    error_kind = "storage"
    retryable = True


class StatsWriteConflict(Exception):
    """The stats row changed between read and write. Internal, always retried."""

    def __init__(self, user_id: str):
        super().__init__(f"Concurrent stats update for user {user_id}")
        self.user_id = user_id

# core/errors.py

from typing import Optional

# ============================================================
# Error taxonomy
# ============================================================

class ChurchAdminError(Exception):
    """Base class for every error the application raises on purpose."""

    status_code: int = 500

    def __init__(self, message: str, *, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def to_detail(self) -> dict:
        return {"detail": self.message}


class StoreConnectionError(ChurchAdminError):
    """The store cannot be reached at all. Retryable, blocks the whole app."""

    status_code = 503


class RemoteQueryError(ChurchAdminError):
    """A read against the store failed."""

    status_code = 502


class RemoteWriteError(ChurchAdminError):
    """An insert/update/delete (or provider call) failed. Never retried."""

    status_code = 502


class RecordNotFoundError(ChurchAdminError):
    status_code = 404


class DuplicateRecordError(ChurchAdminError):
    """Local pre-check: a record with the same composite key is already loaded."""

    status_code = 409


class ValidationMismatchError(ChurchAdminError):
    """Local pre-check: category counts do not add up to the declared total."""

    status_code = 422

    def __init__(self, declared: int, calculated: int):
        self.declared = declared
        self.calculated = calculated
        self.mismatch = calculated - declared
        super().__init__(
            f"Total count ({declared}) doesn't match the sum of individual "
            f"counts ({calculated})"
        )

    def to_detail(self) -> dict:
        return {
            "detail": self.message,
            "declared": self.declared,
            "calculated": self.calculated,
            "mismatch": self.mismatch,
        }


class PermissionDeniedError(ChurchAdminError):
    status_code = 403


class NotAuthenticatedError(ChurchAdminError):
    status_code = 401


# ============================================================
# Supabase error helpers
# ============================================================

def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Case 1: Supabase Auth / GoTrue / PostgREST errors
    message = getattr(error, "message", None)
    if message:
        return str(message)

    # Case 2: errors with args (common)
    if error.args:
        return str(error.args[0])

    # Case 3: Plain string fallback
    return str(error) or type(error).__name__

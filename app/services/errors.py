"""
Exceptions raised by the scoring core.

Each error carries a machine-readable ``reason`` and the HTTP status it maps
to, so the transport layer can render it without knowing the core.
"""


class ScoringError(Exception):
    reason = "scoring_error"
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message or self.reason)
        self.message = message or self.reason


# --- ValidationError family (4xx, fix your input) ---
class BallotValidationError(ScoringError):
    reason = "invalid_ballot"
    status_code = 400


class InvalidBallotShape(BallotValidationError):
    reason = "invalid_ballot_shape"


class DuplicateSelection(BallotValidationError):
    reason = "duplicate_selection"


# --- NotFound family ---
class NotFoundError(ScoringError):
    reason = "not_found"
    status_code = 404


class UnknownBrand(NotFoundError):
    reason = "unknown_brand"


class BrandNotFound(NotFoundError):
    reason = "brand_not_found"


class UserNotFound(NotFoundError):
    reason = "user_not_found"


class BallotNotFound(NotFoundError):
    reason = "ballot_not_found"


# --- Conflict (come back tomorrow) ---
class ConflictError(ScoringError):
    reason = "conflict"
    status_code = 409


class AlreadyVoted(ConflictError):
    reason = "already_voted"


class IdentityVerificationError(ScoringError):
    reason = "identity_verification_failed"
    status_code = 401

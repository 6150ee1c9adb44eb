"""
Custom exceptions.

Every error carries a category (how the caller can recover) and a stable code (what went wrong),
so the API layer can return a tagged error instead of a generic failure.
"""

from uuid import UUID

from src.core.shared_types import SCORE_MAX, SCORE_MIN, ErrorCategory


class ScoreboardError(Exception):
    """Top-level exception for anything raised by the scoreboard."""

    category: ErrorCategory = ErrorCategory.INTERNAL
    code: str = "ScoreboardError"


# --- Persistence ---
class RepositoryError(ScoreboardError):
    code = "RepositoryError"


class DuplicateEntryError(RepositoryError):
    """The store rejected a write because of its uniqueness constraint."""

    code = "DuplicateEntry"


# --- Validation: recoverable by editing the draft / request ---
class ValidationError(ScoreboardError):
    category = ErrorCategory.VALIDATION
    code = "ValidationError"


class InvalidRequestError(ValidationError):
    code = "InvalidRequest"


class EmptyNameError(ValidationError):
    code = "EmptyName"


class InvalidGameSetError(ValidationError):
    code = "InvalidGameSet"


class ScoreOutOfRangeError(ValidationError):
    code = "ScoreOutOfRange"

    def __init__(self, player_id: UUID, score: object) -> None:
        self.player_id = player_id
        self.score = score
        super().__init__(
            f"Score {score!r} for player {player_id} is outside [{SCORE_MIN}, {SCORE_MAX}]."
        )


class IncompleteRoundError(ValidationError):
    code = "IncompleteRound"

    def __init__(
        self,
        missing: set[UUID] | None = None,
        unexpected: set[UUID] | None = None,
        duplicated: set[UUID] | None = None,
    ) -> None:
        self.missing = missing or set()
        self.unexpected = unexpected or set()
        self.duplicated = duplicated or set()
        problems = []
        if self.missing:
            problems.append(f"missing players {sorted(map(str, self.missing))}")
        if self.unexpected:
            problems.append(f"players not on the roster {sorted(map(str, self.unexpected))}")
        if self.duplicated:
            problems.append(f"duplicated players {sorted(map(str, self.duplicated))}")
        super().__init__("Round must hold exactly one score per roster player: " + "; ".join(problems))


# --- Conflict: recoverable by refreshing state and retrying ---
class ConflictError(ScoreboardError):
    category = ErrorCategory.CONFLICT
    code = "ConflictError"


class StaleRoundError(ConflictError):
    code = "StaleRound"

    def __init__(self, requested_round: int, next_round: int) -> None:
        self.requested_round = requested_round
        self.next_round = next_round
        super().__init__(
            f"Round {requested_round} cannot be recorded, the next round is {next_round}. Reload and retry."
        )


class AlreadyAdminError(ConflictError):
    code = "AlreadyAdmin"


class DuplicateNameError(ConflictError):
    code = "DuplicateName"


class PlayerAlreadyInSetError(ConflictError):
    code = "PlayerAlreadyInSet"


# --- Authorization: terminal for the current action ---
class AuthorizationError(ScoreboardError):
    category = ErrorCategory.AUTHORIZATION
    code = "AuthorizationError"


class NotAuthorizedError(AuthorizationError):
    code = "NotAuthorized"


class CannotRemoveCreatorError(AuthorizationError):
    code = "CannotRemoveCreator"


class NotAnAdminError(AuthorizationError):
    code = "NotAnAdmin"


# --- Not found: terminal, surfaced verbatim ---
class NotFoundError(ScoreboardError):
    category = ErrorCategory.NOT_FOUND
    code = "NotFoundError"


class SetNotFoundError(NotFoundError):
    code = "SetNotFound"


class UserNotFoundError(NotFoundError):
    code = "UserNotFound"


class PlayerNotFoundError(NotFoundError):
    code = "PlayerNotFound"

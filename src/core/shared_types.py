"""
Type definitions used across layers
"""

from enum import StrEnum

# Inclusive bounds of a single round score.
SCORE_MIN = -10
SCORE_MAX = 40


class ErrorCategory(StrEnum):
    """Tag attached to every error so callers can decide how to recover."""

    VALIDATION = "validation"
    CONFLICT = "conflict"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"

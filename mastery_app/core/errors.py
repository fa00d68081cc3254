"""
Error types for the Mastery engine

Provides:
- A base exception carrying a stable error code
- One subclass per recoverable condition the engine reports
"""

from typing import Any, Dict, Optional


class MasteryError(Exception):
    """Base exception class for the engine."""

    def __init__(
        self,
        message: str,
        code: str = 'UNKNOWN_ERROR',
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert error to dictionary for collaborators (API layers, telemetry)."""
        return {
            'success': False,
            'message': self.message,
            'code': self.code,
            'details': self.details
        }


class InsufficientCardsError(MasteryError):
    """Deck too small for the configured stage plan."""

    def __init__(self, available: int, required: int):
        super().__init__(
            message=f'At least {required} valid cards are required, got {available}',
            code='INSUFFICIENT_CARDS',
            details={'available': available, 'required': required}
        )


class InsufficientPoolError(MasteryError):
    """Not enough other cards to build distractors."""

    def __init__(self, pool_size: int):
        super().__init__(
            message=f'Cannot pick distractors from a pool of {pool_size} card(s)',
            code='INSUFFICIENT_POOL',
            details={'pool_size': pool_size}
        )


class NoActiveCardError(MasteryError):
    """An answer was submitted while no prompt is pending."""

    def __init__(self, message: str = 'No card is awaiting an answer'):
        super().__init__(message=message, code='NO_ACTIVE_CARD')


class MalformedCardError(MasteryError):
    """Raw card is missing its prompt or answer."""

    def __init__(self, message: str = 'Malformed card', index: Optional[int] = None):
        super().__init__(
            message=message,
            code='MALFORMED_CARD',
            details={'index': index} if index is not None else None
        )


class SchedulerStateError(MasteryError):
    """Queue disjointness or conservation was violated."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code='SCHEDULER_STATE', details=details)

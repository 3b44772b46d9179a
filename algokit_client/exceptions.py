"""
Custom exception classes for Algorand client operations.

Every error raised by this package derives from AlgoKitError. Failures
coming out of algosdk or the node are translated at the AlgorandClient
boundary and chained, so the original exception stays on __cause__.
"""
from typing import Any, Optional


class AlgoKitError(Exception):
    """Base class for all client errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(AlgoKitError):
    """Raised for misuse detectable locally, before any network call."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[dict[str, Any]] = None):
        if field:
            message = f"Validation error on {field}: {message}"
        super().__init__(message, details)
        self.field = field


class NetworkError(AlgoKitError):
    """Raised when the node or the transport to it fails."""
    pass


class RejectionError(AlgoKitError):
    """Raised when the node rejects a submitted transaction or group."""

    def __init__(self, message: str, reason: str = "other", details: Optional[dict[str, Any]] = None):
        super().__init__(message, details)
        self.reason = reason


class ConfirmationTimeoutError(AlgoKitError):
    """
    Raised when a transaction is not confirmed within the round budget.

    The transaction may still confirm later; callers can re-poll with
    wait_for_confirmation().
    """

    def __init__(self, tx_id: str, rounds: int, details: Optional[dict[str, Any]] = None):
        super().__init__(f"Transaction {tx_id} not confirmed after {rounds} rounds", details)
        self.tx_id = tx_id
        self.rounds = rounds

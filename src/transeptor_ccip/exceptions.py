"""Exception hierarchy for the Transeptor CCIP tasks."""

from typing import Any


class TranseptorError(Exception):
    """Base exception for every fatal task condition."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(TranseptorError):
    """Raised when the selected network, addresses or task options are unusable."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class ValidationError(TranseptorError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class AuthorizationError(TranseptorError):
    """Raised when the signer does not control the contract it acts on."""

    def __init__(
        self,
        message: str,
        address: str | None = None,
        owner: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.address = address
        self.owner = owner


class InsufficientFundsError(TranseptorError):
    """Raised when a balance cannot cover the quoted CCIP fee."""

    def __init__(
        self,
        message: str,
        required: int | None = None,
        available: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.required = required
        self.available = available


class TransactionError(TranseptorError):
    """Raised when a transaction cannot be submitted or is reverted."""

    def __init__(
        self,
        message: str,
        action: str | None = None,
        tx_hash: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.action = action
        self.tx_hash = tx_hash


class NetworkError(TranseptorError):
    """Raised when network/connection issues occur."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint

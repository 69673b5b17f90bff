"""Exceptions raised by the relay fee and payload helpers."""


class RelayerError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(RelayerError, ValueError):
    """Raised for malformed, negative or out-of-domain inputs."""


class InvalidRecipientError(InvalidInputError):
    """Raised when a recipient is not a 32-byte address."""


class InsufficientFundsError(InvalidInputError):
    """Raised when a transfer cannot cover the relayer fee and native swap."""


class DivisionByZeroError(RelayerError, ZeroDivisionError):
    """Raised when a swap rate or precision is zero, i.e. no route is configured."""


class UnsupportedPayloadTypeError(RelayerError, ValueError):
    """Raised when a payload carries an unknown payload type byte."""

    def __init__(self, payload_type: int) -> None:
        super().__init__(f"Unsupported payload type: {payload_type}")
        self.payload_type = payload_type


class AmountOverflowError(RelayerError, OverflowError):
    """Raised when an amount or intermediate product exceeds its integer width."""


class RemoteQueryError(RelayerError, ConnectionError):
    """Raised when a read-only chain query fails or returns malformed data."""


__all__ = [
    "AmountOverflowError",
    "DivisionByZeroError",
    "InsufficientFundsError",
    "InvalidInputError",
    "InvalidRecipientError",
    "RelayerError",
    "RemoteQueryError",
    "UnsupportedPayloadTypeError",
]

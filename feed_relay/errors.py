"""
Error types raised by Feed Relay components.

Runtime errors are caught at the boundary of the step that produced them
and logged. Only ``ConfigError`` is fatal, at startup.
"""


class RelayError(Exception):
    """Base class for all Feed Relay errors."""


class TransportError(RelayError):
    """Raised when the backend or chat platform cannot be reached."""


class BackendError(RelayError):
    """
    Raised when the backend answers with a non-2xx status.

    Attributes
    ----------
    status : int
        HTTP status code returned by the backend.
    """

    def __init__(self, status: int, message: str):
        super().__init__(f"HTTP {status}: {message}")
        self.status = status


class DecodeError(RelayError):
    """Raised when a response or feed body cannot be decoded."""


class DeliveryError(RelayError):
    """Raised when a message cannot be sent to the chat channel."""


class ConfigError(RelayError):
    """Raised when required configuration is missing or invalid."""

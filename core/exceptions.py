# core/exceptions.py
from typing import Optional


class ViewerError(Exception):
    """Base exception for spectrum viewer errors."""
    pass


class ConfigError(ViewerError):
    """Raised when the viewer configuration cannot be read or validated."""
    pass


class RpcError(ViewerError):
    """Base class for failures of a single RPC exchange."""
    pass


class TransportFailure(RpcError):
    """Raised when the server cannot be reached or answers with a non-200 status."""

    def __init__(self, message: str = "Server and client connection lost!", status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class DecodeFailure(RpcError):
    """Raised when a response body is not a valid envelope."""

    def __init__(self, body: str, diagnostic: str) -> None:
        super().__init__(f"bad JSON ({diagnostic}): {body}")
        self.body = body
        self.diagnostic = diagnostic


class ApplicationFailure(RpcError):
    """Raised when the service reports an error in the envelope."""
    pass

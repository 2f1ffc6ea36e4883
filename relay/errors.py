from __future__ import annotations

"""Error types for the relay.

Every error knows the HTTP status it maps to and the message that is safe to
return to the browser, so the app needs a single exception handler.
"""

from typing import Any, Dict, Optional


class RelayError(Exception):
    """Base class for all structured relay exceptions."""

    code: str = "RELAY_ERROR"
    status_code: int = 500

    def __init__(self, message: str, *, data: Optional[Dict[str, Any]] = None) -> None:  # noqa: D401 – simple init
        super().__init__(message)
        self.message = message
        self.data = data or {}

    def to_dict(self) -> Dict[str, Any]:  # noqa: D401 – utility
        return {
            "code": self.code,
            "message": self.message,
            "data": self.data,
        }

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class BadRequestError(RelayError):
    """The inbound body is not a JSON object of the expected shape."""

    code = "BAD_REQUEST"
    status_code = 400

    def __init__(self, message: str = "Invalid Request", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class ProviderConnectionError(RelayError):
    """The Gemini client could not be created (missing or rejected key)."""

    code = "CONNECTION_ERROR"

    def __init__(self, message: str = "Connection Error", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class GenerationError(RelayError):
    """The upstream generate_content call failed or timed out."""

    code = "GENERATION_ERROR"

    def __init__(self, detail: str, **kwargs: Any) -> None:
        super().__init__(f"AI Error: {detail}", **kwargs)
        self.detail = detail


class ClientDisconnectedError(RelayError):
    """The HTTP client went away before the upstream call finished."""

    code = "CLIENT_DISCONNECTED"
    status_code = 499

    def __init__(self, message: str = "Client Disconnected", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)

"""
Exceptions raised by hpecom commands.
"""

from typing import Any, Iterable, Optional


class HPEComError(Exception):
    """Base exception for hpecom errors."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(self.message)

    def __str__(self):
        if self.suggestion:
            return f"{self.message}\n\nSuggestion: {self.suggestion}"
        return self.message


class ConfigurationError(HPEComError):
    """Missing or invalid configuration."""

    pass


class NotConnectedError(HPEComError):
    """No session token or no provisioned region available."""

    def __init__(self, message: str = "No active GreenLake session."):
        suggestion = (
            "Set HPECOM_TOKEN, HPECOM_WORKSPACE_ID and HPECOM_REGIONS "
            "(or call hpecom.session.set_connection) before running commands."
        )
        super().__init__(message, suggestion)


class InvalidRegionError(HPEComError):
    """Region is not provisioned in the current workspace."""

    def __init__(self, region: str, available: Iterable[str]):
        self.region = region
        self.available = list(available)
        message = f"Region '{region}' is not provisioned in the current workspace."
        suggestion = "Use one of: " + (", ".join(self.available) or "(none)")
        super().__init__(message, suggestion)


class InvalidParameterError(HPEComError):
    """A command argument failed validation."""

    pass


class ResourceNotFoundError(HPEComError):
    """A resource looked up by name does not exist."""

    def __init__(self, kind: str, name: str, region: Optional[str] = None):
        self.kind = kind
        self.name = name
        where = f" in region '{region}'" if region else ""
        super().__init__(f"{kind} '{name}' cannot be found{where}.")


class ApiError(HPEComError):
    """The GreenLake or COM API answered with an error."""

    def __init__(
        self,
        status: int,
        message: str,
        error_code: Optional[str] = None,
        body: Any = None,
    ):
        self.status = status
        self.error_code = error_code
        self.body = body
        prefix = f"HTTP {status}" if status else "Request failed"
        if error_code:
            prefix = f"{prefix} ({error_code})"
        super().__init__(f"{prefix}: {message}")

    @property
    def is_not_found(self) -> bool:
        return self.status == 404

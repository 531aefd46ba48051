"""Session state shared by every command.

The token, workspace and list of provisioned regions are established by an
external connect step; commands only read them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import Settings, get_settings
from .exceptions import ConfigurationError, InvalidRegionError, NotConnectedError


@dataclass(frozen=True)
class Connection:
    """Read-only session state for the GreenLake and COM APIs."""

    token: Optional[str]
    workspace_id: Optional[str]
    regions: List[str] = field(default_factory=list)
    glp_endpoint: str = "https://global.api.greenlake.hpe.com"
    com_endpoints: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings) -> Connection:
        for url in [settings.glp_endpoint, *settings.com_endpoints.values()]:
            if not url.startswith(("https://", "http://")):
                raise ConfigurationError(f"Endpoint '{url}' is not an http(s) URL.")
        return cls(
            token=settings.token,
            workspace_id=settings.workspace_id,
            regions=list(settings.regions),
            glp_endpoint=settings.glp_endpoint.rstrip('/'),
            com_endpoints={k: v.rstrip('/') for k, v in settings.com_endpoints.items()},
        )

    def validate_region(self, region: str) -> str:
        """Return the provisioned spelling of ``region`` or raise."""
        if not self.regions:
            raise NotConnectedError("No Compute Ops Management region is provisioned.")

        for provisioned in self.regions:
            if provisioned.lower() == (region or "").lower():
                if provisioned not in self.com_endpoints:
                    raise InvalidRegionError(region, self.regions)
                return provisioned

        raise InvalidRegionError(region, self.regions)

    def com_base_url(self, region: str) -> str:
        return self.com_endpoints[self.validate_region(region)]

    def require_token(self) -> str:
        if not self.token:
            raise NotConnectedError()
        return self.token

    def require_workspace(self) -> str:
        if not self.workspace_id:
            raise NotConnectedError("No current GreenLake workspace.")
        return self.workspace_id


# Global connection instance
_connection: Optional[Connection] = None


def get_connection() -> Connection:
    """Get the current connection, building it from settings on first use."""
    global _connection
    if _connection is None:
        _connection = Connection.from_settings(get_settings())
    return _connection


def set_connection(connection: Connection) -> None:
    """Install the connection produced by a connect step."""
    global _connection
    _connection = connection


def reset_connection() -> None:
    """Reset the global connection (for testing)."""
    global _connection
    _connection = None

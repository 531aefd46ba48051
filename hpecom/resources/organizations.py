"""GreenLake organizations.

Organizations live on the global GreenLake endpoint, so these commands take
no region. Joining and leaving always act on the current workspace.
"""

from typing import Any, Dict, List, Optional

from ..filters import build_uri, eq
from ..logging import get_logger
from ..models import OperationStatus, TypedResource, repackage
from ..uris import organization_workspaces_uri, organizations_uri
from .base import Lookup, Outcome, ResourceCommands

logger = get_logger(__name__)

TYPE_NAME = "HPEGreenLake.Organizations"


class Organizations(ResourceCommands):
    """Create, read and update organizations; join or leave them."""

    kind = "Organization"

    async def get(self, *, name: Optional[str] = None) -> List[TypedResource]:
        uri = build_uri(organizations_uri(), filter=eq("name", name) if name else None)
        return repackage(await self.get_items(uri), TYPE_NAME)

    async def _find(self, name: str) -> Lookup:
        return await self.lookup(name, organizations_uri())

    async def new(
        self,
        name: str,
        *,
        description: Optional[str] = None,
        associate_workspace: bool = True,
        whatif: bool = False,
    ) -> Outcome:
        """Create an organization, by default owned by the current workspace."""
        payload: Dict[str, Any] = {"name": name}
        if description is not None:
            payload["description"] = description
        if associate_workspace:
            payload["associatedWorkspace"] = {"id": self.web.connection.require_workspace()}

        existing, error = await self._find(name)
        if error is not None:
            return error
        if existing is not None:
            return OperationStatus.warning(name, "Organization already exists! No action needed.")

        return await self.send(
            name,
            organizations_uri(),
            method="POST",
            body=payload,
            whatif=whatif,
            success="Organization successfully created.",
            failure="Organization cannot be created!",
        )

    async def set(
        self,
        name: str,
        *,
        new_name: Optional[str] = None,
        description: Optional[str] = None,
        whatif: bool = False,
    ) -> Outcome:
        organization, error = await self._find(name)
        if error is not None:
            return error
        if organization is None:
            return OperationStatus.failed(name, "Organization cannot be found!")

        payload: Dict[str, Any] = {}
        if new_name is not None:
            payload["name"] = new_name
        if description is not None:
            payload["description"] = description
        if not payload:
            return OperationStatus.warning(name, "No change requested.")

        return await self.send(
            name,
            f"{organizations_uri()}/{organization['id']}",
            method="PATCH",
            body=payload,
            whatif=whatif,
            success="Organization successfully updated.",
            failure="Organization cannot be updated!",
        )

    async def join(self, name: str, *, whatif: bool = False) -> Outcome:
        """Add the current workspace to an organization."""
        workspace_id = self.web.connection.require_workspace()
        organization, error = await self._find(name)
        if error is not None:
            return error
        if organization is None:
            return OperationStatus.failed(name, "Organization cannot be found!")

        return await self.send(
            name,
            organization_workspaces_uri(organization["id"]),
            method="POST",
            body={"workspaceId": workspace_id},
            whatif=whatif,
            success="Workspace successfully joined the organization.",
            failure="Workspace cannot join the organization!",
        )

    async def leave(self, name: str, *, whatif: bool = False) -> Outcome:
        """Remove the current workspace from an organization."""
        workspace_id = self.web.connection.require_workspace()
        organization, error = await self._find(name)
        if error is not None:
            return error
        if organization is None:
            return OperationStatus.failed(name, "Organization cannot be found!")

        return await self.send(
            name,
            f"{organization_workspaces_uri(organization['id'])}/{workspace_id}",
            method="DELETE",
            whatif=whatif,
            success="Workspace successfully left the organization.",
            failure="Workspace cannot leave the organization!",
        )

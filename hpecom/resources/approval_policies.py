"""Compute Ops Management approval policies."""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..exceptions import ApiError, InvalidParameterError
from ..filters import build_uri, eq
from ..logging import get_logger
from ..models import OperationStatus, TypedResource, repackage
from ..uris import approval_policies_uri, groups_uri
from .base import Outcome, ResourceCommands

logger = get_logger(__name__)

TYPE_NAME = "HPEGreenLake.COM.ApprovalPolicies"

OPERATIONS = (
    "FIRMWARE_UPDATE",
    "POWER_OFF",
    "RESET",
    "IPMI",
    "ILO_SETTINGS",
    "EXTERNAL_STORAGE",
    "OS_INSTALL",
)


def _check_operations(operations: Iterable[str]) -> List[str]:
    checked = []
    for operation in operations:
        normalized = operation.upper().replace("-", "_")
        if normalized not in OPERATIONS:
            raise InvalidParameterError(
                f"Unknown approval operation '{operation}'.",
                "Valid operations: " + ", ".join(OPERATIONS),
            )
        checked.append(normalized)
    if not checked:
        raise InvalidParameterError("At least one approval operation is required.")
    return checked


def _check_approvers(approvers: Sequence[str], minimum_approvals: int) -> List[Dict[str, str]]:
    if not approvers:
        raise InvalidParameterError("At least one approver is required.")
    for email in approvers:
        if "@" not in email:
            raise InvalidParameterError(f"Approver '{email}' is not an e-mail address.")
    if not 1 <= minimum_approvals <= len(approvers):
        raise InvalidParameterError(
            f"Minimum approvals must be between 1 and {len(approvers)}, got {minimum_approvals}."
        )
    return [{"email": email} for email in approvers]


class ApprovalPolicies(ResourceCommands):
    """Create, read, update and delete approval policies."""

    kind = "Approval policy"

    async def get(self, region: str, *, name: Optional[str] = None) -> List[TypedResource]:
        self.validate_region(region)
        uri = build_uri(approval_policies_uri(), filter=eq("name", name) if name else None)
        return repackage(await self.get_items(uri, region), TYPE_NAME)

    async def _resolve_groups(
        self, name: str, region: str, groups: Iterable[str]
    ) -> Tuple[List[Dict[str, str]], Optional[OperationStatus]]:
        resolved = []
        for group in groups:
            try:
                found = await self.find_by(groups_uri(), "name", group, region)
            except ApiError as e:
                return [], self.lookup_failed(name, e, kind=f"Group '{group}'")
            if found is None:
                return [], OperationStatus.failed(name, f"Group '{group}' cannot be found in region '{region}'.")
            resolved.append({"id": found["id"]})
        return resolved, None

    async def new(
        self,
        region: str,
        name: str,
        approvers: Sequence[str],
        *,
        description: Optional[str] = None,
        minimum_approvals: int = 1,
        operations: Iterable[str] = ("FIRMWARE_UPDATE",),
        groups: Iterable[str] = (),
        whatif: bool = False,
    ) -> Outcome:
        """Create an approval policy."""
        self.validate_region(region)
        payload: Dict[str, Any] = {"name": name}
        if description is not None:
            payload["description"] = description
        payload["approvers"] = _check_approvers(approvers, minimum_approvals)
        payload["minApprovals"] = minimum_approvals
        payload["operations"] = _check_operations(operations)

        existing, error = await self.lookup(name, approval_policies_uri(), region)
        if error is not None:
            return error
        if existing is not None:
            return OperationStatus.warning(name, "Approval policy already exists! No action needed.")

        payload["groups"], error = await self._resolve_groups(name, region, groups)
        if error is not None:
            return error

        return await self.send(
            name,
            approval_policies_uri(),
            method="POST",
            region=region,
            body=payload,
            whatif=whatif,
            success="Approval policy successfully created.",
            failure="Approval policy cannot be created!",
        )

    async def set(
        self,
        region: str,
        name: str,
        *,
        new_name: Optional[str] = None,
        description: Optional[str] = None,
        approvers: Optional[Sequence[str]] = None,
        minimum_approvals: Optional[int] = None,
        operations: Optional[Iterable[str]] = None,
        groups: Optional[Iterable[str]] = None,
        whatif: bool = False,
    ) -> Outcome:
        """Update an approval policy; only the given fields are sent."""
        self.validate_region(region)

        policy, error = await self.lookup(name, approval_policies_uri(), region)
        if error is not None:
            return error
        if policy is None:
            return OperationStatus.failed(name, f"Approval policy cannot be found in region '{region}'.")

        payload: Dict[str, Any] = {}
        if new_name is not None:
            payload["name"] = new_name
        if description is not None:
            payload["description"] = description
        if approvers is not None or minimum_approvals is not None:
            current = [a.get("email") for a in policy.get("approvers", [])]
            effective = list(approvers) if approvers is not None else current
            required = minimum_approvals if minimum_approvals is not None else policy.get("minApprovals", 1)
            checked = _check_approvers(effective, required)
            if approvers is not None:
                payload["approvers"] = checked
            if minimum_approvals is not None:
                payload["minApprovals"] = minimum_approvals
        if operations is not None:
            payload["operations"] = _check_operations(operations)
        if groups is not None:
            payload["groups"], error = await self._resolve_groups(name, region, groups)
            if error is not None:
                return error

        if not payload:
            return OperationStatus.warning(name, "No change requested.")

        return await self.send(
            name,
            f"{approval_policies_uri()}/{policy['id']}",
            method="PATCH",
            region=region,
            body=payload,
            whatif=whatif,
            success="Approval policy successfully updated.",
            failure="Approval policy cannot be updated!",
        )

    async def remove(self, region: str, names: Iterable[str], *, whatif: bool = False) -> List[Outcome]:
        """Delete approval policies by name."""
        self.validate_region(region)
        results: List[Outcome] = []
        for name in names:
            policy, error = await self.lookup(name, approval_policies_uri(), region)
            if error is not None:
                results.append(error)
                continue
            if policy is None:
                results.append(
                    OperationStatus.warning(name, f"Approval policy cannot be found in region '{region}'.")
                )
                continue
            results.append(
                await self.send(
                    name,
                    f"{approval_policies_uri()}/{policy['id']}",
                    method="DELETE",
                    region=region,
                    whatif=whatif,
                    success="Approval policy successfully deleted.",
                    failure="Approval policy cannot be deleted!",
                )
            )
        return results

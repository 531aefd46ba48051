"""OneView, Synergy and Secure Gateway appliances attached to COM."""

from typing import Any, Dict, Iterable, List, Optional

from ..exceptions import ApiError, InvalidParameterError
from ..filters import build_uri, eq
from ..logging import get_logger
from ..models import OperationStatus, TypedResource, WhatIfRequest, repackage
from ..uris import activation_keys_uri, appliances_uri
from .base import Outcome, ResourceCommands

logger = get_logger(__name__)

TYPE_NAME = "HPEGreenLake.COM.Appliances"
ACTIVATION_KEY_TYPE_NAME = "HPEGreenLake.COM.Appliances.ActivationKey"

# Friendly type -> (applianceType, activation key targetDevice)
APPLIANCE_TYPES: Dict[str, tuple] = {
    "OneViewVM": ("VM", "OVE_APPLIANCE_VM"),
    "SynergyComposer": ("SYNERGY", "OVE_APPLIANCE_SYNERGY"),
    "SecureGateway": ("GATEWAY", "SECURE_GATEWAY"),
}

MAX_EXPIRATION_HOURS = 168


def _lookup_type(appliance_type: str) -> str:
    for friendly in APPLIANCE_TYPES:
        if friendly.lower() == appliance_type.lower():
            return friendly
    raise InvalidParameterError(
        f"Unknown appliance type '{appliance_type}'.",
        "Valid types: " + ", ".join(APPLIANCE_TYPES),
    )


def _friendly_type(api_type: Optional[str]) -> Optional[str]:
    for friendly, (value, _) in APPLIANCE_TYPES.items():
        if value == api_type:
            return friendly
    return api_type


def _matches(item: Dict[str, Any], name: str) -> bool:
    wanted = name.lower()
    return any(
        str(item.get(key) or "").lower() == wanted
        for key in ("name", "hostname", "ipAddress")
    )


class Appliances(ResourceCommands):
    """Appliance inventory and activation keys."""

    kind = "Appliance"

    async def get(
        self,
        region: str,
        *,
        name: Optional[str] = None,
        type: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[TypedResource]:
        """Appliances of ``region``, optionally narrowed by type and name.

        ``name`` matches the appliance name, hostname or IP address.
        """
        self.validate_region(region)
        type_filter = eq("applianceType", APPLIANCE_TYPES[_lookup_type(type)][0]) if type else None
        uri = build_uri(appliances_uri(), filter=type_filter, limit=limit)

        items = await self.get_items(uri, region)
        if name:
            items = [item for item in items if _matches(item, name)]
        for item in items:
            item["type"] = _friendly_type(item.get("applianceType"))
        return repackage(items, TYPE_NAME)

    async def new_activation_key(
        self,
        region: str,
        type: str,
        *,
        expiration_hours: int = 1,
        subscription_key: Optional[str] = None,
        whatif: bool = False,
    ) -> List[Any]:
        """Generate the key an appliance needs to connect to COM."""
        self.validate_region(region)
        friendly = _lookup_type(type)
        if not 1 <= expiration_hours <= MAX_EXPIRATION_HOURS:
            raise InvalidParameterError(
                f"Expiration must be between 1 and {MAX_EXPIRATION_HOURS} hours, got {expiration_hours}."
            )

        payload: Dict[str, Any] = {
            "targetDevice": APPLIANCE_TYPES[friendly][1],
            "expirationInHours": expiration_hours,
        }
        if subscription_key:
            payload["subscriptionKey"] = subscription_key

        result = await self.web.invoke(
            activation_keys_uri(), region=region, method="POST", body=payload, whatif=whatif
        )
        if isinstance(result, WhatIfRequest):
            return [result]
        logger.info("Activation key generated", region=region, target_device=payload["targetDevice"])
        return repackage(result, ACTIVATION_KEY_TYPE_NAME)

    async def remove(self, region: str, names: Iterable[str], *, whatif: bool = False) -> List[Outcome]:
        """Remove appliances identified by name, hostname or IP address."""
        self.validate_region(region)
        names = list(names)
        try:
            inventory = await self.get_items(appliances_uri(), region)
        except ApiError as e:
            return [self.lookup_failed(name, e) for name in names]

        results: List[Outcome] = []
        for name in names:
            appliance = next((item for item in inventory if _matches(item, name)), None)
            if appliance is None:
                results.append(OperationStatus.warning(name, f"Appliance cannot be found in region '{region}'."))
                continue
            results.append(
                await self.send(
                    name,
                    f"{appliances_uri()}/{appliance['id']}",
                    method="DELETE",
                    region=region,
                    whatif=whatif,
                    success="Appliance successfully removed.",
                    failure="Appliance cannot be removed!",
                )
            )
        return results

"""Alerts raised by servers managed in COM."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from ..exceptions import ResourceNotFoundError
from ..filters import TimeWindow, build_uri, newest_first, parse_timestamp, window_start
from ..logging import get_logger
from ..models import TypedResource, repackage
from ..uris import server_alerts_uri, servers_uri
from .base import ResourceCommands

logger = get_logger(__name__)

TYPE_NAME = "HPEGreenLake.COM.Servers.Alerts"

# Server fields tried in order when resolving a server
SERVER_KEYS = ("name", "host/hostname", "hardware/serialNumber")


class Alerts(ResourceCommands):
    """Server alert history."""

    kind = "Server"

    async def find_server(self, region: str, server: str) -> Dict[str, Any]:
        for key in SERVER_KEYS:
            found = await self.find_by(servers_uri(), key, server, region)
            if found is not None:
                return found
        raise ResourceNotFoundError("Server", server, region)

    async def get(
        self,
        region: str,
        server: str,
        *,
        window: TimeWindow = TimeWindow.ALL,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[TypedResource]:
        """Alerts of one server, newest first.

        The server may be given by name, hostname or serial number. The alerts
        endpoint has no date filter, so ``window`` is applied locally.
        """
        self.validate_region(region)
        found = await self.find_server(region, server)

        items = await self.get_items(build_uri(server_alerts_uri(found["id"]), limit=limit), region)

        start = window_start(window, now)
        if start is not None:
            items = [
                item for item in items
                if (parse_timestamp(item.get("createdAt")) or start) > start
            ]

        hardware = found.get("hardware") or {}
        for item in items:
            item["serverName"] = found.get("name")
            item["serialNumber"] = hardware.get("serialNumber")
            item["createdAt"] = parse_timestamp(item.get("createdAt")) or item.get("createdAt")

        items = newest_first(items)
        logger.debug("Alerts retrieved", region=region, server=found.get("name"), count=len(items))
        return repackage(items, TYPE_NAME)

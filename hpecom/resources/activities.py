"""Compute Ops Management activities."""

from datetime import datetime
from typing import Dict, List, Optional

from ..exceptions import InvalidParameterError
from ..filters import TimeWindow, and_, build_uri, contains, eq, gt, iso_z, newest_first, window_start
from ..logging import get_logger
from ..models import TypedResource, repackage
from ..uris import activities_uri
from .base import ResourceCommands

logger = get_logger(__name__)

TYPE_NAME = "HPEGreenLake.COM.Activities"

# Friendly category name -> activity source type
CATEGORIES: Dict[str, str] = {
    "Server": "Server",
    "Group": "Group",
    "Firmware": "Firmware",
    "Report": "Report",
    "UserPreference": "User-preference",
    "Setting": "Setting",
    "Filter": "Filter",
    "Schedule": "Schedule",
    "Appliance": "Appliance",
    "ApprovalPolicy": "Approval-policy",
    "ApprovalRequest": "Approval-request",
    "ExternalService": "External-service",
    "OneView": "Oneview-appliance",
    "Job": "Job",
}

_SOURCE_TYPES = {v.lower(): k for k, v in CATEGORIES.items()}


def category_source_type(category: str) -> str:
    """Map a friendly category name to its activity source type."""
    for friendly, source_type in CATEGORIES.items():
        if friendly.lower() == category.lower():
            return source_type
    raise InvalidParameterError(
        f"Unknown activity category '{category}'.",
        "Valid categories: " + ", ".join(CATEGORIES),
    )


def category_name(source_type: Optional[str]) -> Optional[str]:
    """Reverse of :func:`category_source_type`; unknown types pass through."""
    if not source_type:
        return None
    return _SOURCE_TYPES.get(source_type.lower(), source_type)


class Activities(ResourceCommands):
    """Read the activity log of a COM region."""

    kind = "Activity"

    async def get(
        self,
        region: str,
        *,
        source_name: Optional[str] = None,
        category: Optional[str] = None,
        window: TimeWindow = TimeWindow.LAST_7_DAYS,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[TypedResource]:
        """Activities of ``region``, newest first.

        By default only the last seven days are returned; ``window`` widens
        the range and ``TimeWindow.ALL`` removes the date filter.
        """
        self.validate_region(region)

        start = window_start(window, now)
        clauses = [
            gt("createdAt", iso_z(start)) if start else None,
            eq("source/type", category_source_type(category)) if category else None,
            contains("source/displayName", source_name) if source_name else None,
        ]
        uri = build_uri(activities_uri(), filter=and_(*clauses), limit=limit)

        items = await self.get_items(uri, region)
        for item in items:
            source = item.get("source") or {}
            item["sourceName"] = source.get("displayName")
            item["category"] = category_name(source.get("type"))

        items = newest_first(items)
        logger.debug("Activities retrieved", region=region, count=len(items))
        return repackage(items, TYPE_NAME)

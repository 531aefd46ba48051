"""Compute Ops Management schedules."""

import re
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from ..exceptions import InvalidParameterError
from ..filters import build_uri, eq, iso_z, parse_timestamp, utcnow
from ..logging import get_logger
from ..models import OperationStatus, TypedResource, repackage
from ..uris import schedule_history_uri, schedules_uri
from .base import Outcome, ResourceCommands

logger = get_logger(__name__)

TYPE_NAME = "HPEGreenLake.COM.Schedules"
HISTORY_TYPE_NAME = "HPEGreenLake.COM.Schedules.History"

# ISO-8601 durations such as P1D, PT12H, P1W or P1DT6H
_DURATION = re.compile(r"^P(?!$)(\d+Y)?(\d+M)?(\d+W)?(\d+D)?(T(?=\d)(\d+H)?(\d+M)?(\d+S)?)?$")


def check_interval(interval: str) -> str:
    if not _DURATION.match(interval.upper()):
        raise InvalidParameterError(
            f"Interval '{interval}' is not an ISO-8601 duration.",
            "Examples: P1D (daily), P1W (weekly), PT12H (every 12 hours).",
        )
    return interval.upper()


class Schedules(ResourceCommands):
    """Read, update and delete schedules."""

    kind = "Schedule"

    async def get(
        self,
        region: str,
        *,
        name: Optional[str] = None,
        show_history: bool = False,
        limit: Optional[int] = None,
    ) -> List[TypedResource]:
        """Schedules of ``region``, or the run history of one schedule."""
        self.validate_region(region)
        if show_history and not name:
            raise InvalidParameterError("A schedule name is required to show its history.")

        uri = build_uri(
            schedules_uri(),
            filter=eq("name", name) if name else None,
            limit=None if show_history else limit,
        )
        items = await self.get_items(uri, region)

        if show_history:
            if not items:
                return []
            history = await self.get_items(build_uri(schedule_history_uri(items[0]["id"]), limit=limit), region)
            return repackage(history, HISTORY_TYPE_NAME)

        for item in items:
            item["associatedResourceName"] = (item.get("associatedResource") or {}).get("name")
            item["lastRunStatus"] = (item.get("lastRun") or {}).get("status")
        return repackage(items, TYPE_NAME)

    async def set(
        self,
        region: str,
        name: str,
        *,
        new_name: Optional[str] = None,
        description: Optional[str] = None,
        schedule_time: Optional[datetime] = None,
        interval: Optional[str] = None,
        whatif: bool = False,
        now: Optional[datetime] = None,
    ) -> Outcome:
        """Rename, describe or reschedule a schedule.

        An ``interval`` makes the schedule recurring. Whatever is not given
        (start time or interval) is carried over from the current schedule.
        """
        self.validate_region(region)
        if schedule_time is not None and parse_timestamp(schedule_time) <= (now or utcnow()):
            raise InvalidParameterError("The schedule time must be in the future.")
        if interval is not None:
            interval = check_interval(interval)

        schedule, error = await self.lookup(name, schedules_uri(), region)
        if error is not None:
            return error
        if schedule is None:
            return OperationStatus.failed(name, f"Schedule cannot be found in region '{region}'.")

        payload: Dict[str, Any] = {}
        if new_name is not None:
            payload["name"] = new_name
        if description is not None:
            payload["description"] = description
        if schedule_time is not None or interval is not None:
            current = schedule.get("schedule") or {}
            effective_interval = interval or current.get("interval")
            timing: Dict[str, Any] = {
                "type": "RECURRING" if effective_interval else "ONCE",
                "startAt": iso_z(schedule_time) if schedule_time is not None else current.get("startAt"),
            }
            if effective_interval:
                timing["interval"] = effective_interval
            payload["schedule"] = timing

        if not payload:
            return OperationStatus.warning(name, "No change requested.")

        return await self.send(
            name,
            f"{schedules_uri()}/{schedule['id']}",
            method="PATCH",
            region=region,
            body=payload,
            whatif=whatif,
            success="Schedule successfully updated.",
            failure="Schedule cannot be updated!",
        )

    async def remove(self, region: str, names: Iterable[str], *, whatif: bool = False) -> List[Outcome]:
        """Delete schedules by name."""
        self.validate_region(region)
        results: List[Outcome] = []
        for name in names:
            schedule, error = await self.lookup(name, schedules_uri(), region)
            if error is not None:
                results.append(error)
                continue
            if schedule is None:
                results.append(OperationStatus.warning(name, f"Schedule cannot be found in region '{region}'."))
                continue
            results.append(
                await self.send(
                    name,
                    f"{schedules_uri()}/{schedule['id']}",
                    method="DELETE",
                    region=region,
                    whatif=whatif,
                    success="Schedule successfully deleted.",
                    failure="Schedule cannot be deleted!",
                )
            )
        return results

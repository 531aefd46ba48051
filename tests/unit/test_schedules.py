"""Unit tests for schedule commands."""

from datetime import datetime, timezone

import pytest

from hpecom.exceptions import ApiError, InvalidParameterError
from hpecom.resources import Schedules
from hpecom.resources.schedules import check_interval

NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)
BASE = "/compute-ops-mgmt/v1beta2/schedules"

SCHEDULE = {
    "id": "s1",
    "name": "Nightly firmware",
    "associatedResource": {"name": "Production", "type": "compute-ops-mgmt/group"},
    "lastRun": {"status": "SUCCESS"},
    "schedule": {"type": "ONCE", "startAt": "2030-01-01T00:00:00Z"},
}


class TestGet:
    """Test cases for Schedules.get."""

    @pytest.mark.asyncio
    async def test_adds_convenience_fields(self, web, sent):
        web.invoke.return_value = [dict(SCHEDULE)]

        schedules = await Schedules(web).get("eu-central", name="Nightly firmware", limit=5)

        assert sent() == [("GET", f"{BASE}?filter=name eq 'Nightly firmware'&limit=5", None)]
        assert schedules[0].associatedResourceName == "Production"
        assert schedules[0].lastRunStatus == "SUCCESS"
        assert schedules[0].type_name == "HPEGreenLake.COM.Schedules"

    @pytest.mark.asyncio
    async def test_history(self, web, sent):
        web.invoke.side_effect = [[SCHEDULE], [{"id": "h1"}, {"id": "h2"}]]

        history = await Schedules(web).get("eu-central", name="Nightly firmware", show_history=True, limit=2)

        assert sent()[1] == ("GET", f"{BASE}/s1/history?limit=2", None)
        assert [h.id for h in history] == ["h1", "h2"]
        assert history[0].type_name == "HPEGreenLake.COM.Schedules.History"

    @pytest.mark.asyncio
    async def test_history_of_unknown_schedule(self, web, sent):
        assert await Schedules(web).get("eu-central", name="Ghost", show_history=True) == []
        assert len(sent()) == 1

    @pytest.mark.asyncio
    async def test_history_requires_name(self, web):
        with pytest.raises(InvalidParameterError, match="schedule name is required"):
            await Schedules(web).get("eu-central", show_history=True)


class TestSet:
    """Test cases for Schedules.set."""

    @pytest.mark.asyncio
    async def test_interval_keeps_start_time(self, web, sent):
        web.invoke.side_effect = [[SCHEDULE], {}]

        status = await Schedules(web).set("eu-central", "Nightly firmware", interval="p1d", now=NOW)

        assert status.is_complete
        assert sent()[-1] == ("PATCH", f"{BASE}/s1", {
            "schedule": {"type": "RECURRING", "startAt": "2030-01-01T00:00:00Z", "interval": "P1D"},
        })

    @pytest.mark.asyncio
    async def test_new_start_time(self, web, sent):
        web.invoke.side_effect = [[SCHEDULE], {}]

        await Schedules(web).set(
            "eu-central",
            "Nightly firmware",
            new_name="Weekend firmware",
            schedule_time=datetime(2030, 6, 1, 8, 0, tzinfo=timezone.utc),
            now=NOW,
        )

        assert sent()[-1][2] == {
            "name": "Weekend firmware",
            "schedule": {"type": "ONCE", "startAt": "2030-06-01T08:00:00Z"},
        }

    @pytest.mark.asyncio
    async def test_start_time_in_the_past(self, web):
        with pytest.raises(InvalidParameterError, match="must be in the future"):
            await Schedules(web).set("eu-central", "Nightly firmware", schedule_time=datetime(2020, 1, 1), now=NOW)

        web.invoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_schedule(self, web):
        status = await Schedules(web).set("eu-central", "Ghost", description="x")

        assert status.status == "Failed"

    @pytest.mark.asyncio
    async def test_lookup_error_is_reported(self, web):
        web.invoke.side_effect = ApiError(503, "unavailable")

        status = await Schedules(web).set("eu-central", "Nightly firmware", description="x")

        assert status.status == "Failed"
        assert status.exception == "HTTP 503: unavailable"


class TestRemove:
    """Test cases for Schedules.remove."""

    @pytest.mark.asyncio
    async def test_remove_whatif(self, web, sent):
        web.invoke.side_effect = [[SCHEDULE], "preview"]

        results = await Schedules(web).remove("eu-central", ["Nightly firmware"], whatif=True)

        assert results == ["preview"]
        assert web.invoke.call_args.kwargs["whatif"] is True
        assert sent()[-1] == ("DELETE", f"{BASE}/s1", None)

    @pytest.mark.asyncio
    async def test_lookup_error_is_reported_per_schedule(self, web):
        web.invoke.side_effect = [[SCHEDULE], None, ApiError(500, "boom")]

        results = await Schedules(web).remove("eu-central", ["Nightly firmware", "Weekly reboot"])

        assert [r.status for r in results] == ["Complete", "Failed"]
        assert results[1].name == "Weekly reboot"
        assert results[1].details == "Schedule cannot be found!"
        assert results[1].exception == "HTTP 500: boom"

    @pytest.mark.asyncio
    async def test_already_deleted_is_a_warning(self, web):
        web.invoke.side_effect = [[SCHEDULE], ApiError(404, "Not found")]

        results = await Schedules(web).remove("eu-central", ["Nightly firmware"])

        assert results[0].status == "Warning"


@pytest.mark.parametrize("interval", ["P1D", "pt12h", "P1W", "P1DT6H", "PT30M"])
def test_valid_intervals(interval):
    assert check_interval(interval) == interval.upper()


@pytest.mark.parametrize("interval", ["P", "PT", "1D", "daily", "P1DT"])
def test_invalid_intervals(interval):
    with pytest.raises(InvalidParameterError):
        check_interval(interval)

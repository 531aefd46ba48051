"""Main CLI application for hpecom."""

import asyncio
import json
from datetime import datetime
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..exceptions import HPEComError
from ..filters import TimeWindow
from ..logging import get_logger, set_level
from ..models import OperationStatus, TypedResource, WhatIfRequest
from ..resources import (
    Activities,
    Alerts,
    Appliances,
    ApprovalPolicies,
    Organizations,
    Schedules,
)

app = typer.Typer(
    name="hpecom",
    help="Command wrappers for HPE Compute Ops Management and GreenLake",
    add_completion=False
)
activity_app = typer.Typer(help="COM activities")
approval_app = typer.Typer(help="COM approval policies")
appliance_app = typer.Typer(help="COM appliances")
alert_app = typer.Typer(help="COM server alerts")
schedule_app = typer.Typer(help="COM schedules")
organization_app = typer.Typer(help="GreenLake organizations")

app.add_typer(activity_app, name="activity")
app.add_typer(approval_app, name="approval-policy")
app.add_typer(appliance_app, name="appliance")
app.add_typer(alert_app, name="alert")
app.add_typer(schedule_app, name="schedule")
app.add_typer(organization_app, name="organization")

console = Console()
logger = get_logger(__name__)

REGION = typer.Option(..., "--region", "-r", help="COM region, e.g. eu-central")
WHATIF = typer.Option(False, "--whatif", help="Show the request instead of sending it")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """HPE Compute Ops Management and GreenLake commands."""
    if verbose:
        set_level("DEBUG")


def _run(coro: Any) -> Any:
    """Run a command coroutine, turning library errors into exit code 1."""
    try:
        return asyncio.run(coro)
    except HPEComError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        logger.error("Command failed", error=e.message)
        raise typer.Exit(1)


def _print(results: Any) -> None:
    """Render command output: resources as JSON, statuses as a table."""
    if not isinstance(results, list):
        results = [results]

    statuses = [r for r in results if isinstance(r, OperationStatus)]
    for result in results:
        if isinstance(result, WhatIfRequest):
            console.print("[yellow]WhatIf:[/yellow] would send", style="bold")
            console.print(result.describe(), markup=False, highlight=False, soft_wrap=True)

    resources = [r.to_dict() for r in results if isinstance(r, TypedResource)]
    if resources:
        console.print_json(json.dumps(resources, default=_json_default))
    elif not statuses and not any(isinstance(r, WhatIfRequest) for r in results):
        console.print("[dim]No result.[/dim]")

    if statuses:
        table = Table(title=OperationStatus.type_name)
        table.add_column("Name", style="cyan")
        table.add_column("Status")
        table.add_column("Details", style="white")
        table.add_column("Exception", style="red")
        for status in statuses:
            color = {"Complete": "green", "Warning": "yellow", "Failed": "red"}[status.status]
            table.add_row(
                status.name,
                f"[{color}]{status.status}[/{color}]",
                status.details or "",
                status.exception or "",
            )
        console.print(table)

    if any(s.status == "Failed" for s in statuses):
        raise typer.Exit(1)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _split(values: Optional[List[str]]) -> Optional[List[str]]:
    """Accept both repeated options and comma separated values."""
    if not values:
        return None
    return [v.strip() for value in values for v in value.split(",") if v.strip()]


def _window(last_month: bool, last_three_months: bool, last_six_months: bool, show_all: bool,
            default: TimeWindow) -> TimeWindow:
    selected = [
        window for flag, window in (
            (last_month, TimeWindow.LAST_MONTH),
            (last_three_months, TimeWindow.LAST_THREE_MONTHS),
            (last_six_months, TimeWindow.LAST_SIX_MONTHS),
            (show_all, TimeWindow.ALL),
        ) if flag
    ]
    if len(selected) > 1:
        raise typer.BadParameter("Choose only one of --last-month, --last-three-months, --last-six-months, --all")
    return selected[0] if selected else default


# Activities

@activity_app.command("get")
def activity_get(
    region: str = REGION,
    source_name: Optional[str] = typer.Option(None, "--source-name", "-s", help="Resource display name"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Activity category, e.g. Server"),
    last_month: bool = typer.Option(False, "--last-month", help="Show the last 30 days"),
    last_three_months: bool = typer.Option(False, "--last-three-months", help="Show the last 90 days"),
    last_six_months: bool = typer.Option(False, "--last-six-months", help="Show the last 180 days"),
    show_all: bool = typer.Option(False, "--all", help="Do not filter by date"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Maximum number of activities"),
) -> None:
    """Get activities (last 7 days by default)."""
    window = _window(last_month, last_three_months, last_six_months, show_all, TimeWindow.LAST_7_DAYS)
    _print(_run(Activities().get(
        region, source_name=source_name, category=category, window=window, limit=limit
    )))


# Approval policies

@approval_app.command("get")
def approval_get(
    region: str = REGION,
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Policy name"),
) -> None:
    """Get approval policies."""
    _print(_run(ApprovalPolicies().get(region, name=name)))


@approval_app.command("new")
def approval_new(
    name: str = typer.Argument(..., help="Policy name"),
    region: str = REGION,
    approvers: List[str] = typer.Option(..., "--approver", "-a", help="Approver e-mail (repeatable)"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    minimum_approvals: int = typer.Option(1, "--minimum-approvals", "-m"),
    operations: List[str] = typer.Option(["FIRMWARE_UPDATE"], "--operation", "-o", help="Operation (repeatable)"),
    groups: Optional[List[str]] = typer.Option(None, "--group", "-g", help="Group name (repeatable)"),
    whatif: bool = WHATIF,
) -> None:
    """Create an approval policy."""
    _print(_run(ApprovalPolicies().new(
        region,
        name,
        _split(approvers),
        description=description,
        minimum_approvals=minimum_approvals,
        operations=_split(operations),
        groups=_split(groups) or [],
        whatif=whatif,
    )))


@approval_app.command("set")
def approval_set(
    name: str = typer.Argument(..., help="Policy name"),
    region: str = REGION,
    new_name: Optional[str] = typer.Option(None, "--new-name"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    approvers: Optional[List[str]] = typer.Option(None, "--approver", "-a"),
    minimum_approvals: Optional[int] = typer.Option(None, "--minimum-approvals", "-m"),
    operations: Optional[List[str]] = typer.Option(None, "--operation", "-o"),
    groups: Optional[List[str]] = typer.Option(None, "--group", "-g"),
    whatif: bool = WHATIF,
) -> None:
    """Update an approval policy."""
    _print(_run(ApprovalPolicies().set(
        region,
        name,
        new_name=new_name,
        description=description,
        approvers=_split(approvers),
        minimum_approvals=minimum_approvals,
        operations=_split(operations),
        groups=_split(groups),
        whatif=whatif,
    )))


@approval_app.command("remove")
def approval_remove(
    names: List[str] = typer.Argument(..., help="Policy names"),
    region: str = REGION,
    whatif: bool = WHATIF,
) -> None:
    """Delete approval policies."""
    _print(_run(ApprovalPolicies().remove(region, names, whatif=whatif)))


# Appliances

@appliance_app.command("get")
def appliance_get(
    region: str = REGION,
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Name, hostname or IP address"),
    type: Optional[str] = typer.Option(None, "--type", "-t", help="OneViewVM, SynergyComposer or SecureGateway"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l"),
) -> None:
    """Get appliances."""
    _print(_run(Appliances().get(region, name=name, type=type, limit=limit)))


@appliance_app.command("new-activation-key")
def appliance_new_activation_key(
    type: str = typer.Argument(..., help="OneViewVM, SynergyComposer or SecureGateway"),
    region: str = REGION,
    expiration_hours: int = typer.Option(1, "--expiration-hours", "-e"),
    subscription_key: Optional[str] = typer.Option(None, "--subscription-key"),
    whatif: bool = WHATIF,
) -> None:
    """Generate an appliance activation key."""
    _print(_run(Appliances().new_activation_key(
        region, type, expiration_hours=expiration_hours, subscription_key=subscription_key, whatif=whatif
    )))


@appliance_app.command("remove")
def appliance_remove(
    names: List[str] = typer.Argument(..., help="Names, hostnames or IP addresses"),
    region: str = REGION,
    whatif: bool = WHATIF,
) -> None:
    """Remove appliances."""
    _print(_run(Appliances().remove(region, names, whatif=whatif)))


# Alerts

@alert_app.command("get")
def alert_get(
    server: str = typer.Argument(..., help="Server name, hostname or serial number"),
    region: str = REGION,
    last_month: bool = typer.Option(False, "--last-month"),
    last_three_months: bool = typer.Option(False, "--last-three-months"),
    last_six_months: bool = typer.Option(False, "--last-six-months"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l"),
) -> None:
    """Get the alerts of a server."""
    window = _window(last_month, last_three_months, last_six_months, False, TimeWindow.ALL)
    _print(_run(Alerts().get(region, server, window=window, limit=limit)))


# Schedules

@schedule_app.command("get")
def schedule_get(
    region: str = REGION,
    name: Optional[str] = typer.Option(None, "--name", "-n"),
    show_history: bool = typer.Option(False, "--history", help="Show the run history of --name"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l"),
) -> None:
    """Get schedules."""
    _print(_run(Schedules().get(region, name=name, show_history=show_history, limit=limit)))


@schedule_app.command("set")
def schedule_set(
    name: str = typer.Argument(...),
    region: str = REGION,
    new_name: Optional[str] = typer.Option(None, "--new-name"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    schedule_time: Optional[datetime] = typer.Option(None, "--schedule-time", help="New start time (UTC)"),
    interval: Optional[str] = typer.Option(None, "--interval", "-i", help="ISO-8601 duration, e.g. P1D"),
    whatif: bool = WHATIF,
) -> None:
    """Update a schedule."""
    _print(_run(Schedules().set(
        region,
        name,
        new_name=new_name,
        description=description,
        schedule_time=schedule_time,
        interval=interval,
        whatif=whatif,
    )))


@schedule_app.command("remove")
def schedule_remove(
    names: List[str] = typer.Argument(...),
    region: str = REGION,
    whatif: bool = WHATIF,
) -> None:
    """Delete schedules."""
    _print(_run(Schedules().remove(region, names, whatif=whatif)))


# Organizations

@organization_app.command("get")
def organization_get(
    name: Optional[str] = typer.Option(None, "--name", "-n"),
) -> None:
    """Get organizations."""
    _print(_run(Organizations().get(name=name)))


@organization_app.command("new")
def organization_new(
    name: str = typer.Argument(...),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    associate_workspace: bool = typer.Option(
        True, "--associate-workspace/--no-associate-workspace",
        help="Make the current workspace the organization owner"
    ),
    whatif: bool = WHATIF,
) -> None:
    """Create an organization."""
    _print(_run(Organizations().new(
        name, description=description, associate_workspace=associate_workspace, whatif=whatif
    )))


@organization_app.command("set")
def organization_set(
    name: str = typer.Argument(...),
    new_name: Optional[str] = typer.Option(None, "--new-name"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    whatif: bool = WHATIF,
) -> None:
    """Update an organization."""
    _print(_run(Organizations().set(name, new_name=new_name, description=description, whatif=whatif)))


@organization_app.command("join")
def organization_join(
    name: str = typer.Argument(...),
    whatif: bool = WHATIF,
) -> None:
    """Join an organization with the current workspace."""
    _print(_run(Organizations().join(name, whatif=whatif)))


@organization_app.command("leave")
def organization_leave(
    name: str = typer.Argument(...),
    whatif: bool = WHATIF,
) -> None:
    """Leave an organization with the current workspace."""
    _print(_run(Organizations().leave(name, whatif=whatif)))


if __name__ == "__main__":
    app()

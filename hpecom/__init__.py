"""
hpecom: command wrappers for HPE Compute Ops Management and GreenLake

hpecom turns friendly arguments into REST calls against the COM and
GreenLake APIs:
- Activities, alerts, appliances, approval policies and schedules (COM)
- Organizations (GreenLake)

Usage:
    from hpecom import Activities

    activities = await Activities().get("eu-central", category="Server")

    # Or use CLI:
    $ hpecom activity get --region eu-central --category Server
"""

__version__ = "1.0.0"

# Core functionality
from .config import get_settings
from .logging import get_logger
from .models import OperationStatus, TypedResource, WhatIfRequest
from .resources import (
    Activities,
    Alerts,
    Appliances,
    ApprovalPolicies,
    Organizations,
    Schedules,
)
from .session import Connection, get_connection, set_connection
from .web import ComWebRequest

__all__ = [
    "Activities",
    "Alerts",
    "Appliances",
    "ApprovalPolicies",
    "ComWebRequest",
    "Connection",
    "OperationStatus",
    "Organizations",
    "Schedules",
    "TypedResource",
    "WhatIfRequest",
    "get_connection",
    "get_logger",
    "get_settings",
    "set_connection",
    "__version__",
]

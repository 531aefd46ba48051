"""Resource commands, one module per REST resource category."""

from .activities import Activities
from .alerts import Alerts
from .appliances import Appliances
from .approval_policies import ApprovalPolicies
from .organizations import Organizations
from .schedules import Schedules

__all__ = [
    "Activities",
    "Alerts",
    "Appliances",
    "ApprovalPolicies",
    "Organizations",
    "Schedules",
]

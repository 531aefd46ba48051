"""Data models for hpecom."""

from .resources import TypedResource, repackage
from .status import OperationStatus, Status, WhatIfRequest

__all__ = [
    "TypedResource",
    "repackage",
    "OperationStatus",
    "Status",
    "WhatIfRequest",
]

"""Result objects for mutating commands."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Literal, Optional

from dataclasses_json import DataClassJsonMixin, LetterCase, config

# Type aliases
Status = Literal['Complete', 'Failed', 'Warning']


@dataclass
class OperationStatus(DataClassJsonMixin):
    """Outcome of one remote operation (Name/Status/Details/Exception)."""

    type_name: ClassVar[str] = "HPEGreenLake.COM.objStatus.NSDE"

    name: str = field(metadata=config(letter_case=LetterCase.PASCAL))
    status: Status = field(metadata=config(letter_case=LetterCase.PASCAL))
    details: Optional[str] = field(default=None, metadata=config(letter_case=LetterCase.PASCAL))
    exception: Optional[str] = field(default=None, metadata=config(letter_case=LetterCase.PASCAL))

    def __post_init__(self) -> None:
        if self.status not in ('Complete', 'Failed', 'Warning'):
            raise ValueError(f"Invalid status: {self.status}")

    @classmethod
    def complete(cls, name: str, details: str) -> OperationStatus:
        return cls(name=name, status='Complete', details=details)

    @classmethod
    def warning(cls, name: str, details: str) -> OperationStatus:
        return cls(name=name, status='Warning', details=details)

    @classmethod
    def failed(cls, name: str, details: str, exception: Optional[BaseException] = None) -> OperationStatus:
        return cls(
            name=name,
            status='Failed',
            details=details,
            exception=str(exception) if exception is not None else None,
        )

    @property
    def is_complete(self) -> bool:
        return self.status == 'Complete'


@dataclass
class WhatIfRequest(DataClassJsonMixin):
    """A request that would have been sent without WhatIf."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Any] = None

    def describe(self) -> str:
        """Human readable rendering used by the CLI."""
        lines: List[str] = [f"{self.method} {self.url}"]
        lines.extend(f"{k}: {v}" for k, v in self.headers.items())
        if self.body is not None:
            lines.append(json.dumps(self.body, indent=2, sort_keys=True, default=str))
        return "\n".join(lines)

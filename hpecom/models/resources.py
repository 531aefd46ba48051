"""Typed wrappers around JSON objects returned by the API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from dataclasses_json import DataClassJsonMixin


@dataclass
class TypedResource(DataClassJsonMixin):
    """A JSON object tagged with a pseudo-type name for formatting."""

    type_name: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.type_name:
            raise ValueError("Type name cannot be empty")

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not dataclass fields
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self.__dict__["data"][name]
        except KeyError:
            raise AttributeError(name) from None

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    @property
    def id(self) -> Optional[str]:
        return self.data.get("id")

    @property
    def name(self) -> Optional[str]:
        return self.data.get("name")

    def to_dict(self, encode_json: bool = False) -> Dict[str, Any]:  # type: ignore[override]
        """Plain JSON view of the wrapped object."""
        return dict(self.data)


def repackage(
    items: Union[None, Dict[str, Any], Iterable[Dict[str, Any]]],
    type_name: str,
) -> List[TypedResource]:
    """Tag every JSON object in ``items`` with ``type_name``."""
    if items is None:
        return []
    if isinstance(items, dict):
        items = [items]
    return [TypedResource(type_name=type_name, data=dict(item)) for item in items]

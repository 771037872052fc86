from dataclasses import dataclass, fields
from typing import Any, Dict, Type, TypeVar

T = TypeVar("T", bound="StaticRecord")


@dataclass(frozen=True)
class StaticRecord:
    """Base for immutable records loaded from the packaged JSON data."""

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Build a record, ignoring keys the record does not declare."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

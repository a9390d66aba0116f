from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


def go_name(name: str) -> str:
    """Capitalize the first letter so the identifier is exported in Go."""
    return name[:1].upper() + name[1:]


def flatten_name(prefix: str, name: str) -> str:
    """Join a parent's flattened name and a child name with an underscore."""
    if not prefix:
        return go_name(name)
    return f"{prefix}_{go_name(name)}"


@dataclass
class GoField:
    name: str
    proto_name: str
    proto_type: str
    number: int
    attribute: str
    go_type: str
    element_type: str
    is_repeated: bool = False

    @property
    def attribute_code(self) -> str:
        return self.attribute[:3]


@dataclass
class GoMessage:
    name: str
    proto_name: str
    stream: bool
    fields: List[GoField] = field(default_factory=list)

    @property
    def repeated_fields(self) -> List[GoField]:
        return [f for f in self.fields if f.is_repeated]

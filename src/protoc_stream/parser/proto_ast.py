"""AST node definitions for schema files."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

REPEATED = "repeated"
REQUIRED = "required"
OPTIONAL = "optional"

FIELD_ATTRIBUTES = (REPEATED, REQUIRED, OPTIONAL)


@dataclass(frozen=True)
class ProtoField:
    """A field declaration: attribute Type name = number;"""

    type_name: str
    field_name: str
    field_number: int
    attribute: str
    line: int = 0
    col: int = 0

    @property
    def is_repeated(self) -> bool:
        return self.attribute == REPEATED


@dataclass(frozen=True)
class ProtoMessage:
    """A message definition, possibly containing nested messages."""

    name: str
    fields: Tuple[ProtoField, ...] = ()
    nested_messages: Tuple[ProtoMessage, ...] = ()


@dataclass(frozen=True)
class ProtoFile:
    """Top-level parsed representation of a schema file."""

    package: str = ""
    messages: Tuple[ProtoMessage, ...] = ()

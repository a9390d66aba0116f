"""Transform proto AST nodes into the Go render model."""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping

from protoc_stream.models import GoField, GoMessage, flatten_name

from .proto_ast import ProtoField, ProtoFile, ProtoMessage

# Schema scalar type -> Go type. Any type not in this table is a message reference.
GO_TYPE_MAP: Mapping[str, str] = MappingProxyType({
    "string": "string",
    "bytes": "[]byte",
    "int32": "int32",
    "uint32": "uint32",
    "int64": "int64",
    "uint64": "uint64",
    "bool": "bool",
})


def go_element_type(type_name: str, prefix: str, repeated: bool) -> str:
    """Render the Go type of a single value of a field.

    Scalars are pointers for single-valued fields so that an absent value
    can be represented, unless the Go type is already a slice. Message
    references are always pointers to the flattened name under ``prefix``;
    whether that message exists is not checked.
    """
    go_type = GO_TYPE_MAP.get(type_name)
    if go_type is not None:
        if repeated or go_type.startswith("[]"):
            return go_type
        return "*" + go_type
    return "*" + flatten_name(prefix, type_name)


def _transform_field(node: ProtoField, prefix: str, stream: bool) -> GoField:
    element = go_element_type(node.type_name, prefix, node.is_repeated)
    if not node.is_repeated:
        go_type = element
    elif stream:
        go_type = "chan " + element
    else:
        go_type = "[]" + element

    return GoField(
        name=flatten_name("", node.field_name),
        proto_name=node.field_name,
        proto_type=node.type_name,
        number=node.field_number,
        attribute=node.attribute,
        go_type=go_type,
        element_type=element,
        is_repeated=node.is_repeated,
    )


def transform_proto(ast: ProtoFile) -> List[GoMessage]:
    """Transform a ProtoFile AST into a flat list of GoMessage objects.

    Messages appear depth-first in declaration order: each message is
    followed by its nested messages. Only top-level messages are
    streaming types.
    """
    result: List[GoMessage] = []
    for msg_node in ast.messages:
        result.extend(_transform_message(msg_node, prefix="", stream=True))
    return result


def _transform_message(
    node: ProtoMessage,
    prefix: str,
    stream: bool,
) -> List[GoMessage]:
    name = flatten_name(prefix, node.name)
    msg = GoMessage(
        name=name,
        proto_name=node.name,
        stream=stream,
        fields=[_transform_field(f, name, stream) for f in node.fields],
    )

    result = [msg]
    for nested_node in node.nested_messages:
        result.extend(
            _transform_message(nested_node, prefix=name, stream=False)
        )
    return result

import pytest

from protoc_stream.models import flatten_name, go_name
from protoc_stream.parser.proto_parser import parse_proto_text
from protoc_stream.parser.proto_transform import GO_TYPE_MAP, go_element_type, transform_proto


NESTED_PROTO = """\
message outer {
    repeated inner items = 1;
    message inner {
        optional string label = 1;
        message leaf {
            repeated int32 values = 1;
        }
    }
    message other {
    }
}

message Second {
}
"""


class TestNaming:
    def test_go_name_capitalizes_first_letter_only(self):
        assert go_name("order_id") == "Order_id"
        assert go_name("x") == "X"
        assert go_name("URL") == "URL"

    def test_flatten_name(self):
        assert flatten_name("", "point") == "Point"
        assert flatten_name("Outer", "inner") == "Outer_Inner"


class TestTypeMapping:
    @pytest.mark.parametrize(
        "proto_type,single,repeated",
        [
            ("string", "*string", "string"),
            ("bytes", "[]byte", "[]byte"),
            ("int32", "*int32", "int32"),
            ("uint32", "*uint32", "uint32"),
            ("int64", "*int64", "int64"),
            ("uint64", "*uint64", "uint64"),
            ("bool", "*bool", "bool"),
        ],
    )
    def test_primitives(self, proto_type, single, repeated):
        assert go_element_type(proto_type, "Msg", repeated=False) == single
        assert go_element_type(proto_type, "Msg", repeated=True) == repeated

    def test_unknown_type_is_reference_under_prefix(self):
        assert go_element_type("detail", "Outer", repeated=False) == "*Outer_Detail"
        assert go_element_type("Detail", "Outer", repeated=True) == "*Outer_Detail"

    def test_float_is_not_a_primitive(self):
        assert go_element_type("float", "M", repeated=False) == "*M_Float"

    def test_type_map_is_read_only(self):
        with pytest.raises(TypeError):
            GO_TYPE_MAP["double"] = "float64"


class TestTransform:
    def test_depth_first_order_and_flattened_names(self):
        messages = transform_proto(parse_proto_text(NESTED_PROTO))
        assert [m.name for m in messages] == [
            "Outer",
            "Outer_Inner",
            "Outer_Inner_Leaf",
            "Outer_Other",
            "Second",
        ]

    def test_only_top_level_messages_stream(self):
        messages = transform_proto(parse_proto_text(NESTED_PROTO))
        assert {m.name: m.stream for m in messages} == {
            "Outer": True,
            "Outer_Inner": False,
            "Outer_Inner_Leaf": False,
            "Outer_Other": False,
            "Second": True,
        }

    def test_repeated_field_rendering(self):
        messages = {m.name: m for m in transform_proto(parse_proto_text(NESTED_PROTO))}
        items = messages["Outer"].fields[0]
        assert items.name == "Items"
        assert items.go_type == "chan *Outer_Inner"
        assert items.element_type == "*Outer_Inner"

        values = messages["Outer_Inner_Leaf"].fields[0]
        assert values.go_type == "[]int32"

        label = messages["Outer_Inner"].fields[0]
        assert label.go_type == "*string"
        assert label.attribute_code == "opt"

    def test_field_metadata_preserved(self):
        messages = transform_proto(
            parse_proto_text("message M { required uint64 big_id = 9; }")
        )
        f = messages[0].fields[0]
        assert (f.proto_name, f.proto_type, f.number, f.attribute) == (
            "big_id",
            "uint64",
            9,
            "required",
        )
        assert f.name == "Big_id"
        assert f.attribute_code == "req"

    def test_repeated_fields_property(self):
        messages = transform_proto(parse_proto_text(
            "message M { repeated string a = 1; optional int32 b = 2; repeated bool c = 3; }"
        ))
        assert [f.name for f in messages[0].repeated_fields] == ["A", "C"]

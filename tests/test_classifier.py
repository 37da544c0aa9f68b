from tfstate_to_hcl.classifier import NodeShape, classify, has_compound_values, is_empty_array, is_simple
from tfstate_to_hcl.models import ValueNode


class TestClassify:
    def test_scalars_are_simple(self) -> None:
        for raw in (None, True, 1, 1.5, "text"):
            assert classify(ValueNode.from_json(raw)) is NodeShape.SIMPLE

    def test_array_of_scalars(self) -> None:
        node = ValueNode.from_json(["10.0.1.0/24", "10.0.2.0/24"])
        assert classify(node) is NodeShape.SCALAR_ARRAY

    def test_array_of_objects(self) -> None:
        node = ValueNode.from_json([{"name": "rule1"}])
        assert classify(node) is NodeShape.NESTED_ARRAY

    def test_array_of_scalar_arrays_stays_literal(self) -> None:
        node = ValueNode.from_json([["a"], ["b", 1]])
        assert classify(node) is NodeShape.SCALAR_ARRAY

    def test_array_of_arrays_with_objects(self) -> None:
        node = ValueNode.from_json([[{"port": 80}], ["b"]])
        assert classify(node) is NodeShape.NESTED_ARRAY

    def test_mixed_array_is_nested(self) -> None:
        node = ValueNode.from_json(["a", {"b": 1}])
        assert classify(node) is NodeShape.NESTED_ARRAY

    def test_object(self) -> None:
        assert classify(ValueNode.from_json({"a": 1})) is NodeShape.OBJECT


class TestHelpers:
    def test_is_simple(self) -> None:
        assert is_simple(ValueNode.from_json(None))
        assert not is_simple(ValueNode.from_json([]))

    def test_is_empty_array(self) -> None:
        assert is_empty_array(ValueNode.from_json([]))
        assert not is_empty_array(ValueNode.from_json({}))
        assert not is_empty_array(ValueNode.from_json([None]))
        assert not is_empty_array(ValueNode.from_json(""))

    def test_has_compound_values(self) -> None:
        assert has_compound_values(ValueNode.from_json({"rules": [{"a": 1}]}))
        assert not has_compound_values(ValueNode.from_json({"env": "dev", "tier": 1}))

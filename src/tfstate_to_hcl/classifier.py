from __future__ import annotations

from enum import Enum

from tfstate_to_hcl.models import ValueKind, ValueNode

SIMPLE_KINDS = frozenset({ValueKind.NULL, ValueKind.BOOL, ValueKind.NUMBER, ValueKind.STRING})


class NodeShape(Enum):
    SIMPLE = "simple"
    SCALAR_ARRAY = "scalar_array"
    NESTED_ARRAY = "nested_array"
    OBJECT = "object"


def is_simple(node: ValueNode) -> bool:
    return node.kind in SIMPLE_KINDS


def is_empty_array(node: ValueNode) -> bool:
    return node.kind is ValueKind.ARRAY and not node.items


def has_compound_values(node: ValueNode) -> bool:
    return any(not is_simple(child) for child in node.fields.values())


def _is_literal_element(node: ValueNode) -> bool:
    # Lists of plain lists stay literal; only a non-simple grandchild forces blocks.
    if node.kind is ValueKind.ARRAY:
        return all(is_simple(item) for item in node.items)
    return is_simple(node)


def classify(node: ValueNode) -> NodeShape:
    if is_simple(node):
        return NodeShape.SIMPLE
    if node.kind is ValueKind.OBJECT:
        return NodeShape.OBJECT
    if all(_is_literal_element(item) for item in node.items):
        return NodeShape.SCALAR_ARRAY
    return NodeShape.NESTED_ARRAY

"""Recursive rendering of state attribute trees into HCL lines.

Every named attribute becomes one of three things: a single ``name = value``
assignment, one or more ``name { ... }`` nested blocks, or nothing at all.
Lists holding objects (or lists) are expanded into one block per element, which
is how Terraform spells repeated nested blocks such as ``network_acls`` or
``access_policy``.
"""

from __future__ import annotations

import logging

from tfstate_to_hcl.classifier import NodeShape, classify, has_compound_values, is_empty_array
from tfstate_to_hcl.exclusions import ExclusionFilter
from tfstate_to_hcl.models import ValueKind, ValueNode

logger = logging.getLogger(__name__)


class PropertyRenderer:
    def __init__(self, exclusion_filter: ExclusionFilter | None = None) -> None:
        self.exclusion_filter = exclusion_filter or ExclusionFilter()

    def render_attributes(self, attributes: ValueNode) -> list[str]:
        lines: list[str] = []
        self.render_node(attributes, lines)
        return lines

    def render_property(self, name: str, node: ValueNode, sink: list[str]) -> None:
        if self.exclusion_filter.is_excluded(name):
            return
        if is_empty_array(node):
            return

        shape = classify(node)
        if shape is NodeShape.NESTED_ARRAY:
            for element in node.items:
                self._render_block(name, element, sink)
        elif shape is NodeShape.OBJECT and has_compound_values(node):
            self._render_block(name, node, sink)
        elif shape is NodeShape.OBJECT:
            self._append_map(name, node, sink)
        else:
            self.append(name, node, sink)

    def render_node(self, node: ValueNode, sink: list[str]) -> None:
        if node.kind is ValueKind.OBJECT:
            for name, child in node.fields.items():
                self.render_property(name, child, sink)
        elif node.kind is ValueKind.ARRAY:
            for child in node.items:
                self.render_node(child, sink)
        else:
            # A bare scalar has no name to assign it to.
            logger.debug("Skipping unnamed %s value", node.kind.value)

    def append(self, name: str, node: ValueNode, sink: list[str]) -> None:
        if node.is_compound:
            sink.append(f"{name} = {node.literal()}")
            return

        text = node.text
        if not text:
            return
        if node.kind is ValueKind.BOOL:
            sink.append(f"{name} = {text.lower()}")
        else:
            sink.append(f'{name} = "{text}"')

    def _append_map(self, name: str, node: ValueNode, sink: list[str]) -> None:
        kept = {
            key: value
            for key, value in node.fields.items()
            if not self.exclusion_filter.is_excluded(key)
        }
        if node.fields and not kept:
            return
        self.append(name, ValueNode(ValueKind.OBJECT, kept), sink)

    def _render_block(self, name: str, element: ValueNode, sink: list[str]) -> None:
        if not element.is_compound:
            logger.debug("Skipping scalar element of nested block list %s", name)
            return

        sink.append(f"{name} {{")
        self.render_node(element, sink)
        sink.append("}")

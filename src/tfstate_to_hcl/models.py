from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from tfstate_to_hcl.exclusions import ExclusionRules


class ValueKind(Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class NumberText(str):
    """A JSON number kept as the exact text it had in the source document."""


@dataclass(frozen=True)
class ValueNode:
    kind: ValueKind
    value: Any = None

    @classmethod
    def from_json(cls, raw: Any) -> ValueNode:
        if raw is None:
            return cls(ValueKind.NULL)
        if isinstance(raw, bool):
            return cls(ValueKind.BOOL, raw)
        if isinstance(raw, NumberText):
            return cls(ValueKind.NUMBER, str(raw))
        if isinstance(raw, (int, float)):
            return cls(ValueKind.NUMBER, json.dumps(raw))
        if isinstance(raw, str):
            return cls(ValueKind.STRING, raw)
        if isinstance(raw, list):
            return cls(ValueKind.ARRAY, tuple(cls.from_json(item) for item in raw))
        if isinstance(raw, dict):
            return cls(ValueKind.OBJECT, {str(k): cls.from_json(v) for k, v in raw.items()})
        raise TypeError(f"Unsupported JSON value: {raw!r}")

    @property
    def items(self) -> tuple[ValueNode, ...]:
        if self.kind is ValueKind.ARRAY:
            return self.value
        return ()

    @property
    def fields(self) -> dict[str, ValueNode]:
        if self.kind is ValueKind.OBJECT:
            return self.value
        return {}

    @property
    def is_compound(self) -> bool:
        return self.kind in (ValueKind.ARRAY, ValueKind.OBJECT)

    @property
    def text(self) -> str:
        if self.kind is ValueKind.NULL:
            return ""
        if self.kind is ValueKind.BOOL:
            return "true" if self.value else "false"
        if self.kind in (ValueKind.NUMBER, ValueKind.STRING):
            return self.value
        return self.literal()

    def literal(self) -> str:
        if self.kind is ValueKind.NULL:
            return "null"
        if self.kind is ValueKind.BOOL:
            return "true" if self.value else "false"
        if self.kind is ValueKind.NUMBER:
            return self.value
        if self.kind is ValueKind.STRING:
            return json.dumps(self.value)
        if self.kind is ValueKind.ARRAY:
            return "[" + ", ".join(item.literal() for item in self.value) + "]"
        pairs = [f"{json.dumps(k)}: {v.literal()}" for k, v in self.value.items()]
        return "{" + ", ".join(pairs) + "}"


@dataclass
class StateInstance:
    attributes: ValueNode
    index_key: str | int | None = None

    @property
    def has_index_key(self) -> bool:
        return self.index_key is not None


@dataclass
class StateResource:
    resource_type: str
    name: str
    module: str
    instances: list[StateInstance] = field(default_factory=list)

    @property
    def module_segments(self) -> list[str]:
        return [segment for segment in self.module.split(".") if segment]

    @property
    def output_name(self) -> str:
        return self.module_segments[1]

    @property
    def address(self) -> str:
        return f"{self.module}.{self.resource_type}.{self.name}"


@dataclass
class TerraformState:
    resources: list[StateResource] = field(default_factory=list)
    version: int | None = None
    terraform_version: str | None = None
    serial: int | None = None
    lineage: str | None = None


@dataclass
class RenderedBlock:
    resource_type: str
    label: str
    body: list[str] = field(default_factory=list)

    @property
    def lines(self) -> list[str]:
        return [f'resource "{self.resource_type}" "{self.label}" {{', *self.body, "}"]

    @property
    def text(self) -> str:
        return "\n".join(self.lines) + "\n"


@dataclass
class OutputBundle:
    files: dict[str, str] = field(default_factory=dict)

    def add(self, name: str, text: str) -> None:
        self.files[name] = self.files.get(name, "") + text

    def merge(self, other: OutputBundle) -> None:
        for name, text in other.files.items():
            self.add(name, text)

    def __len__(self) -> int:
        return len(self.files)


class LabelPolicy(Enum):
    COMPOSITE = "composite"
    INDEX_KEY = "index-key"


class ModuleGrouping(Enum):
    LAST_MODULE = "last-module"
    PER_MODULE = "per-module"


@dataclass
class ConvertConfig:
    input_dir: Path
    output_dir: Path
    label_policy: LabelPolicy = LabelPolicy.COMPOSITE
    module_grouping: ModuleGrouping = ModuleGrouping.LAST_MODULE
    exclusions: ExclusionRules = field(default_factory=ExclusionRules)
    run_formatter: bool = True


@dataclass
class ConvertResult:
    success: bool
    output_path: Path
    files_written: list[Path] = field(default_factory=list)
    instances_rendered: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

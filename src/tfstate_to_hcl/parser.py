from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import hcl2

from tfstate_to_hcl.models import (
    NumberText,
    StateInstance,
    StateResource,
    TerraformState,
    ValueKind,
    ValueNode,
)

logger = logging.getLogger(__name__)

STATE_FILE_PATTERN = "*.tfstate"


class TerraformStateParseError(Exception):
    pass


class TerraformStateError(TerraformStateParseError):
    pass


class GeneratedHclError(Exception):
    pass


class TerraformStateParser:
    def find_state_files(self, directory: Path) -> list[Path]:
        return sorted(path for path in directory.glob(STATE_FILE_PATTERN) if path.is_file())

    def parse_directory(self, directory: Path) -> list[tuple[Path, TerraformState]]:
        state_files = self.find_state_files(directory)
        if not state_files:
            raise TerraformStateParseError(f"No {STATE_FILE_PATTERN} files found in {directory}")

        return [(path, self.parse_file(path)) for path in state_files]

    def parse_file(self, file_path: Path) -> TerraformState:
        try:
            content = file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise TerraformStateParseError(f"Failed to read {file_path}: {e}") from e

        try:
            return self.parse_text(content)
        except TerraformStateError as e:
            raise TerraformStateError(f"{file_path}: {e}") from e
        except TerraformStateParseError as e:
            raise TerraformStateParseError(f"Failed to parse {file_path}: {e}") from e

    def parse_text(self, content: str) -> TerraformState:
        try:
            document = json.loads(content, parse_int=NumberText, parse_float=NumberText)
        except json.JSONDecodeError as e:
            raise TerraformStateParseError(str(e)) from e

        if not isinstance(document, dict):
            raise TerraformStateError("State document must be a JSON object")

        state = TerraformState(
            version=self._optional_int(document.get("version")),
            terraform_version=document.get("terraform_version"),
            serial=self._optional_int(document.get("serial")),
            lineage=document.get("lineage"),
        )
        for raw_resource in self._require(document, "resources", "state document"):
            state.resources.append(self._parse_resource(raw_resource))

        logger.debug("Parsed %d resources", len(state.resources))
        return state

    def _parse_resource(self, raw: dict[str, Any]) -> StateResource:
        resource_type = str(self._require(raw, "type", "resource"))
        name = str(self._require(raw, "name", f"resource of type {resource_type}"))
        where = f"resource {resource_type}.{name}"
        resource = StateResource(
            resource_type=resource_type,
            name=name,
            module=str(self._require(raw, "module", where)),
        )
        for raw_instance in self._require(raw, "instances", where):
            resource.instances.append(self._parse_instance(raw_instance, where))
        return resource

    def _parse_instance(self, raw: dict[str, Any], where: str) -> StateInstance:
        attributes = ValueNode.from_json(self._require(raw, "attributes", f"instance of {where}"))
        if attributes.kind is not ValueKind.OBJECT:
            raise TerraformStateError(f"Attributes of {where} must be an object")

        index_key = raw.get("index_key")
        if isinstance(index_key, NumberText):
            index_key = int(index_key) if index_key.lstrip("-").isdigit() else str(index_key)
        return StateInstance(attributes=attributes, index_key=index_key)

    def _require(self, raw: Any, key: str, where: str) -> Any:
        if not isinstance(raw, dict) or key not in raw:
            raise TerraformStateError(f"Missing '{key}' in {where}")
        return raw[key]

    def _optional_int(self, value: Any) -> int | None:
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None


class GeneratedHclReader:
    def read_resource_addresses(self, file_path: Path) -> list[str]:
        try:
            with file_path.open(encoding="utf-8") as f:
                content = hcl2.load(f)  # type: ignore[attr-defined]
        except Exception as e:
            raise GeneratedHclError(f"Failed to parse {file_path}: {e}") from e

        addresses: list[str] = []
        for resource_block in content.get("resource", []):
            for resource_type, instances in resource_block.items():
                blocks = instances if isinstance(instances, list) else [instances]
                for block in blocks:
                    for name in block:
                        addresses.append(f"{self._unquote(resource_type)}.{self._unquote(name)}")
        return addresses

    def read_directory(self, directory: Path) -> dict[Path, list[str]]:
        return {path: self.read_resource_addresses(path) for path in sorted(directory.glob("*.tf"))}

    def _unquote(self, label: str) -> str:
        if len(label) >= 2 and label.startswith('"') and label.endswith('"'):
            return label[1:-1]
        return label

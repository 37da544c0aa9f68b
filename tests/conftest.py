import json
from pathlib import Path
from typing import Any

import pytest

from tfstate_to_hcl.exclusions import ExclusionFilter, ExclusionRules
from tfstate_to_hcl.models import ConvertConfig
from tfstate_to_hcl.renderer import PropertyRenderer


@pytest.fixture
def renderer() -> PropertyRenderer:
    return PropertyRenderer(ExclusionFilter(ExclusionRules()))


@pytest.fixture
def state_dir(tmp_path: Path) -> Path:
    input_dir = tmp_path / "states"
    input_dir.mkdir()
    return input_dir


@pytest.fixture
def config(state_dir: Path, tmp_path: Path) -> ConvertConfig:
    return ConvertConfig(
        input_dir=state_dir,
        output_dir=tmp_path / "output",
        run_formatter=False,
    )


def make_state(*resources: dict[str, Any]) -> dict[str, Any]:
    return {
        "version": 4,
        "terraform_version": "1.5.7",
        "serial": 12,
        "lineage": "3f6c1e2a-0b7d-4c55-9c1e-6d2a5b8f9e01",
        "resources": list(resources),
    }


def make_resource(
    resource_type: str,
    name: str,
    module: str,
    *instances: dict[str, Any],
) -> dict[str, Any]:
    return {
        "module": module,
        "mode": "managed",
        "type": resource_type,
        "name": name,
        "provider": 'provider["registry.terraform.io/hashicorp/azurerm"]',
        "instances": list(instances),
    }


def write_state(directory: Path, filename: str, state: dict[str, Any]) -> Path:
    path = directory / filename
    path.write_text(json.dumps(state, indent=2), encoding="utf-8")
    return path

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest

from tfstate_to_hcl.formatter import FormatterError, TerraformFormatter


class TestTerraformFormatter:
    def test_missing_terraform(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr("tfstate_to_hcl.formatter.shutil.which", lambda _: None)
        formatter = TerraformFormatter()
        assert not formatter.check_terraform_installed()
        with pytest.raises(FormatterError, match="not installed"):
            formatter.format_directory(tmp_path)

    def test_runs_fmt_in_directory(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        calls: list[dict[str, Any]] = []

        def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
            calls.append({"cmd": cmd, **kwargs})
            return subprocess.CompletedProcess(cmd, 0, stdout="key-vault.tf\n", stderr="")

        monkeypatch.setattr("tfstate_to_hcl.formatter.shutil.which", lambda _: "/usr/bin/terraform")
        monkeypatch.setattr("tfstate_to_hcl.formatter.subprocess.run", fake_run)

        output = TerraformFormatter().format_directory(tmp_path)

        assert output == "key-vault.tf\n"
        assert calls[0]["cmd"] == ["/usr/bin/terraform", "fmt"]
        assert calls[0]["cwd"] == tmp_path

    def test_non_zero_exit(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
            return subprocess.CompletedProcess(cmd, 2, stdout="", stderr="Invalid block definition")

        monkeypatch.setattr("tfstate_to_hcl.formatter.shutil.which", lambda _: "/usr/bin/terraform")
        monkeypatch.setattr("tfstate_to_hcl.formatter.subprocess.run", fake_run)

        with pytest.raises(FormatterError, match="Invalid block definition"):
            TerraformFormatter().format_directory(tmp_path)

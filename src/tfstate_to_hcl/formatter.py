from __future__ import annotations

import shutil
import subprocess
from pathlib import Path


class FormatterError(Exception):
    pass


class TerraformFormatter:
    def __init__(self) -> None:
        self._terraform_path: str | None = None

    def check_terraform_installed(self) -> bool:
        self._terraform_path = shutil.which("terraform")
        return self._terraform_path is not None

    def format_directory(self, directory: Path) -> str:
        if not self.check_terraform_installed():
            raise FormatterError("terraform is not installed")

        cmd = [self._terraform_path or "terraform", "fmt"]

        # Blocks until terraform exits; there is no timeout.
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                cwd=directory,
            )
        except OSError as e:
            raise FormatterError(f"Failed to run terraform fmt: {e}") from e

        if result.returncode != 0:
            raise FormatterError(f"terraform fmt failed: {result.stderr.strip()}")
        return result.stdout

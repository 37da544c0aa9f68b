from __future__ import annotations

import logging
from pathlib import Path

from tfstate_to_hcl.models import OutputBundle

logger = logging.getLogger(__name__)

# Leftovers of earlier runs: generated configuration and import script output.
STALE_OUTPUT_SUFFIXES: tuple[str, ...] = (".tf", ".ps1", ".txt")


class HclFileWriter:
    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir

    def prepare(self) -> list[Path]:
        self.output_dir.mkdir(parents=True, exist_ok=True)

        removed: list[Path] = []
        for path in sorted(self.output_dir.iterdir()):
            if path.is_file() and path.suffix in STALE_OUTPUT_SUFFIXES:
                path.unlink()
                removed.append(path)

        if removed:
            logger.info("Removed %d stale files from %s", len(removed), self.output_dir)
        return removed

    def write(self, bundle: OutputBundle) -> list[Path]:
        written: list[Path] = []
        for name, text in bundle.files.items():
            path = self.output_dir / f"{name}.tf"
            path.write_text(text, encoding="utf-8")
            logger.debug("Wrote %s", path)
            written.append(path)
        return written

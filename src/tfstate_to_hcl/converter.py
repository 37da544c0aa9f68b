from __future__ import annotations

import logging

from tfstate_to_hcl.builder import ResourceBlockBuilder
from tfstate_to_hcl.exclusions import ExclusionFilter
from tfstate_to_hcl.formatter import FormatterError, TerraformFormatter
from tfstate_to_hcl.models import ConvertConfig, ConvertResult, ModuleGrouping, OutputBundle
from tfstate_to_hcl.parser import TerraformStateParseError, TerraformStateParser
from tfstate_to_hcl.renderer import PropertyRenderer
from tfstate_to_hcl.writer import HclFileWriter

logger = logging.getLogger(__name__)


class StateConverter:
    def __init__(self, config: ConvertConfig) -> None:
        self.config = config
        self.parser = TerraformStateParser()
        self.builder = ResourceBlockBuilder(
            renderer=PropertyRenderer(ExclusionFilter(config.exclusions)),
            label_policy=config.label_policy,
            module_grouping=config.module_grouping,
        )
        self.writer = HclFileWriter(config.output_dir)
        self.formatter = TerraformFormatter()

    def run(self) -> ConvertResult:
        warnings: list[str] = []

        try:
            parsed = self.parser.parse_directory(self.config.input_dir)
        except TerraformStateParseError as e:
            return ConvertResult(success=False, output_path=self.config.output_dir, errors=[str(e)])

        # Everything is rendered before anything is written, so a state file that
        # does not match the expected schema leaves the output directory untouched.
        bundle = OutputBundle()
        instances = 0
        for path, state in parsed:
            logger.info("Transforming %s", path.name)
            try:
                file_bundle = self.builder.build(state)
            except TerraformStateParseError as e:
                return ConvertResult(
                    success=False,
                    output_path=self.config.output_dir,
                    errors=[f"{path}: {e}"],
                )
            instances += sum(len(resource.instances) for resource in state.resources)
            self._collect(bundle, file_bundle, path.name, warnings)

        self.writer.prepare()
        files_written = self.writer.write(bundle)

        if self.config.run_formatter:
            warnings.extend(self._format())

        return ConvertResult(
            success=True,
            output_path=self.config.output_dir,
            files_written=files_written,
            instances_rendered=instances,
            warnings=warnings,
        )

    def _collect(
        self,
        bundle: OutputBundle,
        file_bundle: OutputBundle,
        source_name: str,
        warnings: list[str],
    ) -> None:
        if self.config.module_grouping is ModuleGrouping.PER_MODULE:
            bundle.merge(file_bundle)
            return

        for name, text in file_bundle.files.items():
            if name in bundle.files:
                warnings.append(f"{source_name} replaces earlier output for {name}.tf")
            bundle.files[name] = text

    def _format(self) -> list[str]:
        if not self.formatter.check_terraform_installed():
            return ["terraform not found, generated files were not formatted"]
        try:
            self.formatter.format_directory(self.config.output_dir)
        except FormatterError as e:
            return [str(e)]
        return []

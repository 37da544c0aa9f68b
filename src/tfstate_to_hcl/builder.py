from __future__ import annotations

import logging

from tfstate_to_hcl.exclusions import ExclusionFilter
from tfstate_to_hcl.models import (
    LabelPolicy,
    ModuleGrouping,
    OutputBundle,
    RenderedBlock,
    StateInstance,
    StateResource,
    TerraformState,
)
from tfstate_to_hcl.parser import TerraformStateError
from tfstate_to_hcl.renderer import PropertyRenderer

logger = logging.getLogger(__name__)


class ResourceBlockBuilder:
    def __init__(
        self,
        renderer: PropertyRenderer | None = None,
        label_policy: LabelPolicy = LabelPolicy.COMPOSITE,
        module_grouping: ModuleGrouping = ModuleGrouping.LAST_MODULE,
    ) -> None:
        self.renderer = renderer or PropertyRenderer(ExclusionFilter())
        self.label_policy = label_policy
        self.module_grouping = module_grouping

    def build(self, state: TerraformState) -> OutputBundle:
        if self.module_grouping is ModuleGrouping.PER_MODULE:
            return self._build_per_module(state)
        return self._build_last_module(state)

    def build_blocks(self, resource: StateResource) -> list[RenderedBlock]:
        return [self.build_block(resource, instance) for instance in resource.instances]

    def build_block(self, resource: StateResource, instance: StateInstance) -> RenderedBlock:
        return RenderedBlock(
            resource_type=resource.resource_type,
            label=self.label_for(resource, instance),
            body=self.renderer.render_attributes(instance.attributes),
        )

    def label_for(self, resource: StateResource, instance: StateInstance) -> str:
        if not instance.has_index_key:
            return resource.name
        if self.label_policy is LabelPolicy.INDEX_KEY:
            return str(instance.index_key)
        return f"{resource.name}_{instance.index_key}"

    def output_name_for(self, resource: StateResource) -> str:
        segments = resource.module_segments
        if len(segments) < 2:
            raise TerraformStateError(
                f"Module address '{resource.module}' of {resource.resource_type}.{resource.name} "
                "has no module name segment"
            )
        return resource.output_name

    def _build_last_module(self, state: TerraformState) -> OutputBundle:
        # Every block of the document shares one buffer, saved under whichever
        # module the last resource belongs to.
        output_name: str | None = None
        seen_names: list[str] = []
        text = ""

        for resource in state.resources:
            output_name = self.output_name_for(resource)
            if output_name not in seen_names:
                seen_names.append(output_name)
            for block in self.build_blocks(resource):
                text += block.text

        bundle = OutputBundle()
        if output_name is None:
            return bundle

        if len(seen_names) > 1:
            logger.warning(
                "Resources from modules %s are written together to %s.tf",
                ", ".join(seen_names),
                output_name,
            )
        bundle.add(output_name, text)
        return bundle

    def _build_per_module(self, state: TerraformState) -> OutputBundle:
        bundle = OutputBundle()
        for resource in state.resources:
            output_name = self.output_name_for(resource)
            for block in self.build_blocks(resource):
                bundle.add(output_name, block.text)
        return bundle

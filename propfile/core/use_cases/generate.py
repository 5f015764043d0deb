"""
Generate use case — descriptors in, properties file out.

Descriptors come from a propfile.yml or from a pydantic model
reference.  The rendered text is written with a single blocking write
to a file, or handed back to the caller for stdout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from propfile.core.config.loader import ConfigError, load_descriptors, load_template
from propfile.core.models.document import DescriptorSet, GeneratedFile
from propfile.core.models.group import GroupNode
from propfile.core.services.generators.properties_file import (
    build_groups,
    generate_properties,
    order_groups,
)
from propfile.core.services.model_introspect import (
    IntrospectionError,
    extract_group_order,
    extract_properties,
    load_model,
)

logger = logging.getLogger(__name__)

# Output target meaning "don't write, return the text"
STDOUT = "-"


@dataclass
class GenerateResult:
    """Result of a generate run."""

    project: str | None = None
    output_path: Path | None = None
    generated: GeneratedFile | None = None
    property_count: int = 0
    visible_count: int = 0
    group_count: int = 0
    error: str | None = None

    @property
    def content(self) -> str:
        return self.generated.content if self.generated else ""

    def to_dict(self) -> dict:
        return {
            "project": self.project,
            "output_path": str(self.output_path) if self.output_path else None,
            "properties": {
                "total": self.property_count,
                "visible": self.visible_count,
            },
            "groups": self.group_count,
            "duration_ms": self.generated.duration_ms if self.generated else None,
            "error": self.error,
        }


def resolve_descriptors(
    config_path: Path | None = None,
    model_ref: str | None = None,
    project: str | None = None,
    group_order: list[str] | None = None,
) -> DescriptorSet:
    """Collect descriptors from a model reference or a descriptor file.

    Explicit ``project`` and ``group_order`` win over the source's own.

    Raises:
        ConfigError: Descriptor file missing or invalid.
        IntrospectionError: Model reference cannot be loaded.
    """
    if model_ref:
        model_cls = load_model(model_ref)
        descriptors = DescriptorSet(
            project=model_cls.__name__,
            group_order=extract_group_order(model_cls),
            properties=extract_properties(model_cls),
        )
    else:
        descriptors = load_descriptors(config_path)

    if project:
        descriptors.project = project
    if group_order is not None:
        descriptors.group_order = group_order
    return descriptors


def ordered_groups(descriptors: DescriptorSet) -> list[GroupNode]:
    """Group tree for ``descriptors``, top level in final order."""
    return order_groups(build_groups(descriptors.properties), descriptors.group_order)


def write_properties(sink: TextIO, text: str) -> None:
    """Hand the finished document to ``sink`` in one write."""
    sink.write(text)


def _target_path(
    output: str | None,
    descriptors: DescriptorSet,
    config_path: Path | None,
) -> Path | None:
    if output == STDOUT:
        return None
    if output:
        return Path(output)
    base = config_path.parent if config_path else Path.cwd()
    return base / descriptors.output_name()


def run_generate(
    config_path: Path | None = None,
    model_ref: str | None = None,
    project: str | None = None,
    group_order: list[str] | None = None,
    template_path: Path | None = None,
    output: str | None = None,
) -> GenerateResult:
    """Generate a properties file and write it out.

    Args:
        config_path:   Descriptor file (searched upward if None).
        model_ref:     ``package.module:Class`` to introspect instead.
        project:       Override the project name.
        group_order:   Override the top-level group order.
        template_path: File holding a replacement document template.
        output:        Target file, ``"-"`` to skip writing, or None
                       for the descriptor set's default file name.

    Returns:
        GenerateResult with the generated file or an error.
    """
    result = GenerateResult()

    try:
        descriptors = resolve_descriptors(config_path, model_ref, project, group_order)
        if template_path is not None:
            descriptors.render.template = load_template(template_path)
    except (ConfigError, IntrospectionError) as e:
        result.error = str(e)
        return result

    result.project = descriptors.project
    result.property_count = len(descriptors.properties)
    result.visible_count = sum(1 for p in descriptors.properties if p.include_in_output)
    result.group_count = len(ordered_groups(descriptors))

    target = _target_path(output, descriptors, config_path)
    result.generated = generate_properties(
        descriptors.properties,
        descriptors.project,
        group_order=descriptors.group_order,
        settings=descriptors.render,
        output_path=str(target) if target else STDOUT,
    )

    if target is None:
        return result

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8") as fh:
            write_properties(fh, result.generated.content)
    except OSError as e:
        result.error = f"Cannot write {target}: {e}"
        return result

    result.output_path = target
    logger.info("Wrote %s (%d ms)", target, result.generated.duration_ms)
    return result

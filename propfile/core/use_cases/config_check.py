"""
Config check use case — validate propfile.yml and report issues.

Only structure is checked; property values are never validated.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from propfile.core.config.loader import ConfigError, find_descriptor_file, load_descriptors
from propfile.core.models.document import DescriptorSet
from propfile.core.services.generators.properties_file import build_groups


@dataclass
class CheckResult:
    """Result of descriptor file validation."""

    valid: bool = False
    descriptors: DescriptorSet | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "project": self.descriptors.project if self.descriptors else None,
            "property_count": len(self.descriptors.properties) if self.descriptors else 0,
        }


def check_descriptors(config_path: Path | None = None) -> CheckResult:
    """Validate a descriptor file and report issues.

    Args:
        config_path: Optional explicit path to propfile.yml.

    Returns:
        CheckResult with validation status and any issues.
    """
    result = CheckResult()

    if config_path is None:
        config_path = find_descriptor_file()
    if config_path is None:
        result.errors.append("No propfile.yml found.")
        return result
    result.config_path = config_path

    try:
        descriptors = load_descriptors(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.descriptors = descriptors

    if not descriptors.properties:
        result.warnings.append("No properties defined. The generated file will be empty.")

    keys = Counter(p.name for p in descriptors.properties)
    dupes = sorted(k for k, n in keys.items() if n > 1)
    if dupes:
        result.warnings.append(f"Duplicate property keys: {', '.join(dupes)}")

    for prop in descriptors.properties:
        if prop.group is not None and any(seg == "" for seg in prop.group):
            result.warnings.append(f"Property '{prop.name}' has an empty group segment.")

    if descriptors.group_order is not None:
        titles = {g.title for g in build_groups(descriptors.properties)}
        for name in descriptors.group_order:
            if name not in titles:
                result.warnings.append(f"group_order names unknown group '{name}'.")

        repeated = Counter(descriptors.group_order)
        for name, count in repeated.items():
            if count > 1 and name in titles:
                result.warnings.append(
                    f"group_order repeats '{name}'; the group will be rendered {count} times."
                )

    result.valid = len(result.errors) == 0
    return result

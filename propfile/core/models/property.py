"""
Property model — one configuration item as it will appear in the output.

Descriptors are assembled outside the generator (YAML file, pydantic
model introspection, ...).  The generator only arranges and formats them.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class Property(BaseModel):
    """A single configuration key and its documentation.

    Attributes:
        name:              Key written before ``=``.
        description:       Free text; every line becomes a comment line.
        default_value:     Always documented, emitted commented-out when
                           no override is set.
        override_value:    When non-empty, emitted as the live value.
        deprecated:        Adds a ``# DEPRECATED PROPERTY`` line.
        include_in_output: When False the property is never rendered.
        group:             Grouping path, outermost group first.
    """

    name: str
    description: str = ""
    default_value: str = ""
    override_value: str | None = None
    deprecated: bool = False
    include_in_output: bool = True
    group: list[str] | None = None

    @field_validator("group", mode="before")
    @classmethod
    def _single_segment(cls, value: object) -> object:
        if isinstance(value, str):
            return [value]
        return value

    @property
    def is_grouped(self) -> bool:
        """True when the property carries a non-empty grouping path."""
        return bool(self.group)

    @property
    def has_override(self) -> bool:
        return bool(self.override_value)


def escape_value(value: str | None) -> str:
    """Double every backslash so the value survives a properties reader."""
    if value is None:
        return ""
    return value.replace("\\", "\\\\")

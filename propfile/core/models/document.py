"""
Document models — descriptor files, render settings and generated output.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from propfile.core.models.property import Property

DEFAULT_TEMPLATE = "${header}\n${body}\n${footer}"
DEFAULT_HEADER = "# Properties file created for: '{project}' \n\n"
DEFAULT_FOOTER = (
    "\n# Properties file autogenerated by propfile :: PropertiesFileCreator\n"
    "# Created [{created}] in {duration} ms\n"
)
DEFAULT_TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"


class RenderSettings(BaseModel):
    """Text patterns used to assemble the final document.

    Attributes:
        template:         Three slots: ``${header}``, ``${body}``, ``${footer}``.
        header_pattern:   ``str.format`` pattern.
        footer_pattern:   ``str.format`` pattern.  Both receive ``project``,
                          ``created`` and ``duration`` (milliseconds).
        timestamp_format: ``strftime`` format for ``created``.
    """

    template: str = DEFAULT_TEMPLATE
    header_pattern: str = DEFAULT_HEADER
    footer_pattern: str = DEFAULT_FOOTER
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT

    @field_validator("header_pattern", "footer_pattern")
    @classmethod
    def _pattern_formats(cls, value: str) -> str:
        # Patterns only ever receive these three fields
        try:
            value.format(project="", created="", duration=0)
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
            raise ValueError(f"invalid pattern {value!r}: {e!r}") from e
        return value


class DescriptorSet(BaseModel):
    """Everything needed to produce one properties file.

    Loaded from propfile.yml or assembled from a pydantic model.
    """

    project: str
    group_order: list[str] | None = None
    properties: list[Property] = Field(default_factory=list)
    render: RenderSettings = Field(default_factory=RenderSettings)
    output: str | None = None

    def output_name(self) -> str:
        """File name to write when none is given explicitly."""
        return self.output or f"{self.project}.properties"


class GeneratedFile(BaseModel):
    """A file produced by a generator.

    Attributes:
        path:        Relative path of the target file.
        content:     Full file content.
        overwrite:   Whether to overwrite if already exists.
        reason:      Why this file was generated.
        duration_ms: Time spent building and rendering the content.
    """

    path: str
    content: str
    overwrite: bool = True
    reason: str = ""
    duration_ms: int = 0

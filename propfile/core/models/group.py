"""
Group model — a titled bucket of properties and nested sub-groups.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from propfile.core.models.property import Property

# Title of the synthetic group collecting ungrouped properties
GENERIC_GROUP_TITLE = "GENERIC PROPERTIES"


class GroupNode(BaseModel):
    """One node of the group tree.

    ``depth`` is 0 for top-level groups.  Children keep first-seen order.
    """

    title: str
    depth: int = 0
    properties: list[Property] = Field(default_factory=list)
    children: list[GroupNode] = Field(default_factory=list)

    @property
    def is_nested(self) -> bool:
        return self.depth > 0

    @property
    def visible_properties(self) -> list[Property]:
        """Properties that will actually be rendered."""
        return [p for p in self.properties if p.include_in_output]

    def find_child(self, title: str) -> GroupNode | None:
        """Look up a direct sub-group by title."""
        return find_group(self.children, title)

    def count_visible(self) -> int:
        """Visible properties in this node and all of its descendants."""
        return len(self.visible_properties) + sum(c.count_visible() for c in self.children)


def find_group(groups: Iterable[GroupNode], title: str) -> GroupNode | None:
    """Return the first group in ``groups`` titled ``title``."""
    for group in groups:
        if group.title == title:
            return group
    return None

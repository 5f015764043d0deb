"""
Properties file generator — group, order and render property descriptors.

Three stages, all pure:

    build_groups()     descriptors → group tree (ungrouped → GENERIC PROPERTIES)
    order_groups()     top-level groups → caller-specified order
    render_document()  ordered groups → header + body + footer text

``generate_properties()`` runs the whole pipeline and times it.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Iterable, Sequence
from datetime import datetime

from propfile.core.models.document import GeneratedFile, RenderSettings
from propfile.core.models.group import GENERIC_GROUP_TITLE, GroupNode, find_group
from propfile.core.models.property import Property, escape_value

logger = logging.getLogger(__name__)

# ── Banners ─────────────────────────────────────────────────────

_HEAVY_RULE = "#" + "-" * 78
_LIGHT_RULE = "# ----------------------------"

# Only the exact ${header} / ${body} / ${footer} tokens are slots
_SLOT_RE = re.compile(r"\$\{(header|body|footer)\}")


# ═══════════════════════════════════════════════════════════════════
#  Tree building
# ═══════════════════════════════════════════════════════════════════


def build_groups(properties: Iterable[Property]) -> list[GroupNode]:
    """Arrange descriptors into a forest of groups.

    Each grouped property walks its path one segment per level, reusing
    the first sibling with the same title or appending a new node.
    Ungrouped visible properties land in a trailing GENERIC PROPERTIES
    group, which is only added when it is non-empty.

    Args:
        properties: Descriptors in output order.

    Returns:
        Top-level groups in first-seen order.
    """
    groups: list[GroupNode] = []
    generic = GroupNode(title=GENERIC_GROUP_TITLE)

    for prop in properties:
        if prop.is_grouped:
            node = _get_or_add_group(prop.group or [], groups)
            node.properties.append(prop)
        elif prop.include_in_output:
            generic.properties.append(prop)

    if generic.properties:
        groups.append(generic)

    logger.debug(
        "Built %d top-level groups (%d ungrouped properties)",
        len(groups), len(generic.properties),
    )
    return groups


def _get_or_add_group(path: Sequence[str], groups: list[GroupNode]) -> GroupNode:
    """Walk ``path`` through ``groups``, creating missing nodes on the way."""
    level = groups
    node: GroupNode | None = None

    for depth, title in enumerate(path):
        node = find_group(level, title)
        if node is None:
            node = GroupNode(title=title, depth=depth)
            level.append(node)
        level = node.children

    assert node is not None  # path is never empty here
    return node


# ═══════════════════════════════════════════════════════════════════
#  Ordering
# ═══════════════════════════════════════════════════════════════════


def order_groups(
    groups: Sequence[GroupNode],
    order: Sequence[str] | None = None,
) -> list[GroupNode]:
    """Reorder top-level groups by title.

    Named groups come first, in ``order`` sequence; unknown names are
    skipped.  Groups not named follow in their original order.  A name
    repeated in ``order`` appends its group once per occurrence.
    Sub-groups are never reordered.

    Args:
        groups: Top-level groups as built.
        order:  Group titles, or None to keep the built order.

    Returns:
        A new list of the same group instances.
    """
    if order is None:
        return list(groups)

    ordered: list[GroupNode] = []
    for title in order:
        match = find_group(groups, title)
        if match is not None:
            ordered.append(match)

    named = set(order)
    ordered.extend(g for g in groups if g.title not in named)
    return ordered


# ═══════════════════════════════════════════════════════════════════
#  Rendering
# ═══════════════════════════════════════════════════════════════════


def render_banner(node: GroupNode) -> str:
    """Heavy banner for top-level groups, light banner for sub-groups."""
    if node.is_nested:
        return f"{_LIGHT_RULE}\n# - {node.title} -\n{_LIGHT_RULE}\n"
    return f"{_HEAVY_RULE}\n# {node.title}\n{_HEAVY_RULE}\n"


def _description_lines(description: str) -> list[str]:
    # Trailing blank lines are dropped; an empty description still
    # yields one (empty) comment line, a newline-only one yields none.
    stripped = description.rstrip("\n")
    if description and not stripped:
        return []
    return stripped.split("\n")


def render_property(prop: Property) -> str:
    """Render one property block, ending with its assignment line."""
    default = escape_value(prop.default_value)

    lines = ["#"]
    if prop.deprecated:
        lines.append("# DEPRECATED PROPERTY")
    lines.extend(f"# {line}" for line in _description_lines(prop.description))
    lines.append("# ")
    lines.append(f'# Default ("{default}")')
    lines.append("#")

    if prop.has_override:
        lines.append(f"{prop.name}={escape_value(prop.override_value)}")
    else:
        lines.append(f"#{prop.name}={default}")

    return "\n".join(lines) + "\n"


def render_group(node: GroupNode) -> str:
    """Render a group: banner, visible properties, then each sub-group.

    A group with nothing visible still renders its banner.
    """
    parts = [render_banner(node), "\n"]
    for prop in node.visible_properties:
        parts.append(render_property(prop))
        parts.append("\n")
    for child in node.children:
        parts.append(render_group(child))
        parts.append("\n")
    return "".join(parts)


def render_body(groups: Iterable[GroupNode]) -> str:
    return "".join(render_group(g) for g in groups)


def render_document(
    groups: Iterable[GroupNode],
    project: str,
    duration_ms: int,
    settings: RenderSettings | None = None,
    created: datetime | None = None,
    body: str | None = None,
) -> str:
    """Assemble the final document from header, body and footer.

    Each ``${header}``, ``${body}`` and ``${footer}`` token is replaced in
    a single pass; inserted text is never scanned for further tokens and
    any other ``$`` text in the template is left as is.

    Args:
        groups:      Ordered top-level groups.
        project:     Project name for the header line.
        duration_ms: Build time reported in the footer.
        settings:    Template and patterns (defaults if None).
        created:     Timestamp for the footer (now if None).
        body:        Pre-rendered body, skips rendering ``groups``.

    Returns:
        The complete properties file text.
    """
    settings = settings or RenderSettings()
    created = created or datetime.now()

    fields = {
        "project": project,
        "created": created.strftime(settings.timestamp_format),
        "duration": duration_ms,
    }
    header = settings.header_pattern.format(**fields)
    footer = settings.footer_pattern.format(**fields)
    if body is None:
        body = render_body(groups)

    slots = {"header": header, "body": body, "footer": footer}
    return _SLOT_RE.sub(lambda m: slots[m.group(1)], settings.template)


# ═══════════════════════════════════════════════════════════════════
#  Pipeline
# ═══════════════════════════════════════════════════════════════════


def generate_properties(
    properties: Sequence[Property],
    project: str,
    group_order: Sequence[str] | None = None,
    settings: RenderSettings | None = None,
    output_path: str | None = None,
) -> GeneratedFile:
    """Build, order and render a complete properties file.

    The reported duration covers building, ordering and rendering the
    body; it is returned on the GeneratedFile rather than kept around.

    Args:
        properties:  Descriptors in output order.
        project:     Project name for the header line.
        group_order: Optional top-level group order.
        settings:    Template and patterns (defaults if None).
        output_path: Target path recorded on the result.

    Returns:
        GeneratedFile with the document content and ``duration_ms``.
    """
    t0 = time.monotonic()
    groups = order_groups(build_groups(properties), group_order)
    body = render_body(groups)
    duration_ms = int((time.monotonic() - t0) * 1000)

    content = render_document(
        groups, project, duration_ms, settings=settings, body=body,
    )

    visible = sum(1 for p in properties if p.include_in_output)
    logger.debug(
        "Rendered %d/%d properties in %d groups for '%s' (%d ms)",
        visible, len(properties), len(groups), project, duration_ms,
    )

    return GeneratedFile(
        path=output_path or f"{project}.properties",
        content=content,
        overwrite=True,
        reason=f"Generated properties file for '{project}' ({visible} properties)",
        duration_ms=duration_ms,
    )

"""
Domain models — Pydantic types for the properties generator.

All models are re-exported here for convenient access:

    from propfile.core.models import Property, GroupNode, DescriptorSet
"""

from propfile.core.models.document import DescriptorSet, GeneratedFile, RenderSettings
from propfile.core.models.group import GENERIC_GROUP_TITLE, GroupNode, find_group
from propfile.core.models.property import Property, escape_value

__all__ = [
    # document.py
    "DescriptorSet",
    "GENERIC_GROUP_TITLE",
    "GeneratedFile",
    # group.py
    "GroupNode",
    # property.py
    "Property",
    "RenderSettings",
    "escape_value",
    "find_group",
]

"""
Model introspection — turn a pydantic settings model into descriptors.

A config model declares its properties as fields.  Extra metadata rides
on ``json_schema_extra``:

    class AppConfig(BaseModel):
        model_config = ConfigDict(json_schema_extra={"group_order": ["Server"]})

        port: int = Field(
            8080,
            description="Listening port",
            json_schema_extra={"key": "server.port", "group": ["Server"]},
        )

Recognised field keys: ``key``, ``group``, ``value`` (live override)
and ``no_property`` (hide).  ``Field(deprecated=...)`` marks the
property deprecated.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from propfile.core.models.property import Property

logger = logging.getLogger(__name__)


class IntrospectionError(Exception):
    """Raised when a model reference cannot be resolved."""


def load_model(ref: str) -> type[BaseModel]:
    """Import a model class from a ``package.module:ClassName`` reference.

    Raises:
        IntrospectionError: If the reference is malformed, the module
            cannot be imported, or the target is not a pydantic model.
    """
    module_name, sep, attr = ref.partition(":")
    if not sep or not module_name or not attr:
        raise IntrospectionError(
            f"Invalid model reference '{ref}' (expected 'package.module:ClassName')"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise IntrospectionError(f"Cannot import {module_name}: {e}") from e

    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise IntrospectionError(f"{module_name} has no attribute '{attr}'") from e

    if not (isinstance(target, type) and issubclass(target, BaseModel)):
        raise IntrospectionError(f"{ref} is not a pydantic model class")

    return target


def _extra(info: FieldInfo) -> dict[str, Any]:
    extra = info.json_schema_extra
    return extra if isinstance(extra, dict) else {}


def format_value(value: Any) -> str:
    """Render a Python default the way a properties file expects it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(format_value(v) for v in value)
    return str(value)


def _default_of(info: FieldInfo) -> str:
    if info.is_required():
        return ""
    return format_value(info.get_default(call_default_factory=True))


def extract_properties(model_cls: type[BaseModel]) -> list[Property]:
    """Build one descriptor per model field, in declaration order."""
    properties: list[Property] = []

    for field_name, info in model_cls.model_fields.items():
        extra = _extra(info)
        override = extra.get("value")

        properties.append(Property(
            name=str(extra.get("key") or info.alias or field_name),
            description=info.description or "",
            default_value=_default_of(info),
            override_value=format_value(override) if override is not None else None,
            deprecated=bool(info.deprecated),
            include_in_output=not extra.get("no_property", False),
            group=extra.get("group"),
        ))

    logger.debug("Extracted %d properties from %s", len(properties), model_cls.__name__)
    return properties


def extract_group_order(model_cls: type[BaseModel]) -> list[str] | None:
    """Return the model's declared top-level group order, if any."""
    extra = model_cls.model_config.get("json_schema_extra")
    if not isinstance(extra, dict):
        return None
    order = extra.get("group_order")
    if order is None:
        return None
    if isinstance(order, str):
        return [order]
    return [str(title) for title in order]

"""Optional structured-object mapping capability.

Arbitrary objects (pydantic models, dataclasses, TypedDicts, plain
instances) are turned into plain mappings by an :class:`ObjectMapper`.
The capability is optional: :func:`detect_object_mapper` probes for it
once and returns ``None`` when it is missing or disabled, and callers
degrade instead of failing.
"""

from __future__ import annotations

import importlib
from collections.abc import Callable, Mapping
from types import ModuleType
from typing import Any, Protocol, runtime_checkable

import structlog

logger = structlog.get_logger(__name__)


@runtime_checkable
class ObjectMapper(Protocol):
    """Converts a structured object into a string-keyed mapping.

    Implementations must be safe to share between threads once built.
    """

    def convert_to_mapping(self, value: Any) -> Mapping[str, Any]: ...


def _public_fields(value: Any) -> dict[str, Any]:
    """Serialize a plain instance by its public attributes.

    Attributes come from ``__slots__`` (base classes first) and then from
    the instance ``__dict__``; names starting with ``_`` are skipped.
    Classes, modules, callables and instances without public attributes
    raise :class:`TypeError`.
    """
    if isinstance(value, (type, ModuleType)) or callable(value):
        raise TypeError(f"cannot map {type(value).__name__} to a document")

    fields: dict[str, Any] = {}
    for cls in reversed(type(value).__mro__):
        slots = cls.__dict__.get("__slots__", ())
        for name in (slots,) if isinstance(slots, str) else slots:
            if not name.startswith("_") and hasattr(value, name):
                fields[name] = getattr(value, name)
    for name, attr in getattr(value, "__dict__", {}).items():
        if not name.startswith("_"):
            fields[name] = attr

    if not fields:
        raise TypeError(f"{type(value).__name__} has no public attributes to map")
    return fields


class PydanticObjectMapper:
    """Object mapper backed by pydantic-core's serializer.

    Values come back in JSON-compatible form: pydantic models,
    dataclasses and TypedDicts through their schema, plain instances
    through their public attributes, datetimes as ISO strings.  Raises
    whatever the serializer raises for unmappable types or cycles, and
    :class:`TypeError` when the value does not serialize to an object.
    """

    def __init__(self, serializer: Callable[..., Any]) -> None:
        self._serialize = serializer

    def convert_to_mapping(self, value: Any) -> Mapping[str, Any]:
        result = self._serialize(value, by_alias=True, fallback=_public_fields)
        if not isinstance(result, Mapping):
            raise TypeError(
                f"{type(value).__name__} serialized to {type(result).__name__}, not an object"
            )
        return result


def detect_object_mapper(*, enabled: bool = True) -> ObjectMapper | None:
    """Probe for the optional mapping capability.

    Call once at startup and keep the result; the probe is not cached
    here.
    """
    if not enabled:
        logger.info("object_mapper_unavailable", reason="disabled")
        return None

    try:
        pydantic_core = importlib.import_module("pydantic_core")
    except ImportError:
        logger.info("object_mapper_unavailable", reason="pydantic_core_not_installed")
        return None

    mapper = PydanticObjectMapper(pydantic_core.to_jsonable_python)
    logger.info("object_mapper_detected", mapper=type(mapper).__name__)
    return mapper

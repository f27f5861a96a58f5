"""Document normalizer — turns values of unknown shape into canonical documents.

Conversion is best-effort: one bad item must never abort the stream it
came from, so every failure is reported as a :class:`Conversion` with a
:class:`ConversionFailure` cause plus a single warning log event, and no
exception escapes :meth:`DocumentNormalizer.convert`.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from .config import NormalizerConfig
from .document import Document
from .mapper import ObjectMapper, detect_object_mapper

logger = structlog.get_logger(__name__)


class ConversionFailure(str, Enum):
    """Why no document was produced."""

    PARSE_FAILURE = "parse_failure"
    CAPABILITY_UNAVAILABLE = "capability_unavailable"
    TYPE_UNCONVERTIBLE = "type_unconvertible"


@dataclass(frozen=True, slots=True)
class Conversion:
    """Outcome of one conversion.

    The normalizer always sets exactly one of ``document`` and ``failure``.
    """

    document: Document | None = None
    failure: ConversionFailure | None = None

    @property
    def ok(self) -> bool:
        return self.document is not None


def _type_name(value: Any) -> str:
    cls = type(value)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


class DocumentNormalizer:
    """Convert mappings, JSON text and structured objects into :class:`Document`.

    Inputs are tried most specific first:

    1. :class:`Document` -> returned unchanged
    2. any other mapping -> wrapped without copying
    3. ``str`` / ``bytes`` -> parsed as a JSON object
    4. anything else -> the optional :class:`ObjectMapper`

    The normalizer keeps no per-call state; the mapper it holds is fixed
    at construction, so one instance can serve any number of threads.
    """

    def __init__(self, object_mapper: ObjectMapper | None) -> None:
        self._mapper = object_mapper

    @classmethod
    def from_config(cls, config: NormalizerConfig) -> DocumentNormalizer:
        """Build a normalizer, probing for the object mapper exactly once."""
        return cls(detect_object_mapper(enabled=config.object_mapper_enabled))

    @property
    def mapper_available(self) -> bool:
        return self._mapper is not None

    def convert(self, value: Any) -> Conversion:
        if isinstance(value, Document):
            return Conversion(document=value)
        if isinstance(value, Mapping):
            return Conversion(document=Document(value))
        if isinstance(value, (str, bytes, bytearray)):
            return self._from_json(value)
        return self._from_object(value)

    def normalize(self, value: Any) -> Document | None:
        """Return the canonical document for *value*, or None to skip it."""
        return self.convert(value).document

    # ------------------------------------------------------------------
    # JSON text
    # ------------------------------------------------------------------

    def _from_json(self, raw: str | bytes | bytearray) -> Conversion:
        try:
            text = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
            parsed = json.loads(text)
        except (ValueError, RecursionError) as exc:
            return self._failed(ConversionFailure.PARSE_FAILURE, raw, error=str(exc))

        if not isinstance(parsed, dict):
            return self._failed(
                ConversionFailure.PARSE_FAILURE,
                raw,
                error=f"expected a JSON object, got {_type_name(parsed)}",
            )
        return Conversion(document=Document(parsed))

    # ------------------------------------------------------------------
    # Structured objects
    # ------------------------------------------------------------------

    def _from_object(self, value: Any) -> Conversion:
        if self._mapper is None:
            return self._failed(ConversionFailure.CAPABILITY_UNAVAILABLE, value)

        try:
            mapping = self._mapper.convert_to_mapping(value)
        except Exception as exc:
            return self._failed(ConversionFailure.TYPE_UNCONVERTIBLE, value, error=str(exc))
        return Conversion(document=Document(mapping))

    @staticmethod
    def _failed(cause: ConversionFailure, value: Any, **context: Any) -> Conversion:
        logger.warning(
            "document_conversion_failed",
            cause=cause.value,
            value_type=_type_name(value),
            **context,
        )
        return Conversion(failure=cause)


# ----------------------------------------------------------------------
# Process-wide default
# ----------------------------------------------------------------------

_default_normalizer: DocumentNormalizer | None = None
_default_lock = threading.Lock()


def default_normalizer() -> DocumentNormalizer:
    """Return the shared normalizer, creating it from env config on first use."""
    global _default_normalizer
    normalizer = _default_normalizer
    if normalizer is None:
        with _default_lock:
            if _default_normalizer is None:
                _default_normalizer = DocumentNormalizer.from_config(NormalizerConfig())
            normalizer = _default_normalizer
    return normalizer


def reset_default_normalizer() -> None:
    """Drop the shared normalizer so the next call re-reads config and re-probes."""
    global _default_normalizer
    with _default_lock:
        _default_normalizer = None


def normalize(value: Any) -> Document | None:
    return default_normalizer().normalize(value)

"""Canonical document — the ordered-key mapping shared across the pipeline."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any


class Document(MutableMapping[str, Any]):
    """A mutable mapping view over an existing key/value structure.

    The wrapped mapping is stored as-is, never copied, so reads and
    writes through the document and through the source mapping observe
    the same data::

        raw = {"ts": 1}
        doc = Document(raw)
        doc["ts"] = 2
        assert raw["ts"] == 2

    Key order is whatever the underlying mapping preserves (insertion
    order for ``dict``).
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data = {} if data is None else data

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value  # type: ignore[index]

    def __delitem__(self, key: str) -> None:
        del self._data[key]  # type: ignore[attr-defined]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Document):
            other = other._data
        if isinstance(other, Mapping):
            return dict(self._data.items()) == dict(other.items())
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Document({dict(self._data.items())!r})"

    def to_mapping(self) -> Mapping[str, Any]:
        """Return the underlying mapping (same object, not a copy)."""
        return self._data

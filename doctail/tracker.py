"""Tail tracker — holds the last-seen increasing value and hands it to a bookmark store."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any, Protocol

import structlog

from .tail_tracking import TailTrackingConfig, TrackingKey

logger = structlog.get_logger(__name__)


class BookmarkStore(Protocol):
    """Durable storage for tail tracking bookmarks.

    - read: last value written under *key*, or None
    - write: replace the value stored under *key*
    """

    def read(self, key: TrackingKey) -> Any | None: ...

    def write(self, key: TrackingKey, value: Any) -> None: ...


class InMemoryBookmarkStore:
    """Bookmark store kept in process memory (tests, single-run jobs)."""

    def __init__(self) -> None:
        self._values: dict[TrackingKey, Any] = {}
        self._lock = threading.Lock()

    def read(self, key: TrackingKey) -> Any | None:
        with self._lock:
            return self._values.get(key)

    def write(self, key: TrackingKey, value: Any) -> None:
        with self._lock:
            self._values[key] = value


class TailTracker:
    """Track the resume position of one tailed collection.

    The tracked value only ever moves forward: :meth:`observe` ignores
    values that are not strictly greater than the current one, so a
    persisted bookmark never regresses.  Values of incomparable types
    raise :class:`TypeError`.
    """

    def __init__(self, config: TailTrackingConfig, store: BookmarkStore | None = None) -> None:
        if config.persistent and store is None:
            raise ValueError("persistent tail tracking requires a bookmark store")
        self.config = config
        self._store = store
        self._last_value: Any | None = None
        self._lock = threading.Lock()

    @property
    def last_value(self) -> Any | None:
        return self._last_value

    def load(self) -> Any | None:
        """Restore the last value from the store (persistent tracking only).

        The stored value is adopted only if it is ahead of what has been
        observed so far; returns the resulting current value.
        """
        if not self.config.persistent:
            return self._last_value

        assert self._store is not None
        stored = self._store.read(self.config.key)
        with self._lock:
            if stored is not None and (self._last_value is None or stored > self._last_value):
                self._last_value = stored
            value = self._last_value
        logger.info(
            "tail_tracking_loaded",
            collection=self.config.collection,
            persistent_id=self.config.persistent_id,
            stored_value=stored,
            last_value=value,
        )
        return value

    def observe(self, document: Mapping[str, Any]) -> bool:
        """Advance to *document*'s increasing value. Returns True if it moved.

        Documents without the field, or with it set to None, are skipped.
        """
        field = self.config.increasing_field
        value = document.get(field)
        if value is None:
            logger.debug("tail_tracking_field_missing", increasing_field=field)
            return False

        with self._lock:
            if self._last_value is not None and not value > self._last_value:
                return False
            self._last_value = value
        return True

    def persist(self) -> None:
        """Write the current value to the store. No-op when not persistent."""
        if not self.config.persistent:
            return

        value = self._last_value
        if value is None:
            return

        assert self._store is not None
        self._store.write(self.config.key, value)
        logger.debug(
            "tail_tracking_persisted",
            collection=self.config.collection,
            field=self.config.field,
            persistent_id=self.config.persistent_id,
            last_value=value,
        )

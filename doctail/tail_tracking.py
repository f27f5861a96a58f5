"""Tail tracking descriptor — where the resume bookmark of a tailed collection lives."""

from __future__ import annotations

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_COLLECTION = "tailTrackingDefault"
DEFAULT_FIELD = "lastTrackingValue"


class TrackingKey(NamedTuple):
    """Key a bookmark store reads and writes the last tracked value under."""

    db: str | None
    collection: str
    field: str
    persistent_id: str | None


class TailTrackingConfig(BaseModel):
    """Immutable description of how a tailed collection is bookmarked.

    ``collection`` and ``field`` fall back to :data:`DEFAULT_COLLECTION`
    and :data:`DEFAULT_FIELD` at construction; no other field is
    defaulted.  ``db=None`` leaves the location to the bookmark store.
    ``increasing_field`` is taken as given, its syntax is the caller's
    concern.
    """

    model_config = ConfigDict(frozen=True)

    persistent: bool = Field(description="Persist the last tracked value across restarts")
    increasing_field: str = Field(description="Monotonically increasing field used as the resume key")
    db: str | None = Field(default=None, description="Database holding the bookmark")
    collection: str = Field(default=DEFAULT_COLLECTION, description="Collection holding the bookmark")
    field: str = Field(default=DEFAULT_FIELD, description="Field the bookmark value is stored under")
    persistent_id: str | None = Field(
        default=None,
        description="Separates this tailer's bookmark from others sharing the collection",
    )

    @field_validator("collection", mode="before")
    @classmethod
    def _default_collection(cls, value: object) -> object:
        return DEFAULT_COLLECTION if value is None or value == "" else value

    @field_validator("field", mode="before")
    @classmethod
    def _default_field(cls, value: object) -> object:
        return DEFAULT_FIELD if value is None or value == "" else value

    @property
    def key(self) -> TrackingKey:
        return TrackingKey(self.db, self.collection, self.field, self.persistent_id)

"""Settings loaded from environment variables.

Uses pydantic-settings so every field can be overridden via env vars.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from .tail_tracking import TailTrackingConfig


class NormalizerConfig(BaseSettings):
    """Document normalizer settings."""

    model_config = {"env_prefix": "DOCTAIL_NORMALIZER_"}

    object_mapper_enabled: bool = Field(
        default=True,
        description="Allow arbitrary objects to be mapped into documents when the mapper is installed",
    )


class TailTrackingSettings(BaseSettings):
    """Tail tracking settings for one tailed collection.

    Read once at pipeline startup and turned into an immutable
    :class:`TailTrackingConfig`.
    """

    model_config = {"env_prefix": "DOCTAIL_TAIL_"}

    increasing_field: str = Field(description="Monotonically increasing field used as the resume key")
    persistent: bool = Field(
        default=False,
        description="Persist the last tracked value across restarts",
    )
    db: str | None = Field(
        default=None,
        description="Database holding the bookmark (None = the store's default)",
    )
    collection: str | None = Field(
        default=None,
        description="Collection holding the bookmark (None = tailTrackingDefault)",
    )
    field: str | None = Field(
        default=None,
        description="Field under which the bookmark value is stored (None = lastTrackingValue)",
    )
    persistent_id: str | None = Field(
        default=None,
        description="Identifier separating this tailer's bookmark from others in the same collection",
    )

    def to_tracking_config(self) -> TailTrackingConfig:
        return TailTrackingConfig(
            persistent=self.persistent,
            increasing_field=self.increasing_field,
            db=self.db,
            collection=self.collection,
            field=self.field,
            persistent_id=self.persistent_id,
        )

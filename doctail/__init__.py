"""doctail — canonical documents and resumable tail tracking for polling pipelines.

Public API re-exported here for convenience::

    from doctail import DocumentNormalizer, TailTrackingConfig, normalize
"""

from .config import NormalizerConfig, TailTrackingSettings
from .document import Document
from .logging import setup_logging
from .mapper import ObjectMapper, PydanticObjectMapper, detect_object_mapper
from .normalizer import (
    Conversion,
    ConversionFailure,
    DocumentNormalizer,
    default_normalizer,
    normalize,
    reset_default_normalizer,
)
from .tail_tracking import (
    DEFAULT_COLLECTION,
    DEFAULT_FIELD,
    TailTrackingConfig,
    TrackingKey,
)
from .tracker import BookmarkStore, InMemoryBookmarkStore, TailTracker

__all__ = [
    "DEFAULT_COLLECTION",
    "DEFAULT_FIELD",
    "BookmarkStore",
    "Conversion",
    "ConversionFailure",
    "Document",
    "DocumentNormalizer",
    "InMemoryBookmarkStore",
    "NormalizerConfig",
    "ObjectMapper",
    "PydanticObjectMapper",
    "TailTracker",
    "TailTrackingConfig",
    "TailTrackingSettings",
    "TrackingKey",
    "default_normalizer",
    "detect_object_mapper",
    "normalize",
    "reset_default_normalizer",
    "setup_logging",
]

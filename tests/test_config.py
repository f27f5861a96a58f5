"""Tests for doctail.config."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from doctail.config import NormalizerConfig, TailTrackingSettings
from doctail.tail_tracking import DEFAULT_COLLECTION, DEFAULT_FIELD, TailTrackingConfig


class TestNormalizerConfig:
    def test_defaults(self):
        cfg = NormalizerConfig()
        assert cfg.object_mapper_enabled is True

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DOCTAIL_NORMALIZER_OBJECT_MAPPER_ENABLED", "0")
        cfg = NormalizerConfig()
        assert cfg.object_mapper_enabled is False


class TestTailTrackingSettings:
    def test_increasing_field_required(self):
        with pytest.raises(ValidationError):
            TailTrackingSettings()

    def test_defaults(self):
        cfg = TailTrackingSettings(increasing_field="ts")
        assert cfg.persistent is False
        assert cfg.db is None
        assert cfg.collection is None
        assert cfg.field is None
        assert cfg.persistent_id is None

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DOCTAIL_TAIL_INCREASING_FIELD", "seq")
        monkeypatch.setenv("DOCTAIL_TAIL_PERSISTENT", "true")
        monkeypatch.setenv("DOCTAIL_TAIL_DB", "events")
        monkeypatch.setenv("DOCTAIL_TAIL_PERSISTENT_ID", "tailer-7")
        cfg = TailTrackingSettings()
        assert cfg.increasing_field == "seq"
        assert cfg.persistent is True
        assert cfg.db == "events"
        assert cfg.persistent_id == "tailer-7"

    def test_to_tracking_config_applies_defaults(self):
        tracking = TailTrackingSettings(increasing_field="ts", persistent=True).to_tracking_config()
        assert isinstance(tracking, TailTrackingConfig)
        assert tracking.persistent is True
        assert tracking.increasing_field == "ts"
        assert tracking.collection == DEFAULT_COLLECTION
        assert tracking.field == DEFAULT_FIELD

    def test_to_tracking_config_passes_values(self):
        tracking = TailTrackingSettings(
            increasing_field="ts",
            db="events",
            collection="bookmarks",
            field="last_ts",
            persistent_id="p1",
        ).to_tracking_config()
        assert tracking.db == "events"
        assert tracking.collection == "bookmarks"
        assert tracking.field == "last_ts"
        assert tracking.persistent_id == "p1"

"""Shared test fixtures for the doctail test suite."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pytest
import structlog
from pydantic import BaseModel

from doctail.mapper import detect_object_mapper
from doctail.normalizer import DocumentNormalizer, reset_default_normalizer
from doctail.tail_tracking import TailTrackingConfig


@pytest.fixture(autouse=True)
def _reset_process_state():
    """Undo logging config and the shared normalizer between tests."""
    structlog.reset_defaults()
    reset_default_normalizer()
    yield
    structlog.reset_defaults()
    reset_default_normalizer()
    logging.getLogger("doctail").setLevel(logging.NOTSET)


@pytest.fixture
def normalizer() -> DocumentNormalizer:
    return DocumentNormalizer(detect_object_mapper())


@pytest.fixture
def normalizer_without_mapper() -> DocumentNormalizer:
    return DocumentNormalizer(None)


@pytest.fixture
def tracking_config() -> TailTrackingConfig:
    return TailTrackingConfig(
        persistent=True,
        increasing_field="ts",
        db="events",
        collection="bookmarks",
        field="last_ts",
        persistent_id="tailer-1",
    )


# ------------------------------------------------------------------
# Sample structured objects
# ------------------------------------------------------------------


@dataclass
class Point:
    a: int
    b: str


class PointModel(BaseModel):
    a: int
    b: str


@dataclass
class Node:
    name: str
    children: list


class PlainValue:
    def __init__(self) -> None:
        self.a = 1
        self.b = "x"
        self._cache = None


class SlottedValue:
    __slots__ = ("a", "b")

    def __init__(self) -> None:
        self.a = 1
        self.b = "x"


class Opaque:
    """Only private state, so there is nothing to map."""

    def __init__(self) -> None:
        self._handle = object()

"""
Root conftest.py - sys.path, env vars, shared fixtures.

Sets up the test environment so the library can be imported and driven
against an in-memory host map.
"""

import os
import sys

import pytest

# Add project root to sys.path so 'map_utils', 'jam_session', 'config', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

MAP_UTILS_ENV_VARS = (
    "MAP_UTILS_VECTOR_SCHEMES",
    "MAP_UTILS_GEOJSON_SUFFIXES",
    "MAP_UTILS_RASTER_TILE_SIZE",
    "MAP_UTILS_MISSING_LAYER_PATTERN",
    "MAP_UTILS_MISSING_SOURCE_PATTERN",
    "MAP_UTILS_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """
    Start every test from default configuration.

    Clears MAP_UTILS_* variables and the cached config singleton so one
    test's environment never leaks into another.
    """
    from config import reset_config

    for key in MAP_UTILS_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def host():
    """In-memory host map that records every call."""
    from tests.factories.map_factories import FakeMapHost
    return FakeMapHost()


@pytest.fixture
def U(host):
    """MapUtils bound to the fake host."""
    from map_utils import init
    return init(host)


@pytest.fixture
def geojson():
    """An empty FeatureCollection."""
    return {"type": "FeatureCollection", "features": []}

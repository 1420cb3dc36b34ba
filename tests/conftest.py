"""Shared pytest fixtures and configuration for all tests."""

import json
import logging

import pytest

from reckon.config import ReckonConfig, get_config
from reckon.interpreter import Interpreter
from reckon.units import build_registry, get_default_registry

RECKON_ENV_VARS = (
    "RECKON_CONFIG",
    "RECKON_MAX_DEPTH",
    "RECKON_DECIMAL_PLACES",
    "RECKON_RATES_FILE",
    "RECKON_PLACEHOLDER",
    "RECKON_STRICT_UNITS",
    "RECKON_VERBOSE",
)


def pytest_configure(config):
    """Register markers for pytest."""
    config.addinivalue_line("markers", "slow: mark test as slow running")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Run every test without ambient config files, env overrides or cached state."""
    for name in RECKON_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_config.cache_clear()
    get_default_registry.cache_clear()
    yield
    get_config.cache_clear()
    get_default_registry.cache_clear()
    reckon_logger = logging.getLogger("reckon")
    for handler in list(reckon_logger.handlers):
        if getattr(handler, "_reckon_handler", False):
            reckon_logger.removeHandler(handler)
    reckon_logger.setLevel(logging.NOTSET)


@pytest.fixture
def registry():
    """Registry with the built-in temperature and placeholder currency families."""
    return build_registry()


@pytest.fixture
def interpreter(registry):
    return Interpreter(config=ReckonConfig(), registry=registry)


@pytest.fixture
def fixer_payload():
    """Body of a successful rate fetch, quoted against EUR."""
    return {
        "success": True,
        "timestamp": 1561400000,
        "base": "EUR",
        "date": "2019-06-24",
        "rates": {"USD": 1.25, "CAD": 1.5, "GBP": 0.8, "CHF": 1.1, "SEK": 10.0},
    }


@pytest.fixture
def rates_file(tmp_path, fixer_payload):
    path = tmp_path / "latest-fx-rates.json"
    path.write_text(json.dumps(fixer_payload), encoding="utf-8")
    return path

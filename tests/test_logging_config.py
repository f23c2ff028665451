"""Tests for structlog configuration."""

import logging

import pytest
import structlog

from riju_sessions.utils import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_production_renders_json():
    configure_logging("INFO", "production")

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)


def test_development_renders_console():
    configure_logging("debug", "development")

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


def test_unknown_level_falls_back_to_info():
    configure_logging("LOUD", "development")

    wrapper = structlog.get_config()["wrapper_class"]
    assert wrapper is structlog.make_filtering_bound_logger(logging.INFO)

"""Pytest configuration and shared fixtures for the bbcode2html test suite."""

import logging
import os

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

from bbcode2html.options import BBCodeParserOptions, HtmlRendererOptions
from bbcode2html.parser import BBCodeParser
from bbcode2html.renderer import HtmlRenderer

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=300, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=100, suppress_health_check=[HealthCheck.too_slow])
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based fuzzing tests")
    config.addinivalue_line("markers", "security: Tests for injection and resource-exhaustion defenses")


@pytest.fixture
def parser() -> BBCodeParser:
    """Provide a parser with default options."""
    return BBCodeParser(BBCodeParserOptions())


@pytest.fixture
def renderer() -> HtmlRenderer:
    """Provide an HTML renderer with default options."""
    return HtmlRenderer(HtmlRendererOptions())


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handler changes the CLI makes to the package logger."""
    package_logger = logging.getLogger("bbcode2html")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate

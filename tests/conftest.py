"""Pytest configuration and fixtures."""

import pytest

from moondeob.core.context import DeobfuscationContext
from moondeob.debug import close_debug_logger
from moondeob.examples import EXAMPLE_CODES


@pytest.fixture
def context() -> DeobfuscationContext:
    """Return a fresh context with default flags."""
    return DeobfuscationContext()


@pytest.fixture
def simple_code() -> str:
    """Return the simple bundled sample."""
    return EXAMPLE_CODES["simple"]


@pytest.fixture
def medium_code() -> str:
    """Return the medium bundled sample."""
    return EXAMPLE_CODES["medium"]


@pytest.fixture
def complex_code() -> str:
    """Return the complex bundled sample."""
    return EXAMPLE_CODES["complex"]


@pytest.fixture(autouse=True)
def _reset_debug_logger():
    """Make sure no test leaves a file handler attached."""
    yield
    close_debug_logger()

"""Root conftest — shared test configuration."""

import os

import pytest

# Human-readable logs in test output
os.environ.setdefault("REACHQ_LOG_FORMAT", "text")

from reachq.infrastructure.flexible_resolvers import build_default_resolvers  # noqa: E402


@pytest.fixture
def resolvers():
    """The production resolver bundle."""
    return build_default_resolvers()

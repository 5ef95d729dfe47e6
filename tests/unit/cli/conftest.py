"""Fixtures for CLI tests."""

from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep CLI invocations from reconfiguring the root logger."""
    with patch("postertag.cli._configure_logging"):
        yield

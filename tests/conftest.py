"""
Shared pytest configuration for lanplus tests.
"""

import logging

import pytest
from hypothesis import settings

settings.register_profile(
    "fast",
    max_examples=25,
    deadline=None,
    derandomize=True,
)
settings.load_profile("fast")


@pytest.fixture
def trace_logger():
    """Logger used as the injected diagnostics sink."""
    return logging.getLogger("tests.lanplus.trace")


@pytest.fixture
def entropy_file(tmp_path):
    """A readable stand-in for the system entropy device."""
    path = tmp_path / "entropy"
    path.write_bytes(bytes(range(256)))
    return str(path)

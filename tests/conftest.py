"""
Pytest configuration for deferk tests.

Provides execution context fixtures shared across test modules.
"""

import pytest

from deferk import RuntimeConfig, ThreadPoolContext, shutdown_default_context


@pytest.fixture
def pool():
    """Two-worker thread pool with a recognisable thread name prefix."""
    ctx = ThreadPoolContext(RuntimeConfig(max_workers=2, thread_name_prefix="test-pool"))
    yield ctx
    ctx.shutdown()


@pytest.fixture(autouse=True)
def _reset_default_context():
    yield
    shutdown_default_context()

"""
Shared fixtures for the cloud-mcp tests.
"""

import random
from datetime import datetime, timezone

import pytest

from cloud_mcp.mcp.tools.demo import create_demo_registry
from cloud_mcp.mcp.tools.service import ToolService

FIXED_NOW = datetime(2024, 11, 5, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """A clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def demo_registry(rng, fixed_clock):
    return create_demo_registry(rng=rng, clock=fixed_clock)


@pytest.fixture
def service(demo_registry):
    return ToolService(demo_registry)

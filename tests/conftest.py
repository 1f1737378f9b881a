"""Shared fixtures for the chp_sim test suite."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from chp_sim.storage import STORAGE_STRATEGIES


@pytest.fixture(params=sorted(STORAGE_STRATEGIES))
def storage(request):
    """Run a test once per storage strategy."""
    return request.param

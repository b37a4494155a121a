"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local docplane package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from docplane.cache import ManualClock, ResourceCache  # noqa: E402


@pytest.fixture
def clock() -> ManualClock:
    """Clock that only moves when the test advances it."""
    return ManualClock(start=1000.0)


@pytest.fixture
def cache(clock: ManualClock) -> ResourceCache:
    """Cache with the default 30 minute TTL on a manual clock."""
    return ResourceCache(ttl_seconds=1800, clock=clock)

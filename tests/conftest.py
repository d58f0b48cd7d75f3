"""
Pytest configuration and shared fixtures for the LeakLab test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the LeakLab project.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from leaklab.api import create_app  # noqa: E402
from leaklab.config import clear_config_cache  # noqa: E402
from leaklab.engine import AllocationEngine  # noqa: E402
from leaklab.models import AppConfig, LeakConfig  # noqa: E402
from leaklab.service import LeakService  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Make sure no test sees configuration cached by another."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def sample_config_data():
    """Sample parsed config.toml for validator tests."""
    return {
        "server": {"host": "127.0.0.1", "port": 9090, "log_level": "debug"},
        "leak": {
            "interval_seconds": 1.5,
            "chunk_mb": 20,
            "default_request_mb": 15,
            "min_request_mb": 1,
            "max_request_mb": 300,
            "fill_mode": "pattern",
            "stop_join_timeout": 3.0,
        },
        "status": {"high_memory_load_percent": 80},
    }


@pytest.fixture
def fast_config():
    """Configuration with a short scheduler interval and cheap buffer filling."""
    return AppConfig(
        leak=LeakConfig(
            interval_seconds=0.2,
            chunk_mb=1,
            fill_mode="pattern",
            stop_join_timeout=2.0,
        )
    )


@pytest.fixture
def fatal_handler():
    """Stands in for abort_process so failures are observable instead of fatal."""
    return Mock()


@pytest.fixture
def engine():
    """Allocation engine using the fast pattern filler."""
    engine = AllocationEngine(fill_mode="pattern")
    yield engine
    engine.clear_all()


@pytest.fixture
def leak_service(fast_config, fatal_handler):
    """LeakService built from fast_config; stopped and emptied after the test."""
    service = LeakService(fast_config, on_fatal=fatal_handler)
    yield service
    service.shutdown()
    service.engine.clear_all()


@pytest.fixture
def app(leak_service):
    """FastAPI app wired to the leak_service fixture."""
    return create_app(service=leak_service)

"""
Pytest configuration and shared fixtures for airdrop tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_entitlements = _common.make_entitlements
make_distribution = _common.make_distribution
make_contract = _common.make_contract
write_json = _common.write_json


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def entitlements():
    """Provide the default five-recipient entitlement list."""
    return make_entitlements()


@pytest.fixture
def distribution(entitlements):
    """Provide a distribution built over the default entitlements."""
    return make_distribution(entitlements)


@pytest.fixture
def contract(distribution):
    """Provide a contract initialized with the default distribution's root."""
    return make_contract(distribution)


@pytest.fixture
def entitlements_file(tmp_path, entitlements):
    """Write the default entitlements to a JSON file and return its path."""
    return write_json(
        tmp_path / "entitlements.json",
        [e.model_dump(mode="json") for e in entitlements],
    )


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep AIRDROP_* env vars and config files from leaking into tests."""
    import os

    for key in list(os.environ):
        if key.startswith("AIRDROP_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


# =============================================================================
# Test Helpers (available to all tests via fixtures)
# =============================================================================

@pytest.fixture
def assert_check_passed():
    """Helper to assert a specific check passed in VerificationResult."""
    def _assert(result, check_id: str):
        checks = [c for c in result.checks if c.check_id == check_id]
        assert len(checks) == 1, f"Expected check '{check_id}' not found in {[c.check_id for c in result.checks]}"
        assert checks[0].ok, f"Check '{check_id}' failed: {checks[0].message}"
    return _assert


@pytest.fixture
def assert_check_failed():
    """Helper to assert a specific check failed in VerificationResult."""
    def _assert(result, check_id: str):
        checks = [c for c in result.checks if c.check_id == check_id]
        assert len(checks) == 1, f"Expected check '{check_id}' not found in {[c.check_id for c in result.checks]}"
        assert not checks[0].ok, f"Check '{check_id}' unexpectedly passed"
    return _assert

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

from airdrop.ledger import WhitelistMintLedger  # noqa: E402
from airdrop.merkle import MerkleTreeBuilder  # noqa: E402
from fixtures.accounts import ALICE, BOB, OWNER  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def whitelist():
    """Provide the default eligible set {ALICE, BOB}."""
    return [ALICE, BOB]


@pytest.fixture
def tree(whitelist):
    """Provide the built WhitelistTree for the default set."""
    return MerkleTreeBuilder.build_tree(whitelist)


@pytest.fixture
def ledger(tree):
    """Provide a ledger initialized by OWNER with the default root."""
    return WhitelistMintLedger.create(OWNER, tree.root)


@pytest.fixture(autouse=True)
def _clean_airdrop_env(monkeypatch):
    """Keep AIRDROP_* variables from the developer's shell out of tests."""
    import os
    for name in list(os.environ):
        if name.startswith("AIRDROP_"):
            monkeypatch.delenv(name, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )

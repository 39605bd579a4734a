"""
Pytest configuration and shared fixtures for incremental Merkle tree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
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

make_sum_tree = _common.make_sum_tree
make_digest_tree = _common.make_digest_tree
make_digest_leaves = _common.make_digest_leaves


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def sum_tree():
    """The depth=2, arity=2, zero=0, sum tree holding leaves 1, 2, 3."""
    tree = make_sum_tree()
    for leaf in (1, 2, 3):
        tree.insert(leaf)
    return tree


@pytest.fixture
def digest_leaves():
    """Eleven distinct 32-byte leaves."""
    return make_digest_leaves(11)


@pytest.fixture
def digest_tree(digest_leaves):
    """sha256 tree (depth 4, arity 2) bulk-loaded with eleven leaves."""
    return make_digest_tree(depth=4, arity=2, leaves=digest_leaves)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove IMT_* environment variables for the duration of a test."""
    for key in ["IMT_DEPTH", "IMT_ARITY", "IMT_HASH", "IMT_ZERO_VALUE", "IMT_LOG_LEVEL", "IMT_LOG_FILE"]:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch

"""
Shared pytest fixtures for zfsstats tests.

These fixtures provide mock loggers, scripted command runners and fake
kstat trees so tests run without ZFS installed.
"""

from argparse import Namespace
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from zfsstats.accumulators import ListAccumulator
from tests.fixtures import (
    MockLogger,
    MockCommandRunner,
    SAMPLE_POOL_IO,
    SAMPLE_ARCSTATS,
    SAMPLE_ZIL,
    SAMPLE_DMU_TX,
    SAMPLE_ZFS_LIST,
    write_kstat_tree,
)


# =============================================================================
# Logger Fixtures
# =============================================================================

@pytest.fixture
def mock_logger():
    """
    Create a mock logger that captures all log calls.

    Usage:
        def test_something(mock_logger):
            some_function(logger=mock_logger)
            mock_logger.warning.assert_called_once()
    """
    logger = MagicMock()
    for level in ['debug', 'info', 'warning', 'error', 'critical',
                  'status', 'verbose']:
        setattr(logger, level, MagicMock())
    return logger


@pytest.fixture
def capturing_logger() -> MockLogger:
    """Create a logger that keeps messages per level for inspection."""
    return MockLogger()


# =============================================================================
# Collection Fixtures
# =============================================================================

@pytest.fixture
def acc() -> ListAccumulator:
    """An empty in-memory accumulator."""
    return ListAccumulator()


@pytest.fixture
def zfs_list_runner() -> MockCommandRunner:
    """A runner answering ``zfs list`` with three datasets."""
    return MockCommandRunner({r'^zfs list': (SAMPLE_ZFS_LIST, '', 0)})


@pytest.fixture
def empty_runner() -> MockCommandRunner:
    """A runner answering every command with empty output."""
    return MockCommandRunner()


@pytest.fixture
def kstat_root(tmp_path) -> Path:
    """A kstat tree with two pools and three counter categories."""
    return write_kstat_tree(
        tmp_path / "kstat",
        pools={'rpool': SAMPLE_POOL_IO, 'tank': SAMPLE_POOL_IO},
        categories={'arcstats': SAMPLE_ARCSTATS, 'zil': SAMPLE_ZIL, 'dmu_tx': SAMPLE_DMU_TX},
    )


# =============================================================================
# Args Fixtures (Namespace objects for CLI simulation)
# =============================================================================

@pytest.fixture
def base_args() -> Namespace:
    """Args as produced by the parser with no options given."""
    return Namespace(
        debug=False,
        verbose=False,
        stream_log_level=None,
        kstat_path='',
        kstat_metrics=[],
        pool_metrics=False,
        dataset_metrics=False,
        zfs_bin='zfs',
        config_file=None,
    )


# =============================================================================
# Environment Variable Fixtures
# =============================================================================

@pytest.fixture
def clean_env(monkeypatch):
    """Remove zfsstats-related environment variables."""
    monkeypatch.delenv('ZFSSTATS_DEBUG', raising=False)
    return monkeypatch

"""
Test fixtures package for zfsstats tests.

This package provides reusable mock classes and sample data
for testing the kstat readers, dataset gathering and the collector.
"""

from tests.fixtures.mock_logger import MockLogger, create_mock_logger
from tests.fixtures.mock_runner import MockCommandRunner
from tests.fixtures.sample_data import (
    SAMPLE_POOL_IO,
    SAMPLE_POOL_IO_FIELDS,
    SAMPLE_ARCSTATS,
    SAMPLE_ZIL,
    SAMPLE_DMU_TX,
    SAMPLE_ZFS_LIST,
    write_kstat_tree,
    counter_file,
)

__all__ = [
    # Mock classes
    'MockLogger',
    'create_mock_logger',
    'MockCommandRunner',
    # Sample data
    'SAMPLE_POOL_IO',
    'SAMPLE_POOL_IO_FIELDS',
    'SAMPLE_ARCSTATS',
    'SAMPLE_ZIL',
    'SAMPLE_DMU_TX',
    'SAMPLE_ZFS_LIST',
    'write_kstat_tree',
    'counter_file',
]

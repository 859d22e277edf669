"""
ZFS kstat readers.

ZFS on Linux exposes its kernel statistics as pseudo-files under
``/proc/spl/kstat/zfs``. Two layouts are read here:

- ``<root>/<pool>/io``: a three line table (title, keys, values) with the
  aggregate I/O counters of one pool.
- ``<root>/<category>``: a counter file with two header lines followed by
  one ``name type data`` row per counter.

Pool tables are structural data and any problem with them is fatal to the
pass. Counter files are best effort: missing files and bad values are
tolerated.
"""

import glob
import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from zfsstats.config import POOL_MEASUREMENT, UNPREFIXED_KSTAT_METRICS
from zfsstats.errors import ColumnMismatchError, KstatReadError, KstatValueError, MalformedTableError
from zfsstats.interfaces.accumulator import AccumulatorInterface
from zfsstats.utils import join_names, parse_int64, read_lines


# =============================================================================
# Pool Discovery
# =============================================================================

@dataclass(frozen=True)
class PoolInfo:
    """A pool found under the kstat root and the path of its I/O table."""
    name: str
    io_filename: str


def discover_pools(kstat_path: str) -> List[PoolInfo]:
    """
    Find every pool exposing an ``io`` table under ``kstat_path``.

    Args:
        kstat_path: Root of the kstat tree.

    Returns:
        List of PoolInfo sorted by path. Empty if the root is missing or holds
        no pools, since ZFS may simply not be loaded on this host.

    Example:
        >>> discover_pools("/proc/spl/kstat/zfs")
        [PoolInfo(name='tank', io_filename='/proc/spl/kstat/zfs/tank/io')]
    """
    pools = []
    for io_filename in sorted(glob.glob(os.path.join(glob.escape(kstat_path), '*', 'io'))):
        name = io_filename.split(os.sep)[-2]
        pools.append(PoolInfo(name=name, io_filename=io_filename))
    return pools


def get_pool_tags(pools: Iterable[PoolInfo]) -> Dict[str, str]:
    """Build the aggregate ``pools`` tag from discovered pools."""
    return {'pools': join_names(pool.name for pool in pools)}


# =============================================================================
# Pool I/O Tables
# =============================================================================

def parse_pool_io(path: str) -> Dict[str, int]:
    """
    Parse a pool ``io`` kstat table.

    The file holds a title line, a line of whitespace separated keys and a
    line of whitespace separated values:

        12 3 0x00 1 80 2226625432 10766917463226
        nread    nwritten   reads    writes   wtime    wlentime ...
        1884160  6450688    22       978      272187126 2850519036 ...

    Args:
        path: Path of the ``io`` file.

    Returns:
        Dictionary mapping each key to its integer value.

    Raises:
        KstatReadError: If the file cannot be read.
        MalformedTableError: If the file does not have exactly 3 lines.
        ColumnMismatchError: If key and value counts differ.
        KstatValueError: If any value is not a 64-bit integer.
    """
    try:
        lines = read_lines(path)
    except OSError as e:
        raise KstatReadError(path, str(e)) from e

    if len(lines) != 3:
        raise MalformedTableError(path, len(lines))

    keys = lines[1].split()
    values = lines[2].split()

    if len(keys) != len(values):
        raise ColumnMismatchError(keys, values)

    fields = {}
    for key, raw_value in zip(keys, values):
        try:
            fields[key] = parse_int64(raw_value)
        except ValueError as e:
            raise KstatValueError(path, key, raw_value) from e
    return fields


def gather_pool_stats(pool: PoolInfo, acc: AccumulatorInterface, logger=None) -> None:
    """Parse one pool's I/O table and emit it as a ``zfs_pool`` record."""
    fields = parse_pool_io(pool.io_filename)
    if logger is not None:
        logger.verbose(f"Read {len(fields)} I/O counters for pool {pool.name}")
    acc.add_fields(POOL_MEASUREMENT, fields, {'pool': pool.name})


# =============================================================================
# Counter Category Files
# =============================================================================

def kstat_field_name(category: str, raw_key: str) -> str:
    """Name of the emitted field for ``raw_key`` read from ``category``.

    Example:
        >>> kstat_field_name("arcstats", "hits")
        'arcstats_hits'
        >>> kstat_field_name("zil", "zil_commit_count")
        'zil_commit_count'
    """
    if category in UNPREFIXED_KSTAT_METRICS:
        return raw_key
    return f"{category}_{raw_key}"


def parse_kstat_category(category: str, path: str,
                         fields: Optional[Dict[str, int]] = None,
                         logger=None) -> Dict[str, int]:
    """
    Parse a kstat counter file and merge its counters into ``fields``.

    The first two lines are header metadata and are skipped. For every other
    line the first token is the counter name and the last token its value.
    Values that are not 64-bit integers are recorded as 0. An unreadable file
    contributes nothing, since not every category exists on every ZFS release.

    Args:
        category: Category name, used to derive the field names.
        path: Path of the counter file.
        fields: Mapping to merge into. A new one is created if omitted.
        logger: Optional logger tracing files read and skipped.

    Returns:
        The merged mapping (``fields`` itself when given).

    Example:
        A file containing::

            6 1 0x01 91 4368 2226625432 10766917463226
            name                            type data
            hits                            4    123456

        yields ``{'arcstats_hits': 123456}`` for category ``arcstats``.
    """
    if fields is None:
        fields = {}

    try:
        lines = read_lines(path)
    except OSError as e:
        if logger is not None:
            logger.verbose(f"Skipping kstat category {category}: {e}")
        return fields

    count = 0
    for line in lines[2:]:
        raw_data = line.split()
        if not raw_data:
            continue
        try:
            value = parse_int64(raw_data[-1])
        except ValueError:
            value = 0
        fields[kstat_field_name(category, raw_data[0])] = value
        count += 1

    if logger is not None:
        logger.verbose(f"Read {count} counters from kstat category {category}")
    return fields


def gather_kstat_metrics(kstat_path: str, categories: Iterable[str], logger=None) -> Dict[str, int]:
    """Merge the counters of every category under ``kstat_path`` into one mapping."""
    fields: Dict[str, int] = {}
    for category in categories:
        parse_kstat_category(category, os.path.join(kstat_path, category), fields, logger=logger)
    return fields

"""
ZFS statistics collection.

Reads pool and counter statistics from the ZFS kstat tree and dataset
properties from ``zfs list`` and normalizes them into metric records.
"""

VERSION = "1.0.0"
__version__ = VERSION

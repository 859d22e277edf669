"""
Interface definitions for zfsstats.

This package defines the abstract interfaces (contracts) that components
must implement. Using interfaces lets the collector be exercised against
an in-memory accumulator and a scripted command runner in tests.

Available Interfaces:

Accumulator Interfaces:
    - AccumulatorInterface: Receiver of finished metric records
    - MetricRecord: A named measurement with integer fields and string tags

Runner Interfaces:
    - CommandRunnerInterface: Executes an external query command

Collector Interfaces:
    - CollectorInterface: Drives one collection pass into an accumulator
"""

from zfsstats.interfaces.accumulator import (
    AccumulatorInterface,
    MetricRecord,
)

from zfsstats.interfaces.runner import (
    CommandRunnerInterface,
)

from zfsstats.interfaces.collector import (
    CollectorInterface,
)

__all__ = [
    # Accumulator interfaces
    'AccumulatorInterface',
    'MetricRecord',
    # Runner interfaces
    'CommandRunnerInterface',
    # Collector interfaces
    'CollectorInterface',
]

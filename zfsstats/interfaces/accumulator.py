"""
Accumulator interface definitions for zfsstats.

The accumulator is the boundary between collection and whatever pipeline
consumes the records. Collection only ever calls ``add_fields``; any
buffering, serialization, or transport is the accumulator's business.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict


@dataclass
class MetricRecord:
    """A single normalized metric record.

    Attributes:
        measurement: Metric name, e.g. 'zfs' or 'zfs_pool'.
        fields: Counter values keyed by field name.
        tags: Identifying labels keyed by tag name.
    """
    measurement: str
    fields: Dict[str, int] = field(default_factory=dict)
    tags: Dict[str, str] = field(default_factory=dict)


class AccumulatorInterface(ABC):
    """Interface for receivers of finished metric records.

    Example:
        class PrintAccumulator(AccumulatorInterface):
            def add_fields(self, measurement, fields, tags):
                print(measurement, tags, fields)
    """

    @abstractmethod
    def add_fields(self, measurement: str, fields: Dict[str, int], tags: Dict[str, str]) -> None:
        """Accept one finished record.

        Args:
            measurement: Metric name.
            fields: Counter values keyed by field name.
            tags: Identifying labels keyed by tag name.
        """
        pass

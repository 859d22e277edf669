"""
Collector interface definitions for zfsstats.

A collector performs one synchronous collection pass and hands every record
it produces to an accumulator. Scheduling of repeated passes belongs to the
caller.
"""

from abc import ABC, abstractmethod

from zfsstats.interfaces.accumulator import AccumulatorInterface


class CollectorInterface(ABC):
    """Interface for statistics collectors."""

    @abstractmethod
    def collect(self, acc: AccumulatorInterface) -> None:
        """Run one collection pass.

        Args:
            acc: Accumulator receiving the produced records.

        Raises:
            ZfsStatsException: On any hard failure. Records emitted before
                the failure are not retracted.
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the statistics source exists on this host.

        Returns:
            True if collection can be attempted, False otherwise.
        """
        pass

    @abstractmethod
    def get_collection_method(self) -> str:
        """Return the name of the collection method.

        Returns:
            String identifier like 'kstat'.
        """
        pass

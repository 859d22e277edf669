"""In-memory accumulator implementations."""

from typing import Dict, List

from zfsstats.interfaces.accumulator import AccumulatorInterface, MetricRecord


class ListAccumulator(AccumulatorInterface):
    """Keeps every record it receives, in arrival order.

    Example:
        acc = ListAccumulator()
        collector.collect(acc)
        for record in acc.records_for('zfs_pool'):
            print(record.tags['pool'], record.fields['nread'])
    """

    def __init__(self):
        self.records: List[MetricRecord] = []

    def add_fields(self, measurement: str, fields: Dict[str, int], tags: Dict[str, str]) -> None:
        self.records.append(MetricRecord(measurement=measurement, fields=dict(fields), tags=dict(tags)))

    def records_for(self, measurement: str) -> List[MetricRecord]:
        return [r for r in self.records if r.measurement == measurement]

    def clear(self) -> None:
        self.records.clear()

    def __len__(self) -> int:
        return len(self.records)

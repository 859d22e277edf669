"""
ZFS dataset property gathering.

Dataset space usage is not exposed through kstat, so it is queried with
``zfs list -Hp -o <properties>``. In that mode every dataset is printed on
one line, columns are tab separated and values are exact integers.
"""

from typing import List, Optional, Sequence

from zfsstats.config import DATASET_MEASUREMENT, DATASET_PROPERTIES, ZFS_BIN
from zfsstats.errors import DatasetFieldParseError
from zfsstats.interfaces.accumulator import AccumulatorInterface
from zfsstats.interfaces.runner import CommandRunnerInterface
from zfsstats.utils import join_names, parse_int64
from zfsstats.zfs_logging import ZfsStatsLogger


class DatasetStatsGatherer:
    """Lists dataset properties and turns them into metric records.

    Attributes:
        runner: Runner used to invoke the zfs tool.
        logger: Logger for progress and rejected rows.
        dataset_metrics: Emit one ``zfs_dataset`` record per dataset.
        zfs_bin: Name or path of the zfs executable.
    """

    def __init__(self, runner: CommandRunnerInterface, logger: ZfsStatsLogger,
                 dataset_metrics: bool = False, zfs_bin: str = ZFS_BIN):
        self.runner = runner
        self.logger = logger
        self.dataset_metrics = dataset_metrics
        self.zfs_bin = zfs_bin

    def zdataset(self, properties: Sequence[str]) -> List[str]:
        """Run ``zfs list`` for the given properties and return its lines."""
        return self.runner.run(self.zfs_bin, 'list', '-Hp', '-o', ','.join(properties))

    def gather(self, acc: AccumulatorInterface, properties: Optional[Sequence[str]] = None) -> str:
        """
        Gather dataset properties.

        The first column of every output line is taken as a dataset name,
        whether or not the rest of the row is usable. With ``dataset_metrics``
        enabled, rows with the wrong column count are logged and skipped,
        while a non-integer value in an accepted row aborts the whole call.

        Args:
            acc: Accumulator receiving ``zfs_dataset`` records.
            properties: Properties to list; the first must be ``name``.

        Returns:
            All dataset names joined with the tag separator.

        Raises:
            CommandFailedError: If ``zfs list`` fails.
            DatasetFieldParseError: If a property value is not an integer.
        """
        if properties is None:
            properties = DATASET_PROPERTIES

        lines = self.zdataset(properties)

        datasets = [line.split('\t')[0] for line in lines]
        self.logger.verbose(f"zfs list returned {len(lines)} lines for properties {','.join(properties)}")

        if self.dataset_metrics:
            for line in lines:
                col = line.split('\t')
                if len(col) != len(properties):
                    self.logger.warning(f"Invalid number of columns for line: {line}")
                    continue

                tags = {'dataset': col[0]}
                fields = {}
                for key, raw_value in zip(properties[1:], col[1:]):
                    try:
                        fields[key] = parse_int64(raw_value)
                    except ValueError as e:
                        raise DatasetFieldParseError(col[0], key, raw_value) from e

                acc.add_fields(DATASET_MEASUREMENT, fields, tags)

        return join_names(datasets)

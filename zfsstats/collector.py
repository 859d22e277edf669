"""
ZFS statistics collector.

This module drives one collection pass over the local ZFS subsystem:

1. Discover pools under the kstat root and build the ``pools`` tag.
2. Optionally emit a ``zfs_pool`` record per pool.
3. List dataset properties, optionally emitting a ``zfs_dataset`` record per
   dataset, and build the ``datasets`` tag.
4. Merge the configured counter categories into a single ``zfs`` record.

Pool tables and dataset properties must be correct or the pass is aborted.
Counter categories are best effort.
"""

import os
import shutil
import time
from typing import Optional

from zfsstats.config import DATASET_PROPERTIES, ZFS_BIN, ZFS_MEASUREMENT, ZfsInputConfig
from zfsstats.datasets import DatasetStatsGatherer
from zfsstats.interfaces.accumulator import AccumulatorInterface
from zfsstats.interfaces.collector import CollectorInterface
from zfsstats.interfaces.runner import CommandRunnerInterface
from zfsstats.kstat import discover_pools, gather_kstat_metrics, gather_pool_stats, get_pool_tags
from zfsstats.utils import CommandRunner
from zfsstats.zfs_logging import ZfsStatsLogger, setup_logging


class ZfsCollector(CollectorInterface):
    """Collects ZFS pool, dataset and kstat counter statistics.

    Attributes:
        config: Collection settings; empty values fall back to defaults.
        logger: Logger instance for output.
        runner: Runner used for ``zfs list``.
        zfs_bin: Name or path of the zfs executable.
    """

    def __init__(
        self,
        config: Optional[ZfsInputConfig] = None,
        logger: Optional[ZfsStatsLogger] = None,
        runner: Optional[CommandRunnerInterface] = None,
        zfs_bin: str = ZFS_BIN,
    ):
        """Initialize the collector.

        Args:
            config: Collection settings. Defaults to ZfsInputConfig().
            logger: Logger instance for messages. Defaults to a console logger.
            runner: Command runner. Defaults to a subprocess based runner.
            zfs_bin: Name or path of the zfs executable.
        """
        self.config = config or ZfsInputConfig()
        self.logger = logger or setup_logging(__name__)
        self.runner = runner or CommandRunner(logger=self.logger)
        self.zfs_bin = zfs_bin

    def collect(self, acc: AccumulatorInterface) -> None:
        kstat_metrics = self.config.resolved_kstat_metrics()
        kstat_path = self.config.resolved_kstat_path()
        start = time.time()

        pools = discover_pools(kstat_path)
        tags = get_pool_tags(pools)
        self.logger.verbose(f'Discovered {len(pools)} pools under {kstat_path}')

        if self.config.pool_metrics:
            for pool in pools:
                gather_pool_stats(pool, acc, logger=self.logger)

        datasets = DatasetStatsGatherer(
            self.runner,
            self.logger,
            dataset_metrics=self.config.dataset_metrics,
            zfs_bin=self.zfs_bin,
        )
        tags['datasets'] = datasets.gather(acc, DATASET_PROPERTIES)

        fields = gather_kstat_metrics(kstat_path, kstat_metrics, logger=self.logger)
        acc.add_fields(ZFS_MEASUREMENT, fields, tags)

        self.logger.debug(
            f'Collected {len(fields)} kstat counters from {len(pools)} pools '
            f'in {time.time() - start:.3f} seconds'
        )

    def is_available(self) -> bool:
        """Check if the kstat root exists and the zfs tool is installed.

        Returns:
            True if both are present, False otherwise.
        """
        return os.path.isdir(self.config.resolved_kstat_path()) and shutil.which(self.zfs_bin) is not None

    def get_collection_method(self) -> str:
        """Return the name of the collection method.

        Returns:
            String identifier 'kstat'.
        """
        return 'kstat'

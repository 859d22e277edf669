"""
CLI argument parsing for zfsstats.

Command line values form the base settings; a YAML config file, when given,
overrides them.
"""

import argparse

from zfsstats import VERSION
from zfsstats.config import DEFAULT_KSTAT_METRICS, DEFAULT_KSTAT_PATH, ZFS_BIN, ZfsInputConfig, load_config_file


HELP_MESSAGES = {
    'kstat_path': f"Root of the ZFS kstat tree. Defaults to {DEFAULT_KSTAT_PATH}",
    'kstat_metrics': (
        "Space-separated list of kstat counter categories to collect. "
        f"Defaults to: {' '.join(DEFAULT_KSTAT_METRICS)}"
    ),
    'pool_metrics': "Emit a zfs_pool record with the I/O counters of every pool.",
    'dataset_metrics': "Emit a zfs_dataset record with the space usage of every dataset.",
    'zfs_bin': f"Name or path of the zfs executable. Defaults to {ZFS_BIN}",
    'config_file': (
        "Path to YAML file with setting overrides. Recognized keys: kstat_path, kstat_metrics, "
        "pool_metrics, dataset_metrics"
    ),
}


def add_collection_arguments(parser):
    """Add arguments controlling what is collected.

    Args:
        parser: Argparse parser to add arguments to.
    """
    collection_args = parser.add_argument_group("Collection")
    collection_args.add_argument('--kstat-path', type=str, default="", help=HELP_MESSAGES['kstat_path'])
    collection_args.add_argument('--kstat-metrics', nargs='+', default=[], metavar='CATEGORY',
                                 help=HELP_MESSAGES['kstat_metrics'])
    collection_args.add_argument('--pool-metrics', action='store_true', help=HELP_MESSAGES['pool_metrics'])
    collection_args.add_argument('--dataset-metrics', action='store_true', help=HELP_MESSAGES['dataset_metrics'])
    collection_args.add_argument('--zfs-bin', type=str, default=ZFS_BIN, help=HELP_MESSAGES['zfs_bin'])
    collection_args.add_argument('--config-file', '-c', type=str, help=HELP_MESSAGES['config_file'])


def add_universal_arguments(parser):
    """Add output control arguments.

    Args:
        parser: Argparse parser to add arguments to.
    """
    output_control = parser.add_argument_group("Output Control")
    output_control.add_argument("--debug", action="store_true", help="Enable debug mode")
    output_control.add_argument("--verbose", "-v", action="store_true", help="Enable verbose mode")
    output_control.add_argument("--stream-log-level", type=str,
                                help="Log level for console output (e.g. DEBUG, INFO, WARNING)")


def parse_arguments(argv=None):
    """Parse command-line arguments.

    Args:
        argv: Argument list. Defaults to sys.argv[1:].

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="zfsstats",
        description="Collect ZFS pool, dataset and kstat statistics from the local host"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    add_collection_arguments(parser)
    add_universal_arguments(parser)
    return parser.parse_args(argv)


def build_config(args, logger=None) -> ZfsInputConfig:
    """
    Build collection settings from parsed arguments.

    Args:
        args (argparse.Namespace): The parsed command-line arguments
        logger: Optional logger for config file warnings

    Returns:
        ZfsInputConfig: Settings with any config file overrides applied

    Raises:
        ConfigurationError: If the config file is missing or invalid.
    """
    config = ZfsInputConfig(
        kstat_metrics=list(args.kstat_metrics or []),
        kstat_path=args.kstat_path or "",
        pool_metrics=args.pool_metrics,
        dataset_metrics=args.dataset_metrics,
    )

    if getattr(args, 'config_file', None):
        config = load_config_file(args.config_file, logger=logger, base=config)

    return config

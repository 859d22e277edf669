#!/usr/bin/env python3
"""
zfsstats - Main Entry Point

Runs a single collection pass and prints the resulting records. Repeated
collection is left to whatever schedules this command.
"""

import signal
import sys
import traceback

from zfsstats.accumulators import ListAccumulator
from zfsstats.cli_parser import build_config, parse_arguments
from zfsstats.collector import ZfsCollector
from zfsstats.config import EXIT_CODE, ZFSSTATS_DEBUG
from zfsstats.display import render_records
from zfsstats.errors import (
    ZfsStatsException,
    ConfigurationError,
    CommandFailedError,
)
from zfsstats.zfs_logging import setup_logging, apply_logging_options

logger = setup_logging("zfsstats")


def signal_handler(sig, frame):
    """Handle signals like SIGINT (Ctrl+C) and SIGTERM."""
    signal_name = signal.Signals(sig).name
    logger.warning(f"Received signal {signal_name} ({sig})")
    logger.info("Exiting due to signal")
    sys.exit(EXIT_CODE.INTERRUPTED)


def _main_impl(argv=None):
    """
    Main implementation with error handling.

    This is the actual implementation of main(), separated out
    so that main() can wrap it with exception handling.
    """
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    args = parse_arguments(argv)
    if ZFSSTATS_DEBUG:
        args.debug = True
    apply_logging_options(logger, args)

    config = build_config(args, logger=logger)
    logger.verbose(f"Collection settings: {config}")
    collector = ZfsCollector(config=config, logger=logger, zfs_bin=args.zfs_bin)

    if not collector.is_available():
        logger.warning(
            f"ZFS does not appear to be available (kstat path: {config.resolved_kstat_path()}, "
            f"tool: {args.zfs_bin})"
        )

    acc = ListAccumulator()
    collector.collect(acc)
    logger.status(f"Collected {len(acc)} records")

    render_records(acc.records)
    return EXIT_CODE.SUCCESS


def main(argv=None):
    """
    Main entry point with comprehensive error handling.

    This function wraps _main_impl() to catch and handle all
    exceptions with user-friendly error messages.
    """
    try:
        return _main_impl(argv)

    except ConfigurationError as e:
        logger.error(e.message)
        if e.suggestion:
            logger.info(f"Suggestion: {e.suggestion}")
        return EXIT_CODE.INVALID_ARGUMENTS

    except CommandFailedError as e:
        logger.error(e.message)
        if e.suggestion:
            logger.info(f"Suggestion: {e.suggestion}")
        return EXIT_CODE.COMMAND_FAILED

    except ZfsStatsException as e:
        logger.error(e.message)
        if e.suggestion:
            logger.info(f"Suggestion: {e.suggestion}")
        return EXIT_CODE.COLLECTION_ERROR

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        logger.debug(traceback.format_exc())
        return EXIT_CODE.GENERAL_ERROR


if __name__ == "__main__":
    sys.exit(main())

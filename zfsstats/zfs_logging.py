"""
Console logging for zfsstats.

Two levels are added to the standard ladder:

- STATUS (25) reports the outcome of a collection pass and is shown by default.
- VERBOSE (19) traces the pass pool by pool and category by category and is
  shown with ``--verbose``.

Collectors receive the logger from the caller and use ``logger.verbose`` and
``logger.status`` next to the standard methods.
"""

import datetime
import enum
import logging

STATUS = 25
VERBOSE = 19

DEFAULT_STREAM_LOG_LEVEL = logging.INFO

custom_levels = {
    'STATUS': STATUS,
    'VERBOSE': VERBOSE,
}


class COLORS(enum.Enum):
    yellow = "\033[0;33m"
    bred = "\033[1;31m"
    bblue = "\033[1;34m"
    normal = "\033[0m"


# Levels not listed here print uncolored
level_to_color_map = {
    logging.CRITICAL: COLORS.bred,
    logging.ERROR: COLORS.bred,
    logging.WARNING: COLORS.yellow,
    STATUS: COLORS.bblue,
}


def get_level_color(level):
    return level_to_color_map.get(level, COLORS.normal).value


def log_level_factory(level_num):
    def log_func(self, message, *args, **kwargs):
        if self.isEnabledFor(level_num):
            # Attribute the record to the caller of logger.<level>(), not to this module
            kwargs.setdefault('stacklevel', 2)
            self._log(level_num, message, args, **kwargs)
    return log_func


class ZfsStatsLogger(logging.Logger):
    """Logger with ``status`` and ``verbose`` helpers."""


for level_name, level_num in custom_levels.items():
    logging.addLevelName(level_num, level_name)
    setattr(ZfsStatsLogger, level_name.lower(), log_level_factory(level_num))


class ColoredFormatter(logging.Formatter):
    """Formats ``time|LEVEL: message`` colored by severity.

    With ``with_location`` the emitting module and line are added after the
    level, which is what ``--debug`` switches to.
    """

    def __init__(self, with_location=False):
        super().__init__()
        self.with_location = with_location

    def format(self, record):
        timestamp = datetime.datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        prefix = f"{timestamp}|{record.levelname}"
        if self.with_location:
            prefix = f"{prefix}:{record.module}:{record.lineno}"
        return f"{get_level_color(record.levelno)}{prefix}: {record.getMessage()}{COLORS.normal.value}"


def setup_logging(name=__name__, stream_log_level=DEFAULT_STREAM_LOG_LEVEL):
    """Create a logger writing to stderr at ``stream_log_level``.

    The logger itself passes everything; filtering happens on the handler so
    ``apply_logging_options`` can lower it later.
    """
    if isinstance(stream_log_level, str):
        stream_log_level = logging.getLevelName(stream_log_level.upper())

    _logger = ZfsStatsLogger(name)
    _logger.setLevel(logging.DEBUG)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ColoredFormatter())
    stream_handler.setLevel(stream_log_level)
    _logger.addHandler(stream_handler)

    return _logger


def apply_logging_options(_logger, args):
    """Apply ``--verbose``, ``--debug`` and ``--stream-log-level`` to the handlers.

    ``--verbose`` and ``--debug`` only ever lower the threshold. An explicit
    ``--stream-log-level`` is applied last and wins.
    """
    if args is None:
        return

    for handler in _logger.handlers:
        if getattr(args, "verbose", False):
            handler.setLevel(min(handler.level, VERBOSE))
        if getattr(args, "debug", False):
            handler.setFormatter(ColoredFormatter(with_location=True))
            handler.setLevel(min(handler.level, logging.DEBUG))
        if getattr(args, "stream_log_level", None):
            handler.setLevel(args.stream_log_level.upper())

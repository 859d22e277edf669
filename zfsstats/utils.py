"""
Utility Functions for ZFS statistics collection.

This module provides shared helpers used throughout the zfsstats package:

Classes:
    CommandRunner: Execute an external command and return its output lines.

Functions:
    read_lines: Read a text file into a list of lines.
    parse_int64: Parse a base-10 signed 64-bit integer.
    join_names: Join entity names into a single tag value.
"""

import logging
import re
import subprocess
from typing import Iterable, List, Optional

from zfsstats.config import NAME_SEPARATOR
from zfsstats.errors import CommandFailedError, ErrorCode
from zfsstats.interfaces.runner import CommandRunnerInterface

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_INT_PATTERN = re.compile(r'[+-]?[0-9]+')


def read_lines(path: str) -> List[str]:
    """Read a file and return its lines without line terminators.

    Lines end at ``\\n`` only, with a trailing ``\\r`` dropped; other control
    characters stay inside the line. A trailing newline does not produce an
    extra empty line. Bytes that are not valid UTF-8 are replaced with
    U+FFFD so a stray byte never makes the file unreadable.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    with open(path, 'rb') as f:
        content = f.read().decode('utf-8', errors='replace')
    if not content:
        return []
    lines = content.split('\n')
    if lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def parse_int64(token: str) -> int:
    """Parse ``token`` as a base-10 signed 64-bit integer.

    Only an optional sign followed by ASCII digits is accepted; whitespace,
    underscores and out-of-range values are rejected.

    Raises:
        ValueError: If the token is not a valid int64.

    Example:
        >>> parse_int64("-42")
        -42
        >>> parse_int64("9223372036854775808")
        Traceback (most recent call last):
        ...
        ValueError: value out of range: '9223372036854775808'
    """
    if not _INT_PATTERN.fullmatch(token):
        raise ValueError(f"invalid syntax: {token!r}")
    value = int(token)
    if value < INT64_MIN or value > INT64_MAX:
        raise ValueError(f"value out of range: {token!r}")
    return value


def join_names(names: Iterable[str]) -> str:
    """Join names with the tag separator.

    Example:
        >>> join_names(["tank", "rpool"])
        'tank::rpool'
        >>> join_names([])
        ''
    """
    return NAME_SEPARATOR.join(names)


class CommandRunner(CommandRunnerInterface):
    """
    Runs external query commands in a subprocess.

    Stdout and stderr are captured separately. The call blocks until the
    command exits; no timeout is applied.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger

    def run(self, command: str, *args: str) -> List[str]:
        cmd_args = [command, *args]
        if self.logger is not None:
            self.logger.debug(f"Executing command: {' '.join(cmd_args)}")

        try:
            result = subprocess.run(
                cmd_args,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise CommandFailedError(command, stderr=str(e), code=ErrorCode.COMMAND_NOT_FOUND) from e

        if result.returncode != 0:
            raise CommandFailedError(command, stderr=result.stderr.strip(), exit_code=result.returncode)

        return result.stdout.rstrip().split('\n')

"""
Command runner interface definitions for zfsstats.

Dataset properties are only available through the ``zfs`` userland tool.
Hiding process execution behind this interface lets dataset parsing be
tested with scripted output instead of a real ZFS installation.
"""

from abc import ABC, abstractmethod
from typing import List


class CommandRunnerInterface(ABC):
    """Interface for executing an external query command."""

    @abstractmethod
    def run(self, command: str, *args: str) -> List[str]:
        """Run a command and return its output lines.

        Args:
            command: Executable name or path.
            *args: Arguments passed to the executable.

        Returns:
            Stdout with trailing whitespace removed, split on newlines.
            Empty output yields a single empty string.

        Raises:
            CommandFailedError: If the command cannot be started or exits
                with a non-zero status.
        """
        pass

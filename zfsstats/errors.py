"""
Custom exceptions for ZFS statistics collection.

This module provides custom exception classes with user-friendly messaging
that include:
- Clear error descriptions
- Technical details for debugging
- Actionable suggestions for resolution

Every exception raised here is a hard failure: it aborts the collection pass
it was raised from. Soft failures (missing counter files, malformed counter
values, mis-shaped dataset rows) are absorbed where they are detected and
never surface as exceptions.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Any
from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes for ZFS statistics errors."""
    # Configuration errors (1xx)
    CONFIG_INVALID_VALUE = "E101"
    CONFIG_FILE_NOT_FOUND = "E102"
    CONFIG_PARSE_ERROR = "E103"
    CONFIG_FILE_UNREADABLE = "E104"

    # External command errors (2xx)
    COMMAND_FAILED = "E201"
    COMMAND_NOT_FOUND = "E202"

    # Pool I/O table errors (3xx)
    KSTAT_READ_FAILED = "E301"
    KSTAT_MALFORMED_TABLE = "E302"
    KSTAT_COLUMN_MISMATCH = "E303"
    KSTAT_INVALID_VALUE = "E304"

    # Dataset property errors (4xx)
    DATASET_INVALID_VALUE = "E401"

    # Internal errors (9xx)
    INTERNAL_ERROR = "E901"


@dataclass
class ZfsStatsError:
    """
    Structured error information.

    Attributes:
        code: Machine-readable error code.
        message: User-facing error message.
        details: Technical details for debugging.
        suggestion: How to fix the issue.
        context: Additional context information.
    """
    code: ErrorCode
    message: str
    details: str = ""
    suggestion: str = ""
    context: dict = field(default_factory=dict)

    def __str__(self) -> str:
        """Format error for display."""
        lines = [f"[{self.code.value}] {self.message}"]
        if self.details:
            lines.append(f"  Details: {self.details}")
        if self.suggestion:
            lines.append(f"  Suggestion: {self.suggestion}")
        return "\n".join(lines)


class ZfsStatsException(Exception):
    """
    Base exception class for ZFS statistics collection.

    All custom exceptions inherit from this class and provide
    structured error information.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR,
                 details: str = "", suggestion: str = "", **context):
        self.error = ZfsStatsError(
            code=code,
            message=message,
            details=details,
            suggestion=suggestion,
            context=context
        )
        super().__init__(str(self.error))

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def suggestion(self) -> str:
        return self.error.suggestion


class ConfigurationError(ZfsStatsException):
    """
    Raised when configuration is invalid or missing.

    Examples:
        - Config file not found or not valid YAML
        - kstat_metrics is not a list of strings
        - A boolean flag holds a non-boolean value
    """

    def __init__(self, message: str, parameter: str = None,
                 expected: Any = None, actual: Any = None,
                 suggestion: str = None,
                 code: ErrorCode = ErrorCode.CONFIG_INVALID_VALUE):
        details_parts = []
        if parameter:
            details_parts.append(f"Parameter: {parameter}")
        if expected is not None:
            details_parts.append(f"Expected: {expected}")
        if actual is not None:
            details_parts.append(f"Actual: {actual}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or self._default_suggestion(code),
            parameter=parameter,
            expected=expected,
            actual=actual
        )

    @staticmethod
    def _default_suggestion(code: ErrorCode) -> str:
        suggestions = {
            ErrorCode.CONFIG_INVALID_VALUE: "Check the parameter value and correct it",
            ErrorCode.CONFIG_FILE_NOT_FOUND: "Verify the config file path exists",
            ErrorCode.CONFIG_PARSE_ERROR: "Check config file syntax (YAML format)",
            ErrorCode.CONFIG_FILE_UNREADABLE: "Make sure the config path is a readable file",
        }
        return suggestions.get(code, "Check the configuration and try again")


class CommandFailedError(ZfsStatsException):
    """
    Raised when an external query command cannot be run or exits non-zero.

    The command's stdout is discarded; only stderr is kept for diagnosis.
    """

    def __init__(self, command: str, stderr: str = "", exit_code: int = None,
                 code: ErrorCode = ErrorCode.COMMAND_FAILED):
        details_parts = []
        if exit_code is not None:
            details_parts.append(f"Exit code: {exit_code}")
        if stderr:
            # Truncate long error output
            stderr_display = stderr[:500] + "..." if len(stderr) > 500 else stderr
            details_parts.append(f"Error output: {stderr_display}")

        super().__init__(
            message=f"{command} error: {stderr}",
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=self._default_suggestion(code, command),
            command=command,
            stderr=stderr,
            exit_code=exit_code
        )
        self.command = command
        self.stderr = stderr
        self.exit_code = exit_code

    @staticmethod
    def _default_suggestion(code: ErrorCode, command: str) -> str:
        if code == ErrorCode.COMMAND_NOT_FOUND:
            return f"Install the ZFS userland tools or make sure '{command}' is in PATH"
        return "Check that the ZFS kernel module is loaded and the user may query datasets"


class KstatReadError(ZfsStatsException):
    """Raised when a pool I/O table cannot be read."""

    def __init__(self, path: str, reason: str = ""):
        super().__init__(
            message=f"Unable to read kstat file {path}",
            code=ErrorCode.KSTAT_READ_FAILED,
            details=reason,
            suggestion="Verify the kstat path and its permissions",
            path=path
        )
        self.path = path


class MalformedTableError(ZfsStatsException):
    """Raised when a pool I/O table does not have exactly three lines."""

    def __init__(self, path: str, line_count: int):
        super().__init__(
            message=f"Expected 3 lines in {path}, found {line_count}",
            code=ErrorCode.KSTAT_MALFORMED_TABLE,
            details=f"Path: {path}; Lines: {line_count}",
            suggestion="The kstat io format may have changed for this ZFS version",
            path=path,
            line_count=line_count
        )
        self.path = path
        self.line_count = line_count


class ColumnMismatchError(ZfsStatsException):
    """Raised when a pool I/O table has differing key and value counts."""

    def __init__(self, keys: List[str], values: List[str]):
        super().__init__(
            message=f"Key and value count don't match Keys:{keys} Values:{values}",
            code=ErrorCode.KSTAT_COLUMN_MISMATCH,
            details=f"{len(keys)} keys, {len(values)} values",
            suggestion="The kstat io format may have changed for this ZFS version",
            keys=keys,
            values=values
        )
        self.keys = keys
        self.values = values


class KstatValueError(ZfsStatsException):
    """Raised when a pool I/O table value is not a 64-bit integer."""

    def __init__(self, path: str, key: str, value: str):
        super().__init__(
            message=f"Error parsing {key} {value!r} in {path}",
            code=ErrorCode.KSTAT_INVALID_VALUE,
            suggestion="The kstat io format may have changed for this ZFS version",
            path=path,
            key=key,
            value=value
        )
        self.path = path
        self.key = key
        self.value = value


class DatasetFieldParseError(ZfsStatsException):
    """
    Raised when an accepted dataset row holds a non-integer property value.

    Unlike a mis-shaped row, which is skipped, this aborts gathering for
    every dataset.
    """

    def __init__(self, dataset: str, prop: str, value: str):
        super().__init__(
            message=f"Error parsing {prop} {value!r}",
            code=ErrorCode.DATASET_INVALID_VALUE,
            details=f"Dataset: {dataset}",
            suggestion="Only integer valued properties may follow the dataset name",
            dataset=dataset,
            property=prop,
            value=value
        )
        self.dataset = dataset
        self.property = prop
        self.value = value

"""
Configuration constants and settings for ZFS statistics collection.

Defaults mirror the layout exposed by ZFS on Linux: per-pool ``io`` tables
and per-category counter files under ``/proc/spl/kstat/zfs``.
"""

import enum
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

import yaml

from zfsstats.errors import ConfigurationError, ErrorCode


def check_env(setting, default_value=None):
    """
    This function checks the config, the default value, and the environment variables to determine the value
    of the setting. The environment variable takes precedence over the default value.
    """
    value = os.environ.get(setting, default_value)
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


ZFSSTATS_DEBUG = check_env("ZFSSTATS_DEBUG", False)

DEFAULT_KSTAT_PATH = "/proc/spl/kstat/zfs"

# vdev_cache_stats is deprecated and xuio_stats has no known consumers on Linux
DEFAULT_KSTAT_METRICS = [
    "abdstats", "arcstats", "dnodestats", "dbufcachestats",
    "dmu_tx", "fm", "vdev_mirror_stats", "zfetchstats", "zil",
]

# These categories already carry their own namespace in the raw key
UNPREFIXED_KSTAT_METRICS = ("zil", "dmu_tx", "dnodestats")

# First property must be the dataset name, the rest must be integer valued
DATASET_PROPERTIES = ["name", "avail", "used", "usedsnap", "usedds"]

ZFS_BIN = "zfs"
NAME_SEPARATOR = "::"

POOL_MEASUREMENT = "zfs_pool"
DATASET_MEASUREMENT = "zfs_dataset"
ZFS_MEASUREMENT = "zfs"


class EXIT_CODE(enum.IntEnum):
    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENTS = 2
    FILE_NOT_FOUND = 3
    COMMAND_FAILED = 4
    COLLECTION_ERROR = 5
    INTERRUPTED = 130

    def __str__(self):
        return f"{self.name} ({self.value})"


@dataclass
class ZfsInputConfig:
    """Settings for a single collection pass.

    Empty ``kstat_metrics`` or ``kstat_path`` fall back to the module
    defaults at collection time, so an all-default instance is valid.

    Attributes:
        kstat_metrics: Counter categories to read from the kstat root.
        kstat_path: Root of the kstat tree.
        pool_metrics: Emit a ``zfs_pool`` record per pool.
        dataset_metrics: Emit a ``zfs_dataset`` record per dataset.
    """
    kstat_metrics: List[str] = field(default_factory=list)
    kstat_path: str = ""
    pool_metrics: bool = False
    dataset_metrics: bool = False

    def resolved_kstat_metrics(self) -> List[str]:
        if not self.kstat_metrics:
            return list(DEFAULT_KSTAT_METRICS)
        return list(self.kstat_metrics)

    def resolved_kstat_path(self) -> str:
        if not self.kstat_path:
            return DEFAULT_KSTAT_PATH
        return self.kstat_path

    @classmethod
    def from_dict(cls, data: Dict[str, Any], logger=None) -> 'ZfsInputConfig':
        """Create a config from a mapping, validating value types.

        Unknown keys are reported through ``logger`` and ignored.

        Raises:
            ConfigurationError: If a known key holds a value of the wrong type.
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                if logger is not None:
                    logger.warning(f"Config contains unknown parameter '{key}', skipping")
                continue
            if value is None:
                continue
            _validate_value(key, value)
            values[key] = list(value) if key == "kstat_metrics" else value
        return cls(**values)


def _validate_value(key: str, value: Any) -> None:
    if key == "kstat_metrics":
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigurationError(
                "kstat_metrics must be a list of category names",
                parameter=key, expected="list of strings", actual=value,
            )
    elif key == "kstat_path":
        if not isinstance(value, str):
            raise ConfigurationError(
                "kstat_path must be a string",
                parameter=key, expected="string", actual=value,
            )
    elif not isinstance(value, bool):
        raise ConfigurationError(
            f"{key} must be a boolean",
            parameter=key, expected="true or false", actual=value,
        )


def load_config_file(path: str, logger=None, base: Optional[ZfsInputConfig] = None) -> ZfsInputConfig:
    """
    Load collection settings from a YAML file.

    Values in the file override those of ``base`` (or the defaults).

    Args:
        path: Path to the YAML file.
        logger: Optional logger used to report unknown keys.
        base: Settings the file values are applied on top of.

    Returns:
        ZfsInputConfig with the merged settings.

    Raises:
        ConfigurationError: If the file is missing, unreadable, unparsable
            or holds invalid values.
    """
    try:
        # Bytes let PyYAML report undecodable content as a YAMLError
        with open(path, 'rb') as f:
            yaml_config = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            f"Config file {path} not found",
            parameter="config_file",
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
        )
    except OSError as e:
        raise ConfigurationError(
            f"Unable to read config file {path}: {e}",
            parameter="config_file",
            code=ErrorCode.CONFIG_FILE_UNREADABLE,
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Error parsing YAML config file {path}: {e}",
            parameter="config_file",
            code=ErrorCode.CONFIG_PARSE_ERROR,
        )

    merged = dict(vars(base)) if base is not None else {}
    if not yaml_config:
        if logger is not None:
            logger.warning(f"Config file {path} is empty")
        return ZfsInputConfig(**merged)

    if not isinstance(yaml_config, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a mapping",
            parameter="config_file",
            actual=type(yaml_config).__name__,
            code=ErrorCode.CONFIG_PARSE_ERROR,
        )

    overrides = ZfsInputConfig.from_dict(yaml_config, logger=logger)
    known = {f.name for f in fields(ZfsInputConfig)}
    for key in yaml_config:
        if key in known and yaml_config[key] is not None:
            merged[key] = getattr(overrides, key)
    return ZfsInputConfig(**merged)

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import logging
import os
import tomllib

# the standard fingerprint size: number of bytes read from a file
FP_BYTE_SIZE = 255
MAX_BYTE_SIZE = 1024 * 1024
VALID_BITS = (32, 64)
DEFAULT_CONFIG_NAME = "fnvprint.toml"
LOG_LEVEL_ENV = "FNVPRINT_LOG_LEVEL"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _validate_level(level: str) -> str:
    level = str(level).upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}. Must be one of {_LOG_LEVELS}.")
    return level


@dataclass(frozen=True)
class FingerprintConfig:
    """Settings for taking file fingerprints.

    byte_size is how much of each file is read; offset is where reading starts.
    """

    byte_size: int = FP_BYTE_SIZE
    offset: int = 0
    bits: int = 64
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.byte_size <= 0 or self.byte_size > MAX_BYTE_SIZE:
            raise ValueError(f"Invalid byte_size: {self.byte_size}. Must be between 1 and {MAX_BYTE_SIZE}.")
        if self.offset < 0:
            raise ValueError(f"Invalid offset: {self.offset}. Must be >= 0.")
        if self.bits not in VALID_BITS:
            raise ValueError(f"Invalid bits: {self.bits}. Must be one of {VALID_BITS}.")
        object.__setattr__(self, "log_level", _validate_level(self.log_level))

    @property
    def numeric_log_level(self) -> int:
        return getattr(logging, self.log_level)

    @staticmethod
    def from_toml(path: str | Path) -> "FingerprintConfig":
        data = tomllib.loads(Path(path).read_text(encoding="utf-8"))
        fp = data.get("fingerprint", {})
        log = data.get("logging", {})

        # Environment variable takes precedence over the file
        level = os.environ.get(LOG_LEVEL_ENV) or log.get("level", "WARNING")

        return FingerprintConfig(
            byte_size=int(fp.get("byte_size", FP_BYTE_SIZE)),
            offset=int(fp.get("offset", 0)),
            bits=int(fp.get("bits", 64)),
            log_level=level,
        )


def load_config(path: str | Path) -> FingerprintConfig:
    """Load config from *path*, or defaults when the file does not exist."""
    p = Path(path)
    if not p.exists():
        level = os.environ.get(LOG_LEVEL_ENV)
        return FingerprintConfig(log_level=level) if level else FingerprintConfig()
    return FingerprintConfig.from_toml(p)

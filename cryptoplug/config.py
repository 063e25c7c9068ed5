"""
Configuration management for the cryptoplug provider.

Settings come from environment variables so that a host process can tune the
provider without code changes:

- CRYPTOPLUG_MIN_BACKEND_VERSION: oldest acceptable ``cryptography`` release
- CRYPTOPLUG_LOG_LEVEL: level used by the command line runner
- CRYPTOPLUG_BENCH_ITERATIONS: default iteration count for benchmarks
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple


ENV_PREFIX = "CRYPTOPLUG_"

# First cryptography release shipping CFB in the decrepit cipher modes.
DEFAULT_MIN_BACKEND_VERSION = "47.0.0"


class ConfigError(Exception):
    """Raised when configuration values are invalid."""
    pass


def parse_version(text: str) -> Tuple[int, ...]:
    """
    Parse a dotted release string into a comparable tuple.

    Trailing non-numeric suffixes (``42.0.0rc1``, ``43.0.0.dev1``) are ignored.

    Raises:
        ConfigError: If no leading numeric component is present
    """
    parts = []
    for piece in text.strip().split("."):
        digits = ""
        for ch in piece:
            if not ch.isdigit():
                break
            digits += ch
        if not digits:
            break
        parts.append(int(digits))
        if len(digits) != len(piece):
            break
    if not parts:
        raise ConfigError(f"Invalid version string: {text!r}")
    return tuple(parts)


@dataclass
class ProviderConfig:
    """Runtime settings for the provider and its tooling."""
    min_backend_version: str = DEFAULT_MIN_BACKEND_VERSION
    log_level: str = "WARNING"
    benchmark_iterations: int = 200

    def __post_init__(self):
        parse_version(self.min_backend_version)
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise ConfigError(f"Unknown log level: {self.log_level}")
        self.log_level = self.log_level.upper()
        if self.benchmark_iterations <= 0:
            raise ConfigError("Benchmark iterations must be positive")

    @property
    def min_backend_version_info(self) -> Tuple[int, ...]:
        return parse_version(self.min_backend_version)

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ProviderConfig':
        """
        Build a configuration from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            ProviderConfig with defaults for unset variables

        Raises:
            ConfigError: If a variable holds a malformed value
        """
        if environ is None:
            environ = os.environ

        kwargs = {}
        version = environ.get(ENV_PREFIX + "MIN_BACKEND_VERSION")
        if version:
            kwargs["min_backend_version"] = version

        level = environ.get(ENV_PREFIX + "LOG_LEVEL")
        if level:
            kwargs["log_level"] = level

        iterations = environ.get(ENV_PREFIX + "BENCH_ITERATIONS")
        if iterations:
            try:
                kwargs["benchmark_iterations"] = int(iterations)
            except ValueError as exc:
                raise ConfigError(f"{ENV_PREFIX}BENCH_ITERATIONS must be an integer") from exc

        return cls(**kwargs)

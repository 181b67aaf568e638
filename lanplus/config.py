"""
Configuration for lanplus primitives.

Holds the diagnostic verbosity, the entropy source used for seeding and the
explicit opt-in for the insecure deterministic random source. Values can be
given directly or read from LANPLUS_* environment variables.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .crypto.constants import DEFAULT_SEED_BYTES
from .crypto.random import DEFAULT_ENTROPY_SOURCE
from .diagnostics import BufferTracer

ENV_VERBOSE = "LANPLUS_VERBOSE"
ENV_ENTROPY_SOURCE = "LANPLUS_ENTROPY_SOURCE"
ENV_SEED_BYTES = "LANPLUS_SEED_BYTES"
ENV_INSECURE_FAKE_RAND = "LANPLUS_INSECURE_FAKE_RAND"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigError(Exception):
    """Raised when configuration values are invalid."""
    pass


@dataclass
class LanplusConfig:
    """
    Settings for the lanplus primitives.

    verbosity mirrors the count of -v flags: input dumps appear above 2,
    decrypted output above 1. insecure_fake_random swaps the production
    random source for the 0x70 | i test pattern and must stay False for any
    real session.
    """

    verbosity: int = 0
    entropy_source: str = DEFAULT_ENTROPY_SOURCE
    seed_bytes: int = DEFAULT_SEED_BYTES
    insecure_fake_random: bool = False

    def __post_init__(self):
        if isinstance(self.verbosity, bool) or not isinstance(self.verbosity, int):
            raise ConfigError("verbosity must be an integer")
        if self.verbosity < 0:
            raise ConfigError("verbosity must be non-negative")
        if isinstance(self.seed_bytes, bool) or not isinstance(self.seed_bytes, int):
            raise ConfigError("seed_bytes must be an integer")
        if self.seed_bytes <= 0:
            raise ConfigError("seed_bytes must be positive")
        if not self.entropy_source:
            raise ConfigError("entropy_source must not be empty")
        if not isinstance(self.insecure_fake_random, bool):
            raise ConfigError("insecure_fake_random must be a boolean")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LanplusConfig":
        """
        Build a configuration from LANPLUS_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            LanplusConfig with defaults for unset variables

        Raises:
            ConfigError: If a variable holds an invalid value
        """
        if environ is None:
            environ = os.environ

        return cls(
            verbosity=_parse_int(environ, ENV_VERBOSE, 0),
            entropy_source=environ.get(ENV_ENTROPY_SOURCE, DEFAULT_ENTROPY_SOURCE),
            seed_bytes=_parse_int(environ, ENV_SEED_BYTES, DEFAULT_SEED_BYTES),
            insecure_fake_random=_parse_bool(environ, ENV_INSECURE_FAKE_RAND),
        )

    def create_tracer(self, logger: Optional[logging.Logger] = None) -> BufferTracer:
        """Build a BufferTracer at this configuration's verbosity."""
        return BufferTracer(logger=logger, verbosity=self.verbosity)


def _parse_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _parse_bool(environ: Mapping[str, str], name: str) -> bool:
    raw = environ.get(name, "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {raw!r}")

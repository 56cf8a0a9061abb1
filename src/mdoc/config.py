"""
Runtime settings shared by every mdoc operation.

Settings are immutable and passed explicitly; nothing reads the
environment or the working directory after they are built.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from mdoc import __version__
from mdoc.constants import DEFAULT_RUBY
from mdoc.errors import ConfigError

ENV_JOBS = "MDOC_JOBS"
ENV_RUBY = "MDOC_RUBY"
ENV_TIMEOUT = "MDOC_TIMEOUT"


def default_jobs() -> int:
    """Worker count used when none is configured."""
    return min(32, (os.cpu_count() or 1) + 4)


def _parse_positive_int(name: str, value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise ConfigError(f"Invalid value for {name}: {value!r}")
    if number < 1:
        raise ConfigError(f"{name} must be at least 1, got {number}")
    return number


def _parse_timeout(name: str, value: str) -> Optional[float]:
    if not value.strip():
        return None
    try:
        seconds = float(value)
    except ValueError:
        raise ConfigError(f"Invalid value for {name}: {value!r}")
    if seconds <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return seconds


@dataclass(frozen=True)
class Settings:
    """
    Immutable configuration for one mdoc invocation.

    Attributes:
        name: Program name used to prefix warnings and errors
        version: Program version
        cwd: Working directory, the fallback scope for orphans
        jobs: Maximum number of concurrent parser invocations
        ruby: Ruby interpreter used to run Asciidoctor
        timeout: Seconds allowed per parser invocation, None for no limit
    """
    name: str = "mdoc"
    version: str = __version__
    cwd: Path = field(default_factory=Path.cwd)
    jobs: int = field(default_factory=default_jobs)
    ruby: str = DEFAULT_RUBY
    timeout: Optional[float] = None

    def __post_init__(self):
        if self.jobs < 1:
            raise ConfigError(f"jobs must be at least 1, got {self.jobs}")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides,
    ) -> Settings:
        """
        Build settings from environment variables.

        Explicit keyword overrides win over the environment. Overrides
        whose value is None are ignored.

        Raises:
            ConfigError: If an environment value cannot be parsed
        """
        if environ is None:
            environ = os.environ

        values: dict = {}
        if environ.get(ENV_JOBS):
            values["jobs"] = _parse_positive_int(ENV_JOBS, environ[ENV_JOBS])
        if environ.get(ENV_RUBY):
            values["ruby"] = environ[ENV_RUBY]
        if ENV_TIMEOUT in environ:
            values["timeout"] = _parse_timeout(ENV_TIMEOUT, environ[ENV_TIMEOUT])

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

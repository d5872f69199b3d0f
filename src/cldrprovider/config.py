"""Process-wide runtime configuration.

Provides a single frozen dataclass that captures the build-wide choices of
the data layer. The configuration is read from the environment once per
process and never changes afterwards; it is not a per-call option.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import functools
import os
from collections.abc import Mapping
from dataclasses import dataclass

from cldrprovider.constants import ENV_CHECK_KEYS, ENV_SYNC

__all__ = ["ProviderConfig", "get_config"]

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _parse_flag(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    msg = f"{name} must be a boolean flag (1/0, true/false, yes/no, on/off), got: {value!r}"
    raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Immutable configuration for the data layer.

    Attributes:
        sync: Cross-thread sharing mode. When True, only markers declaring
            ``thread_safe = True`` may be erased into an AnyPayload, because
            erased payloads are expected to travel between threads.
        check_key_collisions: Verify that no two distinct key paths share a
            fingerprint when keys are declared (default: True). Disable only
            for start-up time in production builds.

    Example:
        >>> config = ProviderConfig.from_env({"CLDRPROVIDER_SYNC": "1"})
        >>> config.sync
        True
    """

    sync: bool = False
    check_key_collisions: bool = True

    def __post_init__(self) -> None:
        """Validate field types at construction time.

        Raises:
            TypeError: If a field is not a bool
        """
        for name in ("sync", "check_key_collisions"):
            if not isinstance(getattr(self, name), bool):
                msg = f"{name} must be a bool, got {type(getattr(self, name)).__name__}"
                raise TypeError(msg)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ProviderConfig:
        """Build a configuration from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            ProviderConfig with unset variables left at their defaults

        Raises:
            ValueError: If a variable holds something other than a boolean flag
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        sync = defaults.sync
        check = defaults.check_key_collisions
        if ENV_SYNC in env:
            sync = _parse_flag(ENV_SYNC, env[ENV_SYNC])
        if ENV_CHECK_KEYS in env:
            check = _parse_flag(ENV_CHECK_KEYS, env[ENV_CHECK_KEYS])
        return cls(sync=sync, check_key_collisions=check)


@functools.lru_cache(maxsize=1)
def get_config() -> ProviderConfig:
    """Return the process-wide configuration (read from the environment once)."""
    return ProviderConfig.from_env()

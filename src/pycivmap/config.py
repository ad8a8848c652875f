"""Library configuration for pycivmap."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pycivmap._constants import USER_AGENT
from pycivmap.exceptions import CivMapConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, cast: type[int] | type[float]) -> int | float:
    try:
        return cast(value)
    except ValueError as exc:
        raise CivMapConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class CivMapConfig:
    """Runtime configuration.

    Parameters
    ----------
    fetch_timeout : float
        Total timeout in seconds for fetching a remote collection.
    user_agent : str
        ``User-Agent`` header sent with collection fetches.
    trace_enabled : bool
        Log a summary of every fetched document at DEBUG level.
    log_max_string : int
        Strings longer than this are truncated before they reach a log
        record (data URLs of dropped tiles are easily megabytes long).
    """

    fetch_timeout: float = 30.0
    user_agent: str = USER_AGENT
    trace_enabled: bool = False
    log_max_string: int = 256

    @classmethod
    def from_env(cls, **overrides: Any) -> CivMapConfig:
        """Create configuration from ``CIVMAP_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        CivMapConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        timeout_env = env.get("CIVMAP_FETCH_TIMEOUT")
        if timeout_env is not None and "fetch_timeout" not in overrides:
            config_kwargs["fetch_timeout"] = _env_number("CIVMAP_FETCH_TIMEOUT", timeout_env, float)

        agent_env = env.get("CIVMAP_USER_AGENT")
        if agent_env:
            config_kwargs["user_agent"] = agent_env

        if "trace_enabled" not in overrides:
            config_kwargs["trace_enabled"] = _env_bool(env.get("CIVMAP_TRACE_ENABLED"), False)

        max_string_env = env.get("CIVMAP_LOG_MAX_STRING")
        if max_string_env is not None and "log_max_string" not in overrides:
            config_kwargs["log_max_string"] = _env_number("CIVMAP_LOG_MAX_STRING", max_string_env, int)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)

from __future__ import annotations

import logging
from dataclasses import dataclass

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from depth_chart_manager.depth.parser import InjuryMatch
from depth_chart_manager.errors import ConfigError
from depth_chart_manager.ingest._retry import RetryPolicy
from depth_chart_manager.ingest.espn_source import DEFAULT_USER_AGENT

DEFAULT_QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")

_DEFAULTS: dict[str, object] = {
    "depth_chart": {
        "ttl_seconds": 21600,
        "politeness_delay_seconds": 2.0,
        "serve_stale_on_error": False,
        "injury_match": "substring",
    },
    "http": {
        "timeout_seconds": 10.0,
        "connect_timeout_seconds": 5.0,
        "user_agent": DEFAULT_USER_AGENT,
        "retry_attempts": 3,
        "retry_initial_wait_seconds": 1.0,
        "retry_max_wait_seconds": 10.0,
    },
    "logging": {
        "level": "INFO",
        "quiet_loggers": list(DEFAULT_QUIET_LOGGERS),
    },
}

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class Settings:
    """Resolved configuration values.

    Attributes:
        ttl_seconds: How long a cached depth chart stays fresh.
        politeness_delay_seconds: Pause between successive page retrievals in bulk runs.
        serve_stale_on_error: Serve the last good chart when a refresh fails.
        injury_match: Rule for reading injury markers from cells.
        timeout_seconds: Overall HTTP timeout per request.
        connect_timeout_seconds: HTTP connect timeout.
        user_agent: User-Agent header sent to ESPN.
        retry_attempts: Tries per page request, the first included.
        retry_initial_wait_seconds: Base of the exponential backoff between tries.
        retry_max_wait_seconds: Cap on a single backoff wait.
        log_level: Level for this package's loggers when not verbose.
        quiet_loggers: Third-party loggers held at WARNING unless verbose.
    """

    ttl_seconds: float = 21600.0
    politeness_delay_seconds: float = 2.0
    serve_stale_on_error: bool = False
    injury_match: InjuryMatch = InjuryMatch.SUBSTRING
    timeout_seconds: float = 10.0
    connect_timeout_seconds: float = 5.0
    user_agent: str = DEFAULT_USER_AGENT
    retry_attempts: int = 3
    retry_initial_wait_seconds: float = 1.0
    retry_max_wait_seconds: float = 10.0
    log_level: str = "INFO"
    quiet_loggers: tuple[str, ...] = DEFAULT_QUIET_LOGGERS

    @property
    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            attempts=self.retry_attempts,
            initial_wait_seconds=self.retry_initial_wait_seconds,
            max_wait_seconds=self.retry_max_wait_seconds,
        )


def create_config(
    yaml_path: str = "config.yaml",
    env_prefix: str = "DCM",
    defaults: dict[str, object] | None = None,
    overrides: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.
    Environment variables use ``__`` between levels, e.g. ``DCM__DEPTH_CHART__TTL_SECONDS``.
    """
    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults if defaults is not None else _DEFAULTS),
    ]
    if overrides:
        layers.insert(0, config_from_dict(overrides))
    return ConfigurationSet(*layers)


def _as_float(cfg: ConfigurationSet, key: str) -> float:
    try:
        return float(str(cfg[key]))
    except (KeyError, ValueError) as e:
        raise ConfigError(f"{key} must be a number") from e


def _as_bool(cfg: ConfigurationSet, key: str) -> bool:
    value = cfg[key]
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ConfigError(f"{key} must be a boolean, got {value!r}")


def _as_int(cfg: ConfigurationSet, key: str) -> int:
    try:
        return int(str(cfg[key]).strip())
    except (KeyError, ValueError) as e:
        raise ConfigError(f"{key} must be a whole number") from e


def _as_names(cfg: ConfigurationSet, key: str) -> tuple[str, ...]:
    value = cfg[key]
    items = value.split(",") if isinstance(value, str) else value
    return tuple(name for name in (str(item).strip() for item in items) if name)


def load_settings(cfg: ConfigurationSet | None = None) -> Settings:
    """Resolve a configuration set into Settings.

    Env vars arrive as strings, so every value is coerced here.

    Raises:
        ConfigError: For a non-positive TTL or timeout, a negative delay,
            a retry policy with no attempts or inverted waits, or an unknown
            injury match rule or log level.
    """
    if cfg is None:
        cfg = create_config()

    ttl_seconds = _as_float(cfg, "depth_chart.ttl_seconds")
    if ttl_seconds <= 0:
        raise ConfigError(f"depth_chart.ttl_seconds must be positive, got {ttl_seconds}")

    delay = _as_float(cfg, "depth_chart.politeness_delay_seconds")
    if delay < 0:
        raise ConfigError(f"depth_chart.politeness_delay_seconds must not be negative, got {delay}")

    timeout = _as_float(cfg, "http.timeout_seconds")
    connect_timeout = _as_float(cfg, "http.connect_timeout_seconds")
    if timeout <= 0 or connect_timeout <= 0:
        raise ConfigError("http timeouts must be positive")

    raw_match = str(cfg["depth_chart.injury_match"]).strip().lower()
    try:
        injury_match = InjuryMatch(raw_match)
    except ValueError:
        valid = ", ".join(m.value for m in InjuryMatch)
        raise ConfigError(f"depth_chart.injury_match must be one of {valid}, got {raw_match!r}") from None

    attempts = _as_int(cfg, "http.retry_attempts")
    if attempts < 1:
        raise ConfigError(f"http.retry_attempts must be at least 1, got {attempts}")
    initial_wait = _as_float(cfg, "http.retry_initial_wait_seconds")
    max_wait = _as_float(cfg, "http.retry_max_wait_seconds")
    if initial_wait < 0 or max_wait < initial_wait:
        raise ConfigError("http retry waits must satisfy 0 <= retry_initial_wait_seconds <= retry_max_wait_seconds")

    log_level = str(cfg["logging.level"]).strip().upper()
    if log_level not in logging.getLevelNamesMapping():
        raise ConfigError(f"logging.level must be a logging level name, got {log_level!r}")

    return Settings(
        ttl_seconds=ttl_seconds,
        politeness_delay_seconds=delay,
        serve_stale_on_error=_as_bool(cfg, "depth_chart.serve_stale_on_error"),
        injury_match=injury_match,
        timeout_seconds=timeout,
        connect_timeout_seconds=connect_timeout,
        user_agent=str(cfg["http.user_agent"]),
        retry_attempts=attempts,
        retry_initial_wait_seconds=initial_wait,
        retry_max_wait_seconds=max_wait,
        log_level=log_level,
        quiet_loggers=_as_names(cfg, "logging.quiet_loggers"),
    )

"""Logging and profiling spans for kaksel, built on telelog.

Kakoune shows the stderr of a ``%sh{}`` block in its ``*debug*`` buffer, so
console output stays off unless ``KAKSEL_DISABLE_CONSOLE=0``. Set
``KAKSEL_LOG_FILE`` to keep a log file instead.

``configure(...)`` -- replace the active configuration (settings or preset)
``get_logger(name)`` -- fetch a cached logger named ``kaksel.<area>``
``record_event(name, ...)`` -- one structured ``event::<name>`` record
``span(name, ...)`` -- profile a block, tag it with context, report failure
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "KAKSEL_"
ROOT_LOGGER = "kaksel"
DEFAULT_BUFFER_SIZE = 2048

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


@dataclass(frozen=True, slots=True)
class LogSettings:
    """Everything kaksel tells telelog, read from ``KAKSEL_*`` variables."""

    level: str = "INFO"
    console: bool = False
    color: bool = True
    json: bool = False
    log_file: Optional[str] = None
    buffer_size: Optional[int] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LogSettings":
        env = os.environ if environ is None else environ

        def flag(name: str, default: bool) -> bool:
            raw = env.get(f"{ENV_PREFIX}{name}")
            return default if raw is None else raw.lower() in _TRUTHY

        buffer_size = None
        if flag("LOG_BUFFERED", False):
            buffer_size = int(
                env.get(f"{ENV_PREFIX}LOG_BUFFER_SIZE") or DEFAULT_BUFFER_SIZE
            )
        return cls(
            level=(env.get(f"{ENV_PREFIX}LOG_LEVEL") or "INFO").upper(),
            console=not flag("DISABLE_CONSOLE", True),
            color=not flag("NO_COLOR", False),
            json=flag("LOG_JSON", False),
            log_file=env.get(f"{ENV_PREFIX}LOG_FILE") or None,
            buffer_size=buffer_size,
        )

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        config.with_json_format(self.json)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffer_size is not None:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        # spans rely on profiling
        config.with_profiling(True)
        return config


_PRESETS: Mapping[str, Mapping[str, Any]] = MappingProxyType(
    {
        "development": {"level": "DEBUG", "console": True, "json": False},
        "production": {
            "level": "INFO",
            "console": False,
            "log_file": "kaksel.log",
            "buffer_size": DEFAULT_BUFFER_SIZE,
        },
        "performance": {
            "level": "DEBUG",
            "console": False,
            "json": True,
            "log_file": "kaksel-performance.log",
            "buffer_size": DEFAULT_BUFFER_SIZE,
        },
    }
)


def preset_settings(preset: str, base: Optional[LogSettings] = None) -> LogSettings:
    """Apply a named preset on top of ``base``; an explicit log file wins."""

    try:
        overrides = dict(_PRESETS[preset.lower()])
    except KeyError:
        raise ValueError(f"Unknown preset '{preset}'.") from None
    base = base or LogSettings.from_env()
    if base.log_file:
        overrides.pop("log_file", None)
    return replace(base, **overrides)


_LOGGERS: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def configure(
    *, settings: Optional[LogSettings] = None, preset: Optional[str] = None
) -> None:
    """Replace the active configuration and drop cached loggers."""

    global _ACTIVE_CONFIG
    if settings is not None and preset:
        raise ValueError("Provide either `settings` or `preset`, not both.")
    if preset:
        settings = preset_settings(preset)
    _ACTIVE_CONFIG = (settings or LogSettings.from_env()).to_config()
    _LOGGERS.clear()


def _startup_settings() -> LogSettings:
    # an unknown preset is reported by the cli through configure()
    settings = LogSettings.from_env()
    preset = os.environ.get(f"{ENV_PREFIX}LOG_PRESET")
    if preset and preset.lower() in _PRESETS:
        return preset_settings(preset, settings)
    return settings


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _startup_settings().to_config()

    key = name or ROOT_LOGGER
    logger = _LOGGERS.get(key)
    if logger is None:
        logger = _LOGGERS[key] = tl.Logger.with_config(key, _ACTIVE_CONFIG)
    return logger


def _emit(logger: Any, level: str, message: str, data: Dict[str, Any]) -> None:
    """Log with key/value pairs when the level has a ``*_with`` variant."""

    level = level.lower()
    pairs = [(str(key), _stringify(value)) for key, value in data.items()]
    structured = getattr(logger, f"{level}_with", None)
    if structured is not None:
        structured(message, pairs)
        return
    method = getattr(logger, level, None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    method(f"{message} {dict(pairs)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    fields = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", fields)


@dataclass(slots=True)
class Span:
    """Handle yielded by ``span``; everything it logs carries the span fields."""

    name: str
    logger: Any
    component: Optional[str] = None
    fields: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.fields[key] = _stringify(value)

    def done(self, summary: str) -> None:
        self._log("info", "span::done", summary=summary)

    def fail(self, reason: str) -> None:
        self._log("error", "span::fail", reason=reason)

    def _log(self, level: str, message: str, **extra: Any) -> None:
        data: Dict[str, Any] = {"span": self.name, **self.fields, **extra}
        if self.component:
            data["component"] = self.component
        _emit(self.logger, level, message, data)


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> Iterator[Span]:
    """Profile a block under ``name``.

    ``metadata`` is pushed as logger context for the duration of the block,
    ``component`` enables telelog component tracking, and an exception
    escaping the block is logged as ``span::fail`` before it propagates.
    """

    log = get_logger(logger_name)
    handle = Span(
        name,
        log,
        component,
        {key: _stringify(value) for key, value in (metadata or {}).items()},
    )

    with ExitStack() as stack:
        for key, value in handle.fields.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))

        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "LogSettings",
    "Span",
    "configure",
    "get_logger",
    "preset_settings",
    "record_event",
    "span",
]

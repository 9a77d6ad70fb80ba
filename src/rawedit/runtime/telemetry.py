"""Structured logging and profiling for rawedit, on top of telelog.

The editor owns the whole screen while it runs, so nothing reaches the
console unless ``RAWEDIT_ENABLE_CONSOLE`` is set; point ``RAWEDIT_LOG_FILE``
(or ``--log-file``) at a path to keep the records. ``RAWEDIT_LOG_PRESET`` (or
``--log-preset``) selects one of the named setups in ``PRESETS``.

``configure(...)`` -- build and activate a telelog configuration
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit an ``event::<name>`` record
``span(name, ...)`` -- profile a block and track it as a component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "RAWEDIT_"
DEFAULT_LOGGER_NAME = "rawedit"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}") or None


def _env_flag(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


@dataclass(frozen=True)
class LogSettings:
    """Everything rawedit decides about a telelog ``Config``."""

    level: str = "INFO"
    console: bool = False
    colored: bool = True
    json: bool = False
    log_file: Optional[str] = None
    buffer_size: Optional[int] = None

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level.upper())
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffer_size:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(True)
        return config


PRESETS: Mapping[str, LogSettings] = MappingProxyType(
    {
        "development": LogSettings(level="DEBUG", console=True),
        "production": LogSettings(log_file="rawedit.log", buffer_size=2048),
        "performance": LogSettings(
            level="DEBUG",
            json=True,
            log_file="rawedit-performance.log",
            buffer_size=8192,
        ),
    }
)


def settings_from_env() -> LogSettings:
    buffer_size = None
    if _env_flag("LOG_BUFFERED"):
        buffer_size = int(_env("LOG_BUFFER_SIZE") or "2048")
    return LogSettings(
        level=_env("LOG_LEVEL") or "INFO",
        console=_env_flag("ENABLE_CONSOLE"),
        colored=not _env_flag("NO_COLOR"),
        json=_env_flag("LOG_JSON"),
        log_file=_env("LOG_FILE"),
        buffer_size=buffer_size,
    )


def resolve_settings(
    *,
    preset: Optional[str] = None,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> LogSettings:
    """Pick a preset (argument, then ``RAWEDIT_LOG_PRESET``) or the env settings.

    ``RAWEDIT_LOG_FILE`` redirects a preset's file; ``level`` and ``log_file``
    win over both.
    """

    name = preset or _env("LOG_PRESET")
    if name:
        try:
            settings = PRESETS[name.lower()]
        except KeyError as exc:
            choices = ", ".join(PRESETS)
            raise ValueError(
                f"Unknown log preset {name!r} (expected one of: {choices})"
            ) from exc
        if settings.log_file and _env("LOG_FILE"):
            settings = replace(settings, log_file=_env("LOG_FILE"))
    else:
        settings = settings_from_env()

    overrides = {
        key: value
        for key, value in (("level", level), ("log_file", log_file))
        if value
    }
    return replace(settings, **overrides) if overrides else settings


def configure(
    *,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """Activate ``config`` or one built by ``resolve_settings``.

    Cached loggers are dropped so the next ``get_logger`` call sees the change.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if config is None:
        config = resolve_settings(preset=preset, level=level, log_file=log_file).build()
    else:
        config.with_profiling(True)

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        if _ACTIVE_CONFIG is None:
            _ACTIVE_CONFIG = resolve_settings().build()
        logger = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    """Log ``payload`` as key/value pairs when the level supports it."""

    name = str(level).lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(k), _stringify(v)) for k, v in payload.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span``; extra metadata rides along on failure records."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``; ``component`` also tracks it under that id.

    ``metadata`` is pushed as logger context for the duration of the block.
    An escaping exception is logged through ``SpanHandle.fail`` and re-raised.
    """

    log = get_logger(logger_name)
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(
        logger=log, span_name=name, component_name=component, metadata=dict(context)
    )

    with ExitStack() as stack:
        for key, value in context.items():
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
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "resolve_settings",
    "settings_from_env",
    "span",
]

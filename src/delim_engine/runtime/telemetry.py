"""Telelog-backed logging and profiling for the delimiter engine.

``configure`` picks the telelog config (environment default or a named
preset), ``record_event`` logs a structured event, and ``span`` profiles a
block while optionally tracking it as a component. Defaults come from
``DELIM_ENGINE_*`` environment variables.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "DELIM_ENGINE_"
PRESETS = ("development", "production", "performance")

_LOGGERS: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    return (_env(name) or "").strip().lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _preset_config(preset: str) -> Any:
    key = preset.strip().lower()
    if key not in PRESETS:
        raise ValueError(f"Unknown preset '{preset}'. Expected one of {PRESETS}.")

    config = tl.Config()
    config.with_min_level("INFO" if key == "production" else "DEBUG")
    config.with_console_output(key == "development")
    if key == "development":
        config.with_colored_output(True)
        return config

    config.with_buffering(True)
    config.with_json_format(key == "performance")
    default_file = f"delim_engine{'-performance' if key == 'performance' else ''}.log"
    config.with_file_output(_env("LOG_FILE") or default_file)
    return config


def _env_config() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "WARNING").upper())
    console = not _env_flag("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR"))
    if _env_flag("LOG_JSON"):
        config.with_json_format(True)
    if _env("LOG_FILE"):
        config.with_file_output(_env("LOG_FILE"))
    if _env_flag("LOG_BUFFERED"):
        config.with_buffering(True)
        config.with_buffer_size(int(_env("LOG_BUFFER_SIZE") or "2048"))
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Adopt ``config`` or ``preset`` (not both); neither rebuilds the default."""

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset:
        config = _preset_config(preset)
    elif config is None:
        config = _env_config()
    # span() relies on logger.profile
    config.with_profiling(True)
    _ACTIVE_CONFIG = config
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or _env("LOGGER") or "delim_engine"
    if logger_name not in _LOGGERS:
        if _ACTIVE_CONFIG is None:
            configure()
        _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGERS[logger_name]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method = getattr(log, f"{level.lower()}_with", None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    method(message, [(str(key), _stringify(value)) for key, value in payload.items()])


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span`` so callers can attach outcome metadata."""

    logger: Any
    span_name: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload = {"span": self.span_name, **self.metadata, "reason": reason}
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block; ``component=True`` tracks it under ``name``.

    ``metadata`` becomes transient logger context for the block.
    """

    log = get_logger(logger_name)
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(logger=log, span_name=name, metadata=dict(context))

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(
                log.track_component(name if component is True else component)
            )
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]

"""Logging and profiling for the editor, backed by telelog.

Spans cover the buffer mutations (``buffer::load``, ``buffer::store``,
``buffer::insert``, ``buffer::delete``) and each interpreted command line
(``interpreter::run_line``). Discrete facts such as a write or a cursor
hitting a bound go out through :func:`record_event`.

Stdout carries the prompt protocol, so console output is only enabled by
``BLOB_EDITOR_LOG_CONSOLE`` or the ``development`` preset.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "BLOB_EDITOR_"
DEFAULT_LOGGER_NAME = "blob_editor"

_TRUTHY = frozenset({"1", "true", "yes", "on"})

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


@dataclass(frozen=True, slots=True)
class _EnvSettings:
    level: str = "INFO"
    console: bool = False
    colored: bool = True
    json: bool = False
    log_file: str = ""
    buffer_size: Optional[int] = None

    @classmethod
    def read(cls) -> "_EnvSettings":
        def flag(name: str) -> bool:
            return os.getenv(f"{ENV_PREFIX}{name}", "").lower() in _TRUTHY

        buffer_size = None
        if flag("LOG_BUFFERED"):
            buffer_size = int(os.getenv(f"{ENV_PREFIX}LOG_BUFFER_SIZE") or "2048")
        return cls(
            level=(os.getenv(f"{ENV_PREFIX}LOG_LEVEL") or "INFO").upper(),
            console=flag("LOG_CONSOLE"),
            colored=not flag("NO_COLOR"),
            json=flag("LOG_JSON"),
            log_file=os.getenv(f"{ENV_PREFIX}LOG_FILE", ""),
            buffer_size=buffer_size,
        )


def _from_environment(env: _EnvSettings) -> Any:
    config = tl.Config()
    config.with_min_level(env.level)
    config.with_console_output(env.console)
    if env.console:
        config.with_colored_output(env.colored)
    if env.json:
        config.with_json_format(True)
    if env.log_file:
        config.with_file_output(env.log_file)
    if env.buffer_size is not None:
        config.with_buffering(True)
        config.with_buffer_size(env.buffer_size)
    return config


def _development(env: _EnvSettings) -> Any:
    config = tl.Config()
    config.with_min_level("DEBUG")
    config.with_console_output(True)
    config.with_colored_output(env.colored)
    return config


def _production(env: _EnvSettings) -> Any:
    config = tl.Config()
    config.with_min_level("INFO")
    config.with_console_output(False)
    config.with_file_output(env.log_file or "blob_editor.log")
    config.with_buffering(True)
    return config


def _performance(env: _EnvSettings) -> Any:
    config = tl.Config()
    config.with_min_level("DEBUG")
    config.with_console_output(False)
    config.with_json_format(True)
    config.with_file_output(env.log_file or "blob_editor-performance.log")
    config.with_buffering(True)
    return config


_PRESET_BUILDERS: Dict[str, Callable[[_EnvSettings], Any]] = {
    "development": _development,
    "production": _production,
    "performance": _performance,
}

PRESETS = tuple(_PRESET_BUILDERS)


def configure(*, preset: Optional[str] = None) -> None:
    """(Re)build the telelog configuration and drop cached loggers.

    Without ``preset`` the ``BLOB_EDITOR_LOG_*`` variables decide.
    """

    global _config
    env = _EnvSettings.read()
    if preset is None:
        config = _from_environment(env)
    else:
        builder = _PRESET_BUILDERS.get(preset.lower())
        if builder is None:
            raise ValueError(f"Unknown preset '{preset}'.")
        config = builder(env)
    config.with_profiling(True)
    _config = config
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _loggers:
        if _config is None:
            configure()
        _loggers[logger_name] = tl.Logger.with_config(logger_name, _config)
    return _loggers[logger_name]


def _stringify(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value if isinstance(value, str) else str(value)


def _log(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(key, _stringify(val)) for key, val in payload.items()])
        return
    plain = getattr(logger, name, None)
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
    """Log ``event::<name>`` with ``data`` as key/value pairs."""

    _log(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
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
        _log(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block, optionally tracking it as a component.

    ``component=True`` uses ``name`` as the component. ``metadata`` is set as
    logger context for the duration of the block and seeds the handle. An
    exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    handle = SpanHandle(logger=log, span_name=name, component_name=component_name)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)

    with ExitStack() as stack:
        for key, value in handle.metadata.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
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

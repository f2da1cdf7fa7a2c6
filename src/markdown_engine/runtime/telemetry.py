"""Telemetry services built directly on telelog.

The rest of the engine only touches this narrow surface:

``configure(...)`` -- override or preset the telelog configuration
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit structured events at a chosen level
``span(name, ...)`` -- context manager wrapping profiling + component tracking
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MARKDOWN_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "markdown_engine")
DEFAULT_LOG_FILE = os.getenv(f"{ENV_PREFIX}LOG_FILE", "")

PRESETS = ("development", "production", "performance")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


# Each preset is a list of (Config builder method, argument) pairs. File
# paths are fallbacks: MARKDOWN_ENGINE_LOG_FILE wins when set.
_PRESET_SETTINGS: Dict[str, list[tuple[str, Any]]] = {
    "development": [
        ("with_min_level", "DEBUG"),
        ("with_console_output", True),
        ("with_colored_output", True),
        ("with_json_format", False),
    ],
    "production": [
        ("with_min_level", "INFO"),
        ("with_console_output", False),
        ("with_file_output", "markdown_engine.log"),
        ("with_buffering", True),
    ],
    "performance": [
        ("with_min_level", "DEBUG"),
        ("with_console_output", False),
        ("with_buffering", True),
        ("with_json_format", True),
        ("with_file_output", "markdown_engine-performance.log"),
    ],
}


def _apply_settings(settings: list[tuple[str, Any]]) -> Any:
    config = tl.Config()
    for method, value in settings:
        if method == "with_file_output":
            value = _env("LOG_FILE", DEFAULT_LOG_FILE) or value
        getattr(config, method)(value)
    config.with_profiling(True)
    return config


def _env_settings() -> list[tuple[str, Any]]:
    settings: list[tuple[str, Any]] = [
        ("with_min_level", (_env("LOG_LEVEL") or "INFO").upper())
    ]
    console = not _env_flag("DISABLE_CONSOLE", False)
    settings.append(("with_console_output", console))
    if console:
        settings.append(("with_colored_output", not _env_flag("NO_COLOR", False)))
    if _env_flag("LOG_JSON", False):
        settings.append(("with_json_format", True))
    if _env("LOG_FILE") or DEFAULT_LOG_FILE:
        settings.append(("with_file_output", ""))
    if _env_flag("LOG_BUFFERED", False):
        settings.append(("with_buffering", True))
        settings.append(("with_buffer_size", int(_env("LOG_BUFFER_SIZE") or "2048")))
    return settings


def _preset_settings(preset: str) -> list[tuple[str, Any]]:
    try:
        return _PRESET_SETTINGS[preset.lower()]
    except KeyError:
        raise ValueError(f"Unknown preset '{preset}'. Expected one of {PRESETS}.") from None


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    Parameters
    ----------
    config:
        Explicit ``telelog.Config`` instance to adopt.
    preset:
        One of ``"development"``, ``"production"`` or ``"performance"``.
        ``config`` and ``preset`` are mutually exclusive.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _apply_settings(_preset_settings(preset))
    elif config is None:
        config = _apply_settings(_env_settings())

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _apply_settings(_env_settings())
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name``."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ensure_config()
        )
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    name = str(level).lower()
    with_attr = getattr(logger, f"{name}_with", None)
    if with_attr is not None:
        return with_attr, True
    attr = getattr(logger, name, None)
    if attr is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return attr, False


def _emit(logger: Any, level: Any, message: str, payload: Dict[str, Any]) -> None:
    method, accepts_data = _level_method(logger, level)
    if accepts_data:
        method(message, _format_pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` line."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Handle yielded by ``span`` for metadata updates inside the block."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _payload(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        return payload

    def fail(self, reason: str) -> None:
        _emit(self.logger, "error", "span::fail", self._payload({"reason": reason}))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a code block and optionally track it as a component.

    ``component=True`` reuses ``name`` as the component identifier; a string
    names the component explicitly. ``metadata`` is attached as transient
    logger context for the duration of the block.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else None
    if isinstance(component, str):
        component_name = component

    context_keys: list[str] = []
    metadata_payload: Dict[str, Any] = {}
    for key, value in (metadata or {}).items():
        serialized = _stringify(value)
        metadata_payload[key] = serialized
        log.add_context(key, serialized)
        context_keys.append(key)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=metadata_payload,
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context_keys:
                log.remove_context(key)


configure()

__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]

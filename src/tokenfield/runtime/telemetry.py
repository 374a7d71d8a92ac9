"""telelog wiring for tokenfield.

Settings are plain ``option -> value`` tables; each option maps onto the
matching ``Config.with_<option>`` builder call. The default table is read
from ``TOKENFIELD_*`` environment variables, presets override it wholesale.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "TOKENFIELD_"
DEFAULT_LOGGER_NAME = "tokenfield"

Settings = Dict[str, Any]

_PRESETS: Dict[str, Settings] = {
    "development": {
        "min_level": "DEBUG",
        "console_output": True,
        "colored_output": True,
        "json_format": False,
    },
    "production": {
        "min_level": "INFO",
        "console_output": False,
        "buffering": True,
        "file_output": "tokenfield.log",
    },
    "performance": {
        "min_level": "DEBUG",
        "console_output": False,
        "buffering": True,
        "json_format": True,
        "file_output": "tokenfield-performance.log",
    },
}

_loggers: MutableMapping[str, Any] = {}
_active: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.environ.get(f"{ENV_PREFIX}{name}") or None


def _env_flag(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


def env_settings() -> Settings:
    """Settings described by the ``TOKENFIELD_*`` environment."""

    settings: Settings = {
        "min_level": (_env("LOG_LEVEL") or "WARNING").upper(),
        "console_output": not _env_flag("DISABLE_CONSOLE"),
    }
    if settings["console_output"]:
        settings["colored_output"] = not _env_flag("NO_COLOR")
    if _env_flag("LOG_JSON"):
        settings["json_format"] = True
    if _env("LOG_FILE"):
        settings["file_output"] = _env("LOG_FILE")
    if _env_flag("LOG_BUFFERED"):
        settings["buffering"] = True
        settings["buffer_size"] = int(_env("LOG_BUFFER_SIZE") or "2048")
    return settings


def preset_settings(preset: str) -> Settings:
    """Settings for a named preset; ``TOKENFIELD_LOG_FILE`` redirects file output."""

    try:
        settings = dict(_PRESETS[preset.lower()])
    except KeyError:
        raise ValueError(
            f"Unknown preset {preset!r}; expected one of {sorted(_PRESETS)}"
        ) from None
    if "file_output" in settings and _env("LOG_FILE"):
        settings["file_output"] = _env("LOG_FILE")
    return settings


def build_config(settings: Settings) -> Any:
    config = tl.Config()
    for option, value in settings.items():
        getattr(config, f"with_{option}")(value)
    # spans are timed through logger.profile
    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the active telelog configuration and drop cached loggers.

    With neither argument the environment decides. ``config`` and ``preset``
    are mutually exclusive.
    """

    global _active
    if config is not None and preset is not None:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if config is None:
        config = build_config(preset_settings(preset) if preset else env_settings())
    else:
        config.with_profiling(True)
    _active = config
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    name = name or DEFAULT_LOGGER_NAME
    log = _loggers.get(name)
    if log is None:
        if _active is None:
            configure()
        log = _loggers[name] = tl.Logger.with_config(name, _active)
    return log


def _text(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _pairs(payload: Dict[str, Any]) -> List[Tuple[str, str]]:
    return [(str(key), _text(value)) for key, value in payload.items()]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    level = str(level).lower()
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(message, _pairs(payload))
        return
    plain = getattr(log, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level {level!r}")
    plain(" ".join([message, *(f"{key}={value}" for key, value in _pairs(payload))]))


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` as key/value pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata, "reason": reason}
        if self.component:
            payload["component"] = self.component
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a block under ``name``; ``metadata`` is logger context while it runs.

    An exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(log, name, component)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)
    pushed = list(handle.metadata.items())
    for key, value in pushed:
        log.add_context(key, value)

    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key, _ in pushed:
                log.remove_context(key)


__all__ = [
    "SpanHandle",
    "build_config",
    "configure",
    "env_settings",
    "get_logger",
    "preset_settings",
    "record_event",
    "span",
]

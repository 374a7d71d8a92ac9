"""Engine configuration with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from tokenfield.engine.filtering import DEFAULT_THRESHOLD, normalize_threshold
from tokenfield.tokenizers import DEFAULT_SEPARATOR

ENV_PREFIX = "TOKENFIELD_"


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    return environ.get(f"{ENV_PREFIX}{name}")


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _env(environ, name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class EngineConfig:
    separator: str = DEFAULT_SEPARATOR
    threshold: int = DEFAULT_THRESHOLD
    validate_on_focus_loss: bool = True
    tokenize: bool = True

    def __post_init__(self) -> None:
        if len(self.separator) != 1:
            raise ValueError(f"separator must be one character, got {self.separator!r}")
        object.__setattr__(self, "threshold", normalize_threshold(self.threshold))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """Read ``TOKENFIELD_*`` overrides, falling back to the defaults."""

        env = os.environ if environ is None else environ
        raw_threshold = _env(env, "THRESHOLD")
        try:
            threshold = int(raw_threshold) if raw_threshold else DEFAULT_THRESHOLD
        except ValueError as exc:
            raise ValueError(
                f"{ENV_PREFIX}THRESHOLD must be an integer, got {raw_threshold!r}"
            ) from exc
        return cls(
            separator=_env(env, "SEPARATOR") or DEFAULT_SEPARATOR,
            threshold=threshold,
            validate_on_focus_loss=_env_flag(env, "VALIDATE_ON_BLUR", True),
            tokenize=_env_flag(env, "TOKENIZE", True),
        )


__all__ = ["EngineConfig", "ENV_PREFIX"]

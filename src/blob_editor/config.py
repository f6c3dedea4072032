"""Editor configuration sourced from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

ENV_PREFIX = "BLOB_EDITOR_"
DEFAULT_PROMPT = ": "


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Session settings; CLI flags override what the environment provides."""

    prompt: str = DEFAULT_PROMPT
    eof_marker: str = "EOF"
    start_marker: str = "START"
    log_preset: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        env = os.environ if environ is None else environ
        return cls(
            prompt=env.get(f"{ENV_PREFIX}PROMPT", DEFAULT_PROMPT),
            log_preset=env.get(f"{ENV_PREFIX}LOG_PRESET") or None,
        )

    def with_overrides(self, **changes: object) -> "EditorConfig":
        updates = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **updates)


__all__ = ["EditorConfig", "DEFAULT_PROMPT", "ENV_PREFIX"]

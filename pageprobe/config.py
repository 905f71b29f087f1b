"""Runtime configuration, overridable through PAGEPROBE_* environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

from pageprobe.errors import ConfigError

_ENV_PREFIX = "PAGEPROBE_"
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class ProbeConfig:
    headless: bool = True
    new_url_delay_ms: int = 2000  # settle time after loading a new URL
    repeat_delay_ms: int = 500  # settle time when re-capturing the same URL
    navigation_timeout_ms: int = 30000
    viewport_width: int = 1280
    viewport_height: int = 800
    max_payload_chars: int = 1_000_000
    max_error_chars: int = 2000

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ProbeConfig:
        """Build a config from the environment, falling back to the defaults."""
        env = os.environ if environ is None else environ
        config = cls()
        for name, current in list(vars(config).items()):
            raw = env.get(_ENV_PREFIX + name.upper())
            if raw is None or raw.strip() == "":
                continue
            if isinstance(current, bool):
                setattr(config, name, _parse_bool(name, raw))
            else:
                setattr(config, name, _parse_non_negative_int(name, raw))
        return config


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(_ENV_PREFIX + name.upper(), raw, "boolean")


def _parse_non_negative_int(name: str, raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ConfigError(_ENV_PREFIX + name.upper(), raw, "integer") from None
    if value < 0:
        raise ConfigError(_ENV_PREFIX + name.upper(), raw, "non-negative integer")
    return value

"""Persistent JSON config for engine-wide prompt defaults.

Stores the ESC disambiguation delay and default session behavior.
Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "rawprompt"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_ESC_DELAY_MS = 30
MAX_ESC_DELAY_MS = 1000


@dataclass(frozen=True)
class EngineConfig:
    esc_delay_ms: int = DEFAULT_ESC_DELAY_MS
    hide_cursor: bool = True
    clear_on_end: bool = True


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except Exception as exc:
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem and serialization errors are logged and otherwise ignored so a
    read-only config dir never breaks a prompt.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception as exc:
        logger.debug("could not write config %s: %s", CONFIG_PATH, exc)


def _coerce_delay(value: object) -> int:
    """Accept integer delays within ``[0, MAX_ESC_DELAY_MS]``; anything else is the default."""
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_ESC_DELAY_MS
    if value < 0 or value > MAX_ESC_DELAY_MS:
        return DEFAULT_ESC_DELAY_MS
    return value


def _coerce_bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def load_engine_config() -> EngineConfig:
    data = load_config()
    return EngineConfig(
        esc_delay_ms=_coerce_delay(data.get("esc_delay_ms")),
        hide_cursor=_coerce_bool(data.get("hide_cursor"), True),
        clear_on_end=_coerce_bool(data.get("clear_on_end"), True),
    )


def save_engine_config(config: EngineConfig) -> None:
    """Merge ``config`` into the stored file, keeping unrelated keys."""
    data = load_config()
    data.update(asdict(config))
    save_config(data)

"""Runtime settings read from ``PI_TERMWIN_*`` environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

logger = logging.getLogger(__name__)

ENV_PREFIX = "PI_TERMWIN_"


@dataclass(frozen=True)
class TermwinSettings:
    """Rendering and safety knobs shared by windows and widgets."""

    default_prompt: str = "> "
    selected_prefix: str = "> "
    unselected_prefix: str = "  "
    cell_separator: str = "  "
    max_reload_depth: int = 32
    # Mirror every terminal write to this file when set
    write_log: str = ""


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + key)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.debug("Ignoring non-integer %s%s=%r", ENV_PREFIX, key, raw)
        return default
    return value if value > 0 else default


def load_settings(env: Mapping[str, str] | None = None) -> TermwinSettings:
    """Build settings from *env* (defaults to ``os.environ``).

    Unset variables keep the dataclass defaults; invalid integers fall back
    to the default value.
    """
    if env is None:
        env = os.environ
    defaults = TermwinSettings()
    return TermwinSettings(
        default_prompt=env.get(ENV_PREFIX + "DEFAULT_PROMPT", defaults.default_prompt),
        selected_prefix=env.get(ENV_PREFIX + "SELECTED_PREFIX", defaults.selected_prefix),
        unselected_prefix=env.get(
            ENV_PREFIX + "UNSELECTED_PREFIX", defaults.unselected_prefix
        ),
        cell_separator=env.get(ENV_PREFIX + "CELL_SEPARATOR", defaults.cell_separator),
        max_reload_depth=_env_int(env, "MAX_RELOAD_DEPTH", defaults.max_reload_depth),
        write_log=env.get(ENV_PREFIX + "WRITE_LOG", defaults.write_log),
    )

"""Runtime settings read from the environment.

Settings come from environment variables, with a ``.env`` file in the
working directory loaded first if present:

    DATA_ALCHEMIST_RULES_FILE   Rules JSON appended to the built-in rules
    DATA_ALCHEMIST_LOG_LEVEL    Logging level for scripts (default INFO)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Settings for the command-line tools."""

    rules_file: Path | None = None
    log_level: str = DEFAULT_LOG_LEVEL


def get_settings() -> Settings:
    """Load settings from the environment (and ``.env``)."""
    load_dotenv()

    rules_file = os.getenv("DATA_ALCHEMIST_RULES_FILE")
    return Settings(
        rules_file=Path(rules_file) if rules_file else None,
        log_level=os.getenv("DATA_ALCHEMIST_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from backend.preferences import DEFAULT_STORE_NAME

DEFAULT_PREFS_DIR = "~/.simple_calculator"
DEFAULT_LOG_LEVEL = "WARNING"

HOME_ENV = "SIMPLE_CALCULATOR_HOME"
LOG_LEVEL_ENV = "SIMPLE_CALCULATOR_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings:
    def __init__(self, prefs_dir=DEFAULT_PREFS_DIR, prefs_name: str = DEFAULT_STORE_NAME,
                 log_level: str = DEFAULT_LOG_LEVEL, persist: bool = True):
        self.prefs_dir = Path(prefs_dir).expanduser()
        self.prefs_name = prefs_name
        self.log_level = normalize_log_level(log_level)
        self.persist = persist

    def __repr__(self):
        return (f"Settings(prefs_dir={str(self.prefs_dir)!r}, prefs_name={self.prefs_name!r}, "
                f"log_level={self.log_level!r}, persist={self.persist!r})")


def normalize_log_level(name) -> str:
    """Return an upper-case logging level name, or the default for unknown names."""
    if not name:
        return DEFAULT_LOG_LEVEL
    level = str(name).upper()
    if isinstance(logging.getLevelName(level), int):
        return level
    return DEFAULT_LOG_LEVEL


def load_settings(prefs_dir: Optional[str] = None, log_level: Optional[str] = None,
                  persist: bool = True, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings. Explicit arguments (from the command line) win over
    environment variables, which win over defaults.
    """
    env = os.environ if environ is None else environ
    return Settings(
        prefs_dir=prefs_dir or env.get(HOME_ENV) or DEFAULT_PREFS_DIR,
        log_level=log_level or env.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL,
        persist=persist,
    )


def configure_logging(settings: Settings):
    logging.basicConfig(level=getattr(logging, settings.log_level), format=LOG_FORMAT)

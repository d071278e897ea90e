#!/usr/bin/env python3
"""
Entry point for the Calculator application.

    python main.py [--prefs-dir DIR] [--log-level LEVEL] [--no-persist]

The last display value is kept in <prefs-dir>/calcPrefs.json and restored
on the next start.
"""
import argparse
import logging
import sys
from pathlib import Path

# Ensure the repo root is on sys.path so backend/frontend import when run as a script
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine import CalculatorEngine
from backend.preferences import JSONPreferences, MemoryPreferences
from backend.settings import configure_logging, load_settings

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Simple four-function calculator")
    parser.add_argument("--prefs-dir", help="directory holding the saved display value")
    parser.add_argument("--log-level", help="logging level name, e.g. DEBUG or INFO")
    parser.add_argument("--no-persist", action="store_true",
                        help="do not read or write the saved display value")
    return parser.parse_args(argv)


def build_engine(settings) -> CalculatorEngine:
    if settings.persist:
        preferences = JSONPreferences.in_directory(settings.prefs_dir, settings.prefs_name)
        logger.info("Using preferences at %s", preferences.path)
    else:
        preferences = MemoryPreferences()
    return CalculatorEngine(preferences)


def main(argv=None):
    args = parse_args(argv)
    settings = load_settings(prefs_dir=args.prefs_dir, log_level=args.log_level,
                             persist=not args.no_persist)
    configure_logging(settings)
    logger.debug("Starting with %r", settings)

    engine = build_engine(settings)

    # Import late so the engine stays usable where Tk is unavailable
    from frontend.gui import main as run_gui
    run_gui(engine)


if __name__ == "__main__":
    main()

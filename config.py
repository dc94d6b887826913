"""
Environment-driven settings shared by the console and web front ends.
"""
import logging
import os

from dotenv import load_dotenv

from game import DEFAULT_MAX_ATTEMPTS

load_dotenv()


def get_max_attempts() -> int:
    raw = os.getenv("WORDLE_MAX_ATTEMPTS", str(DEFAULT_MAX_ATTEMPTS))
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"WORDLE_MAX_ATTEMPTS must be an integer, got {raw!r}")
    if value < 2:
        raise ValueError("WORDLE_MAX_ATTEMPTS must be at least 2")
    return value


def get_default_secret():
    """Secret word from WORDLE_SECRET, or None when unset."""
    return os.getenv("WORDLE_SECRET") or None


def setup_logging(level=None):
    level = level or os.getenv("WORDLE_LOG_LEVEL", "INFO")
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

def check_level(level: str) -> str:
    name = str(level).upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"unknown log level {level!r}, expected one of {', '.join(LOG_LEVELS)}")
    return name

def setup_logger(level: str | None = None) -> logging.Logger:
    """Configure the package logger on stderr; level falls back to $LOG_LEVEL, then INFO."""
    log = logging.getLogger("almanac_pipeline")
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        log.addHandler(handler)
        log.propagate = False
    log.setLevel(check_level(level or os.getenv("LOG_LEVEL") or "INFO"))
    return log

logger = setup_logger("INFO")

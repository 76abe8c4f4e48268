import logging
import sys
from typing import Union

# Package logger; everything in vibematch logs through the helpers below.
logger = logging.getLogger("vibematch")

_HANDLER_NAME = "vibematch-stdout"


def _parse_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    parsed = logging.getLevelName(level.strip().upper())
    return parsed if isinstance(parsed, int) else logging.INFO


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Send the vibematch logger to stdout at `level` (an int or a name such
    as "debug", as read from VIBEMATCH_LOG_LEVEL).

    Only the package logger is configured; the root logger stays with
    whoever hosts the app (uvicorn, pytest). Calling it again changes the
    level without stacking a second handler.
    """
    logger.setLevel(_parse_level(level))

    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-7s vibematch | %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        logger.addHandler(handler)

    return logger


def log_info(message: str) -> None:
    logger.info("%s", message)


def log_step(message: str) -> None:
    """Ongoing work, e.g. "Recording swipe u1 -> u2"."""
    logger.info("→ %s", message)


def log_success(message: str) -> None:
    logger.info("✅ %s", message)


def log_warning(message: str) -> None:
    """Non-fatal problem that the caller recovered from."""
    logger.warning("⚠️ %s", message)


def log_error(message: str) -> None:
    logger.error("❌ %s", message)

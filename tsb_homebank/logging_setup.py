"""
Logging configuration for the TSB homebank client.

Protocol messages carry a ``[STEP]`` tag (``[HOME]``, ``[SIGNON]``,
``[DASHBOARD]``, ``[COOKIE]``, ``[ERR]``) that is highlighted on the
console.  Passwords and cookie values are never logged, only names.
"""

import logging
from pathlib import Path

try:
    import colorlog
    _COLORLOG_AVAILABLE = True
except ImportError:
    _COLORLOG_AVAILABLE = False

log = logging.getLogger("tsb-homebank")

_CONSOLE_FMT = "%(asctime)s [%(levelname)s] %(message)s"
_FILE_LOG_FMT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_FILE_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_ANSI_RESET = "\033[0m"
_STEP_STYLES: dict[str, str] = {
    "[HOME]":      "\033[36m",
    "[SIGNON]":    "\033[1;35m",
    "[DASHBOARD]": "\033[1;32m",
    "[COOKIE]":    "\033[90m",
    "[ERR]":       "\033[1;31m",
}


def _apply_step_styles(msg: str) -> str:
    for tag, style in _STEP_STYLES.items():
        if tag in msg:
            msg = msg.replace(tag, f"{style}{tag}{_ANSI_RESET}")
    return msg


class _StepFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return _apply_step_styles(super().format(record))


class _ColorlogStepFormatter(colorlog.ColoredFormatter if _COLORLOG_AVAILABLE else logging.Formatter):  # type: ignore[misc]
    def format(self, record: logging.LogRecord) -> str:
        return _apply_step_styles(super().format(record))


def setup_logging(debug: bool = False, log_file: str | Path | None = None) -> None:
    """
    Configure the ``tsb-homebank`` logger.

    Console output is coloured when ``colorlog`` is installed.  When
    *log_file* is given, full DEBUG detail is also written there without
    colour codes.
    """
    level = logging.DEBUG if debug else logging.INFO
    log.setLevel(logging.DEBUG if log_file else level)
    log.handlers.clear()

    if _COLORLOG_AVAILABLE:
        handler = colorlog.StreamHandler()
        handler.setFormatter(_ColorlogStepFormatter(
            "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s",
            datefmt="%H:%M:%S",
            log_colors={
                "DEBUG":    "cyan",
                "INFO":     "green",
                "WARNING":  "yellow",
                "ERROR":    "red",
                "CRITICAL": "bold_red",
            },
        ))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(_StepFormatter(_CONSOLE_FMT, datefmt="%H:%M:%S"))
    handler.setLevel(level)
    log.addHandler(handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_LOG_FMT, datefmt=_FILE_LOG_DATEFMT))
        log.addHandler(fh)
        log.debug("Logging to file: %s", log_path.resolve())

"""
Office Days: Logging Infrastructure
===================================
All loggers live under the ``officedays`` namespace. ``setup_logging`` wires a
console handler (stderr) and, optionally, a size-rotated log file.

Levels:
    TRACE (5): every assignment and rebalance move
    DEBUG (10): phases of a run, round counts, constraint checks
    INFO (20): run progress reported by the CLI
    WARNING (30): failed validation checks
    ERROR (40): crashed background jobs
"""
import functools
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Optional

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

ROOT_LOGGER = "officedays"

CONSOLE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"


class ColoredFormatter(logging.Formatter):
    """Console formatter that tints the line by level when writing to a TTY."""

    COLORS = {
        TRACE: "90",
        logging.DEBUG: "36",
        logging.INFO: "32",
        logging.WARNING: "33",
        logging.ERROR: "31",
        logging.CRITICAL: "1;31",
    }

    def __init__(self, fmt=None, datefmt=None, stream=None):
        super().__init__(fmt, datefmt)
        self.use_color = bool(getattr(stream or sys.stderr, "isatty", lambda: False)())

    def format(self, record):
        text = super().format(record)
        code = self.COLORS.get(record.levelno)
        if self.use_color and code:
            return f"\033[{code}m{text}\033[0m"
        return text


def _parse_level(name: str) -> int:
    name = name.upper()
    if name == "TRACE":
        return TRACE
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt="%H:%M:%S", stream=sys.stderr))
    return handler


def _file_handler(path: Path, level: int, max_bytes: int, backup_count: int) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console_level: Optional[str] = None,
    max_bytes: int = 2 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """
    Configure the ``officedays`` logger tree.

    Calling it again replaces the previous handlers.

    Args:
        level: Level for the log file, and for the console unless overridden
        log_file: Optional log file path; parent directories are created
        console_level: Separate console level (e.g. "WARNING" while the file gets "TRACE")
        max_bytes: Size at which the log file rolls over
        backup_count: Rolled-over files to keep
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(TRACE)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = _parse_level(console_level or level)
    logger.addHandler(_console_handler(console))

    if log_file:
        logger.addHandler(_file_handler(Path(log_file), _parse_level(level), max_bytes, backup_count))

    logger.debug(
        "Logging ready (console=%s, file=%s)",
        logging.getLevelName(console),
        log_file or "off",
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Module logger, e.g. ``get_logger("officedays.io.json_loader")``."""
    return logging.getLogger(name)


def _short_repr(value: Any, limit: int = 60) -> str:
    text = repr(value)
    return text if len(text) <= limit else text[: limit - 3] + "..."


def log_function_call(func: Callable) -> Callable:
    """Trace calls to ``func``: arguments in, result out, exception type on failure."""
    logger = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if logger.isEnabledFor(TRACE):
            shown = [_short_repr(a) for a in args[:3]]
            shown += [f"{k}={_short_repr(v, 30)}" for k, v in kwargs.items()]
            logger.log(TRACE, "call %s(%s)", func.__name__, ", ".join(shown))
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.debug("%s failed: %s: %s", func.__name__, type(e).__name__, e)
            raise
        logger.log(TRACE, "%s -> %s", func.__name__, _short_repr(result, 100))
        return result

    return wrapper


def log_constraint(
    logger: logging.Logger,
    name: str,
    satisfied: bool,
    details: str = "",
    level: int = logging.DEBUG,
):
    """Report one constraint check; a failed check is always a warning."""
    suffix = f": {details}" if details else ""
    if satisfied:
        logger.log(level, "[ok] %s%s", name, suffix)
    else:
        logger.warning("[FAIL] %s%s", name, suffix)


class SolverLogger:
    """
    Indented trace of a scheduling run.

    ``phase`` and ``step`` go out at DEBUG; ``detail`` and the ``enter``/``exit``
    markers at TRACE, so a normal DEBUG log stays one screen per run.
    """

    def __init__(self, name: str = "officedays.solver"):
        self.logger = logging.getLogger(name)
        self.indent = 0

    def _log(self, level: int, text: str):
        self.logger.log(level, "%s%s", "  " * self.indent, text)

    def phase(self, name: str):
        self.logger.debug("--- %s ---", name)

    def step(self, description: str):
        self._log(logging.DEBUG, f"* {description}")

    def detail(self, key: str, value: Any):
        self._log(TRACE, f"{key}: {value}")

    def enter(self, context: str):
        self._log(TRACE, f"> {context}")
        self.indent += 1

    def exit(self, context: str = ""):
        self.indent = max(0, self.indent - 1)
        if context:
            self._log(TRACE, f"< {context}")

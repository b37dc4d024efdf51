"""Logging setup for the command line entry point."""

import logging

from ics23_testgen.config import TESTGEN_LOG_LEVEL


class ColoredFormatter(logging.Formatter):
    """
    Single-line log formatter for standard error.

    Lines read `<time> <LEVEL> <logger>: <message>`. With colors on, the
    time, level and logger name are wrapped in ANSI codes.
    """

    CYAN = "\x1b[38;5;51m"
    BLUE = "\x1b[38;5;39m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[38;5;244m",
        logging.INFO: "\x1b[38;5;40m",
        logging.WARNING: "\x1b[38;5;220m",
        logging.ERROR: "\x1b[38;5;196m",
        logging.CRITICAL: "\x1b[38;5;196;1m",
    }

    def __init__(self, use_color: bool = True, datefmt: str | None = "%Y-%m-%d %H:%M:%S") -> None:
        super().__init__(datefmt=datefmt)
        self.use_color = use_color

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{self.RESET}" if self.use_color else text

    def format(self, record: logging.LogRecord) -> str:
        """Format a record on one line, colored if enabled."""
        level_color = self.LEVEL_COLORS.get(record.levelno, self.RESET)

        timestamp = self._paint(self.formatTime(record, self.datefmt), self.CYAN)
        levelname = self._paint(f"{record.levelname:8}", level_color)
        name = self._paint(record.name, self.BLUE)

        line = f"{timestamp} {levelname} {name}: {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """
    Configure logging for the generator.

    Records go to standard error only; standard output is reserved for the
    fixture. Calling this again replaces the previously installed handler.

    Args:
        verbose: Force DEBUG level, ignoring `TESTGEN_LOG_LEVEL`.
        no_color: Write plain lines without ANSI colors.
    """
    level = logging.DEBUG if verbose else getattr(logging, TESTGEN_LOG_LEVEL.upper())

    # StreamHandler defaults to sys.stderr.
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(use_color=not no_color))

    package_logger = logging.getLogger("ics23_testgen")
    package_logger.setLevel(level)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
    package_logger.addHandler(handler)

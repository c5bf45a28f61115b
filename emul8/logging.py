"""Console logging for the emulator.

A small leveled logger printing ``[elapsed][LEVEL][name] message`` with
optional ANSI colours, plus helpers for the two machine events that carry
an address: instruction traces and halts. Long scheduler runs get a tqdm
progress bar.
"""

import time
import sys
from typing import Optional

from tqdm import tqdm

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_ANSI = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


class ConsoleLogger:
    """Leveled console logger shared by the machine, core and scheduler.

    Setting the level to ``CRITICAL`` silences everything the emulator emits,
    since halts are reported at ``ERROR``.
    """

    def __init__(
        self,
        name: str = "Emul8",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.set_level(log_level)
        self.use_colors = (
            use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def set_level(self, log_level: str):
        """Change the minimum level that gets printed."""
        level = log_level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        self.log_level = level

    def is_enabled_for(self, level: str) -> bool:
        return LEVELS.index(level.upper()) >= LEVELS.index(self.log_level)

    def _format_message(self, level: str, message: str) -> str:
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        if self.use_colors:
            level_str = f"{_ANSI[level]}{level_str}{_RESET}"
        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        level = level.upper()
        if self.is_enabled_for(level):
            print(self._format_message(level, message), flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def instruction(self, address: int, word: int, text: str):
        """Trace one executed instruction as ``0x200: 00E0  CLS``."""
        if self.is_enabled_for("DEBUG"):
            self.debug(f"0x{address:03X}: {word:04X}  {text}")

    def halt(self, address: int, error: Exception):
        """Report the fault that halted the machine at address."""
        self.error(f"Halted at 0x{address:03X}: {error}")


_logger = ConsoleLogger()


def get_logger() -> ConsoleLogger:
    """Shared logger used throughout the emulator."""
    return _logger


def set_log_level(log_level: str):
    _logger.set_level(log_level)


def build_progress_bar(n: int, desc: Optional[str] = None, **kwargs) -> tqdm:
    """Build a tqdm progress bar over n timer ticks."""
    if desc is None:
        desc = f"Running ({n:,} ticks)"

    for kwarg in ("total", "unit"):
        kwargs.pop(kwarg, None)

    return tqdm(total=n, desc=desc, unit="tick", **kwargs)

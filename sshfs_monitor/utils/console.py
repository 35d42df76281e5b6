"""Colorful console logging formatter and shared ANSI codes."""

import logging
import re
from datetime import datetime

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    # Foreground colors
    "black": "\033[30m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    # Bright foreground colors
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bright_white": "\033[97m",
    # Background colors
    "bg_red": "\033[41m",
    "bg_green": "\033[42m",
    "bg_yellow": "\033[43m",
    "bg_blue": "\033[44m",
}

# Terminal control sequences
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
CLEAR_SCREEN = "\033[H\033[2J"

# Log level colors
LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Component colors for logger names
COMPONENT_COLORS = {
    "sshfs_monitor.services.reconciler": COLORS["bright_cyan"],
    "sshfs_monitor.services.recovery": COLORS["bright_yellow"],
    "sshfs_monitor.services.mounter": COLORS["bright_blue"],
    "sshfs_monitor.services.pool": COLORS["bright_magenta"],
    "sshfs_monitor.services": COLORS["cyan"],
    "sshfs_monitor.config": COLORS["green"],
    "sshfs_monitor.daemon": COLORS["magenta"],
    "default": COLORS["white"],
}

_DURATION = re.compile(r"(\d+\.?\d*m?s)\b")
_SSH_TARGET = re.compile(r"(\w[\w.\-]*@[\w.\-]+:\d+)")


class ColorfulFormatter(logging.Formatter):
    """Colorful log formatter with local timestamps and component highlighting."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        """Get color for a logger name/component (first matching prefix wins)."""
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        return f"{dt.strftime('%H:%M:%S')}.{int(record.msecs):03d} {dt.strftime('%m/%d')}"

    def _format_level(self, record: logging.LogRecord) -> str:
        """Format log level with color and fixed width."""
        level = record.levelname
        color = LEVEL_COLORS.get(level, COLORS["white"])
        return self._colorize(f"{level:<8}", color)

    def _format_component(self, record: logging.LogRecord) -> str:
        """Format component/logger name with color."""
        name = record.name
        if name.startswith("sshfs_monitor."):
            name = name[len("sshfs_monitor."):]
        color = self._get_component_color(record.name)
        return self._colorize(f"{name:<20}", color)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors and timestamp."""
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._format_level(record)
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight_message(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

    def _highlight_message(self, message: str) -> str:
        """Highlight durations and ssh targets in log messages."""
        if not self.use_colors:
            return message

        message = _DURATION.sub(f"{COLORS['bright_yellow']}\\1{COLORS['reset']}", message)
        message = _SSH_TARGET.sub(f"{COLORS['bright_magenta']}\\1{COLORS['reset']}", message)
        return message


class MonitorFormatter(ColorfulFormatter):
    """Extended formatter with mount lifecycle indicators."""

    def format(self, record: logging.LogRecord) -> str:
        """Prefix lines with a marker for the kind of event."""
        base = super().format(record)

        if not self.use_colors:
            return base

        message = record.getMessage().lower()

        if "started" in message:
            return f"{COLORS['bright_green']}>>>{COLORS['reset']} {base}"
        elif "stopped" in message or "shutdown" in message:
            return f"{COLORS['bright_red']}<<<{COLORS['reset']} {base}"
        elif "failed" in message or "error" in message:
            return f"{COLORS['bright_red']}!!{COLORS['reset']}  {base}"
        elif "stale" in message or "incomplete" in message:
            return f"{COLORS['bright_yellow']}!{COLORS['reset']}   {base}"
        elif "successfully" in message or "verified" in message:
            return f"{COLORS['bright_green']}OK{COLORS['reset']}  {base}"

        return f"    {base}"


class PlainFileFormatter(logging.Formatter):
    """Log file format: "[YYYY-mm-dd HH:MM:SS] LEVEL message"."""

    def __init__(self) -> None:
        super().__init__("[%(asctime)s] %(levelname)s %(message)s", "%Y-%m-%d %H:%M:%S")

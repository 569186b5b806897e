"""Themed console output for the command line.

Wraps a Rich console with a small colour theme and status-line helpers.
"""

import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.text import Text
from rich.theme import Theme


class StatusType(Enum):
    """Standard status types with associated symbols."""
    SUCCESS = ("[✓]", "success", "green")
    ERROR = ("[x]", "error", "red")
    WARNING = ("[!]", "warning", "yellow")
    INFO = ("[i]", "info", "cyan")


@dataclass
class ThemeColors:
    """Color definitions for a theme."""
    info: str
    warning: str
    error: str
    success: str
    highlight: str
    heading: str
    path: str
    number: str
    dim: str


THEMES = {
    'manhattan': ThemeColors(
        info='cyan',
        warning='yellow',
        error='red',
        success='green',
        highlight='bright_cyan',
        heading='bright_yellow',
        path='white',
        number='bright_blue',
        dim='bright_black',
    ),
    'green': ThemeColors(
        info='green',
        warning='yellow',
        error='red',
        success='bright_green',
        highlight='bold green',
        heading='bright_cyan',
        path='bright_green',
        number='green',
        dim='green',
    ),
    'sunset': ThemeColors(
        info='orange3',
        warning='yellow',
        error='red3',
        success='green',
        highlight='bold orange1',
        heading='dark_orange3',
        path='wheat1',
        number='orange1',
        dim='grey50',
    ),
}


class ConsoleManager:
    """Console with theme support; styling is dropped when output is not a terminal."""

    def __init__(self, theme: str = "manhattan", file: Optional[Any] = None,
                 force_plain: bool = False):
        """Initialize console.

        Args:
            theme: Theme name from THEMES
            file: Output file (defaults to sys.stderr)
            force_plain: Strip colour even on a terminal
        """
        self.theme_name = theme
        self.theme_colors = THEMES.get(theme, THEMES['manhattan'])
        self.file = file or sys.stderr

        no_color = force_plain or bool(os.environ.get('NO_COLOR'))
        self.console = Console(
            theme=self._create_rich_theme(),
            file=self.file,
            no_color=no_color,
            highlight=False,
        )

    def _create_rich_theme(self) -> Theme:
        """Create Rich theme from our theme colors."""
        colors = self.theme_colors
        return Theme({
            'info': colors.info,
            'warning': colors.warning,
            'error': colors.error,
            'success': colors.success,
            'highlight': colors.highlight,
            'heading': colors.heading,
            'path': colors.path,
            'number': colors.number,
            'dim': colors.dim,
        })

    def print(self, *args, **kwargs):
        """Print with Rich markup."""
        self.console.print(*args, **kwargs)

    def print_status(self, status: StatusType, message: str):
        """Print a status line with icon."""
        icon, _, color = status.value
        status_text = Text()
        status_text.append(f"{icon} ", style=color)
        status_text.append(message)
        self.console.print(status_text)

    def print_error(self, message: str):
        self.print_status(StatusType.ERROR, message)

    def print_success(self, message: str):
        self.print_status(StatusType.SUCCESS, message)

    def print_warning(self, message: str):
        self.print_status(StatusType.WARNING, message)

    def print_info_with_heading(self, heading: str, value: str):
        """Print an info line with a colored heading and regular value."""
        text = Text()
        text.append("i ", style=self.theme_colors.info)
        text.append(heading, style=self.theme_colors.heading)
        text.append(f" {value}", style=self.theme_colors.info)
        self.console.print(text)

    def print_separator(self, char: str = "═", width: int = 60):
        self.console.print(char * width, style="dim")

    def print_exception(self):
        """Print the active exception's traceback."""
        self.console.print_exception()

"""Console output with theme support and a plain text fallback.

Reports are always written verbatim; only status lines are styled.
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
    ERROR = ("[x]", "error", "red")
    WARNING = ("[!]", "warning", "yellow")


@dataclass
class ThemeColors:
    """Color definitions for a theme."""
    info: str
    warning: str
    error: str
    success: str
    path: str
    number: str
    dim: str


THEMES = {
    'manhattan': ThemeColors(
        info='cyan',
        warning='yellow',
        error='red',
        success='green',
        path='white',
        number='bright_blue',
        dim='bright_black',
    ),
    'green': ThemeColors(
        info='green',
        warning='yellow',
        error='red',
        success='bright_green',
        path='bright_green',
        number='green',
        dim='green',
    ),
    'sunset': ThemeColors(
        info='orange3',
        warning='yellow',
        error='red3',
        success='green',
        path='wheat1',
        number='orange1',
        dim='grey50',
    ),
}


class ConsoleManager:
    """Writes reports and status lines, using Rich on color terminals."""

    def __init__(self, theme: str = "manhattan", file: Optional[Any] = None,
                 force_plain: bool = False):
        """Initialize console manager.

        Args:
            theme: Theme name from THEMES
            file: Output file (defaults to sys.stdout at print time)
            force_plain: Force plain output even on a terminal
        """
        self.theme_name = theme
        self.theme_colors = THEMES.get(theme, THEMES['manhattan'])
        self._file = file

        self.use_rich = not force_plain and self._should_use_rich_terminal()
        if self.use_rich:
            self.console = Console(
                theme=self._create_rich_theme(),
                file=file,
                highlight=False
            )
        else:
            self.console = None

    @property
    def file(self):
        return self._file or sys.stdout

    def _should_use_rich_terminal(self) -> bool:
        """Use Rich only on an interactive terminal that allows color."""
        if os.environ.get('NO_COLOR'):
            return False
        return hasattr(self.file, 'isatty') and self.file.isatty()

    def _create_rich_theme(self) -> Theme:
        """Create Rich theme from our theme colors."""
        colors = self.theme_colors
        return Theme({
            'info': colors.info,
            'warning': colors.warning,
            'error': colors.error,
            'success': colors.success,
            'path': colors.path,
            'number': colors.number,
            'dim': colors.dim,
        })

    def print_report(self, text: str) -> None:
        """Print report text exactly as given."""
        if self.use_rich:
            self.console.print(text, markup=False, emoji=False, highlight=False, soft_wrap=True)
        else:
            print(text, file=self.file)

    def print_status(self, status: StatusType, message: str) -> None:
        """Print a status line with icon."""
        icon, style, _ = status.value

        if self.use_rich:
            status_text = Text()
            status_text.append(f"{icon} ", style=style)
            status_text.append(message)
            self.console.print(status_text, soft_wrap=True)
        else:
            print(f"{icon} {message}", file=self.file)

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.print_status(StatusType.ERROR, message)

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self.print_status(StatusType.WARNING, message)

    def print_exception(self) -> None:
        """Print the current exception traceback."""
        if self.use_rich:
            self.console.print_exception()
        else:
            import traceback
            traceback.print_exc(file=self.file)

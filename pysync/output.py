"""Console output formatting for the pysync CLI."""

import json
from typing import Any, Optional

from rich.console import Console
from rich.table import Table

from .utils import format_size as _format_size


class OutputFormatter:
    """Formats user-facing output for the command line.

    Informational messages are suppressed in quiet mode and when JSON
    output is requested, so that stdout stays machine readable. Errors are
    always written to stderr.
    """

    def __init__(self, json_output: bool = False, quiet: bool = False):
        """Initialize output formatter.

        Args:
            json_output: Emit results as JSON instead of human-readable text
            quiet: Suppress non-essential output
        """
        self.json_output = json_output
        self.quiet = quiet
        self.console = Console(highlight=False, soft_wrap=True)
        self.err_console = Console(stderr=True, highlight=False, soft_wrap=True)

    @property
    def _silent(self) -> bool:
        return self.quiet or self.json_output

    def print(self, message: str = "") -> None:
        """Print a plain message."""
        if not self._silent:
            self.console.print(message, markup=False)

    def info(self, message: str) -> None:
        """Print an informational message."""
        if not self._silent:
            self.console.print(message, markup=False)

    def success(self, message: str) -> None:
        """Print a success message."""
        if not self._silent:
            self.console.print(f"✓ {message}", style="green", markup=False)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            self.err_console.print(f"Warning: {message}", style="yellow", markup=False)

    def error(self, message: str) -> None:
        """Print an error message to stderr."""
        self.err_console.print(f"Error: {message}", style="bold red", markup=False)

    def output_json(self, data: Any) -> None:
        """Write data as JSON to stdout."""
        self.console.print_json(json.dumps(data))

    def print_summary(
        self, title: str, rows: list[tuple[str, Any]], footer: Optional[str] = None
    ) -> None:
        """Print a two-column summary table.

        Args:
            title: Table title
            rows: (label, value) pairs
            footer: Optional line printed below the table
        """
        if self._silent:
            return

        table = Table(title=title, show_header=False, title_justify="left")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        for label, value in rows:
            table.add_row(label, str(value))

        self.console.print(table)
        if footer:
            self.console.print(footer, markup=False)

    @staticmethod
    def format_size(size_bytes: int) -> str:
        """Format file size in human-readable format."""
        return _format_size(size_bytes)

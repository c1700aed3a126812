"""Shared utility functions for resgen.

Provides async file output, duration formatting and Rich-based console
reporting.  The core and generator packages never print; everything the
user sees goes through the helpers below.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from pathlib import Path

from rich.console import Console
from rich.table import Table

from resgen.core.models import Diagnostic, Severity

console = Console()

# ---------------------------------------------------------------------------
# File output
# ---------------------------------------------------------------------------


def _write_if_changed(file_path: Path, content: str) -> bool:
    if file_path.is_file() and file_path.read_text(encoding="utf-8") == content:
        return False
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
    return True


async def write_if_changed(path: str | Path, content: str) -> bool:
    """Write *content* unless the file already holds exactly that text.

    Leaving an unchanged file alone keeps its modification time, so the
    build system does not recompile the generated source.  The I/O runs in
    a worker thread to keep the event loop free.

    Args:
        path: Destination file path.  Parent directories are created.
        content: Full file contents.

    Returns:
        ``True`` if the file was (re)written, ``False`` if it was up to date.
    """
    return await asyncio.to_thread(_write_if_changed, Path(path), content)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(0.042) -> "42ms"
        format_duration(3.7)   -> "3.7s"
        format_duration(65.2)  -> "1m 5s"
    """
    if seconds < 0:
        return "0ms"
    if seconds < 1:
        return f"{int(seconds * 1000)}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {int(seconds % 60)}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------

SEVERITY_STYLES: dict[Severity, str] = {
    Severity.INFO: "dim",
    Severity.WARNING: "bold yellow",
    Severity.ERROR: "bold red",
}


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_diagnostics(diagnostics: Iterable[Diagnostic], verbose: bool = False) -> int:
    """Print validation diagnostics, one per line.

    Informational diagnostics (merged duplicates) only show in *verbose*
    mode; warnings always show.

    Returns:
        The number of lines printed.
    """
    printed = 0
    for diagnostic in diagnostics:
        if diagnostic.severity is Severity.INFO and not verbose:
            continue
        style = SEVERITY_STYLES[diagnostic.severity]
        label = diagnostic.severity.value
        console.print(f"[{style}]{label}:[/{style}] {diagnostic.message}", highlight=False)
        printed += 1
    return printed


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")

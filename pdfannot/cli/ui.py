"""Rich-based UI components for CLI"""

from typing import List, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.markup import escape
from rich import box

from pdfannot.core.constants import ColorChoice, NO_ANNOTATIONS_MESSAGE
from pdfannot.annotations.stats import StatsTable

console = Console()


def configure_console(color: str = ColorChoice.AUTO.value) -> Console:
    """Rebuild the shared console for the requested color mode"""
    global console
    choice = ColorChoice(color)
    if choice is ColorChoice.ALWAYS:
        console = Console(force_terminal=True)
    elif choice is ColorChoice.NEVER:
        console = Console(color_system=None)
    else:
        console = Console()
    return console


def supports_color() -> bool:
    return console.color_system is not None and console.is_terminal


def print_success(message: str):
    """Print success message"""
    console.print(f"[green][+][/green] {escape(message)}", highlight=False, soft_wrap=True)


def print_error(message: str):
    """Print error message"""
    console.print(f"[red][!][/red] {escape(message)}", style="red", highlight=False, soft_wrap=True)


def print_warning(message: str):
    """Print warning message"""
    console.print(f"[yellow][*][/yellow] {escape(message)}", style="yellow", highlight=False, soft_wrap=True)


def create_table(
    title: str,
    columns: List[str],
    rows: List[List[Any]],
    show_header: bool = True,
    border_style: Optional[str] = None,
) -> Table:
    """Create a Rich table"""
    table = Table(
        title=Text(title),
        show_header=show_header,
        box=box.SQUARE,
        border_style=border_style,
    )

    for col in columns:
        table.add_column(Text(col), justify="right")

    for row in rows:
        table.add_row(*[cell if isinstance(cell, Text) else str(cell) for cell in row])

    return table


def render_stats_table(stats_table: Optional[StatsTable], per_page: bool = False):
    """Print annotation counts, or a notice when the document has none"""
    if stats_table is None:
        console.print(NO_ANNOTATIONS_MESSAGE, highlight=False)
        return

    rows = stats_table.rows
    if per_page:
        # a subtype missing from a page is shown dimmed
        rows = [
            [row[0]] + [Text("0", style="dim") if count == 0 else str(count) for count in row[1:]]
            for row in rows
        ]

    table = create_table(
        stats_table.title,
        stats_table.columns,
        rows,
        border_style="green" if supports_color() else None,
    )
    console.print(table)


def confirm(question: str, default: bool = False) -> bool:
    """Ask for confirmation; end of input counts as the default answer"""
    suffix = " [Y/n]: " if default else " [y/N]: "
    try:
        response = console.input(f"[yellow]{escape(question + suffix)}[/yellow]")
    except EOFError:
        return default

    if not response:
        return default

    return response.lower() in ['y', 'yes']


def print_verbose(message: str, verbose: bool = False):
    """Print message only in verbose mode"""
    if verbose:
        console.print(f"[dim]{escape(message)}[/dim]", highlight=False, soft_wrap=True)

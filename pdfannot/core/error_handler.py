"""Enhanced error handling with explanations and suggestions"""

from typing import Optional, Dict, Any
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from pdfannot.core.exceptions import (
    PDFOpenError,
    PDFCorruptedError,
    PDFNotFoundError,
    PDFWriteError,
    StructureError,
    ConfigurationError,
    ValidationError,
)


class ErrorContext:
    """Context information for enhanced error reporting"""

    def __init__(
        self,
        operation: str,
        input_file: Optional[Any] = None,
        output_file: Optional[Path] = None,
    ):
        self.operation = operation
        self.input_file = input_file
        self.output_file = output_file


ERROR_EXPLANATIONS = {
    PDFOpenError: {
        "why": "The PDF file could not be opened. Common causes:\n"
               "  - File is not a valid PDF\n"
               "  - File is password protected\n"
               "  - Insufficient permissions",
        "try_next": [
            "Verify the file is a valid PDF: `file <input>`",
            "Use QPDF for diagnosis: `qpdf --check <input>`",
            "Remove the password first: `qpdf --decrypt --password=<pw> <input> <output>`",
        ],
    },
    PDFCorruptedError: {
        "why": "PDF structure is damaged or malformed. Possible issues:\n"
               "  - Missing xref table or trailer\n"
               "  - Corrupted object streams\n"
               "  - Truncated file",
        "try_next": [
            "Rewrite the file with QPDF: `qpdf <input> <output>`",
            "Use QPDF for diagnosis: `qpdf --check <input>`",
        ],
    },
    PDFNotFoundError: {
        "why": "The specified file does not exist",
        "try_next": [
            "Verify file path is correct",
            "Use absolute path instead of relative",
        ],
    },
    PDFWriteError: {
        "why": "The resulting PDF could not be written to the destination",
        "try_next": [
            "Check that the destination directory is writable",
            "Check available disk space",
            "Choose another destination with `--dest <path>`",
        ],
    },
    StructureError: {
        "why": "A page or its annotation array has an unexpected object type.\n"
               "The document is outside of what this tool is able to edit",
        "try_next": [
            "Normalize the file with QPDF: `qpdf --qdf <input> <output>`",
            "Inspect the reported object: `qpdf --show-object=<n> <input>`",
        ],
    },
    ConfigurationError: {
        "why": "The configuration file could not be used",
        "try_next": [
            "Check the TOML syntax of the configuration file",
            "Run without `--config` to use the defaults",
        ],
    },
    ValidationError: {
        "why": "Input validation failed. Check command syntax and arguments",
        "try_next": [
            "Review command help: `pdfannot <command> --help`",
        ],
    },
}


def _lookup_explanation(error: Exception) -> Optional[Dict[str, Any]]:
    for error_type in type(error).__mro__:
        if error_type in ERROR_EXPLANATIONS:
            return ERROR_EXPLANATIONS[error_type]
    return None


def explain_error(
    error: Exception,
    context: Optional[ErrorContext] = None,
    show_traceback: bool = False,
    console: Optional[Console] = None,
) -> None:
    """
    Explain error with context and suggestions

    Args:
        error: The exception that occurred
        context: Additional context about the operation
        show_traceback: Whether to show full traceback (debug mode)
        console: Console to print to (a new one by default)
    """
    console = console or Console()

    console.print("\n[bold red]Error occurred:[/bold red]", style="bold")
    console.print(f"[red][!][/red] {escape(str(error))}", style="red", highlight=False, soft_wrap=True)

    if context:
        console.print(f"\n[bold]Operation:[/bold] {context.operation}")
        if context.input_file:
            console.print(f"[bold]Input:[/bold] {escape(str(context.input_file))}", soft_wrap=True)
        if context.output_file:
            console.print(f"[bold]Output:[/bold] {escape(str(context.output_file))}", soft_wrap=True)

    explanation = _lookup_explanation(error)
    if explanation:
        console.print("\n[bold yellow]Why this likely failed:[/bold yellow]")
        console.print(f"[yellow]{explanation['why']}[/yellow]")

        console.print("\n[bold cyan]What to try next:[/bold cyan]")
        for i, suggestion in enumerate(explanation['try_next'], 1):
            console.print(f"  [cyan]{i}. {escape(suggestion)}[/cyan]")

    if isinstance(error, StructureError) and error.object_id is not None:
        number, generation = error.object_id
        console.print(f"\n[bold]Offending object:[/bold] {number} {generation} R")

    if show_traceback:
        console.print("\n[bold]Full traceback:[/bold]")
        console.print_exception()
    else:
        console.print("\n[dim]Use --debug for full traceback[/dim]")

"""CLI decorators for error handling and common patterns"""

import functools
import sys
from typing import Callable, Optional

import click

from pdfannot.core.exceptions import PDFAnnotError
from pdfannot.core.error_handler import explain_error, ErrorContext
from pdfannot.core.logging import get_logger
from pdfannot.cli import ui


def handle_errors(operation_name: Optional[str] = None):
    """
    Decorator to handle errors with enhanced error reporting

    Usage:
        @handle_errors("Merging annotations")
        def merge_cmd(files, dest, ...):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            ctx = click.get_current_context()
            config = ctx.obj.get('config') if ctx.obj else None

            show_traceback = config.debug if config else False
            operation = operation_name or func.__name__.replace('_', ' ').title()

            input_file = kwargs.get('file') or kwargs.get('files')
            if isinstance(input_file, (list, tuple)):
                input_file = ", ".join(str(f) for f in input_file)

            error_context = ErrorContext(
                operation=operation,
                input_file=input_file,
                output_file=kwargs.get('dest'),
            )

            try:
                return func(*args, **kwargs)
            except (click.ClickException, click.Abort):
                raise
            except PDFAnnotError as e:
                get_logger().debug(f"{operation} failed: {e!r}")
                explain_error(e, error_context, show_traceback, console=ui.console)
                sys.exit(1)
            except KeyboardInterrupt:
                ui.print_error("Operation cancelled by user")
                sys.exit(130)
            except Exception as e:
                if show_traceback:
                    raise
                ui.print_error(f"Unexpected error: {e}")
                ui.print_error("Use --debug for full traceback")
                sys.exit(1)

        return wrapper
    return decorator


def log_command(func: Callable) -> Callable:
    """
    Decorator to log command execution

    Usage:
        @log_command
        def some_command(...):
            ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        ctx = click.get_current_context()

        command_path = ctx.command_path
        params = {k: v for k, v in kwargs.items() if v is not None}

        logger.info(f"Executing command: {command_path}")
        logger.debug(f"Parameters: {params}")

        result = func(*args, **kwargs)

        logger.info(f"Command completed: {command_path}")

        return result

    return wrapper

"""Main CLI entry point using Click"""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from click.shell_completion import get_completion_class

from pdfannot import __version__
from pdfannot.core.logging import setup_logger, get_logger
from pdfannot.core.config import Config, load_config
from pdfannot.core.constants import PROG_NAME, COMPLETION_SHELLS, ColorChoice
from pdfannot.core.exceptions import ConfigurationError
from pdfannot.annotations import (
    collect_stats,
    merge_annotations,
    strip_annotations,
    would_overwrite,
)
from pdfannot.cli import ui
from pdfannot.cli.decorators import handle_errors, log_command
from pdfannot.cli.validators import (
    normalize_subtype,
    validate_merge_inputs,
    validate_output_path,
    validate_subtypes,
)


def _config() -> Config:
    ctx = click.get_current_context()
    return ctx.obj['config']


def _resolve_exclude(exclude: Tuple[str, ...], no_exclude: bool, config: Config) -> Tuple[str, ...]:
    if exclude and no_exclude:
        raise click.UsageError("--exclude and --no-exclude cannot be used together")
    if no_exclude:
        return ()
    if exclude:
        return exclude
    return tuple(normalize_subtype(name) for name in config.annotations.exclude)


def _confirm_overwrite(dest: Path, force: bool, config: Config) -> bool:
    if not would_overwrite(dest) or force or config.annotations.force:
        return True
    return ui.confirm(f'Output file "{dest}" already exists. Do you want to overwrite it?')


@click.group()
@click.version_option(version=__version__, prog_name=PROG_NAME)
@click.option('--config', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Configuration file path (TOML, also read from $PDFANNOT_CONFIG)')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
@click.option('--debug', '-d', is_flag=True, help='Debug output')
@click.option('--quiet', '-q', is_flag=True, help='Only report errors')
@click.option('--color', type=click.Choice([c.value for c in ColorChoice]),
              help='Specify WHEN to colorize output [default: auto]')
@click.pass_context
def cli(ctx, config: Optional[Path], verbose: bool, debug: bool, quiet: bool, color: Optional[str]):
    """
    pdfannot - PDF annotation command-line utils

    Inspect, merge and strip the annotations of PDF documents.
    """
    ctx.ensure_object(dict)

    setup_logger(verbose=verbose, debug=debug, quiet=quiet)

    try:
        cfg = load_config(config)
    except ConfigurationError as e:
        ui.print_error(str(e))
        sys.exit(1)

    cfg.verbose = verbose or cfg.verbose
    cfg.debug = debug or cfg.debug
    cfg.quiet = quiet or cfg.quiet
    cfg.output.color = color or cfg.output.color

    setup_logger(verbose=cfg.verbose, debug=cfg.debug, quiet=cfg.quiet)
    ui.configure_console(cfg.output.color)

    ctx.obj['config'] = cfg
    ctx.obj['logger'] = get_logger()


@cli.group()
def annotations():
    """
    Work with PDF annotations

    Examples:
        pdfannot annotations stats input.pdf --per-page
        pdfannot ann merge reference.pdf reviewer1.pdf reviewer2.pdf -d merged.pdf
        pdfannot ann strip input.pdf -d clean.pdf --exclude Link --exclude Widget
    """
    pass


cli.add_command(annotations, name='ann')


@annotations.command('stats')
@click.argument('file', type=click.Path(dir_okay=False, path_type=Path))
@click.option('--per-page', '-p', is_flag=True, help='Show per page statistics')
@handle_errors("Computing annotation statistics")
@log_command
def stats_cmd(file: Path, per_page: bool):
    """Retrieve annotation statistics"""
    stats = collect_stats(file)
    ui.render_stats_table(stats.table(per_page=per_page), per_page=per_page)


@annotations.command('merge')
@click.argument('files', nargs=-1, required=True, metavar='FILE1 FILE2 [FILE...]',
                type=click.Path(dir_okay=False, path_type=Path), callback=validate_merge_inputs)
@click.option('--dest', '-d', type=click.Path(dir_okay=False, path_type=Path), callback=validate_output_path,
              help='Output file where resulting PDF is written [default: merged_annotations.pdf]')
@click.option('--exclude', '-e', multiple=True, callback=validate_subtypes,
              help='Annotation subtype not copied from FILE2 and later (repeatable) [default: Link]. '
                   'Excluded annotations are only kept in FILE1.')
@click.option('--no-exclude', is_flag=True, help='Copy annotations of every subtype')
@click.option('--force', '-f', is_flag=True, help='Overwrite output file if exists')
@handle_errors("Merging annotations")
@log_command
def merge_cmd(
    files: Tuple[Path, ...],
    dest: Optional[Path],
    exclude: Tuple[str, ...],
    no_exclude: bool,
    force: bool,
):
    """Merge annotations from multiple files into the first one"""
    cfg = _config()
    logger = get_logger()
    dest = dest or Path(cfg.annotations.merge_dest)
    excluded = _resolve_exclude(exclude, no_exclude, cfg)

    if not _confirm_overwrite(dest, force, cfg):
        ui.print_warning(f'Merge cancelled, "{dest}" was left untouched')
        return

    logger.info("Processing documents: " + ", ".join(f'"{f}" (#{i})' for i, f in enumerate(files)))
    for i, path in enumerate(files, 1):
        ui.print_verbose(f"  {i}. {path}", cfg.verbose)

    result = merge_annotations(files, dest, exclude=excluded)

    logger.info(f"Copied {result.copied} annotations onto pages {result.pages_updated}")
    for warning in result.warnings:
        ui.print_warning(str(warning))

    ui.print_success(f'Successfully merged annotations from {len(files)} files to "{result.output}".')


@annotations.command('strip')
@click.argument('file', type=click.Path(dir_okay=False, path_type=Path))
@click.option('--dest', '-d', type=click.Path(dir_okay=False, path_type=Path), callback=validate_output_path,
              help='Output file where resulting PDF is written [default: stripped_annotations.pdf]')
@click.option('--exclude', '-e', multiple=True, callback=validate_subtypes,
              help='Annotation subtype kept in the output (repeatable) [default: Link]')
@click.option('--no-exclude', is_flag=True, help='Strip annotations of every subtype')
@click.option('--force', '-f', is_flag=True, help='Overwrite output file if exists')
@handle_errors("Stripping annotations")
@log_command
def strip_cmd(
    file: Path,
    dest: Optional[Path],
    exclude: Tuple[str, ...],
    no_exclude: bool,
    force: bool,
):
    """Strip annotations from a given file"""
    cfg = _config()
    dest = dest or Path(cfg.annotations.strip_dest)
    excluded = _resolve_exclude(exclude, no_exclude, cfg)

    if not _confirm_overwrite(dest, force, cfg):
        ui.print_warning(f'Strip cancelled, "{dest}" was left untouched')
        return

    result = strip_annotations(file, dest, exclude=excluded)

    get_logger().info(f"Removed {len(result.removed)} annotations from {file}")
    ui.print_success(f"Successfully stripped annotations from {file} to {result.output}")


@cli.command('completions')
@click.argument('shell', type=click.Choice(COMPLETION_SHELLS, case_sensitive=False))
def completions_cmd(shell: str):
    """
    Generate tab-completion scripts for supported shells

    The script is written to stdout, so it can be redirected to the file of
    your choosing.

    Bash:
        pdfannot completions bash > ~/.local/share/bash-completion/completions/pdfannot

    Zsh:
        pdfannot completions zsh > ~/.zfunc/_pdfannot

    Fish:
        pdfannot completions fish > ~/.config/fish/completions/pdfannot.fish
    """
    complete_var = f"_{PROG_NAME.upper()}_COMPLETE"
    completion_class = get_completion_class(shell.lower())
    completion = completion_class(cli, {}, PROG_NAME, complete_var)
    click.echo(completion.source())


if __name__ == '__main__':
    cli()

"""Command-line entry point: ``grepr PATTERN [FILE]...``."""

import importlib.metadata
import logging
from collections.abc import Callable
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from .engine import SearchEngine
from .errors import InvalidPatternError
from .models import SearchRequest
from .output import PROG_NAME, ResultFormatter

app = typer.Typer(
    name=PROG_NAME,
    add_completion=False,
    pretty_exceptions_enable=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def create_version_callback(package_name: str) -> Callable[[bool], None]:
    """Create a --version flag callback printing ``{package_name}: {version}``."""

    def version_callback(value: bool) -> None:
        if value:
            typer.echo(f"{package_name}: {importlib.metadata.version(package_name)}")
            raise typer.Exit

    return version_callback


def configure_logging(*, verbose: bool) -> None:
    """Send log records to stderr through Rich; DEBUG with ``verbose``, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
    )


@app.command(no_args_is_help=True)
def main(
    pattern: Annotated[str, typer.Argument(help="Search pattern (regular expression).", show_default=False)],
    files: Annotated[
        list[str] | None, typer.Argument(help="Input file(s); '-' reads standard input.", show_default=False)
    ] = None,
    recursive: Annotated[bool, typer.Option("--recursive", "-r", help="Recursive search.")] = False,
    count: Annotated[bool, typer.Option("--count", "-c", help="Count occurrences.")] = False,
    invert_match: Annotated[bool, typer.Option("--invert-match", "-v", help="Invert match.")] = False,
    insensitive: Annotated[bool, typer.Option("--insensitive", "-i", help="Case insensitive.")] = False,
    fixed_strings: Annotated[
        bool, typer.Option("--fixed-strings", "-F", help="Treat the pattern as a literal string.")
    ] = False,
    ignore_binary: Annotated[
        bool, typer.Option("--ignore-binary", "-I", help="Skip files that look binary.")
    ] = False,
    json_mode: Annotated[bool, typer.Option("--json", help="Output JSON lines.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log debug details to stderr.")] = False,
    _version: Annotated[
        bool | None,
        typer.Option(
            "--version", "-V", callback=create_version_callback(PROG_NAME), is_eager=True, help="Show version and exit."
        ),
    ] = None,
) -> None:
    """Print lines matching a pattern."""
    configure_logging(verbose=verbose)
    formatter = ResultFormatter(json_mode=json_mode)

    try:
        request = SearchRequest(
            pattern=pattern,
            targets=tuple(files or ()),
            recursive=recursive,
            count_only=count,
            invert=invert_match,
            case_insensitive=insensitive,
            fixed_strings=fixed_strings,
            skip_binary=ignore_binary,
        )
    except ValidationError as e:
        lines = []
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"])
            lines.append(f"{field}: {err['msg']}")
        formatter.print_error_and_exit("validation_error", "; ".join(lines))

    try:
        engine = SearchEngine(request)
    except InvalidPatternError as e:
        formatter.print_error_and_exit(e.code, str(e))

    formatter.with_filename = engine.multi_source
    status = formatter.render(engine.run())
    raise typer.Exit(status)

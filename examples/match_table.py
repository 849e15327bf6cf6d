"""Library usage: per-file match counts over a directory tree, shown as a Rich table."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from grepr import InvalidPatternError, SearchEngine, SearchRequest, SourceFailed, SourceSummary

app = typer.Typer(add_completion=False)


@app.command()
def main(
    pattern: Annotated[str, typer.Argument(help="Regex pattern to search for.")],
    root: Annotated[Path, typer.Argument(help="Directory to search.")] = Path(),
    ignore_case: Annotated[bool, typer.Option("--ignore-case", "-i", help="Case-insensitive matching.")] = False,
) -> None:
    """Count matching lines in every file under ROOT."""
    request = SearchRequest(
        pattern=pattern, targets=(str(root),), recursive=True, count_only=True, case_insensitive=ignore_case, skip_binary=True
    )
    try:
        engine = SearchEngine(request)
    except InvalidPatternError as e:
        raise typer.BadParameter(str(e), param_hint="PATTERN") from e

    table = Table("File", "Matches")
    for event in engine.run():
        if isinstance(event, SourceSummary) and event.count:
            table.add_row(escape(event.source.display_name), str(event.count))
        elif isinstance(event, SourceFailed):
            table.add_row(escape(event.target), f"[red]{escape(event.error.reason)}[/red]")
    Console().print(table)


if __name__ == "__main__":
    app()

"""Rendering of search events as text or JSON lines, and the exit status they imply."""

# ruff: noqa: T201 -- output layer

import json
import sys
from collections.abc import Iterable
from enum import IntEnum
from typing import NoReturn

import click
import typer

from .engine import encode_line
from .models import MatchRecord, SearchEvent, SourceFailed, SourceSummary

PROG_NAME = "grepr"


class ExitStatus(IntEnum):
    """Process exit codes: some match, no match, any source-level or fatal error."""

    MATCH = 0
    NO_MATCH = 1
    ERROR = 2


class ResultFormatter:
    """Writes search events to stdout and diagnostics to stderr.

    Text mode mimics grep: ``[name:]line`` for matches and ``[name:]count`` for
    summaries, where the ``name:`` prefix appears only with ``with_filename``.
    JSON mode writes one object per event (``{"type": "match", ...}``).

    The formatter tallies what it renders so :meth:`exit_status` can report the
    outcome of the whole run.
    """

    def __init__(self, *, json_mode: bool = False, with_filename: bool = False) -> None:
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON lines; otherwise grep-style text.
            with_filename: Prefix text output with the source display name.

        """
        self.json_mode = json_mode
        self.with_filename = with_filename
        self.matched = False
        self.failed = False

    def render(self, events: Iterable[SearchEvent]) -> ExitStatus:
        """Render every event and return the resulting exit status."""
        for event in events:
            self.emit(event)
        return self.exit_status()

    def emit(self, event: SearchEvent) -> None:
        match event:
            case MatchRecord():
                self.matched = True
                self._emit_match(event)
            case SourceSummary():
                if event.count > 0:
                    self.matched = True
                self._emit_summary(event)
            case SourceFailed():
                self.failed = True
                self._emit_failure(event)

    def exit_status(self) -> ExitStatus:
        """ERROR if any source failed, else MATCH if anything matched, else NO_MATCH."""
        if self.failed:
            return ExitStatus.ERROR
        return ExitStatus.MATCH if self.matched else ExitStatus.NO_MATCH

    def print_error_and_exit(self, code: str, message: str) -> NoReturn:
        """Print a fatal error in JSON or display format and exit with the error status."""
        if self.json_mode:
            print(json.dumps({"ok": False, "error": code, "message": message}))
        else:
            print(f"{PROG_NAME}: {message}", file=sys.stderr)
        raise typer.Exit(ExitStatus.ERROR)

    def _emit_match(self, record: MatchRecord) -> None:
        if self.json_mode:
            self._print_json(
                {
                    "type": "match",
                    "source": record.source.display_name,
                    "line_number": record.line_number,
                    "text": record.text,
                }
            )
            return
        # bytes go to the binary stdout so undecodable input is written back unchanged
        click.echo(self._prefix(record.source.display_name) + encode_line(record.text))

    def _emit_summary(self, summary: SourceSummary) -> None:
        if self.json_mode:
            self._print_json({"type": "count", "source": summary.source.display_name, "count": summary.count})
            return
        click.echo(self._prefix(summary.source.display_name) + str(summary.count).encode())

    def _emit_failure(self, failure: SourceFailed) -> None:
        if self.json_mode:
            self._print_json(
                {"type": "error", "source": failure.target, "error": failure.error.code, "message": failure.error.reason}
            )
            return
        print(f"{PROG_NAME}: {failure.error}", file=sys.stderr)

    def _prefix(self, name: str) -> bytes:
        return encode_line(name) + b":" if self.with_filename else b""

    @staticmethod
    def _print_json(data: dict[str, object]) -> None:
        print(json.dumps(data), flush=True)

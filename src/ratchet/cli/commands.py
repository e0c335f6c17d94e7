from __future__ import annotations

import logging
from pathlib import Path

import typer

from ratchet.cli.engine import CommandOutcome, diff_results, merge_results_file
from ratchet.core.config import load_config
from ratchet.core.constants import EXIT_INTERNAL_ERROR


def _version_callback(value: bool) -> None:
    if value:
        from ratchet import __version__

        typer.echo(f"ratchet {__version__}")
        raise typer.Exit()


app = typer.Typer(add_completion=False, help="Track lint/type/test issues so new ones fail and fixed ones stay fixed")


@app.callback(invoke_without_command=True)
def _main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Print version and exit."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s %(message)s",
    )


def _emit_outcome(outcome: CommandOutcome) -> None:
    for line in outcome.output:
        typer.echo(line)
    for error in outcome.errors:
        typer.echo(f"ERROR: {error}", err=True)
    raise typer.Exit(outcome.exit_code)


@app.command()
def diff(
    result: Path = typer.Option(..., "--result", help="Results document from the current run"),
    expected: Path | None = typer.Option(None, "--expected", help="Expected results document (defaults to config)"),
    project_root: Path = typer.Option(Path("."), "--project-root", help="Project root"),
    tests: list[str] | None = typer.Option(None, "--test", help="Only diff the named test(s)"),
    update: bool = typer.Option(False, "--update", help="Write the result as expected when there are no new issues"),
    json_output: Path | None = typer.Option(None, "--json-output", help="Write a JSON diff report"),
    markdown_output: Path | None = typer.Option(None, "--markdown-output", help="Write a Markdown diff report"),
) -> None:
    """Diff current results against expected results and fail on new issues."""
    try:
        config = load_config(project_root.resolve())
    except (ValueError, OSError) as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(EXIT_INTERNAL_ERROR) from exc
    if expected is not None:
        config.results_path = expected.resolve()

    outcome = diff_results(
        config=config,
        result_path=result.resolve(),
        test_names=tests,
        update=update,
        json_output=json_output,
        markdown_output=markdown_output,
    )
    _emit_outcome(outcome)


@app.command()
def merge(
    contents: list[str] | None = typer.Argument(None, help="Conflicted contents, or ours and theirs contents"),
    results: Path | None = typer.Option(None, "--results", help="Results document to merge (defaults to config)"),
    project_root: Path = typer.Option(Path("."), "--project-root", help="Project root"),
) -> None:
    """Resolve git merge conflicts in the results document."""
    try:
        config = load_config(project_root.resolve())
    except (ValueError, OSError) as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(EXIT_INTERNAL_ERROR) from exc
    if results is not None:
        config.results_path = results.resolve()

    outcome = merge_results_file(
        contents=list(contents or []),
        cwd=config.project_root,
        results_path=config.resolved_results_path,
    )
    _emit_outcome(outcome)

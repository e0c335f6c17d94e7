"""Command orchestration for the CLI: load results, diff, merge, report."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from ratchet.core.config import RatchetConfig
from ratchet.core.constants import EXIT_INTERNAL_ERROR, EXIT_REGRESSION, EXIT_SUCCESS
from ratchet.core.diff import DiffLog, FileTestDiff, differ
from ratchet.core.errors import RatchetError
from ratchet.core.report import render_logs, write_reports
from ratchet.core.results import MergeOptions, ResultSnapshot, merge, read_results, write_results

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandOutcome:
    exit_code: int
    processed_tests: int = 0
    regressions: int = 0
    output: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def _with_source_text(logs: list[DiffLog]) -> list[DiffLog]:
    """Fill in source text for code logs whose snapshot carried none."""
    filled: list[DiffLog] = []
    for log in logs:
        code = log.code
        if code is not None and code.file_text is None:
            source = Path(code.file_path)
            if source.is_file():
                try:
                    text = source.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as exc:
                    logger.debug("event=source_unreadable path=%s error=%s", source, exc)
                else:
                    log = replace(log, code=replace(code, file_text=text))
        filled.append(log)
    return filled


def diff_results(
    *,
    config: RatchetConfig,
    result_path: Path,
    test_names: list[str] | None = None,
    update: bool = False,
    json_output: Path | None = None,
    markdown_output: Path | None = None,
) -> CommandOutcome:
    """Diff the results document at `result_path` against the expected one."""
    root = config.project_root
    expected_path = config.resolved_results_path
    try:
        expected = read_results(expected_path, root)
        if not result_path.exists():
            raise FileNotFoundError(f"Result file not found: {result_path}")
        result = read_results(result_path, root)
    except (RatchetError, OSError) as exc:
        return CommandOutcome(exit_code=EXIT_INTERNAL_ERROR, errors=[str(exc)])

    names = sorted(set(expected) | set(result))
    if test_names:
        missing = [name for name in test_names if name not in names]
        if missing:
            return CommandOutcome(
                exit_code=EXIT_INTERNAL_ERROR,
                errors=[f"Unknown test(s): {', '.join(missing)}"],
            )
        names = [name for name in names if name in test_names]

    diffs: dict[str, FileTestDiff] = {}
    outcome = CommandOutcome(exit_code=EXIT_SUCCESS)
    for name in names:
        test_diff = differ(expected.get(name, ResultSnapshot()), result.get(name, ResultSnapshot()))
        test_diff.logs = _with_source_text(test_diff.logs)
        diffs[name] = test_diff
        outcome.processed_tests += 1
        summary = test_diff.summary
        if summary["regression"]:
            outcome.regressions += 1
        outcome.output.append(
            f"{name}: {summary['fixed']} fixed, {summary['new']} new, {summary['existing']} existing"
        )
        outcome.output.extend(f"  {line}" for line in render_logs(test_diff.logs, config.context_lines))

    try:
        write_reports(diffs, json_output, markdown_output, config.context_lines)
    except OSError as exc:
        outcome.errors.append(f"Could not write report: {exc}")
        outcome.exit_code = EXIT_INTERNAL_ERROR
        return outcome

    if outcome.regressions:
        outcome.exit_code = EXIT_REGRESSION
        return outcome

    if update:
        updated = dict(expected)
        for name in names:
            if name in result:
                updated[name] = result[name]
            else:
                updated.pop(name, None)
        try:
            write_results(expected_path, updated, root)
        except OSError as exc:
            outcome.errors.append(f"Could not update results: {exc}")
            outcome.exit_code = EXIT_INTERNAL_ERROR
            return outcome
        outcome.output.append(f"Updated results: {expected_path}")
    return outcome


def merge_results_file(*, contents: list[str], cwd: Path, results_path: Path) -> CommandOutcome:
    options = MergeOptions(contents=contents, cwd=cwd, results_path=results_path)
    try:
        merged = merge(options)
    except (RatchetError, OSError) as exc:
        logger.debug("event=merge_failed path=%s", results_path, exc_info=True)
        return CommandOutcome(exit_code=EXIT_INTERNAL_ERROR, errors=[f"Merge failed: {exc}"])
    return CommandOutcome(
        exit_code=EXIT_SUCCESS,
        processed_tests=len(merged),
        output=[f"Merged results for {len(merged)} test(s) into {options.results_path}"],
    )


__all__ = ["CommandOutcome", "diff_results", "merge_results_file"]

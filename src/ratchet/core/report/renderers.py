from __future__ import annotations

import json
from pathlib import Path

from ratchet.core.constants import DEFAULT_CONTEXT_LINES, RESULTS_SCHEMA_VERSION
from ratchet.core.diff.models import CodeContext, DiffLog, FileTestDiff

_PREFIXES = {
    "success": "[ok]",
    "warn": "[warn]",
    "error": "[error]",
}


def render_code_frame(context: CodeContext, context_lines: int = DEFAULT_CONTEXT_LINES) -> list[str]:
    """Numbered source lines around an issue, with a caret underline.

    Lines and columns are zero-based.
    """
    header = f"{context.message} ({context.file_path}:{context.line + 1}:{context.column + 1})"
    if context.file_text is None:
        return [header]

    source = context.file_text.splitlines()
    if context.line >= len(source):
        return [header]

    first = max(0, context.line - context_lines)
    last = min(len(source) - 1, context.line + context_lines)
    width = len(str(last + 1))
    frame = [header]
    for index in range(first, last + 1):
        marker = ">" if index == context.line else " "
        frame.append(f"{marker} {index + 1:>{width}} | {source[index]}")
        if index == context.line:
            underline = "^" * max(1, context.length)
            frame.append(f"  {' ' * width} | {' ' * context.column}{underline}")
    return frame


def render_logs(logs: list[DiffLog], context_lines: int = DEFAULT_CONTEXT_LINES) -> list[str]:
    lines: list[str] = []
    for log in logs:
        if log.code is not None:
            lines.extend(f"    {line}" for line in render_code_frame(log.code, context_lines))
            continue
        lines.append(f"{_PREFIXES.get(log.level, '')} {log.message}")
    return lines


def render_markdown(test_name: str, result: FileTestDiff, context_lines: int = DEFAULT_CONTEXT_LINES) -> str:
    lines: list[str] = []
    lines.append(f"## Ratchet Report: {test_name}")
    lines.append("")
    summary = result.summary
    status = "New issues detected" if summary["regression"] else "No new issues"
    lines.append(f"- Status: **{status}**")
    lines.append(f"- Files changed: **{summary['files']}**")

    lines.append("")
    lines.append("### Files")
    lines.append("")
    if not result.diff:
        lines.append("No changes.")
    else:
        lines.append("| File | Fixed | New | Existing |")
        lines.append("|---|---:|---:|---:|")
        for path, entry in result.diff.items():
            lines.append(
                f"| `{path}` | {len(entry.fixed or [])} | {len(entry.new or [])} | {len(entry.existing or [])} |"
            )

    if result.logs:
        lines.append("")
        lines.append("### Details")
        lines.append("")
        lines.append("```")
        lines.extend(render_logs(result.logs, context_lines))
        lines.append("```")

    lines.append("")
    return "\n".join(lines)


def write_reports(
    results: dict[str, FileTestDiff],
    json_path: Path | None,
    md_path: Path | None,
    context_lines: int = DEFAULT_CONTEXT_LINES,
) -> None:
    if json_path is not None:
        json_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "schema_version": RESULTS_SCHEMA_VERSION,
            "tests": {name: result.to_dict() for name, result in results.items()},
        }
        json_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    if md_path is not None:
        md_path.parent.mkdir(parents=True, exist_ok=True)
        sections = [render_markdown(name, result, context_lines) for name, result in results.items()]
        md_path.write_text("\n".join(sections), encoding="utf-8")


__all__ = ["render_code_frame", "render_logs", "render_markdown", "write_reports"]

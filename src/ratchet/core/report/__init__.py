from ratchet.core.report.renderers import render_code_frame, render_logs, render_markdown, write_reports

__all__ = ["render_code_frame", "render_logs", "render_markdown", "write_reports"]

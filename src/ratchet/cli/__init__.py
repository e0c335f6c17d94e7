"""Command line entry point for diffing and merging ratchet results documents.

`ratchet diff` fails when a run introduces new issues; `ratchet merge`
resolves git conflicts in the committed results file.
"""
from __future__ import annotations


def __getattr__(name: str) -> object:
    if name == "app":
        from ratchet.cli.commands import app
        return app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["app"]

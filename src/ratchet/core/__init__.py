"""Ratchet core: snapshot models, the result differ, results files and reports.

Nothing in this package depends on typer or any CLI framework.
"""
from __future__ import annotations

"""Ratchet: keep lint/type/test issue counts moving in one direction."""
from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]

"""CLI module."""

from __future__ import annotations

from slotmap.cli.main import app

__all__ = ["app"]

"""Capture templates for Norg notes workspaces."""

from __future__ import annotations

__version__ = "0.1.0"

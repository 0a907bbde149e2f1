"""Presentation renderers for result states."""

from __future__ import annotations

from ElixirFinder.renderers.console import render_elixirs, render_result

__all__ = ["render_elixirs", "render_result"]

"""Renderers for mounted report documents."""

from reportview.application.renderers.console import ConsoleRenderer

__all__ = ["ConsoleRenderer"]

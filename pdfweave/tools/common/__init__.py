"""Shared plumbing for pdfweave tool plugins."""

from __future__ import annotations

from .interfaces import BaseTool, ToolContext, ToolFactory
from .pipeline import ToolRegistry, register_tool, registry

__all__ = ["BaseTool", "ToolContext", "ToolFactory", "ToolRegistry", "register_tool", "registry"]

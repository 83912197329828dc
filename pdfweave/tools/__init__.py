"""Namespace for pluggable pdfweave tools."""

from __future__ import annotations

from .common.interfaces import BaseTool, ToolContext
from .common.pipeline import register_tool, registry


def load_builtin_plugins() -> None:
    from .metadata import info  # noqa: F401  # register the inspect tool
    from .merger import merge  # noqa: F401
    from .watermark import remove  # noqa: F401
    from .pages import delete  # noqa: F401
    from .images import compose  # noqa: F401


__all__ = ["registry", "register_tool", "load_builtin_plugins", "BaseTool", "ToolContext"]

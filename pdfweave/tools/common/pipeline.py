"""Name-to-tool lookup and the single entry point that runs a tool."""

from __future__ import annotations

from typing import Any, Dict, List

from ...core.utils import get_logger
from ...exceptions import PdfValidationError
from .interfaces import BaseTool, ToolContext, ToolFactory

LOGGER = get_logger("pdfweave.tools")


class ToolRegistry:
    """Tools available to the CLI, keyed by the name they are invoked with."""

    def __init__(self) -> None:
        self._tools: Dict[str, type[BaseTool]] = {}

    def register(self, name: str, tool_class: type[BaseTool]) -> None:
        existing = self._tools.get(name)
        if existing is tool_class:
            return
        if existing is not None:
            raise ValueError(
                f"Tool name '{name}' is taken by {existing.__qualname__}, cannot register {tool_class.__qualname__}"
            )
        LOGGER.debug("Registered tool %s -> %s", name, tool_class.__qualname__)
        self._tools[name] = tool_class

    def create(self, name: str, context: ToolContext) -> BaseTool:
        tool_class = self._tools.get(name)
        if tool_class is None:
            known = ", ".join(self.names()) or "none"
            raise PdfValidationError(f"Unknown tool '{name}' (available: {known})")
        return tool_class(context)

    def run(self, name: str, context: ToolContext) -> Any:
        """Build the tool registered as *name* and run it against *context*."""

        tool = self.create(name, context)
        LOGGER.debug("Running tool %s (input=%s, output=%s)", name, context.input_path, context.output_path)
        result = tool.run()
        LOGGER.info("Tool %s finished", name)
        return result

    def names(self) -> List[str]:
        return sorted(self._tools)

    def get(self, name: str) -> type[BaseTool] | None:
        return self._tools.get(name)


registry = ToolRegistry()


def register_tool(name: str):
    """Class decorator adding a :class:`BaseTool` subclass to :data:`registry`."""

    def decorator(cls: type[BaseTool]) -> type[BaseTool]:
        registry.register(name, cls)
        return cls

    return decorator


__all__ = ["ToolRegistry", "registry", "register_tool", "ToolContext", "BaseTool", "ToolFactory"]

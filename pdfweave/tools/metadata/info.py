"""Plugin exposing metadata inspection through the registry."""

from __future__ import annotations

from ...core.utils import get_logger
from ...metadata.inspector import PDFInfo, get_pdf_info
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("pdfweave.tools.inspect")


@register_tool("inspect")
class InspectTool(BaseTool):
    name = "inspect"

    def run(self) -> PDFInfo:
        source = self.require_input()
        LOGGER.debug("Inspecting %s", source)
        result = get_pdf_info(source)
        self.context.resources["result"] = result
        return result

"""Plugin exposing watermark removal through the registry."""

from __future__ import annotations

from ...core.utils import get_logger
from ...watermark.remover import WatermarkRemovalResult, remove_watermarks_from_pdf
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("pdfweave.tools.watermark")


@register_tool("remove_watermarks")
class RemoveWatermarksTool(BaseTool):
    name = "remove_watermarks"

    def run(self) -> WatermarkRemovalResult:
        source = self.require_input()
        output = self.require_output()
        LOGGER.debug("Removing watermarks from %s into %s", source, output)
        result = remove_watermarks_from_pdf(source, output, settings=self.context.settings)
        self.context.resources["result"] = result
        return result

"""Plugin exposing image to PDF composition through the registry."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ...core.utils import get_logger
from ...images.composer import images_to_pdf
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("pdfweave.tools.images")


@register_tool("images_to_pdf")
class ImagesToPdfTool(BaseTool):
    name = "images_to_pdf"

    def run(self) -> Path:
        context = self.context
        images: Iterable[str | Path] | None = context.config.get("images")
        if images is None:
            images = [context.input_path] if context.input_path is not None else []

        output = self.require_output()
        images_list = list(images)
        LOGGER.debug("Composing %d image(s) into %s", len(images_list), output)
        result = images_to_pdf(images_list, output, settings=context.settings)
        context.resources["result"] = result
        return result

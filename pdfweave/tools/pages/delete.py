"""Plugin exposing page deletion through the registry."""

from __future__ import annotations

from pathlib import Path

from ...core.utils import get_logger
from ...exceptions import PdfValidationError
from ...pages.deleter import delete_pdf_pages
from ...pages.utils import parse_page_spec
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("pdfweave.tools.pages")


@register_tool("delete_pages")
class DeletePagesTool(BaseTool):
    name = "delete_pages"

    def run(self) -> Path:
        source = self.require_input()
        output = self.require_output()

        pages = self.context.config.get("pages")
        if isinstance(pages, str):
            pages = parse_page_spec(pages)
        if not pages:
            raise PdfValidationError("No pages specified for deletion")

        LOGGER.debug("Deleting pages %s from %s", pages, source)
        result = delete_pdf_pages(source, output, pages, settings=self.context.settings)
        self.context.resources["result"] = result
        return result

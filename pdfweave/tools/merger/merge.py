"""Plugin exposing PDF merge capabilities through the registry."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping

from ...core.utils import get_logger
from ...exceptions import PdfValidationError
from ...merge.merger import merge_pdfs
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("pdfweave.tools.merge")


@register_tool("merge")
class MergeTool(BaseTool):
    name = "merge"

    def run(self) -> Path:
        context = self.context
        inputs: Iterable[str | Path] | None = context.config.get("inputs")
        if inputs is None:
            if context.input_path is None:
                raise PdfValidationError("No input files provided")
            inputs = [context.input_path]

        output = self.require_output()
        document_info: Mapping[str, object] | None = context.config.get("document_info")

        inputs_list = list(inputs)
        LOGGER.debug("Merging %d input(s) into %s", len(inputs_list), output)
        result = merge_pdfs(
            inputs_list,
            output,
            document_info=document_info,
            settings=context.settings,
        )
        context.resources["result"] = result
        return result

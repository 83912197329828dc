from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image
from pypdf import PdfReader

from pdfweave.exceptions import PdfValidationError
from pdfweave.metadata import PDFInfo
from pdfweave.tools import ToolContext, load_builtin_plugins, registry
from pdfweave.tools.common.interfaces import BaseTool
from pdfweave.tools.common.pipeline import ToolRegistry
from pdfweave.watermark import WatermarkRemovalResult


@pytest.fixture(autouse=True)
def _plugins() -> None:
    load_builtin_plugins()


def test_builtin_tools_are_registered() -> None:
    assert {"inspect", "merge", "remove_watermarks", "delete_pages", "images_to_pdf"} <= set(registry.names())


def test_inspect_tool(sample_pdf: Path) -> None:
    context = ToolContext(input_path=sample_pdf)

    result = registry.create("inspect", context).run()

    assert isinstance(result, PDFInfo)
    assert result.pages == 5
    assert context.resources["result"] is result


def test_merge_tool(tmp_path: Path, sample_pdfs: list[Path]) -> None:
    context = ToolContext(
        output_path=tmp_path / "merged.pdf",
        config={"inputs": sample_pdfs, "document_info": {"title": "Tool merge"}},
    )

    result = registry.create("merge", context).run()

    reader = PdfReader(str(result))
    assert len(reader.pages) == 3
    assert reader.metadata.title == "Tool merge"


def test_merge_tool_requires_inputs(tmp_path: Path) -> None:
    with pytest.raises(PdfValidationError):
        registry.create("merge", ToolContext(output_path=tmp_path / "out.pdf")).run()


def test_delete_pages_tool_accepts_page_spec(sample_pdf: Path, tmp_path: Path) -> None:
    context = ToolContext(sample_pdf, tmp_path / "out.pdf", config={"pages": "2-3"})

    result = registry.create("delete_pages", context).run()

    assert len(PdfReader(str(result)).pages) == 3


def test_delete_pages_tool_requires_output(sample_pdf: Path) -> None:
    with pytest.raises(PdfValidationError, match="requires an output path"):
        registry.create("delete_pages", ToolContext(sample_pdf, config={"pages": [1]})).run()


def test_remove_watermarks_tool(watermarked_pdf: Path, tmp_path: Path) -> None:
    context = ToolContext(watermarked_pdf, tmp_path / "clean.pdf")

    result = registry.create("remove_watermarks", context).run()

    assert isinstance(result, WatermarkRemovalResult)
    assert result.success


def test_images_to_pdf_tool(tmp_path: Path) -> None:
    image = tmp_path / "pixel.png"
    Image.new("RGB", (10, 10), (0, 0, 0)).save(image)
    context = ToolContext(output_path=tmp_path / "images.pdf", config={"images": [image, image]})

    result = registry.create("images_to_pdf", context).run()

    assert len(PdfReader(str(result)).pages) == 2


def test_context_with_updates_merges_config(tmp_path: Path) -> None:
    context = ToolContext(tmp_path / "in.pdf", config={"pages": "1"})

    updated = context.with_updates(output_path=tmp_path / "out.pdf", config={"extra": True})

    assert updated.input_path == context.input_path
    assert updated.output_path == (tmp_path / "out.pdf").resolve()
    assert updated.config == {"pages": "1", "extra": True}
    assert context.config == {"pages": "1"}


def test_registry_rejects_name_clashes_and_unknown_names() -> None:
    local = ToolRegistry()

    class EchoTool(BaseTool):
        name = "echo"

        def run(self) -> str:
            return "echo"

    class OtherTool(EchoTool):
        pass

    local.register("echo", EchoTool)
    local.register("echo", EchoTool)
    with pytest.raises(ValueError, match="is taken by"):
        local.register("echo", OtherTool)
    with pytest.raises(PdfValidationError, match="Unknown tool 'missing'"):
        local.create("missing", ToolContext())
    assert local.run("echo", ToolContext()) == "echo"
    assert local.names() == ["echo"]


def test_registry_run_returns_tool_result(sample_pdf: Path) -> None:
    context = ToolContext(input_path=sample_pdf)

    result = registry.run("inspect", context)

    assert result.pages == 5
    assert context.resources["result"] is result

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from pypdf import PdfReader

from pdfweave import merge_pdfs
from pdfweave.core.codec import load_document
from pdfweave.core.objects import Document, Reference
from pdfweave.exceptions import DocumentLoadError, PdfValidationError
from pdfweave.merge import IdentifierRemapper, RemapTable, apply_document_info, merge_documents, merge_into


def _widths(path: Path) -> list[float]:
    return [float(page.mediabox.width) for page in PdfReader(str(path)).pages]


def test_merge_pdfs_concatenates_pages_in_input_order(tmp_path: Path, sample_pdfs: list[Path]) -> None:
    output = tmp_path / "merged.pdf"

    result = merge_pdfs(sample_pdfs, output)

    assert result == output.resolve()
    assert _widths(output) == [100, 200, 300]
    assert PdfReader(str(output)).metadata.title == "Document One"


def test_merge_pdfs_three_inputs(tmp_path: Path, pdf_factory: Callable[..., Path]) -> None:
    inputs = [
        pdf_factory("a.pdf", [10, 20]),
        pdf_factory("b.pdf", [30]),
        pdf_factory("c.pdf", [40, 50, 60]),
    ]
    output = merge_pdfs(inputs, tmp_path / "merged.pdf")

    assert _widths(output) == [10, 20, 30, 40, 50, 60]
    merged = load_document(output)
    assert merged.pages_root()["Count"] == 6
    assert merged.dangling_references() == []


def test_merge_pdfs_no_inputs(tmp_path: Path) -> None:
    with pytest.raises(PdfValidationError, match="No input files provided"):
        merge_pdfs([], tmp_path / "out.pdf")


def test_single_input_is_copied_byte_for_byte(tmp_path: Path, sample_pdf: Path) -> None:
    output = merge_pdfs([sample_pdf], tmp_path / "copy.pdf")

    assert output.read_bytes() == sample_pdf.read_bytes()


def test_single_input_with_document_info_is_rewritten(tmp_path: Path, sample_pdf: Path) -> None:
    output = merge_pdfs([sample_pdf], tmp_path / "titled.pdf", document_info={"title": "Renamed", "author": "QA"})

    metadata = PdfReader(str(output)).metadata
    assert metadata.title == "Renamed"
    assert metadata.author == "QA"


def test_merge_pdfs_missing_input_raises(tmp_path: Path, sample_pdf: Path) -> None:
    with pytest.raises(DocumentLoadError):
        merge_pdfs([sample_pdf, tmp_path / "missing.pdf"], tmp_path / "out.pdf")


@pytest.mark.parametrize("count", [1, 2])
def test_failed_merge_does_not_create_output_directory(tmp_path: Path, sample_pdf: Path, count: int) -> None:
    output = tmp_path / "new_dir" / "out.pdf"
    inputs = [sample_pdf] * (count - 1) + [tmp_path / "missing.pdf"]

    with pytest.raises(DocumentLoadError):
        merge_pdfs(inputs, output)

    assert not (tmp_path / "new_dir").exists()


def test_merge_leaves_no_dangling_references(document_factory, page_labels) -> None:
    base = document_factory(2, label="a")
    source = document_factory(3, group_size=2, label="b")

    merge_documents(base, [source])

    assert page_labels(base) == ["a1", "a2", "b1", "b2", "b3"]
    assert base.dangling_references() == []
    assert base.pages_root()["Count"] == 5


def test_merge_never_mutates_sources(document_factory) -> None:
    base = document_factory(1)
    source = document_factory(2, group_size=1)
    snapshot = source.copy()

    merge_into(base, source)

    assert source.objects == snapshot.objects
    assert source.trailer == snapshot.trailer
    assert source.max_id == snapshot.max_id


def test_repeated_self_merges_keep_identifiers_unique(document_factory, page_labels) -> None:
    base = document_factory(2)

    for _ in range(3):
        merge_into(base, base)

    assert base.page_count == 16
    assert page_labels(base)[:4] == ["p1", "p2", "p1", "p2"]
    assert len(set(base.page_ids())) == 16
    assert base.dangling_references() == []
    assert base.max_id >= max(number for number, _ in base.objects)


def test_merged_pages_take_inherited_attributes_and_new_parent(document_factory) -> None:
    base = document_factory(1)
    source = document_factory(1, group_size=1)
    source.pages_root()["MediaBox"] = [0, 0, 612, 792]
    source.pages_root()["Rotate"] = 90

    (new_page_id,) = merge_into(base, source)

    page = base.get_dictionary(Reference.to(new_page_id))
    assert page["MediaBox"] == [0, 0, 612, 792]
    assert page["Rotate"] == 90
    assert page["Parent"] == Reference.to(base.pages_root_id())


def test_merge_documents_without_sources_returns_base(document_factory) -> None:
    base = document_factory(2)
    snapshot = base.copy()

    assert merge_documents(base, []) is base
    assert base.objects == snapshot.objects


def test_remapper_allocates_disjoint_blocks(document_factory) -> None:
    target = document_factory(1)
    start = target.max_id
    source = document_factory(2)
    remapper = IdentifierRemapper(target)

    first = remapper.allocate(source)
    second = remapper.allocate(source)

    first_numbers = sorted(number for number, _ in first.values())
    second_numbers = sorted(number for number, _ in second.values())
    assert first_numbers == list(range(start + 1, start + 1 + source.object_count))
    assert set(first_numbers).isdisjoint(second_numbers)
    assert target.max_id == second_numbers[-1]


def test_remap_table_keeps_foreign_references() -> None:
    table = RemapTable({(1, 0): (10, 0)})

    assert table.translate(Reference(1)) == Reference(10)
    assert table.translate(Reference(2)) == Reference(2)
    assert table.apply([Reference(1), {"X": Reference(2)}]) == [Reference(10), {"X": Reference(2)}]


def test_apply_document_info_creates_info_dictionary(document_factory) -> None:
    document: Document = document_factory(1)

    apply_document_info(document, {"title": "Merged", "author": None, "subject": "  "})

    info = document.get_dictionary(document.trailer["Info"])
    assert info == {"Title": "Merged"}

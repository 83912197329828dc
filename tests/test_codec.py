from __future__ import annotations

from pathlib import Path

import pytest
from pypdf import PdfReader

from pdfweave.core.codec import load_document, save_document, serialize_document
from pdfweave.core.objects import Reference, Stream
from pdfweave.core.optimizers import linearize_in_place
from pdfweave.config import EngineSettings
from pdfweave.exceptions import DocumentLoadError, DocumentSaveError, DocumentStructureError


def test_load_document_reads_page_tree(sample_pdf: Path) -> None:
    document = load_document(sample_pdf)

    assert document.page_count == 5
    assert isinstance(document.trailer["Root"], Reference)
    assert document.max_id >= max(number for number, _ in document.objects)
    assert document.version.startswith("1.")


def test_round_trip_preserves_pages_and_metadata(sample_pdf: Path, tmp_path: Path) -> None:
    output = tmp_path / "copy.pdf"

    save_document(load_document(sample_pdf), output)

    reader = PdfReader(str(output))
    assert len(reader.pages) == 5
    assert reader.metadata.title == "Sample"
    assert float(reader.pages[0].mediabox.width) == 200


def test_in_memory_document_serialises(document_factory, tmp_path: Path) -> None:
    document = document_factory(3)
    output = save_document(document, tmp_path / "built.pdf")

    reader = PdfReader(str(output))
    assert len(reader.pages) == 3
    assert reader.pages[1]["/Contents"].get_object().get_data() == b"p2"


def test_serialised_output_starts_with_header_and_ends_with_eof(document_factory) -> None:
    data = serialize_document(document_factory(1))

    assert data.startswith(b"%PDF-1.7\n")
    assert data.rstrip().endswith(b"%%EOF")
    assert b"\nxref\n0 " in data


def test_stream_payload_is_written_verbatim(document_factory, tmp_path: Path) -> None:
    document = document_factory(1)
    page = document.get_dictionary(Reference.to(document.page_ids()[0]))
    page["Contents"] = document.add_object(Stream({"Length": 999}, b"q 1 0 0 1 0 0 cm Q"))

    reader = PdfReader(str(save_document(document, tmp_path / "stream.pdf")))

    contents = reader.pages[0]["/Contents"].get_object()
    assert contents.get_data() == b"q 1 0 0 1 0 0 cm Q"
    data = serialize_document(document)
    assert b"/Length 18" in data
    assert b"/Length 999" not in data


def test_load_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(DocumentLoadError):
        load_document(tmp_path / "missing.pdf")


def test_load_non_pdf_raises(tmp_path: Path) -> None:
    bogus = tmp_path / "bogus.pdf"
    bogus.write_text("this is not a pdf")

    with pytest.raises(DocumentLoadError):
        load_document(bogus)


def test_serialise_without_root_raises(document_factory) -> None:
    document = document_factory(1)
    del document.trailer["Root"]

    with pytest.raises(DocumentStructureError):
        serialize_document(document)


def test_save_to_directory_raises_save_error(document_factory, tmp_path: Path) -> None:
    target = tmp_path / "occupied"
    target.mkdir()

    with pytest.raises(DocumentSaveError):
        save_document(document_factory(1), target)

    assert target.is_dir()


def test_optimize_skipped_without_qpdf(
    monkeypatch: pytest.MonkeyPatch, document_factory, tmp_path: Path
) -> None:
    monkeypatch.setattr("pdfweave.core.optimizers._qpdf_available", lambda: None)
    output = tmp_path / "optimized.pdf"

    save_document(document_factory(2), output, settings=EngineSettings(optimize=True))

    assert len(PdfReader(str(output)).pages) == 2
    assert linearize_in_place(output) is False

from __future__ import annotations

from pathlib import Path
from typing import Callable, List
import sys

import pytest
from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    NameObject,
    NumberObject,
)

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdfweave.core.objects import PAGE, PAGES, Document, Name, Reference, Stream  # noqa: E402


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    for _ in range(5):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Producer": "pdfweave-tests", "/Title": "Sample"})
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    """Create PDFs whose page widths identify each page."""

    def _create(
        filename: str,
        widths: List[int] | None = None,
        *,
        title: str | None = None,
        author: str | None = None,
    ) -> Path:
        path = tmp_path / filename
        writer = PdfWriter()
        for width in widths or [72]:
            writer.add_blank_page(width=width, height=72)
        metadata = {}
        if title is not None:
            metadata["/Title"] = title
        if author is not None:
            metadata["/Author"] = author
        if metadata:
            writer.add_metadata(metadata)
        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def sample_pdfs(pdf_factory: Callable[..., Path]) -> list[Path]:
    pdf1 = pdf_factory("one.pdf", [100], title="Document One")
    pdf2 = pdf_factory("two.pdf", [200, 300])
    return [pdf1, pdf2]


@pytest.fixture()
def watermarked_pdf(tmp_path: Path) -> Path:
    """One page carrying a named watermark XObject and a /Watermark annotation."""

    path = tmp_path / "watermarked.pdf"
    writer = PdfWriter()
    page = writer.add_blank_page(width=200, height=200)

    watermark = DecodedStreamObject()
    watermark.set_data(b"0 0 m 200 200 l S")
    watermark.update(
        {
            NameObject("/Type"): NameObject("/XObject"),
            NameObject("/Subtype"): NameObject("/Form"),
            NameObject("/BBox"): ArrayObject([NumberObject(0), NumberObject(0), NumberObject(200), NumberObject(200)]),
            NameObject("/Name"): NameObject("/Watermark1"),
        }
    )
    watermark_ref = writer._add_object(watermark)

    content = DecodedStreamObject()
    content.set_data(b"q /Wm0 Do Q")
    page[NameObject("/Contents")] = writer._add_object(content)
    page[NameObject("/Resources")] = DictionaryObject(
        {NameObject("/XObject"): DictionaryObject({NameObject("/Wm0"): watermark_ref})}
    )

    annotation = DictionaryObject(
        {
            NameObject("/Type"): NameObject("/Annot"),
            NameObject("/Subtype"): NameObject("/Watermark"),
            NameObject("/Rect"): ArrayObject([NumberObject(0), NumberObject(0), NumberObject(200), NumberObject(200)]),
        }
    )
    page[NameObject("/Annots")] = ArrayObject([writer._add_object(annotation)])

    with path.open("wb") as handle:
        writer.write(handle)
    return path


def _build_document(page_count: int, *, group_size: int | None = None, label: str = "p") -> Document:
    document = Document()
    root_kids: list = []
    root_ref = document.add_object(
        {"Type": PAGES, "Kids": root_kids, "Count": page_count, "MediaBox": [0, 0, 100, 100]}
    )
    document.trailer["Root"] = document.add_object({"Type": Name("Catalog"), "Pages": root_ref})

    parent_ref, parent_kids = root_ref, root_kids
    for index in range(page_count):
        if group_size and index % group_size == 0:
            parent_kids = []
            parent_ref = document.add_object(
                {
                    "Type": PAGES,
                    "Parent": root_ref,
                    "Kids": parent_kids,
                    "Count": min(group_size, page_count - index),
                }
            )
            root_kids.append(parent_ref)
        content_ref = document.add_object(Stream({}, f"{label}{index + 1}".encode("ascii")))
        page_ref = document.add_object({"Type": PAGE, "Parent": parent_ref, "Contents": content_ref})
        parent_kids.append(page_ref)
    return document


@pytest.fixture()
def document_factory() -> Callable[..., Document]:
    """Build in-memory documents whose page contents read ``p1``, ``p2``..."""

    return _build_document


def _page_labels(document: Document) -> list[str]:
    labels = []
    for page_id in document.page_ids():
        page = document.get_dictionary(Reference.to(page_id))
        content = document.resolve(page["Contents"])
        labels.append(content.data.decode("ascii"))
    return labels


@pytest.fixture()
def page_labels() -> Callable[[Document], list[str]]:
    return _page_labels

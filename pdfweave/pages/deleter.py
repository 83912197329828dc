"""Page deletion for the :mod:`pdfweave.pages` package."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

from ..config import EngineSettings
from ..core.codec import load_document, save_document
from ..core.objects import Document, ObjectId, PageEntry, Reference, iter_references, rewrite_references
from ..core.utils import PathLike
from ..exceptions import PdfValidationError
from .utils import normalize_pages

LOGGER = logging.getLogger("pdfweave.pages")


def validate_page_deletion(pages: Iterable[int | str], total_pages: int) -> List[int]:
    """Return the distinct 1-indexed page numbers to delete, or raise.

    Raises:
        PdfValidationError: If no page is given, a number is outside
            ``1..total_pages``, or the request would leave no page.
    """

    numbers = normalize_pages(pages)
    if not numbers:
        raise PdfValidationError("No pages specified for deletion")
    for number in numbers:
        if number < 1 or number > total_pages:
            raise PdfValidationError(
                f"Invalid page number: {number}. PDF has {total_pages} pages (1-indexed)."
            )
    if len(numbers) >= total_pages:
        raise PdfValidationError("Cannot delete all pages from PDF")
    return numbers


def _null_references_to(document: Document, target: ObjectId) -> int:
    def drop(reference: Reference):
        return None if reference.id == target else reference

    touched = 0
    for object_id, value in list(document.objects.items()):
        if any(reference.id == target for reference in iter_references(value)):
            document.objects[object_id] = rewrite_references(value, drop)
            touched += 1
    if any(reference.id == target for reference in iter_references(document.trailer)):
        document.trailer = rewrite_references(document.trailer, drop)
        touched += 1
    return touched


def _detach_page(document: Document, entry: PageEntry) -> None:
    parent = document.get_dictionary(Reference.to(entry.parent_id))
    if parent is not None:
        kids = document.kids_of(parent)
        for index, kid in enumerate(kids):
            if isinstance(kid, Reference) and kid.id == entry.page_id:
                del kids[index]
                break

    for ancestor_id in entry.ancestors:
        node = document.get_dictionary(Reference.to(ancestor_id))
        if node is None:
            continue
        count = document.resolve(node.get("Count"))
        if isinstance(count, int) and count > 0:
            node["Count"] = count - 1

    document.remove_object(entry.page_id)
    touched = _null_references_to(document, entry.page_id)
    LOGGER.debug("Deleted page object %s; nulled references in %d object(s)", entry.page_id, touched)


def delete_pages(document: Document, pages: Iterable[int | str]) -> Document:
    """Remove the given 1-indexed *pages* from *document* in place.

    All numbers are validated against the current page count before anything
    is touched. Pages are then removed one at a time from the highest number
    down, so each remaining number still designates its original page.
    Every ``Pages`` node above a removed page has its ``Count`` decremented.
    """

    numbers = validate_page_deletion(pages, document.page_count)
    for number in sorted(numbers, reverse=True):
        entry = list(document.iter_page_entries())[number - 1]
        LOGGER.debug("Deleting page %d (object %s)", number, entry.page_id)
        _detach_page(document, entry)
    LOGGER.info("Deleted %d page(s); %d remain", len(numbers), document.page_count)
    return document


def delete_pdf_pages(
    input: PathLike,
    output: PathLike,
    pages: Iterable[int | str],
    *,
    settings: EngineSettings | None = None,
) -> Path:
    """Delete *pages* from the PDF at *input* and write the result to *output*."""

    document = load_document(input)
    delete_pages(document, pages)
    return save_document(document, output, settings=settings)


__all__ = ["validate_page_deletion", "delete_pages", "delete_pdf_pages"]

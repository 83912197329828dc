"""Merge functionality for the :mod:`pdfweave.merge` package."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence

from ..config import EngineSettings
from ..core.codec import load_document, save_document
from ..core.objects import (
    INHERITABLE_PAGE_KEYS,
    Document,
    ObjectId,
    PageEntry,
    PdfObject,
    Reference,
)
from ..core.utils import PathLike, ensure_iterable
from ..core.validator import ensure_input_exists, ensure_output_parent
from ..exceptions import DocumentSaveError, DocumentStructureError, PdfValidationError
from .remap import IdentifierRemapper

LOGGER = logging.getLogger("pdfweave.merge")

_INFO_KEY_MAP = {
    "title": "Title",
    "author": "Author",
    "subject": "Subject",
    "keywords": "Keywords",
}


def _kids_array(document: Document, node: dict) -> list:
    """Return the mutable ``Kids`` list of *node*, creating it when absent."""

    kids = node.get("Kids")
    if isinstance(kids, Reference):
        target = document.resolve(kids)
        if isinstance(target, list):
            return target
        raise DocumentStructureError(f"Kids reference {kids.id} is not an array")
    if isinstance(kids, list):
        return kids
    node["Kids"] = []
    return node["Kids"]


def _inherited_attributes(document: Document, entry: PageEntry) -> Dict[str, PdfObject]:
    """Collect inheritable attributes a page takes from its ancestors."""

    page = document.get_dictionary(Reference.to(entry.page_id)) or {}
    inherited: Dict[str, PdfObject] = {}
    for ancestor_id in reversed(entry.ancestors):
        ancestor = document.get_dictionary(Reference.to(ancestor_id)) or {}
        for key in INHERITABLE_PAGE_KEYS:
            if key in page or key in inherited or key not in ancestor:
                continue
            inherited[key] = ancestor[key]
    return inherited


def merge_into(base: Document, source: Document) -> List[ObjectId]:
    """Copy every object of *source* into *base* and append its pages.

    *source* is only read. Each of its objects is stored in *base* under a
    fresh identifier with its internal references rewritten; references to
    objects outside *source* are kept as they are. The remapped pages are
    appended, in document order, to the ``Kids`` of the base catalog's page
    tree root, whose ``Count`` grows by one per page.

    Returns:
        The identifiers the source pages received in *base*.
    """

    entries = list(source.iter_page_entries())
    inherited = {entry.page_id: _inherited_attributes(source, entry) for entry in entries}
    snapshot = list(source.objects.items())

    table = IdentifierRemapper(base).allocate(source)
    for old_id, value in snapshot:
        base.objects[table[old_id]] = table.apply(value)

    root_id = base.pages_root_id()
    root = base.pages_root()
    kids = _kids_array(base, root)

    appended: List[ObjectId] = []
    for entry in entries:
        new_page_id = table[entry.page_id]
        page = base.get_dictionary(Reference.to(new_page_id))
        if page is None:  # pragma: no cover - page ids always resolve
            continue
        for key, value in inherited[entry.page_id].items():
            page[key] = table.apply(value)
        page["Parent"] = Reference.to(root_id)
        kids.append(Reference.to(new_page_id))
        appended.append(new_page_id)
        LOGGER.debug("Appended page %s as %s", entry.page_id, new_page_id)

    count = base.resolve(root.get("Count"))
    root["Count"] = (count if isinstance(count, int) else 0) + len(appended)
    return appended


def merge_documents(base: Document, sources: Iterable[Document]) -> Document:
    """Fold *sources* into *base* in order and return *base*.

    With no sources the base is returned untouched.
    """

    for index, source in enumerate(sources, start=1):
        appended = merge_into(base, source)
        LOGGER.debug("Merged source %d: %d page(s)", index, len(appended))
    return base


def apply_document_info(document: Document, document_info: Mapping[str, object]) -> None:
    """Write title/author/subject/keywords overrides into the Info dictionary."""

    updates: Dict[str, PdfObject] = {}
    for key, value in document_info.items():
        if value is None:
            continue
        string_value = str(value).strip()
        if not string_value:
            continue
        pdf_key = _INFO_KEY_MAP.get(str(key).lower())
        if pdf_key is None:
            pdf_key = str(key).lstrip("/")
        updates[pdf_key] = string_value
    if not updates:
        return

    info = document.get_dictionary(document.trailer.get("Info"))
    if info is None:
        info = {}
        document.trailer["Info"] = document.add_object(info)
    info.update(updates)
    LOGGER.debug("Applied document info %s", updates)


def merge_pdfs(
    inputs: Sequence[PathLike],
    output: PathLike,
    *,
    document_info: Mapping[str, object] | None = None,
    settings: EngineSettings | None = None,
) -> Path:
    """Merge *inputs* into *output* and return the resulting path.

    Args:
        inputs: Ordered paths of the PDFs to merge. Pages appear in the
            output in this order.
        output: The output file path that will contain the merged PDF.
        document_info: Optional Info dictionary overrides for the result.

    Raises:
        PdfValidationError: If *inputs* is empty.
        DocumentLoadError: If an input cannot be loaded.
        DocumentSaveError: If the result cannot be written.
    """

    pdf_paths = ensure_iterable(inputs)
    if not pdf_paths:
        raise PdfValidationError("No input files provided")

    if len(pdf_paths) == 1 and not document_info:
        source = ensure_input_exists(pdf_paths[0])
        output_path = ensure_output_parent(output)
        LOGGER.debug("Single input; copying %s to %s", source, output_path)
        try:
            shutil.copyfile(source, output_path)
        except OSError as exc:
            LOGGER.error("Failed to copy %s to %s: %s", source, output_path, exc)
            raise DocumentSaveError(f"Failed to copy PDF: {exc}") from exc
        return output_path

    base = load_document(pdf_paths[0])
    for pdf_path in pdf_paths[1:]:
        LOGGER.debug("Processing input PDF %s", pdf_path)
        merge_into(base, load_document(pdf_path))

    if document_info:
        apply_document_info(base, document_info)

    output_path = ensure_output_parent(output)
    save_document(base, output_path, settings=settings)
    LOGGER.info("Merged %d PDFs into %s", len(pdf_paths), output_path)
    return output_path


__all__ = ["merge_into", "merge_documents", "merge_pdfs", "apply_document_info"]

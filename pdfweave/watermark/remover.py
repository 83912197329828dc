"""Heuristic removal of overlay watermarks.

Watermarks added as separate objects (named XObjects, optional content
groups, ``/Watermark`` annotations) are recognised by their ``/Name``,
``/Subtype`` and ``/Type`` entries and deleted from the object graph.
Watermarks drawn directly into a page's content stream are indistinguishable
from the rest of the page and are left alone.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence

from ..config import EngineSettings, get_settings
from ..core.codec import load_document, save_document
from ..core.objects import Document, Name, ObjectId, PdfObject, Reference, Stream
from ..core.utils import PathLike

LOGGER = logging.getLogger("pdfweave.watermark")

WATERMARK = Name("Watermark")
ANNOT = Name("Annot")


@dataclass(frozen=True)
class WatermarkRemovalResult:
    """Outcome of a watermark removal attempt."""

    success: bool
    items_removed: int
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "itemsRemoved": self.items_removed,
            "message": self.message,
        }


def _name_matches(value: PdfObject, keywords: Sequence[str]) -> bool:
    if not isinstance(value, Name):
        return False
    return any(keyword in value.value for keyword in keywords)


def is_watermark_object(value: PdfObject, keywords: Sequence[str]) -> bool:
    """Return ``True`` when *value* looks like a watermark overlay."""

    if isinstance(value, Stream):
        return _name_matches(value.dictionary.get("Name"), keywords)
    if not isinstance(value, dict):
        return False
    if _name_matches(value.get("Name"), keywords):
        return True
    if value.get("Subtype") == WATERMARK:
        return True
    return value.get("Type") == ANNOT and value.get("Subtype") == WATERMARK


def find_watermark_objects(document: Document, keywords: Sequence[str]) -> List[ObjectId]:
    """Return the identifiers of every object matching the heuristics."""

    return sorted(
        object_id
        for object_id, value in document.objects.items()
        if is_watermark_object(value, keywords)
    )


def _prune_annotations(document: Document, page_ids: Iterable[ObjectId], removed: set[ObjectId]) -> int:
    dropped_total = 0
    for page_id in page_ids:
        page = document.get_dictionary(Reference.to(page_id))
        if page is None:
            continue
        annots = document.resolve(page.get("Annots"))
        if not isinstance(annots, list):
            continue

        kept: list = []
        for item in annots:
            if isinstance(item, Reference):
                target = document.get_dictionary(item)
                if item.id in removed or (target is not None and target.get("Subtype") == WATERMARK):
                    continue
            kept.append(item)

        dropped = len(annots) - len(kept)
        if dropped:
            LOGGER.debug("Dropped %d annotation(s) from page %s", dropped, page_id)
            annots[:] = kept
            dropped_total += dropped
    return dropped_total


def remove_watermarks(
    document: Document,
    *,
    keywords: Sequence[str] | None = None,
) -> WatermarkRemovalResult:
    """Delete watermark-like objects and annotations from *document* in place.

    Every matching object is deleted once. Afterwards each page's ``Annots``
    array loses the references that pointed at a deleted object or at a
    ``/Watermark`` annotation; each dropped entry is counted in addition to
    the deleted objects.

    References to deleted objects held anywhere other than a page's
    ``Annots`` array are not rewritten and are reported as a warning.
    """

    keywords = tuple(keywords if keywords is not None else get_settings().watermark_keywords)
    page_ids = document.page_ids()

    to_remove = find_watermark_objects(document, keywords)
    for object_id in to_remove:
        LOGGER.debug("Removing watermark candidate %s", object_id)
        document.remove_object(object_id)
    removed = set(to_remove)

    items_removed = len(to_remove) + _prune_annotations(document, page_ids, removed)

    leftovers = [ref for _, ref in document.dangling_references() if ref.id in removed]
    if leftovers:
        LOGGER.warning(
            "%d reference(s) to removed watermark objects remain outside page annotations",
            len(leftovers),
        )

    if items_removed > 0:
        message = (
            f"Found and removed {items_removed} potential watermark element(s). "
            "Please check the output file."
        )
    else:
        message = (
            "No obvious watermark elements were found. The watermark may be embedded "
            "in the page content, which cannot be easily removed."
        )
    LOGGER.info("Watermark removal finished: %d item(s) removed", items_removed)
    return WatermarkRemovalResult(success=items_removed > 0, items_removed=items_removed, message=message)


def remove_watermarks_from_pdf(
    input: PathLike,
    output: PathLike,
    *,
    settings: EngineSettings | None = None,
) -> WatermarkRemovalResult:
    """Load *input*, remove watermark candidates and save the result to *output*."""

    settings = settings or get_settings()
    document = load_document(input)
    result = remove_watermarks(document, keywords=settings.watermark_keywords)
    save_document(document, Path(output), settings=settings)
    return result


__all__ = [
    "WatermarkRemovalResult",
    "is_watermark_object",
    "find_watermark_objects",
    "remove_watermarks",
    "remove_watermarks_from_pdf",
]

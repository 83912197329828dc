"""Build a new document holding one page per raster image."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Tuple

from ..config import EngineSettings, get_settings
from ..core.codec import save_document
from ..core.objects import PAGE, PAGES, Document, Name, Reference, Stream
from ..core.utils import PathLike
from ..exceptions import PdfValidationError
from .decoder import DecodedImage, decode_image

LOGGER = logging.getLogger("pdfweave.images")

MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0
DOCUMENT_TITLE = "Images to PDF"
_IMAGE_RESOURCE = "Im0"


def page_size_points(width_px: int, height_px: int, settings: EngineSettings) -> Tuple[float, float]:
    """Return the page size in points for an image of the given pixel size.

    The physical size assumes ``settings.image_dpi``; images larger than the
    configured sheet are shrunk uniformly to fit it, smaller ones keep their
    natural size.
    """

    width_mm = width_px / settings.image_dpi * MM_PER_INCH
    height_mm = height_px / settings.image_dpi * MM_PER_INCH
    scale = min(settings.sheet_width_mm / width_mm, settings.sheet_height_mm / height_mm, 1.0)
    to_points = POINTS_PER_INCH / MM_PER_INCH
    # Rounding may not push a shrunk page past the sheet.
    sheet_width = settings.sheet_width_mm * POINTS_PER_INCH / MM_PER_INCH
    sheet_height = settings.sheet_height_mm * POINTS_PER_INCH / MM_PER_INCH
    return (
        min(round(width_mm * scale * to_points, 4), sheet_width),
        min(round(height_mm * scale * to_points, 4), sheet_height),
    )


def _add_image_page(
    document: Document,
    pages_ref: Reference,
    image: DecodedImage,
    settings: EngineSettings,
) -> Reference:
    width, height = page_size_points(image.width, image.height, settings)
    image_ref = document.add_object(image.to_xobject())
    content = f"q {width} 0 0 {height} 0 0 cm /{_IMAGE_RESOURCE} Do Q".encode("ascii")
    content_ref = document.add_object(Stream({}, content))
    color_proc = "ImageB" if image.color_space == "DeviceGray" else "ImageC"
    return document.add_object(
        {
            "Type": PAGE,
            "Parent": pages_ref,
            "MediaBox": [0, 0, width, height],
            "Resources": {
                "ProcSet": [Name("PDF"), Name(color_proc)],
                "XObject": {_IMAGE_RESOURCE: image_ref},
            },
            "Contents": content_ref,
        }
    )


def images_to_document(
    image_paths: Iterable[PathLike],
    *,
    settings: EngineSettings | None = None,
) -> Document:
    """Compose a document with one page per image, in input order.

    Every image is decoded before the document is built, so a bad file
    aborts the whole request.

    Raises:
        PdfValidationError: If *image_paths* is empty.
        ImageLoadError: If an image cannot be decoded.
    """

    settings = settings or get_settings()
    paths: List[PathLike] = list(image_paths)
    if not paths:
        raise PdfValidationError("No image files provided")

    images = [decode_image(path) for path in paths]

    document = Document()
    kids: list = []
    pages_ref = document.add_object({"Type": PAGES, "Kids": kids, "Count": 0})
    catalog_ref = document.add_object({"Type": Name("Catalog"), "Pages": pages_ref})
    document.trailer["Root"] = catalog_ref

    for index, image in enumerate(images, start=1):
        kids.append(_add_image_page(document, pages_ref, image, settings))
        LOGGER.debug("Added page %d for %dx%d image", index, image.width, image.height)

    document.get_dictionary(pages_ref)["Count"] = len(kids)
    document.trailer["Info"] = document.add_object({"Title": DOCUMENT_TITLE, "Producer": "pdfweave"})
    return document


def images_to_pdf(
    image_paths: Iterable[PathLike],
    output: PathLike,
    *,
    settings: EngineSettings | None = None,
) -> Path:
    """Write a PDF with one page per image to *output* and return its path."""

    settings = settings or get_settings()
    document = images_to_document(image_paths, settings=settings)
    destination = save_document(document, output, settings=settings)
    LOGGER.info("Composed %d image page(s) into %s", document.page_count, destination)
    return destination


__all__ = ["page_size_points", "images_to_document", "images_to_pdf", "DOCUMENT_TITLE"]

"""FastAPI application exposing the pdfweave engine over HTTP."""

from __future__ import annotations

import json
from json import JSONDecodeError
import logging
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Callable, List, TypeVar

from fastapi import BackgroundTasks, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse, JSONResponse

from pdfweave import (
    DocumentLoadError,
    PdfValidationError,
    PdfWeaveError,
    __version__,
    delete_pdf_pages,
    get_pdf_info,
    images_to_pdf,
    merge_pdfs,
    remove_watermarks_from_pdf,
)
from pdfweave.pages.utils import parse_page_spec

LOGGER = logging.getLogger("pdfweave.api")

app = FastAPI(title="pdfweave API", version=__version__)

T = TypeVar("T")


def _cleanup_temp_dir(background_tasks: BackgroundTasks, temp_dir: TemporaryDirectory) -> None:
    """Schedule ``temp_dir`` to be cleaned up after the response is sent."""

    background_tasks.add_task(temp_dir.cleanup)


async def _store_upload(upload: UploadFile, destination: Path) -> Path:
    """Persist an uploaded file to ``destination`` and return the resulting path."""

    contents = await upload.read()
    if not contents:
        raise HTTPException(status_code=400, detail=f"File '{upload.filename}' is empty.")

    destination.write_bytes(contents)
    return destination


async def _store_uploads(uploads: List[UploadFile], directory: Path, default_suffix: str) -> list[Path]:
    stored: list[Path] = []
    for index, upload in enumerate(uploads, start=1):
        # Index prefix keeps duplicate upload names apart and preserves order.
        filename = f"{index:03d}_{_safe_filename(upload.filename, f'upload{default_suffix}')}"
        stored.append(await _store_upload(upload, directory / filename))
    return stored


def _safe_filename(filename: str | None, default: str) -> str:
    """Return a filesystem-safe filename derived from user input."""

    if not filename:
        return default

    candidate = Path(filename).name
    return candidate or default


async def _run_engine(func: Callable[..., T], *args, **kwargs) -> T:
    """Run an engine call on the thread pool and translate its errors to HTTP."""

    try:
        return await run_in_threadpool(func, *args, **kwargs)
    except PdfValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except DocumentLoadError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except PdfWeaveError as exc:
        LOGGER.error("Engine call %s failed: %s", getattr(func, "__name__", func), exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.get("/health", response_class=JSONResponse)
async def health() -> dict[str, str]:
    """Lightweight health endpoint for uptime checks."""
    return {"status": "ok"}


@app.post("/info", response_class=JSONResponse)
async def pdf_info(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(..., description="PDF to inspect."),
) -> dict[str, object]:
    """Return the page count, title and author of an uploaded PDF."""

    temp_dir = TemporaryDirectory()
    input_path = Path(temp_dir.name) / _safe_filename(file.filename, "document.pdf")
    _cleanup_temp_dir(background_tasks, temp_dir)
    await _store_upload(file, input_path)

    info = await _run_engine(get_pdf_info, input_path)
    payload = info.to_dict()
    payload["path"] = input_path.name
    return payload


@app.post("/merge", response_class=FileResponse)
async def merge_documents(
    background_tasks: BackgroundTasks,
    files: List[UploadFile] = File(..., description="PDF files to merge, in order."),
    document_info: str | None = Form(
        None,
        description="Optional JSON encoded title/author/subject/keywords overrides.",
    ),
) -> FileResponse:
    """Merge multiple PDF uploads into a single document.

    Uploads are stored on disk, merged by :func:`pdfweave.merge_pdfs` on a
    worker thread, and the merged PDF is returned. Temporary files are
    cleaned up once the response is sent.
    """

    if not files:
        raise HTTPException(status_code=400, detail="No input files provided")

    metadata_overrides: dict[str, object] | None = None
    if document_info:
        try:
            parsed_info = json.loads(document_info)
        except JSONDecodeError as exc:
            raise HTTPException(status_code=400, detail="document_info must be valid JSON.") from exc
        if not isinstance(parsed_info, dict):
            raise HTTPException(status_code=400, detail="document_info must be a JSON object.")
        metadata_overrides = {str(key): value for key, value in parsed_info.items() if value is not None}

    temp_dir = TemporaryDirectory()
    temp_path = Path(temp_dir.name)
    _cleanup_temp_dir(background_tasks, temp_dir)
    stored_files = await _store_uploads(files, temp_path, ".pdf")

    output_path = temp_path / "merged.pdf"
    await _run_engine(merge_pdfs, stored_files, output_path, document_info=metadata_overrides)

    return FileResponse(output_path, media_type="application/pdf", filename="merged.pdf")


@app.post("/remove-watermark", response_class=FileResponse)
async def remove_watermark(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(..., description="PDF to clean."),
) -> FileResponse:
    """Remove overlay watermarks; the outcome is reported in response headers."""

    temp_dir = TemporaryDirectory()
    temp_path = Path(temp_dir.name)
    _cleanup_temp_dir(background_tasks, temp_dir)
    input_path = await _store_upload(file, temp_path / _safe_filename(file.filename, "document.pdf"))

    output_path = temp_path / "cleaned.pdf"
    result = await _run_engine(remove_watermarks_from_pdf, input_path, output_path)

    headers = {
        "X-Pdfweave-Watermark-Success": json.dumps(result.success),
        "X-Pdfweave-Watermark-Items-Removed": str(result.items_removed),
        "X-Pdfweave-Watermark-Message": result.message,
    }
    return FileResponse(output_path, media_type="application/pdf", filename="cleaned.pdf", headers=headers)


@app.post("/delete-pages", response_class=FileResponse)
async def delete_pages(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(..., description="Source PDF."),
    pages: str = Form(..., description="1-indexed pages to delete, e.g. '2' or '1,3,5-7'."),
) -> FileResponse:
    """Delete the given pages and return the resulting PDF."""

    try:
        numbers = parse_page_spec(pages)
    except PdfValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    temp_dir = TemporaryDirectory()
    temp_path = Path(temp_dir.name)
    _cleanup_temp_dir(background_tasks, temp_dir)
    input_path = await _store_upload(file, temp_path / _safe_filename(file.filename, "document.pdf"))

    output_path = temp_path / "pages_deleted.pdf"
    await _run_engine(delete_pdf_pages, input_path, output_path, numbers)

    return FileResponse(output_path, media_type="application/pdf", filename="pages_deleted.pdf")


@app.post("/images-to-pdf", response_class=FileResponse)
async def images_to_pdf_endpoint(
    background_tasks: BackgroundTasks,
    files: List[UploadFile] = File(..., description="Images to place one per page, in order."),
) -> FileResponse:
    """Compose a PDF with one page per uploaded image."""

    if not files:
        raise HTTPException(status_code=400, detail="No image files provided")

    temp_dir = TemporaryDirectory()
    temp_path = Path(temp_dir.name)
    _cleanup_temp_dir(background_tasks, temp_dir)
    stored_images = await _store_uploads(files, temp_path, ".img")

    output_path = temp_path / "images.pdf"
    await _run_engine(images_to_pdf, stored_images, output_path)

    return FileResponse(output_path, media_type="application/pdf", filename="images.pdf")


__all__ = ["app"]

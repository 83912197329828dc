"""Bridge between PDF files on disk and the :class:`Document` arena.

Loading delegates all byte-level parsing to :class:`pypdf.PdfReader`: the
reader resolves cross-reference tables, object streams and trailers, and this
module copies every object reachable from the trailer into the arena.

Saving serialises each object body with the ``write_to_stream`` methods of
:mod:`pypdf.generic` and lays the bodies out with a classic cross-reference
table, so every arena identifier is written under its own object number.
"""

from __future__ import annotations

from io import BytesIO
import logging
from pathlib import Path
from typing import Dict, List

from pypdf import PdfReader
from pypdf.errors import PdfReadError
from pypdf.generic import (
    ArrayObject,
    BooleanObject,
    ByteStringObject,
    DecodedStreamObject,
    DictionaryObject,
    FloatObject,
    IndirectObject,
    NameObject,
    NullObject,
    NumberObject,
    StreamObject,
    TextStringObject,
    create_string_object,
)
from pypdf.generic import PdfObject as PypdfObject

from ..config import EngineSettings, get_settings
from ..exceptions import DocumentLoadError, DocumentSaveError, DocumentStructureError
from .objects import Document, Name, ObjectId, PdfObject, Reference, Stream
from .optimizers import linearize_in_place
from .utils import PathLike
from .validator import ensure_input_exists, ensure_output_parent

LOGGER = logging.getLogger("pdfweave.codec")

# Trailer keys that survive a load; the rest describe the source file layout.
_TRAILER_KEYS = ("Root", "Info", "ID")
_BINARY_MARKER = b"%\xe2\xe3\xcf\xd3\n"


# -- Loading -----------------------------------------------------------------


def _open_reader(path: Path) -> PdfReader:
    try:
        reader = PdfReader(str(path))
    except PdfReadError as exc:
        LOGGER.error("Failed to parse PDF %s: %s", path, exc)
        raise DocumentLoadError(f"Failed to load PDF: {path}: {exc}") from exc
    except Exception as exc:  # pragma: no cover - dependency exceptions vary
        LOGGER.error("Failed to read PDF %s: %s", path, exc)
        raise DocumentLoadError(f"Failed to load PDF: {path}: {exc}") from exc

    if reader.is_encrypted:
        LOGGER.debug("Attempting to decrypt encrypted PDF %s", path)
        try:
            decrypted = reader.decrypt("")
        except Exception as exc:  # pragma: no cover - decrypt errors vary
            raise DocumentLoadError(f"Unable to decrypt encrypted PDF: {path}") from exc
        if decrypted == 0:
            raise DocumentLoadError(f"PDF is encrypted and requires a password: {path}")
    return reader


def _from_pypdf(value: object, pending: List[ObjectId]) -> PdfObject:
    """Convert a pypdf object into an arena value.

    Indirect references are not followed; their targets are queued on
    *pending* so the caller can load them once.
    """

    if isinstance(value, IndirectObject):
        pending.append((value.idnum, value.generation))
        return Reference(value.idnum, value.generation)
    if value is None or isinstance(value, NullObject):
        return None
    if isinstance(value, BooleanObject):
        return bool(value.value)
    if isinstance(value, NameObject):
        return Name(str(value)[1:])
    if isinstance(value, StreamObject):
        dictionary = {
            str(key)[1:]: _from_pypdf(item, pending) for key, item in value.items()
        }
        return Stream(dictionary, bytes(value._data))
    if isinstance(value, DictionaryObject):
        return {str(key)[1:]: _from_pypdf(item, pending) for key, item in value.items()}
    if isinstance(value, ArrayObject):
        return [_from_pypdf(item, pending) for item in value]
    if isinstance(value, ByteStringObject):
        return bytes(value)
    if isinstance(value, TextStringObject):
        return str(value)
    if isinstance(value, FloatObject):
        return float(value)
    if isinstance(value, NumberObject):
        return int(value)
    LOGGER.debug("Unsupported pypdf object %r converted to null", type(value))
    return None


def read_document(reader: PdfReader) -> Document:
    """Copy every object reachable from *reader*'s trailer into a new arena."""

    pending: List[ObjectId] = []
    trailer: Dict[str, PdfObject] = {}
    for key in _TRAILER_KEYS:
        pdf_key = f"/{key}"
        if pdf_key in reader.trailer:
            trailer[key] = _from_pypdf(reader.trailer.raw_get(pdf_key), pending)

    if not isinstance(trailer.get("Root"), Reference):
        raise DocumentStructureError("PDF trailer does not reference a document catalog")

    objects: Dict[ObjectId, PdfObject] = {}
    unresolved: set[ObjectId] = set()
    while pending:
        object_id = pending.pop()
        if object_id in objects or object_id in unresolved:
            continue
        try:
            resolved = reader.get_object(IndirectObject(object_id[0], object_id[1], reader))
        except Exception as exc:  # pragma: no cover - dependency exceptions vary
            raise DocumentLoadError(f"Failed to read object {object_id}: {exc}") from exc
        if resolved is None or isinstance(resolved, NullObject):
            LOGGER.debug("Object %s does not resolve; leaving reference in place", object_id)
            unresolved.add(object_id)
            continue
        objects[object_id] = _from_pypdf(resolved, pending)

    size = reader.trailer.get("/Size")
    max_id = int(size) - 1 if isinstance(size, int) else 0
    version = reader.pdf_header[5:] if reader.pdf_header.startswith("%PDF-") else "1.7"
    document = Document(objects=objects, trailer=trailer, max_id=max_id, version=version)
    LOGGER.debug("Loaded %d object(s), max id %d", document.object_count, document.max_id)
    return document


def load_document(path: PathLike) -> Document:
    """Load the PDF at *path* into a :class:`Document`.

    Raises:
        DocumentLoadError: If the file is missing, unreadable, not a PDF or
            encrypted with a non-empty password.
        DocumentStructureError: If the trailer does not reference a catalog.
    """

    source = ensure_input_exists(path)
    reader = _open_reader(source)
    document = read_document(reader)
    LOGGER.info("Loaded %s (%d object(s))", source, document.object_count)
    return document


# -- Saving ------------------------------------------------------------------


def _to_pypdf(value: PdfObject) -> PypdfObject:
    if isinstance(value, Reference):
        return IndirectObject(value.obj_id, value.generation, None)  # type: ignore[arg-type]
    if value is None:
        return NullObject()
    if isinstance(value, bool):
        return BooleanObject(value)
    if isinstance(value, int):
        return NumberObject(value)
    if isinstance(value, float):
        return FloatObject(value)
    if isinstance(value, Name):
        return NameObject(f"/{value.value}")
    if isinstance(value, str):
        return create_string_object(value)
    if isinstance(value, bytes):
        return ByteStringObject(value)
    if isinstance(value, list):
        return ArrayObject(_to_pypdf(item) for item in value)
    if isinstance(value, dict):
        result = DictionaryObject()
        for key, item in value.items():
            result[NameObject(f"/{key}")] = _to_pypdf(item)
        return result
    if isinstance(value, Stream):
        stream = DecodedStreamObject()
        for key, item in value.dictionary.items():
            # pypdf writes /Length from the payload itself.
            if key == "Length":
                continue
            stream[NameObject(f"/{key}")] = _to_pypdf(item)
        stream.set_data(value.data)
        return stream
    raise TypeError(f"Cannot serialise value of type {type(value).__name__}")


def serialize_document(document: Document) -> bytes:
    """Return the PDF bytes for *document*."""

    if not isinstance(document.trailer.get("Root"), Reference):
        raise DocumentStructureError("Document trailer has no Root reference")

    buffer = BytesIO()
    buffer.write(f"%PDF-{document.version}\n".encode("ascii"))
    buffer.write(_BINARY_MARKER)

    offsets: Dict[int, tuple[int, int]] = {}
    for object_id in sorted(document.objects):
        number, generation = object_id
        if number in offsets:
            LOGGER.warning("Object number %d appears with several generations; keeping the last", number)
        offsets[number] = (buffer.tell(), generation)
        buffer.write(b"%d %d obj\n" % (number, generation))
        _to_pypdf(document.objects[object_id]).write_to_stream(buffer)
        buffer.write(b"\nendobj\n")

    size = max(document.max_id, max(offsets, default=0)) + 1
    xref_offset = buffer.tell()
    buffer.write(b"xref\n0 %d\n" % size)
    buffer.write(b"0000000000 65535 f \n")
    for number in range(1, size):
        if number in offsets:
            offset, generation = offsets[number]
            buffer.write(b"%010d %05d n \n" % (offset, generation))
        else:
            buffer.write(b"0000000000 00000 f \n")

    trailer = _to_pypdf(document.trailer)
    trailer[NameObject("/Size")] = NumberObject(size)
    buffer.write(b"trailer\n")
    trailer.write_to_stream(buffer)
    buffer.write(b"\nstartxref\n%d\n%%%%EOF\n" % xref_offset)
    return buffer.getvalue()


def save_document(
    document: Document,
    path: PathLike,
    *,
    settings: EngineSettings | None = None,
) -> Path:
    """Serialise *document* to *path* and return the resolved output path.

    The bytes are produced in memory first; if writing fails, any partially
    written file is removed before :class:`DocumentSaveError` is raised.
    """

    settings = settings or get_settings()
    try:
        data = serialize_document(document)
    except (TypeError, ValueError) as exc:
        LOGGER.error("Failed to serialise document: %s", exc)
        raise DocumentSaveError(f"Failed to serialise PDF: {exc}") from exc

    try:
        destination = ensure_output_parent(path)
        destination.write_bytes(data)
    except OSError as exc:
        LOGGER.error("Failed to write PDF to %s: %s", path, exc)
        partial = Path(path)
        if partial.is_file():
            partial.unlink()
        raise DocumentSaveError(f"Failed to save PDF to {path}: {exc}") from exc

    if settings.optimize:
        linearize_in_place(destination)

    LOGGER.info("Saved %s (%d bytes)", destination, len(data))
    return destination


__all__ = ["load_document", "read_document", "save_document", "serialize_document"]

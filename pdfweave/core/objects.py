"""In-memory object graph used by every pdfweave operation.

A :class:`Document` is an arena: a mapping from object identifier to object
value. Objects never point at each other directly; edges are
:class:`Reference` values that are resolved by looking the identifier up in
the arena. Merging two graphs therefore reduces to copying arena entries,
relabelling their identifiers and rewriting the references they contain.

Object values are a closed set of plain Python types:

========================  ===============================
PDF type                  Python value
========================  ===============================
null                      ``None``
boolean                   ``bool``
integer / real            ``int`` / ``float``
text string               ``str``
byte string               ``bytes``
name                      :class:`Name`
array                     ``list``
dictionary                ``dict`` keyed by name (no slash)
stream                    :class:`Stream`
indirect reference        :class:`Reference`
========================  ===============================
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union

from ..exceptions import DocumentStructureError

LOGGER = logging.getLogger("pdfweave.core")

ObjectId = Tuple[int, int]


@dataclass(frozen=True)
class Name:
    """PDF name object, stored without its leading slash."""

    value: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"/{self.value}"


@dataclass(frozen=True)
class Reference:
    """Indirect reference (``12 0 R``) to an object in the same arena."""

    obj_id: int
    generation: int = 0

    @property
    def id(self) -> ObjectId:
        return (self.obj_id, self.generation)

    @classmethod
    def to(cls, object_id: ObjectId) -> "Reference":
        return cls(object_id[0], object_id[1])


@dataclass
class Stream:
    """Stream dictionary plus its raw, still-encoded payload."""

    dictionary: Dict[str, "PdfObject"]
    data: bytes = b""


PdfObject = Union[
    None, bool, int, float, str, bytes, Name, list, dict, Stream, Reference
]

PAGES = Name("Pages")
PAGE = Name("Page")

# Page attributes a leaf may inherit from its ancestors in the page tree.
INHERITABLE_PAGE_KEYS = ("Resources", "MediaBox", "CropBox", "Rotate")


def rewrite_references(
    value: PdfObject, substitute: Callable[[Reference], PdfObject]
) -> PdfObject:
    """Return a copy of *value* with every reference passed through *substitute*.

    Arrays, dictionaries and stream dictionaries are rebuilt, so the result
    never shares a mutable container with *value*. Stream payloads are
    immutable ``bytes`` and are shared.
    """

    if isinstance(value, Reference):
        return substitute(value)
    if isinstance(value, list):
        return [rewrite_references(item, substitute) for item in value]
    if isinstance(value, dict):
        return {key: rewrite_references(item, substitute) for key, item in value.items()}
    if isinstance(value, Stream):
        return Stream(rewrite_references(value.dictionary, substitute), value.data)
    return value


def iter_references(value: PdfObject) -> Iterator[Reference]:
    """Yield every reference reachable inside *value* without following it."""

    if isinstance(value, Reference):
        yield value
    elif isinstance(value, list):
        for item in value:
            yield from iter_references(item)
    elif isinstance(value, dict):
        for item in value.values():
            yield from iter_references(item)
    elif isinstance(value, Stream):
        yield from iter_references(value.dictionary)


def as_dictionary(value: PdfObject) -> Optional[dict]:
    """Return the dictionary behind a dictionary or stream value."""

    if isinstance(value, Stream):
        return value.dictionary
    if isinstance(value, dict):
        return value
    return None


@dataclass(frozen=True)
class PageEntry:
    """A leaf page together with the ``Pages`` nodes above it, root first."""

    page_id: ObjectId
    ancestors: Tuple[ObjectId, ...]

    @property
    def parent_id(self) -> ObjectId:
        return self.ancestors[-1]


@dataclass
class Document:
    """Object arena for a single PDF document."""

    objects: Dict[ObjectId, PdfObject] = field(default_factory=dict)
    trailer: Dict[str, PdfObject] = field(default_factory=dict)
    max_id: int = 0
    version: str = "1.7"

    def __post_init__(self) -> None:
        highest = max((number for number, _ in self.objects), default=0)
        self.max_id = max(self.max_id, highest)

    # -- Arena access --------------------------------------------------------

    @property
    def object_count(self) -> int:
        return len(self.objects)

    def resolve(self, value: PdfObject) -> PdfObject:
        """Follow references until a direct value is reached.

        Missing targets resolve to ``None``, the PDF null object.
        """

        seen: set[ObjectId] = set()
        while isinstance(value, Reference):
            if value.id in seen:
                LOGGER.warning("Reference cycle detected at object %s", value.id)
                return None
            seen.add(value.id)
            value = self.objects.get(value.id)
        return value

    def get_dictionary(self, value: PdfObject) -> Optional[dict]:
        return as_dictionary(self.resolve(value))

    def add_object(self, value: PdfObject) -> Reference:
        """Store *value* under a freshly minted identifier."""

        self.max_id += 1
        object_id = (self.max_id, 0)
        self.objects[object_id] = value
        return Reference.to(object_id)

    def remove_object(self, object_id: ObjectId) -> PdfObject:
        return self.objects.pop(object_id, None)

    def copy(self) -> "Document":
        """Return a deep copy that shares no mutable state with this document."""

        def keep(reference: Reference) -> Reference:
            return reference

        return Document(
            objects={
                object_id: rewrite_references(value, keep)
                for object_id, value in self.objects.items()
            },
            trailer=rewrite_references(self.trailer, keep),
            max_id=self.max_id,
            version=self.version,
        )

    def dangling_references(self) -> List[Tuple[ObjectId, Reference]]:
        """Return ``(holder, reference)`` pairs whose target is not in the arena."""

        dangling: List[Tuple[ObjectId, Reference]] = []
        for holder, value in self.objects.items():
            for reference in iter_references(value):
                if reference.id not in self.objects:
                    dangling.append((holder, reference))
        return dangling

    # -- Page tree -----------------------------------------------------------

    def catalog(self) -> dict:
        catalog = self.get_dictionary(self.trailer.get("Root"))
        if catalog is None:
            raise DocumentStructureError("PDF has no document catalog")
        return catalog

    def pages_root_id(self) -> ObjectId:
        pages_ref = self.catalog().get("Pages")
        if not isinstance(pages_ref, Reference) or self.get_dictionary(pages_ref) is None:
            raise DocumentStructureError("Document catalog has no page tree")
        return pages_ref.id

    def pages_root(self) -> dict:
        root = self.get_dictionary(Reference.to(self.pages_root_id()))
        if root is None:
            raise DocumentStructureError("Page tree root is not a dictionary")
        return root

    def kids_of(self, node: dict) -> list:
        """Return the ``Kids`` array of a page tree node, resolving one level."""

        kids = self.resolve(node.get("Kids"))
        return kids if isinstance(kids, list) else []

    def iter_page_entries(self) -> Iterator[PageEntry]:
        """Walk the page tree and yield leaf pages in document order."""

        root_id = self.pages_root_id()
        visited: set[ObjectId] = set()

        def visit(node_id: ObjectId, ancestors: Tuple[ObjectId, ...]) -> Iterator[PageEntry]:
            if node_id in visited:
                LOGGER.warning("Page tree revisits object %s; skipping", node_id)
                return
            visited.add(node_id)
            node = self.get_dictionary(Reference.to(node_id))
            if node is None:
                LOGGER.debug("Page tree kid %s does not resolve", node_id)
                return
            is_interior = not ancestors or node.get("Type") == PAGES or (
                node.get("Type") != PAGE and "Kids" in node
            )
            if not is_interior:
                yield PageEntry(node_id, ancestors)
                return
            for kid in self.kids_of(node):
                if isinstance(kid, Reference):
                    yield from visit(kid.id, ancestors + (node_id,))

        yield from visit(root_id, ())

    def page_ids(self) -> List[ObjectId]:
        return [entry.page_id for entry in self.iter_page_entries()]

    @property
    def page_count(self) -> int:
        return len(self.page_ids())


__all__ = [
    "ObjectId",
    "Name",
    "Reference",
    "Stream",
    "PdfObject",
    "PageEntry",
    "Document",
    "PAGES",
    "PAGE",
    "INHERITABLE_PAGE_KEYS",
    "rewrite_references",
    "iter_references",
    "as_dictionary",
]

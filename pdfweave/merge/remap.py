"""Identifier allocation for copying one object graph into another."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, Iterator, Mapping

from ..core.objects import Document, ObjectId, PdfObject, Reference, rewrite_references

LOGGER = logging.getLogger("pdfweave.merge")


@dataclass
class RemapTable(Mapping[ObjectId, ObjectId]):
    """Old-to-new identifier mapping scoped to a single source document."""

    mapping: Dict[ObjectId, ObjectId] = field(default_factory=dict)

    def __getitem__(self, object_id: ObjectId) -> ObjectId:
        return self.mapping[object_id]

    def __iter__(self) -> Iterator[ObjectId]:
        return iter(self.mapping)

    def __len__(self) -> int:
        return len(self.mapping)

    def translate(self, reference: Reference) -> Reference:
        """Return the remapped reference, or *reference* itself if it is foreign."""

        new_id = self.mapping.get(reference.id)
        if new_id is None:
            return reference
        return Reference.to(new_id)

    def apply(self, value: PdfObject) -> PdfObject:
        """Return a copy of *value* with every known reference remapped."""

        return rewrite_references(value, self.translate)


class IdentifierRemapper:
    """Mints fresh identifiers in *target* for objects of other documents.

    Each call to :meth:`allocate` reserves a contiguous block of object
    numbers above ``target.max_id`` and advances ``max_id`` past it straight
    away, so tables handed out by one remapper (or by several remappers over
    the same target) never overlap each other or the target's own objects.
    """

    def __init__(self, target: Document) -> None:
        self.target = target

    def allocate(self, source: Document) -> RemapTable:
        next_number = self.target.max_id
        mapping: Dict[ObjectId, ObjectId] = {}
        for old_id in sorted(source.objects):
            next_number += 1
            mapping[old_id] = (next_number, 0)
        LOGGER.debug(
            "Reserved object numbers %d-%d for %d object(s)",
            self.target.max_id + 1,
            next_number,
            len(mapping),
        )
        self.target.max_id = next_number
        return RemapTable(mapping)


__all__ = ["IdentifierRemapper", "RemapTable"]

from __future__ import annotations

import pytest

from pdfweave.core.objects import (
    PAGE,
    PAGES,
    Document,
    Name,
    Reference,
    Stream,
    iter_references,
    rewrite_references,
)
from pdfweave.exceptions import DocumentStructureError


def test_rewrite_references_substitutes_nested_references() -> None:
    value = {
        "Kids": [Reference(1), Reference(2)],
        "Resources": {"XObject": {"Im0": Reference(3)}},
        "Content": Stream({"Font": Reference(1)}, b"BT ET"),
    }

    rewritten = rewrite_references(value, lambda ref: Reference(ref.obj_id + 10))

    assert rewritten["Kids"] == [Reference(11), Reference(12)]
    assert rewritten["Resources"]["XObject"]["Im0"] == Reference(13)
    assert rewritten["Content"].dictionary["Font"] == Reference(11)
    assert rewritten["Content"].data == b"BT ET"
    # the input is left untouched
    assert value["Kids"] == [Reference(1), Reference(2)]
    assert rewritten["Kids"] is not value["Kids"]


def test_rewrite_references_leaves_scalars_alone() -> None:
    for scalar in (None, True, 3, 1.5, "text", b"\x00\x01", Name("Page")):
        assert rewrite_references(scalar, lambda ref: None) == scalar


def test_iter_references_walks_stream_dictionaries() -> None:
    value = [Stream({"Resources": Reference(4)}, b""), {"A": [Reference(5, 2)]}]

    assert [ref.id for ref in iter_references(value)] == [(4, 0), (5, 2)]


def test_add_object_mints_identifier_above_max_id() -> None:
    document = Document(objects={(7, 0): 1})

    assert document.max_id == 7
    reference = document.add_object("value")

    assert reference == Reference(8, 0)
    assert document.max_id == 8
    assert document.resolve(reference) == "value"


def test_resolve_follows_chains_and_tolerates_missing_targets() -> None:
    document = Document(objects={(1, 0): Reference(2), (2, 0): 42, (3, 0): Reference(3)})

    assert document.resolve(Reference(1)) == 42
    assert document.resolve(Reference(99)) is None
    assert document.resolve(Reference(3)) is None


def test_page_entries_follow_document_order_in_nested_trees(document_factory, page_labels) -> None:
    document = document_factory(5, group_size=2)

    entries = list(document.iter_page_entries())

    assert page_labels(document) == ["p1", "p2", "p3", "p4", "p5"]
    assert document.page_count == 5
    root_id = document.pages_root_id()
    assert all(entry.ancestors[0] == root_id for entry in entries)
    assert all(len(entry.ancestors) == 2 for entry in entries)


def test_page_tree_tolerates_cycles(document_factory) -> None:
    document = document_factory(2)
    root = document.pages_root()
    root["Kids"].append(Reference.to(document.pages_root_id()))

    assert document.page_count == 2


def test_missing_catalog_raises() -> None:
    document = Document(objects={(1, 0): {"Type": PAGES, "Kids": [], "Count": 0}})

    with pytest.raises(DocumentStructureError):
        document.catalog()


def test_missing_page_tree_raises() -> None:
    document = Document(objects={(1, 0): {"Type": Name("Catalog")}}, trailer={"Root": Reference(1)})

    with pytest.raises(DocumentStructureError):
        document.pages_root_id()


def test_copy_shares_no_mutable_state(document_factory) -> None:
    document = document_factory(2)
    duplicate = document.copy()

    duplicate.pages_root()["Kids"].pop()
    duplicate.objects.clear()

    assert document.page_count == 2
    assert duplicate.max_id == document.max_id


def test_dangling_references_are_reported() -> None:
    document = Document(
        objects={(1, 0): {"Type": PAGE, "Parent": Reference(2)}, (2, 0): {"Kids": [Reference(1), Reference(9)]}}
    )

    assert document.dangling_references() == [((2, 0), Reference(9))]


def test_page_tree_root_must_be_a_dictionary() -> None:
    document = Document(
        objects={(1, 0): {"Type": Name("Catalog"), "Pages": Reference(2)}, (2, 0): 7},
        trailer={"Root": Reference(1)},
    )

    with pytest.raises(DocumentStructureError):
        document.pages_root()

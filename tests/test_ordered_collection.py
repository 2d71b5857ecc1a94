import pytest

from pdfmerge.core.errors import InvalidPermutation
from pdfmerge.services.merge_engine import SourceDocument
from pdfmerge.services.ordered_collection import OrderedCollection, move_permutation


def _docs(*names):
    return [SourceDocument(name=name, content=name.encode()) for name in names]


def _by_name(left, right):
    return (left.name > right.name) - (left.name < right.name)


def test_move_forward_shifts_others_back():
    docs = _docs("a", "b", "c", "d")
    moved = OrderedCollection(docs).move(0, 2)
    assert [d.name for d in moved] == ["b", "c", "a", "d"]


def test_move_backward_shifts_others_forward():
    docs = _docs("a", "b", "c", "d")
    moved = OrderedCollection(docs).move(3, 1)
    assert [d.name for d in moved] == ["a", "d", "b", "c"]


@pytest.mark.parametrize("old_index,new_index", [(0, 3), (3, 0), (1, 2), (2, 2)])
def test_move_then_move_back_restores_order(old_index, new_index):
    collection = OrderedCollection(_docs("a", "b", "c", "d"))
    restored = collection.move(old_index, new_index).move(new_index, old_index)
    assert restored.items == collection.items


def test_move_preserves_identity_and_multiset():
    docs = _docs("a", "b", "c")
    moved = OrderedCollection(docs).move(2, 0)
    assert {id(d) for d in moved} == {id(d) for d in docs}
    assert moved[0] is docs[2]


def test_operations_return_new_collection():
    collection = OrderedCollection(_docs("a", "b"))
    moved = collection.move(0, 1)
    assert moved is not collection
    assert [d.name for d in collection] == ["a", "b"]


def test_replace_order_applies_permutation():
    docs = _docs("a", "b", "c")
    result = OrderedCollection(docs).replace_order([2, 0, 1])
    assert [d.name for d in result] == ["c", "a", "b"]


@pytest.mark.parametrize(
    "order",
    [[0, 1], [0, 1, 1], [0, 1, 3], [-1, 0, 1], [0, 1, 2, 3], [0.0, 1, 2], [True, 0, 2]],
)
def test_replace_order_rejects_non_bijections(order):
    collection = OrderedCollection(_docs("a", "b", "c"))
    with pytest.raises(InvalidPermutation):
        collection.replace_order(order)
    assert [d.name for d in collection] == ["a", "b", "c"]


@pytest.mark.parametrize("old_index,new_index", [(3, 0), (0, 3), (-1, 0)])
def test_move_rejects_out_of_range(old_index, new_index):
    with pytest.raises(InvalidPermutation):
        OrderedCollection(_docs("a", "b", "c")).move(old_index, new_index)


def test_move_permutation():
    assert move_permutation(5, 1, 3) == [0, 2, 3, 1, 4]


def test_duplicate_object_rejected_but_duplicate_names_allowed():
    doc = SourceDocument(name="same.pdf", content=b"x")
    with pytest.raises(ValueError):
        OrderedCollection([doc, doc])

    twins = OrderedCollection(_docs("same.pdf", "same.pdf"))
    assert len(twins) == 2


def test_sorted_by_is_stable_for_ties():
    first, second, third = _docs("b", "a", "b")
    result = OrderedCollection([first, second, third]).sorted_by(_by_name)
    assert list(result) == [second, first, third]


def test_sorted_by_is_idempotent():
    collection = OrderedCollection(_docs("c", "a", "b", "a"))
    once = collection.sorted_by(_by_name)
    twice = once.sorted_by(_by_name)
    assert twice.items == once.items


def test_empty_collection():
    collection = OrderedCollection()
    assert len(collection) == 0
    assert not collection
    assert collection.replace_order([]).items == ()


def test_read_accessors():
    docs = [SourceDocument(name="a.pdf", content=b"123"), SourceDocument(name="b.pdf", content=b"45")]
    collection = OrderedCollection(docs).move(1, 0)
    assert collection.names == ["b.pdf", "a.pdf"]
    assert collection.documents == (docs[1], docs[0])
    assert collection.total_bytes == 5

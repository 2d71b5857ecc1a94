from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, Generic, Iterable, Iterator, List, Sequence, Tuple, TypeVar

from pdfmerge.core.errors import InvalidPermutation

T = TypeVar("T")

Comparator = Callable[[T, T], int]


class OrderedCollection(Generic[T]):
    """
    تسلسل ثابت من العناصر يكون فيه الموضع هو إشارة الترتيب الوحيدة.

    لا توجد أي عملية تعديل في المكان: كل إعادة ترتيب أو فرز تعيد مجموعة جديدة،
    لذلك يرى أي قارئ دائمًا لقطة كاملة ومتسقة.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T] = ()) -> None:
        snapshot = tuple(items)
        if len({id(item) for item in snapshot}) != len(snapshot):
            raise ValueError("لا يمكن أن يظهر العنصر نفسه أكثر من مرة في المجموعة.")
        self._items: Tuple[T, ...] = snapshot

    # ------------------------------------------------------------------
    # القراءة
    # ------------------------------------------------------------------
    @property
    def items(self) -> Tuple[T, ...]:
        return self._items

    @property
    def documents(self) -> Tuple[T, ...]:
        return self._items

    @property
    def names(self) -> List[str]:
        """أسماء العناصر بترتيبها الحالي (للعناصر التي تحمل الخاصية name)."""
        return [item.name for item in self._items]

    @property
    def total_bytes(self) -> int:
        return sum(item.size_bytes for item in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"OrderedCollection({list(self._items)!r})"

    # ------------------------------------------------------------------
    # إعادة الترتيب
    # ------------------------------------------------------------------
    def replace_order(self, new_order: Sequence[int]) -> "OrderedCollection[T]":
        """
        إعادة مجموعة جديدة حيث يكون العنصر في الموضع k هو العنصر الذي كان في new_order[k].

        يجب أن يكون new_order تبديلًا (bijection) على مجموعة الفهارس الحالية.
        """
        size = len(self._items)
        order = list(new_order)

        if len(order) != size:
            raise InvalidPermutation(f"طول الترتيب ({len(order)}) لا يطابق عدد العناصر ({size}).")
        if any(isinstance(i, bool) or not isinstance(i, int) for i in order):
            raise InvalidPermutation("يجب أن تكون جميع الفهارس أعدادًا صحيحة.")
        if sorted(order) != list(range(size)):
            raise InvalidPermutation(f"الترتيب {order} ليس تبديلًا صالحًا للفهارس 0..{size - 1}.")

        return OrderedCollection(self._items[i] for i in order)

    def move(self, old_index: int, new_index: int) -> "OrderedCollection[T]":
        """نقل عنصر واحد من old_index إلى new_index مع إزاحة البقية بمقدار خانة واحدة."""
        size = len(self._items)
        for label, value in (("old_index", old_index), ("new_index", new_index)):
            if not 0 <= value < size:
                raise InvalidPermutation(f"{label}={value} خارج النطاق 0..{size - 1}.")

        return self.replace_order(move_permutation(size, old_index, new_index))

    def sorted_by(self, comparator: Comparator) -> "OrderedCollection[T]":
        """فرز مستقر: العناصر المتساوية تحتفظ بترتيبها النسبي."""
        return OrderedCollection(sorted(self._items, key=cmp_to_key(comparator)))


def move_permutation(size: int, old_index: int, new_index: int) -> List[int]:
    order = list(range(size))
    moved = order.pop(old_index)
    order.insert(new_index, moved)
    return order

from __future__ import annotations

import locale
import re
from typing import Callable, Optional, Tuple

from pdfmerge.models.common import SortDirection

_FIRST_DIGITS = re.compile(r"\d+")
_CHUNKS = re.compile(r"(\d+)")


def first_number(name: str) -> Optional[int]:
    """أول سلسلة أرقام متصلة في الاسم كعدد صحيح، أو None إن لم توجد."""
    match = _FIRST_DIGITS.search(name)
    return int(match.group()) if match else None


def _collation_key(name: str) -> Tuple[Tuple[int, object], ...]:
    # digit runs compare as integers and sort before text
    key = []
    for chunk in _CHUNKS.split(name.casefold()):
        if not chunk:
            continue
        if chunk.isdigit():
            key.append((0, int(chunk)))
        else:
            key.append((1, locale.strxfrm(chunk)))
    return tuple(key)


def _three_way(left, right) -> int:
    return (left > right) - (left < right)


def compare(a: str, b: str, direction: SortDirection = SortDirection.ascending) -> int:
    """
    مقارنة اسمي ملفين لفرزهما.

    إن احتوى الاسمان على أرقام تُقارن أول سلسلة أرقام في كل منهما كعدد صحيح
    (page2 قبل page10). وإلا تتم مقارنة نصية غير حساسة لحالة الأحرف ومراعية
    للغة مع ترتيب رقمي للمقاطع الرقمية. الاتجاه التنازلي يعكس الإشارة فقط.
    """
    num_a, num_b = first_number(a), first_number(b)
    if num_a is not None and num_b is not None:
        result = _three_way(num_a, num_b)
    else:
        result = _three_way(_collation_key(a), _collation_key(b))

    if SortDirection(direction) is SortDirection.descending:
        return -result
    return result


def comparator(
    direction: SortDirection = SortDirection.ascending,
    name_of: Callable[[object], str] = lambda item: item.name,
) -> Callable[[object, object], int]:
    """إنشاء دالة مقارنة للعناصر التي تحمل اسمًا (افتراضيًا الخاصية name)."""

    def _cmp(left, right) -> int:
        return compare(name_of(left), name_of(right), direction)

    return _cmp

"""Row lookup, filtering, sorting and slicing behind the generated query fields."""

from functools import cmp_to_key
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .values import MISSING, loose_equals, sort_comparator, strict_equals

Row = Dict[str, Any]


def find_row(
    rows: Sequence[Row],
    row: Optional[int] = None,
    criteria: Iterable[Tuple[str, Any]] = (),
) -> Optional[Row]:
    """Resolve a singular query field.

    ``row`` selects by index and wins over everything else; out-of-range
    indexes give None. Otherwise the first criterion with a value decides:
    the first row whose field loosely equals that value is returned and
    later criteria are ignored.
    """
    if row is not None:
        if 0 <= row < len(rows):
            return rows[row]
        return None

    for source, value in criteria:
        if value is None:
            continue
        for candidate in rows:
            if loose_equals(candidate.get(source, MISSING), value):
                return candidate
        return None
    return None


def select_rows(
    rows: Sequence[Row],
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    sort: Optional[str] = None,
    sort_desc: Optional[str] = None,
) -> List[Row]:
    """Resolve a plural query field.

    ``sort_desc`` orders ascending exactly like ``sort`` and, when both
    are given, is applied last. Offset is applied before limit; zero for
    either means no slicing.
    """
    data = list(rows)
    if sort:
        data = sorted(data, key=cmp_to_key(sort_comparator(sort)))
    if sort_desc:
        # NOTE: ascending on purpose; callers depend on the existing order.
        data = sorted(data, key=cmp_to_key(sort_comparator(sort_desc)))
    if offset:
        data = data[offset:]
    if limit:
        data = data[:limit]
    return data


def find_by_id(rows: Sequence[Row], related_id: Any) -> Optional[Row]:
    """First row whose ``id`` is strictly equal to ``related_id``."""
    for candidate in rows:
        if strict_equals(candidate.get("id", MISSING), related_id):
            return candidate
    return None


def relation_lookup(views: Mapping[str, Sequence[Row]], naming):
    """Build the callback relation fields use to fetch their target row."""
    def lookup(target: str, related_id: Any) -> Optional[Row]:
        rows = views.get(naming.collection_for(target))
        if rows is None:
            return None
        return find_by_id(rows, related_id)

    return lookup

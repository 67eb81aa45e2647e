from typing import Any, Dict, List, Sequence, TypeVar

T = TypeVar("T")


def array_move(items: Sequence[T], old_index: int, new_index: int) -> List[T]:
    """
    Return a copy of ``items`` with the element at ``old_index`` moved to
    ``new_index``. Indices follow list semantics, so negatives count from the end.
    """
    moved = list(items)
    if not moved:
        return moved
    item = moved.pop(old_index)
    moved.insert(new_index, item)
    return moved


def _item_id(item: Any) -> str:
    if isinstance(item, dict):
        return item["id"]
    return item.id


def build_reorder_payload(items: Sequence[Any]) -> List[Dict[str, Any]]:
    """Full reorder set for the API: each item's order is its list position."""
    return [{"id": _item_id(item), "order": index} for index, item in enumerate(items)]

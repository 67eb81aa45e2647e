import pytest

from neropage.client.reorder import array_move, build_reorder_payload


def test_move_forward():
    assert array_move(["a", "b", "c", "d"], 0, 2) == ["b", "c", "a", "d"]


def test_move_backward():
    assert array_move(["a", "b", "c", "d"], 3, 1) == ["a", "d", "b", "c"]


def test_move_to_same_index_is_a_copy():
    items = ["a", "b"]
    moved = array_move(items, 1, 1)
    assert moved == items
    assert moved is not items


def test_original_is_untouched():
    items = ["a", "b", "c"]
    array_move(items, 0, 2)
    assert items == ["a", "b", "c"]


def test_empty_list():
    assert array_move([], 0, 0) == []


def test_out_of_range_source_raises():
    with pytest.raises(IndexError):
        array_move(["a"], 3, 0)


def test_payload_uses_list_position_as_order():
    items = [{"id": "c", "order": 7}, {"id": "a", "order": 0}]
    assert build_reorder_payload(items) == [{"id": "c", "order": 0}, {"id": "a", "order": 1}]


def test_payload_accepts_models():
    class Link:
        def __init__(self, id):
            self.id = id

    assert build_reorder_payload([Link("x"), Link("y")]) == [{"id": "x", "order": 0}, {"id": "y", "order": 1}]

from datetime import date, datetime

import pytest

from truck_loads.app.context import FilterState
from truck_loads.app.load_store import LoadNotFoundError, LoadStore
from truck_loads.app.models import LoadCategory

from tests.helpers import make_load

JAN_1 = date(2025, 1, 1)
JAN_2 = date(2025, 1, 2)
JAN_3 = date(2025, 1, 3)


def test_next_load_number_on_empty_store_is_one():
    store = LoadStore()
    assert store.next_load_number(JAN_1) == 1
    assert store.next_load_number(date(1999, 12, 31)) == 1


def test_next_load_number_is_one_past_the_highest_that_day():
    store = LoadStore([make_load(JAN_1, 1), make_load(JAN_1, 3)])
    assert store.next_load_number(JAN_1) == 4


def test_next_load_number_ignores_other_days():
    store = LoadStore([make_load(JAN_1, 7), make_load(JAN_3, 2)])
    assert store.next_load_number(JAN_2) == 1
    assert store.next_load_number(JAN_3) == 3


def test_next_load_number_compares_calendar_days():
    store = LoadStore([make_load(JAN_1, 2)])
    assert store.next_load_number(datetime(2025, 1, 1, 23, 59)) == 3


def test_next_load_number_has_no_side_effects():
    store = LoadStore([make_load(JAN_1, 1)])
    store.next_load_number(JAN_1)
    store.next_load_number(JAN_1)
    assert len(store) == 1


def test_new_load_is_numbered_but_not_stored():
    store = LoadStore([make_load(JAN_1, 1), make_load(JAN_1, 2)])
    draft = store.new_load(date=JAN_1, truck_number="TRK9")
    assert draft.load_number == 3
    assert draft.category is LoadCategory.TANKER
    assert len(store) == 2


def test_new_load_keeps_an_explicit_number():
    store = LoadStore([make_load(JAN_1, 1)])
    assert store.new_load(date=JAN_1, load_number=10).load_number == 10


def test_append_keeps_insertion_order_and_allows_duplicates():
    store = LoadStore()
    first = store.append(make_load(JAN_2, 1))
    second = store.append(make_load(JAN_1, 1))
    third = store.append(make_load(JAN_2, 1))
    assert store.loads == (first, second, third)
    assert store.next_load_number(JAN_2) == 2


def test_filter_by_date_range_is_inclusive_and_ordered():
    loads = [
        make_load(JAN_3, 1, origin="a"),
        make_load(JAN_1, 1, origin="b"),
        make_load(date(2024, 12, 31), 1, origin="c"),
        make_load(JAN_2, 1, origin="d"),
        make_load(JAN_1, 2, origin="e"),
    ]
    store = LoadStore(loads)
    result = store.filter_by_date_range(JAN_1, JAN_2)
    assert [load.origin for load in result] == ["b", "d", "e"]
    assert all(JAN_1 <= load.date <= JAN_2 for load in result)


def test_filter_disabled_returns_everything():
    loads = [make_load(JAN_3, 1), make_load(JAN_1, 1)]
    store = LoadStore(loads)
    assert store.filter_by_date_range(JAN_2, JAN_2, enabled=False) == loads


def test_filter_with_start_after_end_is_empty():
    store = LoadStore([make_load(JAN_1, 1), make_load(JAN_2, 1)])
    assert store.filter_by_date_range(JAN_2, JAN_1) == []


def test_filtered_uses_filter_state():
    loads = [make_load(JAN_1, 1), make_load(JAN_3, 1)]
    store = LoadStore(loads)
    assert store.filtered(FilterState()) == loads
    assert store.filtered(FilterState(enabled=True, start=JAN_2, end=JAN_3)) == [loads[1]]
    # Enabled without both bounds behaves like no filter.
    assert store.filtered(FilterState(enabled=True, start=JAN_2)) == loads


def test_delete_from_filtered_view_removes_exactly_one():
    loads = [
        make_load(JAN_1, 1, origin="a"),
        make_load(JAN_2, 1, origin="b"),
        make_load(JAN_1, 2, origin="c"),
        make_load(JAN_2, 2, origin="d"),
    ]
    store = LoadStore(loads)
    view = store.filter_by_date_range(JAN_2, JAN_2)
    removed = store.delete_at({1}, view=view)
    assert [load.origin for load in removed] == ["d"]
    assert [load.origin for load in store] == ["a", "b", "c"]


def test_delete_several_positions_without_view():
    store = LoadStore([make_load(JAN_1, n, origin=str(n)) for n in range(1, 6)])
    store.delete_at([0, 3])
    assert [load.origin for load in store] == ["2", "3", "5"]


def test_delete_out_of_range_raises_and_removes_nothing():
    store = LoadStore([make_load(JAN_1, 1), make_load(JAN_1, 2)])
    with pytest.raises(LoadNotFoundError) as info:
        store.delete_at({0, 5})
    assert info.value.index == 5
    assert len(store) == 2

    with pytest.raises(LoadNotFoundError):
        store.delete_at({-1})


def test_delete_with_stale_view_raises():
    store = LoadStore([make_load(JAN_1, 1), make_load(JAN_1, 2)])
    view = list(store)
    store.delete_at({0}, view=view)
    with pytest.raises(LoadNotFoundError):
        store.delete_at({0}, view=view)
    assert len(store) == 1


def test_delete_error_is_a_lookup_error():
    with pytest.raises(LookupError):
        LoadStore().delete_at({0})


def test_update_edits_in_place_without_renumbering():
    first = make_load(JAN_1, 1)
    second = make_load(JAN_1, 2)
    store = LoadStore([first, second])
    updated = store.update(second.id, load_number=1, notes="moved", date=datetime(2025, 1, 2, 8, 30))
    assert updated is second
    assert second.load_number == 1
    assert second.notes == "moved"
    assert second.date == JAN_2
    assert store.next_load_number(JAN_1) == 2


def test_update_rejects_unknown_fields_and_bad_values():
    load = make_load(JAN_1, 1, weight=500)
    store = LoadStore([load])
    with pytest.raises(ValueError):
        store.update(load.id, colour="red")
    with pytest.raises(ValueError):
        store.update(load.id, weight=-1, notes="changed")
    assert load.weight == 500
    assert load.notes == ""


def test_update_accepts_category_label():
    load = make_load(JAN_1, 1)
    store = LoadStore([load])
    store.update(load.id, category="hazmat/adr loads")
    assert load.category is LoadCategory.HAZMAT


def test_get_unknown_id_raises():
    with pytest.raises(LoadNotFoundError) as info:
        LoadStore().get("missing")
    assert info.value.load_id == "missing"

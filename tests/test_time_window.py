from __future__ import annotations

from chartseries.model.policies import SeriesKind, TimeWindowPolicy, build_policy
from chartseries.model.store import SeriesStore


def test_sliding_window_evicts_oldest_entries() -> None:
    store = SeriesStore(policy=TimeWindowPolicy(maximum_time_entries=3))
    for idx in range(5):
        store.insert([str(idx), str(idx * 10)])

    assert store.export_all() == [(2.0, 20.0), (3.0, 30.0), (4.0, 40.0)]


def test_time_window_keeps_arrival_order() -> None:
    store = SeriesStore(policy=TimeWindowPolicy(maximum_time_entries=10))
    store.set_elements("5,1,2,2,9,3")

    assert store.export_all() == [(5.0, 1.0), (2.0, 2.0), (9.0, 3.0)]


def test_grow_mode_appends_placeholder_instead_of_evicting() -> None:
    store = SeriesStore(policy=TimeWindowPolicy(maximum_time_entries=2, window_mode="grow"))
    for row in (["0", "1"], ["1", "2"], ["2", "3"]):
        store.insert(row)

    assert store.export_all() == [(0.0, 1.0), (1.0, 2.0), (2, 0.0), (2.0, 3.0)]
    assert len(store) == 4


def test_insert_time_entry_on_point_store_keeps_sorted_window() -> None:
    store = SeriesStore(policy=build_policy(SeriesKind.LINE, maximum_time_entries=2))
    store.insert_time_entry(["5", "1"])
    store.insert_time_entry(["1", "2"])
    store.insert_time_entry(["3", "3"])
    store.insert_time_entry(["bad", "3"])

    assert store.export_all() == [(3.0, 3.0), (5.0, 1.0)]


def test_mixed_time_entries_and_inserts_keep_point_store_sorted() -> None:
    store = SeriesStore(policy=build_policy(SeriesKind.SCATTER, maximum_time_entries=4))
    calls = [
        ("time", ["5", "1"]),
        ("time", ["1", "2"]),
        ("insert", ["3", "3"]),
        ("time", ["0", "4"]),
        ("insert", ["4", "5"]),
        ("time", ["2", "6"]),
        ("insert", ["1", "7"]),
    ]
    for method, row in calls:
        if method == "time":
            store.insert_time_entry(row)
        else:
            store.insert(row)
        positions = [position for position, _ in store.export_all()]
        assert positions == sorted(positions)

    assert len(store) == 5


def test_grow_mode_on_point_store_inserts_placeholder_in_order() -> None:
    store = SeriesStore(
        policy=build_policy(SeriesKind.LINE, maximum_time_entries=1, window_mode="grow")
    )
    store.insert_time_entry(["5", "1"])
    store.insert_time_entry(["2", "2"])

    assert store.export_all() == [(1, 0.0), (2.0, 2.0), (5.0, 1.0)]

from netstar.graph.node_map import NameMap


def test_assign_first_seen_gets_next_id():
    names = NameMap()
    assert names.assign("b") == 0
    assert names.assign("a") == 1
    assert names.assign("b") == 0
    assert names.assign("c") == 2
    assert len(names) == 3


def test_lookups_both_ways():
    names = NameMap.from_names(["x", "y", "x", "z"])
    assert names.index_of("y") == 1
    assert names.name_of(2) == "z"
    assert names.to_index == {"x": 0, "y": 1, "z": 2}
    assert names.to_name == {0: "x", 1: "y", 2: "z"}


def test_misses_return_none():
    names = NameMap.from_names(["x"])
    assert names.index_of("missing") is None
    assert names.name_of(1) is None
    assert names.name_of(-1) is None


def test_contains():
    names = NameMap.from_names([("tuple", 1), 7])
    assert ("tuple", 1) in names
    assert 7 in names
    assert "7" not in names

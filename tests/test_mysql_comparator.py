import pytest

from cdcorder.core.exceptions import InvalidPositionError
from cdcorder.ordering.comparators.mysql import GtidSet, binlog_index, binlog_position_at_or_before


def test_binlog_index_uses_numeric_extension():
    assert binlog_index("mysql-bin.000003") == 3
    assert binlog_index("other-name.000010") == 10
    with pytest.raises(InvalidPositionError):
        binlog_index("mysql-bin")


def test_earlier_file_is_before_regardless_of_pos():
    assert binlog_position_at_or_before(
        {"file": "mysql-bin.000003", "pos": 90000},
        {"file": "mysql-bin.000004", "pos": 4},
    )
    assert not binlog_position_at_or_before(
        {"file": "mysql-bin.000004", "pos": 4},
        {"file": "mysql-bin.000003", "pos": 90000},
    )


def test_same_file_compares_pos_then_event_then_row():
    base = {"file": "mysql-bin.000003", "pos": 154}
    assert binlog_position_at_or_before(base, {**base, "pos": 155})
    assert not binlog_position_at_or_before({**base, "pos": 155}, base)
    assert binlog_position_at_or_before({**base, "event": 1}, {**base, "event": 2})
    assert not binlog_position_at_or_before({**base, "event": 2, "row": 0}, {**base, "event": 1, "row": 9})
    assert binlog_position_at_or_before({**base, "event": 1, "row": 3}, {**base, "event": 1, "row": 3})
    assert not binlog_position_at_or_before({**base, "row": 4}, {**base, "row": 3})


def test_missing_file_is_invalid():
    with pytest.raises(InvalidPositionError, match="file"):
        binlog_position_at_or_before({"pos": 4}, {"file": "mysql-bin.000001", "pos": 4})


def test_gtid_set_parsing_merges_ranges():
    gtids = GtidSet.parse("3E11FA47-71CA-11E1-9E33-C80AA9429562:1-5:6-9, abc:3")
    assert gtids.intervals == {
        "3e11fa47-71ca-11e1-9e33-c80aa9429562": ((1, 9),),
        "abc": ((3, 3),),
    }


def test_gtid_containment_decides_order():
    smaller = {"gtids": "uuid-a:1-5", "file": "mysql-bin.000009", "pos": 1}
    larger = {"gtids": "uuid-a:1-8,uuid-b:1-2", "file": "mysql-bin.000001", "pos": 1}
    assert binlog_position_at_or_before(smaller, larger)
    assert not binlog_position_at_or_before(larger, smaller)


def test_disjoint_gtid_sets_are_not_ordered():
    p1 = {"gtids": "uuid-a:1-5"}
    p2 = {"gtids": "uuid-b:1-5"}
    assert not binlog_position_at_or_before(p1, p2)
    assert not binlog_position_at_or_before(p2, p1)


def test_equal_gtid_sets_fall_through_to_counters():
    p1 = {"gtids": "uuid-a:1-5", "event": 1, "row": 0}
    p2 = {"gtids": "uuid-a:1-3:4-5", "event": 2, "row": 0}
    assert binlog_position_at_or_before(p1, p2)
    assert not binlog_position_at_or_before(p2, p1)


def test_gtids_on_one_side_only_use_binlog_coordinates():
    p1 = {"gtids": "uuid-a:1-5", "file": "mysql-bin.000002", "pos": 10}
    p2 = {"file": "mysql-bin.000002", "pos": 20}
    assert binlog_position_at_or_before(p1, p2)


def test_malformed_gtid_is_invalid():
    with pytest.raises(InvalidPositionError):
        GtidSet.parse("uuid-a:one-five")
    with pytest.raises(InvalidPositionError):
        GtidSet.parse("uuid-a")


def test_non_text_gtids_are_invalid():
    with pytest.raises(InvalidPositionError, match="GTID set must be text"):
        binlog_position_at_or_before({"gtids": 5}, {"gtids": "uuid-a:1-5"})


def test_missing_pos_counts_as_zero():
    assert binlog_position_at_or_before({"file": "mysql-bin.000002"}, {"file": "mysql-bin.000002", "pos": 0})
    assert binlog_position_at_or_before({"file": "mysql-bin.000002", "pos": 0}, {"file": "mysql-bin.000002"})
    assert not binlog_position_at_or_before({"file": "mysql-bin.000002", "pos": 4}, {"file": "mysql-bin.000002"})

"""
Example: ordering recorded change-event positions.

Shows the default similar-fields policy, a source-specific policy from the
comparator registry and a caller-supplied comparator.
"""

from cdcorder import DEFAULT_POLICY, HistoryRecord, PositionOrderingPolicy
from cdcorder.bootstrap import load_builtin_comparators
from cdcorder.core.logger import configure_root_logger
from cdcorder.ordering.registry import policy_for
from cdcorder.recovery import find_regressions, records_up_to

configure_root_logger("DEBUG")
load_builtin_comparators()


# =============================================================================
# Example 1: default policy, positions compared on shared fields only
# =============================================================================
older = HistoryRecord.of({"server": "inventory"}, {"lsn": 5})
newer = HistoryRecord.of({"server": "inventory"}, {"lsn": 5, "txId": 564})

print(f"older at or before newer: {DEFAULT_POLICY.is_at_or_before(older, newer)}")   # True
print(f"newer at or before older: {DEFAULT_POLICY.is_at_or_before(newer, older)}")   # True


# =============================================================================
# Example 2: MySQL binlog coordinates through the registry
# =============================================================================
mysql = policy_for("mysql")
first = HistoryRecord.of({"server": "inventory"}, {"file": "mysql-bin.000003", "pos": 90000})
second = HistoryRecord.of({"server": "inventory"}, {"file": "mysql-bin.000004", "pos": 4})

print(f"binlog 3 before binlog 4: {mysql.is_at_or_before(first, second)}")          # True
print(f"binlog 4 before binlog 3: {mysql.is_at_or_before(second, first)}")          # False (traced)


# =============================================================================
# Example 3: custom comparator, recovery and regression checks
# =============================================================================
by_seq = PositionOrderingPolicy.using_positions(lambda p1, p2: p1["seq"] <= p2["seq"])
history = [
    HistoryRecord.of({"db": "A"}, {"seq": 1}, ddl="CREATE TABLE t (id INT)"),
    HistoryRecord.of({"db": "A"}, {"seq": 2}, ddl="ALTER TABLE t ADD c INT"),
    HistoryRecord.of({"db": "A"}, {"seq": 1}, ddl="DROP TABLE t"),
]
stop = HistoryRecord.of({"db": "A"}, {"seq": 1})

print([r.ddl for r in records_up_to(history, stop, by_seq)])
print(f"regressions: {len(find_regressions(history, by_seq))}")                      # 1

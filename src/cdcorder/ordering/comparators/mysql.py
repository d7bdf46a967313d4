"""
MySQL binlog position ordering.

Positions look like::

    {"file": "mysql-bin.000003", "pos": 154, "event": 2, "row": 1,
     "gtids": "3e11fa47-71ca-11e1-9e33-c80aa9429562:1-5"}

When both positions carry a GTID set, containment of the sets decides the
order; otherwise the binlog coordinates do.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple

from cdcorder.core.exceptions import InvalidPositionError
from cdcorder.ordering.comparators.base import both_have, int_field, require_field
from cdcorder.ordering.registry import register_position_comparator

Interval = Tuple[int, int]


@dataclass(frozen=True)
class GtidSet:
    """Parsed GTID set: server UUID mapped to merged, sorted transaction intervals."""

    intervals: Dict[str, Tuple[Interval, ...]]

    @classmethod
    def parse(cls, text: str) -> "GtidSet":
        if not isinstance(text, str):
            raise InvalidPositionError(reason="GTID set must be text", details={"gtids": text})
        ranges: Dict[str, List[Interval]] = {}
        for entry in text.replace("\n", "").split(","):
            entry = entry.strip()
            if not entry:
                continue
            uuid, _, ranges_text = entry.partition(":")
            if not ranges_text:
                raise InvalidPositionError(reason="GTID entry has no transaction range", details={"entry": entry})
            for part in ranges_text.split(":"):
                start, _, end = part.partition("-")
                try:
                    interval = (int(start), int(end or start))
                except ValueError as exc:
                    raise InvalidPositionError(
                        reason="GTID range is not numeric", details={"entry": entry}
                    ) from exc
                ranges.setdefault(uuid.strip().lower(), []).append(interval)
        return cls({uuid: _merge(found) for uuid, found in ranges.items()})

    def is_contained_within(self, other: "GtidSet") -> bool:
        for uuid, intervals in self.intervals.items():
            theirs = other.intervals.get(uuid, ())
            for start, end in intervals:
                if not any(s <= start and end <= e for s, e in theirs):
                    return False
        return True


def _merge(intervals: List[Interval]) -> Tuple[Interval, ...]:
    merged: List[Interval] = []
    for start, end in sorted(intervals):
        if merged and start <= merged[-1][1] + 1:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return tuple(merged)


def binlog_index(filename: str) -> int:
    """Numeric extension of a binlog file name, e.g. 3 for ``mysql-bin.000003``."""
    _, _, extension = str(filename).rpartition(".")
    if not extension.isdigit():
        raise InvalidPositionError(reason="Binlog file name has no numeric extension", details={"file": filename})
    return int(extension)


def _counters(position: Mapping[str, Any]) -> Tuple[int, int]:
    return int_field(position, "event"), int_field(position, "row")


@register_position_comparator(source_type="mysql")
def binlog_position_at_or_before(recorded: Mapping[str, Any], desired: Mapping[str, Any]) -> bool:
    if both_have(recorded, desired, "gtids"):
        recorded_gtids = GtidSet.parse(recorded["gtids"])
        desired_gtids = GtidSet.parse(desired["gtids"])
        if recorded_gtids != desired_gtids:
            return recorded_gtids.is_contained_within(desired_gtids)
        return _counters(recorded) <= _counters(desired)

    recorded_file = binlog_index(require_field(recorded, "file"))
    desired_file = binlog_index(require_field(desired, "file"))
    if recorded_file != desired_file:
        return recorded_file < desired_file

    recorded_pos = int_field(recorded, "pos")
    desired_pos = int_field(desired, "pos")
    if recorded_pos != desired_pos:
        return recorded_pos < desired_pos

    return _counters(recorded) <= _counters(desired)

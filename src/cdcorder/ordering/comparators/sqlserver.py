"""SQL Server change-table position ordering."""

from __future__ import annotations

from typing import Any, Mapping, Tuple

from cdcorder.core.exceptions import InvalidPositionError
from cdcorder.ordering.comparators.base import both_have, int_field, require_field
from cdcorder.ordering.registry import register_position_comparator


def parse_lsn(value: Any) -> Tuple[int, ...]:
    """Split an LSN such as ``0000002a:00000710:0003`` into its hex parts."""
    parts = str(value).strip().split(":")
    try:
        return tuple(int(part, 16) for part in parts)
    except ValueError as exc:
        raise InvalidPositionError(reason="LSN must be colon-separated hex", details={"lsn": value}) from exc


@register_position_comparator(source_type="sqlserver")
def change_lsn_position_at_or_before(recorded: Mapping[str, Any], desired: Mapping[str, Any]) -> bool:
    recorded_commit = parse_lsn(require_field(recorded, "commit_lsn"))
    desired_commit = parse_lsn(require_field(desired, "commit_lsn"))
    if recorded_commit != desired_commit:
        return recorded_commit < desired_commit

    if both_have(recorded, desired, "change_lsn"):
        recorded_change = parse_lsn(recorded["change_lsn"])
        desired_change = parse_lsn(desired["change_lsn"])
        if recorded_change != desired_change:
            return recorded_change < desired_change

    if both_have(recorded, desired, "event_serial_no"):
        return int_field(recorded, "event_serial_no") <= int_field(desired, "event_serial_no")
    return True

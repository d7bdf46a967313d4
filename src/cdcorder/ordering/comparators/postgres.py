"""PostgreSQL WAL position ordering by log sequence number."""

from __future__ import annotations

from typing import Any, Mapping

from cdcorder.core.exceptions import InvalidPositionError
from cdcorder.ordering.comparators.base import both_have, require_field
from cdcorder.ordering.registry import register_position_comparator


def parse_lsn(value: Any) -> int:
    """Accept an integer LSN or the textual ``XXX/YYY`` form (two hex halves)."""
    if isinstance(value, bool):
        raise InvalidPositionError(reason="LSN must be an integer or 'XXX/YYY' text", details={"lsn": value})
    if isinstance(value, int):
        return value
    text = str(value).strip()
    try:
        if "/" in text:
            high, low = text.split("/", 1)
            return (int(high, 16) << 32) + int(low, 16)
        return int(text)
    except ValueError as exc:
        raise InvalidPositionError(reason="LSN must be an integer or 'XXX/YYY' text", details={"lsn": value}) from exc


@register_position_comparator(source_type="postgres")
def lsn_position_at_or_before(recorded: Mapping[str, Any], desired: Mapping[str, Any]) -> bool:
    recorded_lsn = parse_lsn(require_field(recorded, "lsn"))
    desired_lsn = parse_lsn(require_field(desired, "lsn"))
    if recorded_lsn != desired_lsn:
        return recorded_lsn < desired_lsn
    if both_have(recorded, desired, "lsn_proc"):
        return parse_lsn(recorded["lsn_proc"]) <= parse_lsn(desired["lsn_proc"])
    return True

"""
Helpers built on the ordering policy for recovery and stream resumption.

These work on any iterable of :class:`HistoryRecord`; reading the records
from wherever they are stored is left to the caller.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from cdcorder.core.contracts import HistoryRecord
from cdcorder.core.document import Document
from cdcorder.core.logger import get_logger
from cdcorder.ordering.policy import DEFAULT_POLICY, PositionOrderingPolicy

log = get_logger(__name__)


def records_up_to(
    records: Iterable[HistoryRecord],
    stop: HistoryRecord,
    policy: PositionOrderingPolicy = DEFAULT_POLICY,
) -> Iterator[HistoryRecord]:
    """
    Yield the records that are at or before ``stop``.

    Records from other sources, and records past the stop point, are skipped.
    Used to rebuild state up to a known offset before streaming resumes.
    """
    skipped = 0
    for record in records:
        if policy.is_at_or_before(record, stop):
            yield record
        else:
            skipped += 1
    if skipped:
        log.info(f"Skipped {skipped} record(s) past the stop point {stop.position}")


def find_regressions(
    records: Iterable[HistoryRecord],
    policy: PositionOrderingPolicy = DEFAULT_POLICY,
) -> List[Tuple[HistoryRecord, HistoryRecord]]:
    """
    Return ``(previous, current)`` pairs where ``current`` moved backwards.

    Records are tracked per source, as the policy's source check groups
    them, so interleaved streams from different sources never count as
    regressions against each other.
    """
    latest: List[HistoryRecord] = []
    regressions: List[Tuple[HistoryRecord, HistoryRecord]] = []
    for record in records:
        index = _index_of_source(latest, record.source, policy)
        if index is None:
            latest.append(record)
            continue
        previous = latest[index]
        if not policy.is_at_or_before(previous, record):
            log.warning(f"Position regression in source {record.source}: {previous.position} -> {record.position}")
            regressions.append((previous, record))
        latest[index] = record
    return regressions


def _index_of_source(
    latest: List[HistoryRecord],
    source: Document,
    policy: PositionOrderingPolicy,
) -> Optional[int]:
    for index, seen in enumerate(latest):
        if policy.is_same_source(seen.source, source):
            return index
    return None


def is_resumable(
    committed: HistoryRecord,
    candidate: HistoryRecord,
    policy: PositionOrderingPolicy = DEFAULT_POLICY,
) -> bool:
    """True when a stream may resume at ``candidate`` without losing events after ``committed``."""
    return policy.is_at_or_before(committed, candidate)

"""
Ordering of recorded change events.

A :class:`PositionOrderingPolicy` answers one question: is ``record1`` at the
same or an earlier point in the change stream than ``record2``? The answer is
only ever ``True`` when both records come from the same source; positions of
different sources are never ordered against each other.

Example:
    >>> from cdcorder import DEFAULT_POLICY, HistoryRecord
    >>> r1 = HistoryRecord.of({"server": "db1"}, {"lsn": 5})
    >>> r2 = HistoryRecord.of({"server": "db1"}, {"lsn": 7, "txId": 12})
    >>> DEFAULT_POLICY.is_at_or_before(r1, r2)
    True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol

from cdcorder.core.contracts import HistoryRecord
from cdcorder.core.document import Document
from cdcorder.core.logger import get_logger

SourceComparator = Callable[[Document, Document], bool]
PositionComparator = Callable[[Document, Document], bool]


class TraceSink(Protocol):
    def debug(self, msg: str, *args: Any, **kwargs: Any) -> Any:
        ...


def same_source(source1: Mapping[str, Any], source2: Mapping[str, Any]) -> bool:
    """Structural equality: same keys, same values, same nesting."""
    return Document.of(source1) == Document.of(source2)


def similar_fields_at_or_before(position1: Mapping[str, Any], position2: Mapping[str, Any]) -> bool:
    """Compare only the fields both positions carry; ``<= 0`` means at or before."""
    return Document.of(position1).compare_to_using_similar_fields(position2) <= 0


@dataclass(frozen=True)
class OrderingCheck:
    source_same: bool
    position_ok: bool

    @property
    def at_or_before(self) -> bool:
        return self.source_same and self.position_ok


def _default_sink() -> TraceSink:
    return get_logger(__name__)


@dataclass(frozen=True)
class PositionOrderingPolicy:
    """Decides whether one history record is at or before another.

    Both sub-checks can be replaced, either by passing callables at
    construction or by overriding :meth:`is_same_source` /
    :meth:`is_position_at_or_before` in a subclass. Instances hold no mutable
    state and may be shared between threads.
    """

    source_comparator: SourceComparator = same_source
    position_comparator: PositionComparator = similar_fields_at_or_before
    sink: TraceSink = field(default_factory=_default_sink, compare=False, repr=False)

    @staticmethod
    def using_positions(
        position_comparator: PositionComparator,
        *,
        sink: TraceSink | None = None,
    ) -> "PositionOrderingPolicy":
        """
        Create a policy that requires identical sources but compares positions
        with the supplied function. The result is always a plain
        PositionOrderingPolicy, so source matching keeps its default rule even
        when called through a subclass.

        Args:
            position_comparator: function returning ``True`` when the first
                position is at or before the second.
            sink: optional trace sink; defaults to this module's logger.
        """
        if sink is None:
            return PositionOrderingPolicy(position_comparator=position_comparator)
        return PositionOrderingPolicy(position_comparator=position_comparator, sink=sink)

    def is_at_or_before(self, record1: HistoryRecord, record2: HistoryRecord) -> bool:
        return self.check(record1, record2).at_or_before

    def check(self, record1: HistoryRecord, record2: HistoryRecord) -> OrderingCheck:
        """Run both sub-checks once and trace whichever failed."""
        source_same = self.is_same_source(record1.source, record2.source)
        position_ok = self.is_position_at_or_before(record1.position, record2.position)
        if not source_same:
            self._trace(lambda: f"is_at_or_before: source is not same ({record1.source} != {record2.source})")
        if not position_ok:
            self._trace(lambda: f"is_at_or_before: position is not ok ({record1.position} vs {record2.position})")
        return OrderingCheck(source_same=source_same, position_ok=position_ok)

    def is_same_source(self, source1: Document, source2: Document) -> bool:
        return bool(self.source_comparator(source1, source2))

    def is_position_at_or_before(self, position1: Document, position2: Document) -> bool:
        return bool(self.position_comparator(position1, position2))

    def _trace(self, message: Callable[[], str]) -> None:
        try:
            self.sink.debug(message())
        except Exception:
            # Tracing must never change the outcome of a comparison
            pass


# Requires identical sources and considers only position fields present in both records.
DEFAULT_POLICY = PositionOrderingPolicy()

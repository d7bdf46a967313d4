"""cdcorder.

Ordering of recorded change-data-capture positions.

Decides whether one recorded change event is at or before another from the
same source, with pluggable per-source position comparison (MySQL binlog and
GTID sets, PostgreSQL LSNs, SQL Server change LSNs).
"""

from cdcorder.core.contracts import HistoryRecord
from cdcorder.core.document import Document
from cdcorder.ordering.policy import DEFAULT_POLICY, PositionOrderingPolicy

__version__ = "0.1.0"

using_positions = PositionOrderingPolicy.using_positions

__all__ = [
    "DEFAULT_POLICY",
    "Document",
    "HistoryRecord",
    "PositionOrderingPolicy",
    "using_positions",
]

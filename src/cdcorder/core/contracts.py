from dataclasses import dataclass
from typing import Any, Mapping, Optional

from cdcorder.core.document import Document


@dataclass(frozen=True)
class HistoryRecord:
    """A recorded change event as seen by the ordering policy.

    ``source`` identifies where the change came from (server, database,
    partition...) and ``position`` where it sits in that source's log
    (offset, LSN, binlog coordinates...). Plain mappings are frozen into
    :class:`Document` instances on construction.
    """
    source: Document
    position: Document
    database_name: Optional[str] = None         # Database the change applies to
    ddl: Optional[str] = None                   # Schema change statement, when the record carries one

    def __post_init__(self) -> None:
        object.__setattr__(self, "source", Document.of(self.source))
        object.__setattr__(self, "position", Document.of(self.position))

    @classmethod
    def of(
        cls,
        source: Mapping[str, Any],
        position: Mapping[str, Any],
        **metadata: Any,
    ) -> "HistoryRecord":
        return cls(source=Document.of(source), position=Document.of(position), **metadata)

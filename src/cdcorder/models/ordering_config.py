from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from cdcorder.core.contracts import HistoryRecord

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class OrderingConfig(BaseModel):
    # None selects the default similar-fields comparison
    source_type: Optional[str] = None
    log_level: LogLevel = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("source_type")
    @classmethod
    def _normalize_source_type(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().lower()
        return value or None


class RecordConfig(BaseModel):
    source: Dict[str, Any]
    position: Dict[str, Any]
    database_name: Optional[str] = None
    ddl: Optional[str] = None

    def to_record(self) -> HistoryRecord:
        return HistoryRecord.of(
            self.source,
            self.position,
            database_name=self.database_name,
            ddl=self.ddl,
        )


class CompareConfig(BaseModel):
    """A single "is record1 at or before record2?" question, as read from a config file."""

    ordering: OrderingConfig = Field(default_factory=OrderingConfig)
    record1: RecordConfig
    record2: RecordConfig

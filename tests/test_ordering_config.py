import pytest
from pydantic import ValidationError

from cdcorder.core.document import Document
from cdcorder.models.ordering_config import CompareConfig, OrderingConfig, RecordConfig


def test_ordering_config_defaults():
    cfg = OrderingConfig()
    assert cfg.source_type is None
    assert cfg.log_level == "INFO"


def test_ordering_config_normalizes_values():
    cfg = OrderingConfig(source_type="  MySQL ", log_level="debug")
    assert cfg.source_type == "mysql"
    assert cfg.log_level == "DEBUG"
    assert OrderingConfig(source_type="  ").source_type is None


def test_ordering_config_rejects_unknown_level():
    with pytest.raises(ValidationError):
        OrderingConfig(log_level="TRACE")


def test_record_config_builds_history_record():
    record = RecordConfig(
        source={"server": "inventory"},
        position={"file": "mysql-bin.000003", "pos": 154},
        database_name="shop",
        ddl="CREATE TABLE t (id INT)",
    ).to_record()

    assert isinstance(record.source, Document)
    assert record.position == {"pos": 154, "file": "mysql-bin.000003"}
    assert record.database_name == "shop"
    assert record.ddl == "CREATE TABLE t (id INT)"


def test_compare_config_requires_both_records():
    with pytest.raises(ValidationError):
        CompareConfig.model_validate({"record1": {"source": {}, "position": {}}})


def test_compare_config_default_ordering():
    cfg = CompareConfig.model_validate(
        {
            "record1": {"source": {"db": "A"}, "position": {"lsn": 1}},
            "record2": {"source": {"db": "A"}, "position": {"lsn": 2}},
        }
    )
    assert cfg.ordering.source_type is None

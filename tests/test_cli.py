import json

import pytest
import yaml

from cdcorder.bootstrap import load_builtin_comparators
from cdcorder.cli import cli, main, validate_config
from cdcorder.core.exceptions import ConfigurationError
from cdcorder.ordering.registry import ComparatorRegistryError, PositionComparatorRegistry


def _config(source_type=None, pos1=154, pos2=200, server2="inventory"):
    return {
        "ordering": {"source_type": source_type},
        "record1": {"source": {"server": "inventory"}, "position": {"file": "mysql-bin.000003", "pos": pos1}},
        "record2": {"source": {"server": server2}, "position": {"file": "mysql-bin.000003", "pos": pos2}},
    }


def test_main_with_dict_uses_default_policy():
    result = main(config_dict=_config())
    assert result == {
        "at_or_before": True,
        "source_same": True,
        "position_ok": True,
        "source_type": None,
    }


def test_main_reports_which_check_failed():
    result = main(config_dict=_config(source_type="mysql", pos1=300, server2="billing"))
    assert result["at_or_before"] is False
    assert result["source_same"] is False
    assert result["position_ok"] is False
    assert result["source_type"] == "mysql"


def test_main_with_yaml_file(tmp_path):
    path = tmp_path / "compare.yaml"
    path.write_text(yaml.safe_dump(_config(source_type="mysql")))
    assert main(config_path=str(path))["at_or_before"] is True


def test_main_requires_a_config():
    with pytest.raises(ConfigurationError, match="Either config_path or config_dict"):
        main()


def test_main_rejects_invalid_config():
    with pytest.raises(ConfigurationError, match="Invalid comparison config"):
        main(config_dict={"record1": {"source": {}}})


def test_main_unknown_source_type():
    with pytest.raises(ComparatorRegistryError):
        main(config_dict=_config(source_type="oracle"))


def test_unsupported_config_format(tmp_path):
    path = tmp_path / "compare.toml"
    path.write_text("")
    with pytest.raises(ConfigurationError, match="Unsupported config format"):
        main(config_path=str(path))


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        validate_config(str(tmp_path / "missing.json"))


def test_validate_config(tmp_path):
    path = tmp_path / "compare.json"
    path.write_text(json.dumps(_config(source_type="postgres")))
    assert validate_config(str(path)) is True


def test_cli_compare_exit_codes(tmp_path, capsys):
    ok = tmp_path / "ok.json"
    ok.write_text(json.dumps(_config()))
    with pytest.raises(SystemExit) as exc:
        cli(["compare", str(ok)])
    assert exc.value.code == 0
    assert json.loads(capsys.readouterr().out.strip().splitlines()[-1])["at_or_before"] is True

    later = tmp_path / "later.json"
    later.write_text(json.dumps(_config(pos1=500)))
    with pytest.raises(SystemExit) as exc:
        cli(["compare", str(later)])
    assert exc.value.code == 1

    with pytest.raises(SystemExit) as exc:
        cli(["compare", str(tmp_path / "missing.json")])
    assert exc.value.code == 2


def test_cli_validate_exit_codes(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps(_config(source_type="oracle")))
    with pytest.raises(SystemExit) as exc:
        cli(["validate", str(bad)])
    assert exc.value.code == 2


def test_main_runs_position_comparator_once():
    calls = []

    def counting(p1, p2):
        calls.append((p1, p2))
        return True

    load_builtin_comparators()
    PositionComparatorRegistry.register(source_type="counting", comparator=counting)
    try:
        result = main(config_dict=_config(source_type="counting"))
    finally:
        load_builtin_comparators(reload=True)

    assert result["at_or_before"] is True
    assert len(calls) == 1

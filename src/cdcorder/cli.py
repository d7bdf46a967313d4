"""
Command-line interface and entry points for cdcorder.

Compares two recorded change-event positions described in a JSON or YAML
file, for example::

    ordering:
      source_type: mysql
    record1:
      source: {server: inventory}
      position: {file: mysql-bin.000003, pos: 154}
    record2:
      source: {server: inventory}
      position: {file: mysql-bin.000004, pos: 4}
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from cdcorder.bootstrap import load_builtin_comparators
from cdcorder.core.exceptions import ConfigurationError
from cdcorder.core.logger import configure_root_logger, get_logger, push_connector, reset_connector
from cdcorder.models.ordering_config import CompareConfig
from cdcorder.ordering.registry import PositionComparatorRegistry, policy_for

logger = get_logger(__name__)


def load_config(config_path: str) -> Dict[str, Any]:
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file, "r") as f:
        if config_file.suffix == ".json":
            return json.load(f)
        if config_file.suffix in (".yaml", ".yml"):
            return yaml.safe_load(f) or {}
    raise ConfigurationError(
        f"Unsupported config format: {config_file.suffix}. Use .json or .yaml"
    )


def parse_config(config: Dict[str, Any]) -> CompareConfig:
    try:
        return CompareConfig.model_validate(config)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid comparison config: {exc}") from exc


def main(
    config_path: Optional[str] = None,
    config_dict: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Answer "is record1 at or before record2?" for a comparison config.

    Args:
        config_path: Path to a JSON/YAML comparison config
        config_dict: Comparison config as a dictionary

    Returns:
        Dict with ``at_or_before``, ``source_same``, ``position_ok`` and
        ``source_type``

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigurationError: If the config is missing or invalid
        ComparatorRegistryError: If no comparator is registered for the source type

    Example:
        >>> from cdcorder.cli import main
        >>> main(config_dict={
        ...     "record1": {"source": {"db": "A"}, "position": {"lsn": 5}},
        ...     "record2": {"source": {"db": "A"}, "position": {"lsn": 7}},
        ... })["at_or_before"]
        True
    """
    if config_dict is not None:
        raw = config_dict
    elif config_path:
        raw = load_config(config_path)
        logger.info(f"Loaded config from {config_path}")
    else:
        raise ConfigurationError("Either config_path or config_dict must be provided")

    cfg = parse_config(raw)
    configure_root_logger(cfg.ordering.log_level)
    load_builtin_comparators()

    token = push_connector(cfg.ordering.source_type)
    try:
        policy = policy_for(cfg.ordering.source_type)
        record1 = cfg.record1.to_record()
        record2 = cfg.record2.to_record()

        result = policy.check(record1, record2)
        logger.info(f"record1 at or before record2: {result.at_or_before}")
    finally:
        reset_connector(token)

    return {
        "at_or_before": result.at_or_before,
        "source_same": result.source_same,
        "position_ok": result.position_ok,
        "source_type": cfg.ordering.source_type,
    }


def validate_config(config_path: str) -> bool:
    """
    Validate a comparison config without comparing anything.

    Raises:
        Exception: If the config is invalid or names an unknown source type
    """
    cfg = parse_config(load_config(config_path))
    load_builtin_comparators()
    if cfg.ordering.source_type is not None:
        _ = PositionComparatorRegistry.get(cfg.ordering.source_type)
    logger.info(f"Configuration is valid: {config_path}")
    return True


def cli(argv: Optional[list] = None) -> None:
    """
    Usage:
        cdcorder compare /path/to/config.yaml
        cdcorder validate /path/to/config.yaml

    ``compare`` exits 0 when record1 is at or before record2, 1 when it is
    not and 2 on errors.
    """
    parser = argparse.ArgumentParser(
        prog="cdcorder",
        description="Order recorded change-event positions from the same source"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    compare_parser = subparsers.add_parser("compare", help="Check whether record1 is at or before record2")
    compare_parser.add_argument("config", help="Path to configuration file (JSON or YAML)")
    compare_parser.add_argument("--verbose", "-v", action="store_true", help="Log comparison traces")

    validate_parser = subparsers.add_parser("validate", help="Validate a comparison config")
    validate_parser.add_argument("config", help="Path to configuration file (JSON or YAML)")

    args = parser.parse_args(argv)

    if args.command == "compare":
        try:
            raw = load_config(args.config)
            if args.verbose:
                raw.setdefault("ordering", {})["log_level"] = "DEBUG"
            result = main(config_dict=raw)
        except Exception as e:
            logger.error(f"Comparison failed: {e}")
            sys.exit(2)
        print(json.dumps(result))
        sys.exit(0 if result["at_or_before"] else 1)

    elif args.command == "validate":
        try:
            validate_config(args.config)
        except Exception as e:
            logger.error(f"Validation failed: {e}")
            sys.exit(2)
        sys.exit(0)

    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    cli()

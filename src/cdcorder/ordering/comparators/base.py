from __future__ import annotations

from typing import Any, Mapping

from cdcorder.core.exceptions import InvalidPositionError

_MISSING = object()


def require_field(position: Mapping[str, Any], name: str) -> Any:
    value = position.get(name, _MISSING)
    if value is _MISSING or value is None:
        raise InvalidPositionError(
            reason=f"Position is missing required field {name!r}",
            details={"position": dict(position)},
        )
    return value


def int_field(position: Mapping[str, Any], name: str, default: int = 0) -> int:
    value = position.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidPositionError(
            reason=f"Position field {name!r} is not an integer",
            details={"field": name, "value": value},
        ) from exc


def both_have(position1: Mapping[str, Any], position2: Mapping[str, Any], name: str) -> bool:
    return position1.get(name) is not None and position2.get(name) is not None

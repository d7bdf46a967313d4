from __future__ import annotations

import importlib
import sys
from typing import Iterable


BUILTIN_COMPARATOR_MODULES: tuple[str, ...] = (
    "cdcorder.ordering.comparators.mysql",
    "cdcorder.ordering.comparators.postgres",
    "cdcorder.ordering.comparators.sqlserver",
)


_LOADED = False


def load_builtin_comparators(*, reload: bool = False, modules: Iterable[str] = BUILTIN_COMPARATOR_MODULES) -> None:
    """Import built-in comparator modules so their decorators register them.

    In tests, call with reload=True after clearing the registry to re-run decorators.
    """

    global _LOADED

    if _LOADED and not reload:
        return

    if reload:
        from cdcorder.ordering.registry import PositionComparatorRegistry

        PositionComparatorRegistry.clear()

    for module_name in modules:
        if reload:
            sys.modules.pop(module_name, None)
        importlib.import_module(module_name)

    _LOADED = True

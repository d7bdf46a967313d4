from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Dict, Optional

from cdcorder.ordering.policy import DEFAULT_POLICY, PositionComparator, PositionOrderingPolicy


class ComparatorRegistryError(RuntimeError):
    pass


@dataclass(frozen=True)
class ComparatorRegistration:
    source_type: str
    comparator: PositionComparator


class PositionComparatorRegistry:
    _registry: ClassVar[Dict[str, PositionComparator]] = {}

    @classmethod
    def register(
        cls,
        *,
        source_type: str,
        comparator: PositionComparator,
        overwrite: bool = False,
    ) -> None:
        if not overwrite and source_type in cls._registry:
            existing = cls._registry[source_type]
            raise ComparatorRegistryError(
                f"Position comparator already registered for source_type={source_type!r}: {existing}"
            )
        cls._registry[source_type] = comparator

    @classmethod
    def get(cls, source_type: str) -> PositionComparator:
        try:
            return cls._registry[source_type]
        except KeyError as exc:
            raise ComparatorRegistryError(
                f"No position comparator registered for source_type={source_type!r}"
            ) from exc

    @classmethod
    def try_get(cls, source_type: str) -> Optional[PositionComparator]:
        return cls._registry.get(source_type)

    @classmethod
    def registrations(cls) -> list[ComparatorRegistration]:
        return [ComparatorRegistration(k, v) for k, v in sorted(cls._registry.items())]

    @classmethod
    def clear(cls) -> None:
        cls._registry.clear()


def register_position_comparator(
    *,
    source_type: str,
    overwrite: bool = False,
) -> Callable[[PositionComparator], PositionComparator]:
    def decorator(comparator: PositionComparator) -> PositionComparator:
        PositionComparatorRegistry.register(
            source_type=source_type,
            comparator=comparator,
            overwrite=overwrite,
        )
        return comparator

    return decorator


def policy_for(source_type: Optional[str]) -> PositionOrderingPolicy:
    """Policy for a source type: the default one for ``None``, otherwise the registered comparator."""
    if source_type is None:
        return DEFAULT_POLICY
    return PositionOrderingPolicy.using_positions(PositionComparatorRegistry.get(source_type))

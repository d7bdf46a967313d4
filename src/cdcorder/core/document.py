"""Immutable key-value documents used for record sources and positions."""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Optional


class Document(Mapping[str, Any]):
    """Read-only mapping with structural equality and field-wise ordering.

    Nested mappings are frozen into documents and nested lists into tuples
    when the document is built. Key order is kept for ordering purposes but
    is irrelevant to equality.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        data = dict(fields or {})
        data.update(kwargs)
        self._fields = {str(k): _freeze(v) for k, v in data.items()}

    @classmethod
    def of(cls, value: Optional[Mapping[str, Any]]) -> "Document":
        if isinstance(value, Document):
            return value
        return cls(value)

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Document):
            if self._fields.keys() != other._fields.keys():
                return False
            return all(values_equal(v, other._fields[k]) for k, v in self._fields.items())
        if isinstance(other, Mapping):
            return self == Document(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Document({self._fields!r})"

    def to_dict(self) -> dict:
        return {k: _thaw(v) for k, v in self._fields.items()}

    def compare_to(self, other: Optional[Mapping[str, Any]]) -> int:
        """Compare every field, in this document's key order.

        A field missing from ``other`` makes this document greater; if all of
        this document's fields match, extra fields in ``other`` make it
        greater.
        """
        if other is None:
            return 1
        that = Document.of(other)
        for name, value in self._fields.items():
            if name not in that._fields:
                return 1
            diff = compare_values(value, that._fields[name])
            if diff != 0:
                return diff
        if len(that._fields) > len(self._fields):
            return -1
        return 0

    def compare_to_using_similar_fields(self, other: Optional[Mapping[str, Any]]) -> int:
        """Compare only the fields present in both documents.

        Fields are visited in this document's key order and the first
        non-zero difference is returned. Fields unique to either side are
        ignored, so ``{"lsn": 5}`` and ``{"lsn": 5, "extra": "x"}`` compare
        equal.
        """
        if other is None:
            return 1
        that = Document.of(other)
        for name, value in self._fields.items():
            if name in that._fields:
                diff = compare_values(value, that._fields[name])
                if diff != 0:
                    return diff
        return 0


def compare_values(left: Any, right: Any) -> int:
    """Three-way comparison of two document values.

    ``None`` sorts before everything else, documents compare with
    :meth:`Document.compare_to` and sequences element by element. Values of
    incomparable types raise ``TypeError``; booleans only compare with booleans.
    """
    if left is None or right is None:
        if left is None and right is None:
            return 0
        return -1 if left is None else 1
    if isinstance(left, bool) != isinstance(right, bool):
        raise TypeError(f"Cannot compare {type(left).__name__} with {type(right).__name__}")
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return Document.of(left).compare_to(right)
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        for a, b in zip(left, right):
            diff = compare_values(a, b)
            if diff != 0:
                return diff
        return (len(left) > len(right)) - (len(left) < len(right))
    return (left > right) - (left < right)


def _freeze(value: Any) -> Any:
    if isinstance(value, Document):
        return value
    if isinstance(value, Mapping):
        return Document(value)
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Document):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


def values_equal(left: Any, right: Any) -> bool:
    """Exact equality of frozen values; unlike ``==``, ``True`` never equals ``1``."""
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, tuple) and isinstance(right, tuple):
        return len(left) == len(right) and all(values_equal(a, b) for a, b in zip(left, right))
    return left == right

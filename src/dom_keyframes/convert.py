"""Order-preserving conversions between property mappings and pair lists."""

from typing import Iterable, Mapping, TypeVar

_V = TypeVar("_V")


def mapping_to_pairs(mapping: Mapping[str, _V]) -> tuple[tuple[str, _V], ...]:
    """Convert a mapping into ``(name, value)`` pairs in insertion order."""
    return tuple((name, value) for name, value in mapping.items())


def pairs_to_mapping(pairs: Iterable[tuple[str, _V]]) -> dict[str, _V]:
    """Convert ``(name, value)`` pairs back into a mapping; later pairs win."""
    mapping: dict[str, _V] = {}
    for name, value in pairs:
        mapping[name] = value
    return mapping

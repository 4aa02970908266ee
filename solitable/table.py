"""Open-addressing hash table keyed by 32-bit hashes with quadratic probing."""

from __future__ import annotations

import operator
from typing import Callable, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")

NEVER_OCCUPIED_HASH = 0
REMOVED_HASH = 1
FIRST_VALID_HASH = 2

_MASK32 = 0xFFFFFFFF
_FNV_OFFSET = 0x811C9DC5
_FNV_PRIME = 0x01000193


def next_power_of_two(x: int) -> int:
    """Return the smallest power of two that is at least ``x``."""
    if x <= 0:
        raise ValueError(f"cannot round {x} up to a power of two")
    p = 1
    while x > p:
        p += p
    return p


def _fnv1a(data: bytes) -> int:
    h = _FNV_OFFSET
    for byte in data:
        h ^= byte
        h = (h * _FNV_PRIME) & _MASK32
    return h


def default_hash(key: Hashable) -> int:
    """Return a deterministic 32-bit hash for ``key``."""
    if isinstance(key, int):
        return key & _MASK32
    if isinstance(key, str):
        return _fnv1a(key.encode("utf-8"))
    if isinstance(key, (bytes, bytearray, memoryview)):
        return _fnv1a(bytes(key))
    return hash(key) & _MASK32


class Table(Generic[K, V]):
    """Hash table that allows several entries under the same key.

    Removed slots are marked with a tombstone and reused by later additions;
    the table is rehashed once the number of filled slots reaches the load
    factor.
    """

    SIZE_MIN = 32

    def __init__(
        self,
        cmp_function: Optional[Callable[[K, K], bool]] = None,
        hash_function: Optional[Callable[[K], int]] = None,
        load_factor: int = 70,
        slots_to_allocate: int = 0,
    ) -> None:
        if not 0 < load_factor < 100:
            raise ValueError("load factor must lie strictly between 0 and 100 percent")
        self.cmp_function = cmp_function or operator.eq
        self.hash_function = hash_function or default_hash
        self.load_factor_percent = load_factor
        self.count = 0
        self.slots_filled = 0
        self.add_collisions = 0
        self.find_collisions = 0
        self._hashes: List[int] = []
        self._keys: List[Optional[K]] = []
        self._values: List[Optional[V]] = []
        self._resize(slots_to_allocate or self.SIZE_MIN)

    @property
    def allocated(self) -> int:
        """Number of slots currently allocated."""
        return len(self._hashes)

    def _resize(self, slots: int) -> None:
        n = next_power_of_two(slots)
        self._hashes = [NEVER_OCCUPIED_HASH] * n
        self._keys = [None] * n
        self._values = [None] * n

    def _hash(self, key: K) -> int:
        h = self.hash_function(key) & _MASK32
        if h < FIRST_VALID_HASH:
            h += FIRST_VALID_HASH
        return h

    def _probe(self, h: int) -> Iterator[int]:
        mask = self.allocated - 1
        index = h & mask
        increment = 1
        while True:
            yield index
            index = (index + increment) & mask
            increment += 1

    def _walk(self, h: int) -> Iterator[int]:
        """Yield the occupied or removed slots along the probe sequence of ``h``."""
        for index in self._probe(h):
            if self._hashes[index] == NEVER_OCCUPIED_HASH:
                return
            yield index

    def _find_index(self, key: K) -> Optional[int]:
        h = self._hash(key)
        for index in self._walk(h):
            if self._hashes[index] == h and self.cmp_function(self._keys[index], key):
                return index
            self.find_collisions += 1
        return None

    def _expand(self) -> None:
        old = [
            (k, v)
            for h, k, v in zip(self._hashes, self._keys, self._values)
            if h >= FIRST_VALID_HASH
        ]
        # A table full of tombstones is rehashed at the same size to clear them.
        if (self.count * 2 + 1) * 100 < self.allocated * self.load_factor_percent:
            new_allocated = self.allocated
        else:
            new_allocated = self.allocated * 2
        new_allocated = max(new_allocated, self.SIZE_MIN)

        self._resize(new_allocated)
        self.count = 0
        self.slots_filled = 0
        for key, value in old:
            self.add(key, value)

    def add(self, key: K, value: V) -> V:
        """Add an entry, even if the key is already present, and return the value."""
        if (self.slots_filled + 1) * 100 >= self.allocated * self.load_factor_percent:
            self._expand()

        h = self._hash(key)
        slot_reused = False
        for index in self._probe(h):
            state = self._hashes[index]
            if state == NEVER_OCCUPIED_HASH:
                break
            if state == REMOVED_HASH:
                slot_reused = True
                break
            self.add_collisions += 1

        self.count += 1
        if not slot_reused:
            self.slots_filled += 1

        self._hashes[index] = h
        self._keys[index] = key
        self._values[index] = value
        return value

    def set(self, key: K, value: V) -> V:
        """Replace the value of the first entry with ``key``, or add one."""
        index = self._find_index(key)
        if index is None:
            return self.add(key, value)
        self._values[index] = value
        return value

    def find(self, key: K) -> V:
        """Return the value of the first entry with ``key``; raise KeyError if absent."""
        index = self._find_index(key)
        if index is None:
            raise KeyError(key)
        return self._values[index]  # type: ignore[return-value]

    def find_or_add(self, key: K, default_factory: Optional[Callable[[], V]] = None) -> V:
        """Return the value under ``key``, adding a fresh default when absent."""
        index = self._find_index(key)
        if index is not None:
            return self._values[index]  # type: ignore[return-value]
        value = default_factory() if default_factory is not None else None
        return self.add(key, value)  # type: ignore[arg-type]

    def find_multiple(self, key: K) -> List[V]:
        """Return the values of every entry with ``key`` in probe order."""
        h = self._hash(key)
        results: List[V] = []
        for index in self._walk(h):
            if self._hashes[index] == h and self.cmp_function(self._keys[index], key):
                results.append(self._values[index])  # type: ignore[arg-type]
            else:
                self.find_collisions += 1
        return results

    def remove(self, key: K) -> V:
        """Remove the first entry with ``key`` and return its value."""
        h = self._hash(key)
        for index in self._walk(h):
            if self._hashes[index] == h and self.cmp_function(self._keys[index], key):
                self._hashes[index] = REMOVED_HASH
                self.count -= 1
                value = self._values[index]
                self._keys[index] = None
                self._values[index] = None
                return value  # type: ignore[return-value]
            self.find_collisions += 1
        raise KeyError(key)

    def reset(self) -> None:
        """Drop every entry while keeping the allocated size."""
        self.count = 0
        self.slots_filled = 0
        n = self.allocated
        self._hashes = [NEVER_OCCUPIED_HASH] * n
        self._keys = [None] * n
        self._values = [None] * n

    def __contains__(self, key: object) -> bool:
        return self._find_index(key) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[K]:
        for key, _ in self.items():
            yield key

    def items(self) -> Iterator[Tuple[K, V]]:
        """Yield ``(key, value)`` pairs in slot order."""
        for h, key, value in zip(self._hashes, self._keys, self._values):
            if h >= FIRST_VALID_HASH:
                yield key, value  # type: ignore[misc]
"""Chunked byte builder and a matching little-endian reader."""

from __future__ import annotations

import struct
import sys
from typing import BinaryIO, Optional, Tuple, Union

BUILDER_BUFFER_SIZE = 16384

BytesLike = Union[bytes, bytearray, memoryview]
Position = Tuple[int, int]


def _normalize(fmt: str) -> str:
    """Default struct formats to little-endian, standard sizes."""
    return fmt if fmt[:1] in "<>!=@" else "<" + fmt


class StringBuilder:
    """Collects bytes in fixed-size buffers, adding buffers as needed."""

    def __init__(self) -> None:
        self._buffers = [bytearray()]

    @property
    def _current(self) -> bytearray:
        return self._buffers[-1]

    @property
    def buffer_count(self) -> int:
        """Number of buffers in use."""
        return len(self._buffers)

    def _expand(self) -> None:
        self._buffers.append(bytearray())

    def ensure_contiguous_space(self, size: int) -> bool:
        """Make room for ``size`` bytes in one buffer; False if that cannot fit."""
        if size > BUILDER_BUFFER_SIZE:
            return False
        if BUILDER_BUFFER_SIZE - len(self._current) >= size:
            return True
        self._expand()
        return True

    def append(self, data: BytesLike, backwards: bool = False) -> None:
        """Append bytes, spilling into new buffers.

        With ``backwards`` the part that fits into the current buffer is
        written in reverse order; the remainder is written as is.
        """
        view = memoryview(bytes(data))
        reverse = backwards
        while True:
            space = BUILDER_BUFFER_SIZE - len(self._current)
            if space <= 0:
                self._expand()
                reverse = False
                continue
            chunk = bytes(view[:space])
            if reverse:
                chunk = chunk[::-1]
            self._current.extend(chunk)
            view = view[space:]
            reverse = False
            if not view:
                return

    def put(self, value: Union[int, float, bool], fmt: str) -> None:
        """Write one value packed with the struct format ``fmt``."""
        packed = struct.pack(_normalize(fmt), value)
        if not self.ensure_contiguous_space(len(packed)):
            raise ValueError(f"value of {len(packed)} bytes cannot fit in one buffer")
        self._current.extend(packed)

    def put_string(self, data: Optional[Union[BytesLike, str]]) -> None:
        """Write a 64-bit length followed by the bytes; None writes nothing."""
        if data is None:
            return
        if isinstance(data, str):
            data = data.encode("utf-8")
        payload = bytes(data)
        self.put(len(payload), "q")
        self.append(payload)

    def put_pair(self, old: BytesLike, new: BytesLike) -> None:
        """Write an old and a new value of the same size back to back."""
        self.append(old)
        self.append(new)

    def placeholder(self, fmt: str) -> Position:
        """Reserve room for one value to be filled in later with :meth:`patch`."""
        size = struct.calcsize(_normalize(fmt))
        if not self.ensure_contiguous_space(size):
            raise ValueError(f"placeholder of {size} bytes cannot fit in one buffer")
        position = (len(self._buffers) - 1, len(self._current))
        self._current.extend(bytes(size))
        return position

    def patch(self, position: Position, value: Union[int, float, bool], fmt: str) -> None:
        """Overwrite a value reserved by :meth:`placeholder`."""
        buffer_index, offset = position
        struct.pack_into(_normalize(fmt), self._buffers[buffer_index], offset, value)

    def reset(self) -> None:
        """Discard everything written so far."""
        self._buffers = [bytearray()]

    def to_bytes(self) -> bytes:
        """Return all the bytes written, in order."""
        return b"".join(self._buffers)

    def write_to(self, stream: Optional[BinaryIO] = None) -> int:
        """Write the contents to ``stream`` (standard output by default)."""
        if stream is None:
            stream = sys.stdout.buffer
        written = 0
        for buffer in self._buffers:
            count = stream.write(bytes(buffer))
            written += len(buffer) if count is None else count
        return written

    def __len__(self) -> int:
        return sum(len(buffer) for buffer in self._buffers)


class ByteReader:
    """Reads values back from bytes produced by :class:`StringBuilder`."""

    def __init__(self, data: BytesLike) -> None:
        self._data = memoryview(bytes(data))
        self._pos = 0

    def __len__(self) -> int:
        return len(self._data) - self._pos

    def __bool__(self) -> bool:
        return len(self) > 0

    def _check(self, count: int) -> None:
        if count < 0:
            raise ValueError(f"cannot read a negative number of bytes ({count})")
        if count > len(self):
            raise ValueError(f"need {count} bytes but only {len(self)} remain")

    def get(self, fmt: str) -> Union[int, float, bool]:
        """Read one value packed with the struct format ``fmt``."""
        fmt = _normalize(fmt)
        size = struct.calcsize(fmt)
        self._check(size)
        (value,) = struct.unpack_from(fmt, self._data, self._pos)
        self._pos += size
        return value

    def consume(self, count: int) -> bytes:
        """Read and return ``count`` bytes."""
        self._check(count)
        result = bytes(self._data[self._pos:self._pos + count])
        self._pos += count
        return result

    def advance(self, count: int) -> None:
        """Skip ``count`` bytes."""
        self._check(count)
        self._pos += count

    def get_string(self) -> bytes:
        """Read a length-prefixed byte string."""
        return self.consume(self.get("q"))

    def discard_string(self) -> None:
        """Skip a length-prefixed byte string."""
        self.advance(self.get("q"))
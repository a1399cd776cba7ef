from __future__ import annotations
from typing import Optional, Union

import numpy as np

from .errors import OutOfBounds

MARKER_PREFIX = 0xFF


class ByteCursor:
    """Bounds-checked, read-only view over the bytes of one file.

    Every access outside ``[0, len)`` raises OutOfBounds instead of being
    clamped to the last byte.
    """

    def __init__(self, data: Union[bytes, bytearray, memoryview]):
        self.data = np.frombuffer(bytes(data), dtype=np.uint8)
        # offsets of every 0xFF byte, so the scanner can jump between candidates
        self._prefixes = np.flatnonzero(self.data == MARKER_PREFIX)

    def __len__(self) -> int:
        return int(self.data.size)

    def peek(self, offset: int) -> int:
        if offset < 0 or offset >= len(self):
            raise OutOfBounds(f"Offset {offset} outside of {len(self)} bytes")
        return int(self.data[offset])

    def slice(self, start: int, length: int) -> bytes:
        if start < 0 or length < 0 or start + length > len(self):
            raise OutOfBounds(
                f"Range [{start}, {start + length}) outside of {len(self)} bytes"
            )
        return self.data[start:start + length].tobytes()

    def read_u16(self, offset: int) -> int:
        # big-endian, as every JPEG length and dimension field
        return (self.peek(offset) << 8) | self.peek(offset + 1)

    def next_prefix(self, start: int) -> Optional[int]:
        """Offset of the first 0xFF byte at or after ``start``, or None."""
        idx = int(np.searchsorted(self._prefixes, start))
        if idx >= self._prefixes.size:
            return None
        return int(self._prefixes[idx])

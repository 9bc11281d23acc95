"""
Big-endian fixed-width reads from a byte buffer.

Each reader takes the buffer and an explicit offset and returns the value
together with the offset just past it. Nothing is stored between calls.
"""

import struct

from .errors import OutOfBoundsError

_U2 = struct.Struct(">H")
_U4 = struct.Struct(">I")
_U8 = struct.Struct(">Q")


def _check(buffer, offset: int, width: int):
    if offset < 0 or offset + width > len(buffer):
        raise OutOfBoundsError.for_read(offset, width, len(buffer))


def read_u1(buffer, offset: int) -> tuple[int, int]:
    _check(buffer, offset, 1)
    return buffer[offset], offset + 1


def read_u2(buffer, offset: int) -> tuple[int, int]:
    _check(buffer, offset, 2)
    return _U2.unpack_from(buffer, offset)[0], offset + 2


def read_u4(buffer, offset: int) -> tuple[int, int]:
    _check(buffer, offset, 4)
    return _U4.unpack_from(buffer, offset)[0], offset + 4


def read_u8(buffer, offset: int) -> tuple[int, int]:
    _check(buffer, offset, 8)
    return _U8.unpack_from(buffer, offset)[0], offset + 8


def read_bytes(buffer, offset: int, length: int) -> tuple[bytes, int]:
    """Read ``length`` raw bytes as an immutable copy."""
    _check(buffer, offset, length)
    return bytes(buffer[offset:offset + length]), offset + length

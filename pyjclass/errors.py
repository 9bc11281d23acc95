"""
Errors raised while decoding a class file.

Every error carries the byte offset at which decoding failed, so a caller
can report where a file went wrong without inspecting the message text.
"""

from typing import Optional


class ClassDecodeError(ValueError):
    """Base class for all class file decoding errors."""

    kind = "ClassDecodeError"

    def __init__(self, message: str, offset: int):
        super().__init__(message)
        self.offset = offset

    def __str__(self) -> str:
        return f"{super().__str__()} (at offset {self.offset})"


class BadMagicNumberError(ClassDecodeError):
    """The buffer does not start with 0xCAFEBABE."""

    kind = "BadMagicNumber"

    def __init__(self, magic: int, offset: int = 0):
        super().__init__(f"Invalid class file magic: {magic:#010x}", offset)
        self.magic = magic


class OutOfBoundsError(ClassDecodeError):
    """A read would run past the end of the buffer."""

    kind = "OutOfBounds"

    def __init__(self, message: str, offset: int, width: int = 0, length: int = 0):
        super().__init__(message, offset)
        self.width = width
        self.length = length

    @classmethod
    def for_read(cls, offset: int, width: int, length: int) -> "OutOfBoundsError":
        return cls(
            f"Cannot read {width} byte(s) at offset {offset} from a buffer of {length} byte(s)",
            offset, width, length,
        )


class TruncatedPoolError(OutOfBoundsError):
    """The buffer ended before the declared number of pool entries was read."""

    kind = "TruncatedPool"

    def __init__(self, message: str, offset: int, partial_pool: tuple = (),
                 width: int = 0, length: int = 0):
        super().__init__(message, offset, width, length)
        self.partial_pool = partial_pool


class TruncatedListError(OutOfBoundsError):
    """The buffer ended before a count-prefixed list was complete."""

    kind = "TruncatedList"

    def __init__(self, message: str, offset: int, list_kind: str, index: int,
                 width: int = 0, length: int = 0):
        super().__init__(message, offset, width, length)
        self.list_kind = list_kind
        self.index = index


class UnknownConstantTagError(ClassDecodeError):
    """A constant pool tag byte matches no known entry kind."""

    kind = "UnknownConstantTag"

    def __init__(self, tag: int, offset: int, partial_pool: Optional[tuple] = None):
        super().__init__(f"Unknown constant pool tag: {tag}", offset)
        self.tag = tag
        self.partial_pool = partial_pool if partial_pool is not None else ()


class InvalidEncodingError(ClassDecodeError):
    """A Utf8 constant holds bytes that are not valid text."""

    kind = "InvalidEncoding"

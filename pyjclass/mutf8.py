"""
Modified UTF-8, the text encoding of Utf8 constants.

It differs from standard UTF-8 in two ways: the NUL character is written as
the two bytes C0 80, and characters above U+FFFF are written as a UTF-16
surrogate pair with each surrogate encoded in three bytes. Four-byte forms
and raw zero bytes never appear.
"""

from .errors import InvalidEncodingError


def _continuation(data: bytes, i: int, base: int) -> int:
    if i >= len(data):
        raise InvalidEncodingError("Truncated modified UTF-8 sequence", base + i)
    byte = data[i]
    if byte & 0xC0 != 0x80:
        raise InvalidEncodingError(
            f"Expected continuation byte, got {byte:#04x}", base + i)
    return byte & 0x3F


def _three_byte_unit(data: bytes, i: int, base: int) -> int:
    return ((data[i] & 0x0F) << 12) | (_continuation(data, i + 1, base) << 6) \
        | _continuation(data, i + 2, base)


def decode_mutf8(data: bytes, offset: int = 0) -> str:
    """Decode modified UTF-8 bytes.

    ``offset`` is the position of ``data`` within the enclosing buffer and is
    only used to report where an invalid byte sits.

    Raises:
        InvalidEncodingError: On a zero byte, a byte in 0xF0-0xFF, a stray
            continuation byte, or a truncated sequence.
    """
    result = []
    i = 0
    n = len(data)
    while i < n:
        byte = data[i]
        if byte == 0 or byte >= 0xF0:
            raise InvalidEncodingError(
                f"Byte {byte:#04x} is not allowed in modified UTF-8", offset + i)
        if byte < 0x80:
            result.append(chr(byte))
            i += 1
        elif byte & 0xE0 == 0xC0:
            result.append(chr(((byte & 0x1F) << 6) | _continuation(data, i + 1, offset)))
            i += 2
        elif byte & 0xF0 == 0xE0:
            unit = _three_byte_unit(data, i, offset)
            i += 3
            if 0xD800 <= unit <= 0xDBFF and i + 2 < n and data[i] == 0xED:
                low = _three_byte_unit(data, i, offset)
                if 0xDC00 <= low <= 0xDFFF:
                    result.append(chr(0x10000 + ((unit - 0xD800) << 10) + (low - 0xDC00)))
                    i += 3
                    continue
            # Lone surrogates are kept as-is.
            result.append(chr(unit))
        else:
            raise InvalidEncodingError(
                f"Unexpected continuation byte {byte:#04x}", offset + i)
    return "".join(result)


def decode_utf8(data: bytes, offset: int = 0) -> str:
    """Decode strict standard UTF-8, reporting failures as InvalidEncodingError."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidEncodingError(f"Invalid UTF-8: {e.reason}", offset + e.start) from e

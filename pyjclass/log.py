"""Logger for pyjclass."""

import binascii
import logging

logger = logging.getLogger("pyjclass")


def get_hexdump(data: bytes | bytearray | memoryview, pos: int, window: int = 16) -> str:
    """Return a hex dump of the bytes surrounding ``pos``."""
    start = max(0, pos - window)
    end = min(len(data), pos + window)
    chunk = bytes(data[start:end])

    hex_str = binascii.hexlify(chunk).decode("ascii")
    hex_str = " ".join(hex_str[i:i + 2] for i in range(0, len(hex_str), 2))

    return f"Context around offset {pos} (bytes {start}-{end}):\n{hex_str}"

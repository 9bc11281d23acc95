"""Decoding options."""

from dataclasses import dataclass
from typing import Literal

TextEncoding = Literal["mutf8", "utf-8"]

TEXT_ENCODINGS: tuple[str, ...] = ("mutf8", "utf-8")


@dataclass(frozen=True)
class DecodeOptions:
    """Immutable options threaded through a single decode.

    Attributes:
        text_encoding: How Utf8 constants are decoded. ``"mutf8"`` follows the
            class file's modified UTF-8; ``"utf-8"`` uses strict standard UTF-8.
        wide_constants_take_two_slots: Whether Long and Double constants fill
            the following pool position with an ``UnusableSlot`` marker.
    """

    text_encoding: TextEncoding = "mutf8"
    wide_constants_take_two_slots: bool = True

    def __post_init__(self):
        if self.text_encoding not in TEXT_ENCODINGS:
            raise ValueError(f"Unsupported text encoding: {self.text_encoding!r}")

    @classmethod
    def from_params(
        cls,
        text_encoding: TextEncoding = "mutf8",
        single_slot_wide: bool = False,
    ) -> "DecodeOptions":
        """Build options from command-line style parameters."""
        return cls(
            text_encoding=text_encoding,
            wide_constants_take_two_slots=not single_slot_wide,
        )


DEFAULT_OPTIONS = DecodeOptions()

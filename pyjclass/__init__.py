"""pyjclass - A decoder for Java class files."""

from . import classfile
from .classfile import *
from .classreader import ClassPath, decode_class, decode_files, read_class_file
from .errors import (
    ClassDecodeError, BadMagicNumberError, OutOfBoundsError, TruncatedPoolError,
    TruncatedListError, UnknownConstantTagError, InvalidEncodingError,
)
from .options import DecodeOptions

__version__ = "0.1.0"
__all__ = classfile.__all__ + [
    "decode_class",
    "read_class_file",
    "decode_files",
    "ClassPath",
    "DecodeOptions",
    "ClassDecodeError",
    "BadMagicNumberError",
    "OutOfBoundsError",
    "TruncatedPoolError",
    "TruncatedListError",
    "UnknownConstantTagError",
    "InvalidEncodingError",
]

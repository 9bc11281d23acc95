"""
Constant pool decoding.

``decode_constant`` decodes one entry given its tag; ``decode_constant_pool``
reads tag bytes and loops it until the declared number of pool positions is
filled.
"""

from typing import Callable, Optional

from .classfile import (
    ConstantEntry, ConstantPoolTag, ClassRef, FieldRef, MethodRef,
    InterfaceMethodRef, StringRef, IntegerValue, FloatValue, LongValue,
    DoubleValue, NameAndType, Utf8Value, MethodHandle, MethodType,
    InvokeDynamic, UnusableSlot, WIDE_CONSTANTS,
)
from .errors import OutOfBoundsError, TruncatedPoolError, UnknownConstantTagError
from .log import logger
from .mutf8 import decode_mutf8, decode_utf8
from .options import DecodeOptions, DEFAULT_OPTIONS
from .reader import read_u1, read_u2, read_u4, read_u8, read_bytes

Decoder = Callable[[bytes, int, DecodeOptions], tuple[ConstantEntry, int]]


def _decode_class(b, offset, options):
    name_index, offset = read_u2(b, offset)
    return ClassRef(name_index), offset


def _member_ref(entry_type) -> Decoder:
    def decode(b, offset, options):
        class_index, offset = read_u2(b, offset)
        name_and_type_index, offset = read_u2(b, offset)
        return entry_type(class_index, name_and_type_index), offset
    return decode


def _decode_string(b, offset, options):
    string_index, offset = read_u2(b, offset)
    return StringRef(string_index), offset


def _decode_integer(b, offset, options):
    bits, offset = read_u4(b, offset)
    return IntegerValue(bits), offset


def _decode_float(b, offset, options):
    bits, offset = read_u4(b, offset)
    return FloatValue(bits), offset


def _decode_long(b, offset, options):
    bits, offset = read_u8(b, offset)
    return LongValue(bits), offset


def _decode_double(b, offset, options):
    bits, offset = read_u8(b, offset)
    return DoubleValue(bits), offset


def _decode_name_and_type(b, offset, options):
    name_index, offset = read_u2(b, offset)
    descriptor_index, offset = read_u2(b, offset)
    return NameAndType(name_index, descriptor_index), offset


def _decode_utf8(b, offset, options):
    length, offset = read_u2(b, offset)
    raw, end = read_bytes(b, offset, length)
    if options.text_encoding == "utf-8":
        text = decode_utf8(raw, offset)
    else:
        text = decode_mutf8(raw, offset)
    return Utf8Value(text), end


def _decode_method_handle(b, offset, options):
    reference_kind, offset = read_u1(b, offset)
    reference_index, offset = read_u2(b, offset)
    return MethodHandle(reference_kind, reference_index), offset


def _decode_method_type(b, offset, options):
    descriptor_index, offset = read_u2(b, offset)
    return MethodType(descriptor_index), offset


def _decode_invoke_dynamic(b, offset, options):
    bootstrap_index, offset = read_u2(b, offset)
    name_and_type_index, offset = read_u2(b, offset)
    return InvokeDynamic(bootstrap_index, name_and_type_index), offset


CONSTANT_DECODERS: dict[int, Decoder] = {
    ConstantPoolTag.CLASS: _decode_class,
    ConstantPoolTag.FIELDREF: _member_ref(FieldRef),
    ConstantPoolTag.METHODREF: _member_ref(MethodRef),
    ConstantPoolTag.INTERFACE_METHODREF: _member_ref(InterfaceMethodRef),
    ConstantPoolTag.STRING: _decode_string,
    ConstantPoolTag.INTEGER: _decode_integer,
    ConstantPoolTag.FLOAT: _decode_float,
    ConstantPoolTag.LONG: _decode_long,
    ConstantPoolTag.DOUBLE: _decode_double,
    ConstantPoolTag.NAME_AND_TYPE: _decode_name_and_type,
    ConstantPoolTag.UTF8: _decode_utf8,
    ConstantPoolTag.METHOD_HANDLE: _decode_method_handle,
    ConstantPoolTag.METHOD_TYPE: _decode_method_type,
    ConstantPoolTag.INVOKE_DYNAMIC: _decode_invoke_dynamic,
}


def decode_constant(tag: int, buffer, offset: int,
                    options: Optional[DecodeOptions] = None) -> tuple[ConstantEntry, int]:
    """Decode the payload of one constant pool entry.

    ``offset`` points just past the tag byte. Returns the entry and the offset
    of the byte following its payload.

    Raises:
        UnknownConstantTagError: ``tag`` names no known entry kind. The
            reported offset is that of the tag byte.
        OutOfBoundsError: The payload runs past the end of the buffer.
        InvalidEncodingError: A Utf8 payload is not valid text.
    """
    decoder = CONSTANT_DECODERS.get(tag)
    if decoder is None:
        raise UnknownConstantTagError(tag, offset - 1)
    return decoder(buffer, offset, options or DEFAULT_OPTIONS)


def decode_constant_pool(buffer, declared_count: int, offset: int,
                         options: Optional[DecodeOptions] = None) -> tuple[tuple[ConstantEntry, ...], int]:
    """Decode ``declared_count - 1`` constant pool positions starting at ``offset``.

    With ``options.wide_constants_take_two_slots`` a Long or Double entry is
    followed by an ``UnusableSlot`` so pool position ``i`` is always referenced
    by index ``i + 1``.
    """
    options = options or DEFAULT_OPTIONS
    target = max(declared_count - 1, 0)
    pool: list[ConstantEntry] = []

    while len(pool) < target:
        start = offset
        try:
            tag, offset = read_u1(buffer, offset)
            entry, offset = decode_constant(tag, buffer, offset, options)
        except UnknownConstantTagError as e:
            e.partial_pool = tuple(pool)
            raise
        except OutOfBoundsError as e:
            raise TruncatedPoolError(
                f"Constant pool truncated: entry {len(pool) + 1} of {target} "
                f"starting at offset {start} runs past the end of the buffer",
                e.offset, tuple(pool), e.width, e.length,
            ) from e

        pool.append(entry)
        if options.wide_constants_take_two_slots and isinstance(entry, WIDE_CONSTANTS):
            if len(pool) < target:
                pool.append(UnusableSlot())
            else:
                logger.debug("Wide constant at offset %d occupies the last pool position", start)

    return tuple(pool), offset

"""Tests for constant and constant pool decoding."""

import math
import struct

import pytest

from pyjclass.classfile import (
    ClassRef, FieldRef, MethodRef, InterfaceMethodRef, StringRef, IntegerValue,
    FloatValue, LongValue, DoubleValue, NameAndType, Utf8Value, MethodHandle,
    MethodType, InvokeDynamic, UnusableSlot, ConstantPoolTag,
)
from pyjclass.constants import decode_constant, decode_constant_pool
from pyjclass.errors import (
    InvalidEncodingError, OutOfBoundsError, TruncatedPoolError, UnknownConstantTagError,
)
from pyjclass.options import DecodeOptions


class TestDecodeConstant:
    def test_utf8(self):
        entry, offset = decode_constant(1, b"\x00\x05Hello", 0)
        assert entry == Utf8Value("Hello")
        assert offset == 7

    def test_integer(self):
        entry, offset = decode_constant(3, bytes([0x00, 0x00, 0x00, 0x2A]), 0)
        assert entry == IntegerValue(42)
        assert entry.value == 42
        assert offset == 4

    def test_negative_integer_keeps_bits(self):
        entry, _ = decode_constant(3, b"\xff\xff\xff\xff", 0)
        assert entry.bits == 0xFFFFFFFF
        assert entry.value == -1

    def test_float(self):
        entry, offset = decode_constant(4, struct.pack(">f", 1.5), 0)
        assert entry == FloatValue(0x3FC00000)
        assert entry.value == 1.5
        assert offset == 4

    def test_float_nan(self):
        entry, _ = decode_constant(4, b"\x7f\xc0\x00\x00", 0)
        assert isinstance(entry, FloatValue)
        assert math.isnan(entry.value)
        assert entry == decode_constant(4, b"\x7f\xc0\x00\x00", 0)[0]

    def test_signalling_nan_bits_preserved(self):
        entry, _ = decode_constant(4, b"\x7f\x80\x00\x01", 0)
        assert entry.bits == 0x7F800001
        assert struct.pack(">I", entry.bits) == b"\x7f\x80\x00\x01"

    def test_double_nan(self):
        data = b"\x7f\xf0\x00\x00\x00\x00\x00\x01"
        entry, _ = decode_constant(6, data, 0)
        assert entry.bits == 0x7FF0000000000001
        assert math.isnan(entry.value)
        assert entry == DoubleValue(0x7FF0000000000001)

    def test_long(self):
        entry, offset = decode_constant(5, struct.pack(">q", -2), 0)
        assert isinstance(entry, LongValue)
        assert entry.value == -2
        assert entry.bits == 0xFFFFFFFFFFFFFFFE
        assert offset == 8

    def test_double(self):
        entry, offset = decode_constant(6, struct.pack(">d", 3.25), 0)
        assert entry == DoubleValue(0x400A000000000000)
        assert entry.value == 3.25
        assert offset == 8

    def test_class(self):
        assert decode_constant(7, b"\x00\x07", 0) == (ClassRef(7), 2)

    def test_string(self):
        assert decode_constant(8, b"\x00\x03", 0) == (StringRef(3), 2)

    @pytest.mark.parametrize("tag, entry_type", [
        (9, FieldRef),
        (10, MethodRef),
        (11, InterfaceMethodRef),
    ])
    def test_member_refs(self, tag, entry_type):
        entry, offset = decode_constant(tag, b"\x00\x01\x00\x02", 0)
        assert entry == entry_type(class_index=1, name_and_type_index=2)
        assert entry.tag == tag
        assert offset == 4

    def test_name_and_type(self):
        assert decode_constant(12, b"\x00\x04\x00\x05", 0) == (NameAndType(4, 5), 4)

    def test_method_handle(self):
        entry, offset = decode_constant(15, bytes([6, 0, 9]), 0)
        assert entry == MethodHandle(reference_kind=6, reference_index=9)
        assert offset == 3

    def test_method_type(self):
        assert decode_constant(16, b"\x00\x0b", 0) == (MethodType(11), 2)

    def test_invoke_dynamic(self):
        entry, offset = decode_constant(18, b"\x00\x00\x00\x0c", 0)
        assert entry == InvokeDynamic(bootstrap_method_attr_index=0, name_and_type_index=12)
        assert offset == 4

    def test_tag_values(self):
        assert ConstantPoolTag.UTF8 == 1
        assert ConstantPoolTag.INVOKE_DYNAMIC == 18
        assert Utf8Value.tag is ConstantPoolTag.UTF8

    @pytest.mark.parametrize("tag", [0, 2, 13, 14, 17, 19, 0xFF])
    def test_unknown_tag(self, tag):
        with pytest.raises(UnknownConstantTagError) as exc:
            decode_constant(tag, b"\x00\x00\x00", 1)
        assert exc.value.tag == tag
        assert exc.value.offset == 0
        assert exc.value.kind == "UnknownConstantTag"

    def test_modified_utf8_null(self):
        entry, _ = decode_constant(1, b"\x00\x02\xc0\x80", 0)
        assert entry == Utf8Value("\x00")

    def test_invalid_utf8(self):
        with pytest.raises(InvalidEncodingError) as exc:
            decode_constant(1, b"\x00\x02\xc3\x28", 0)
        assert exc.value.offset == 3

    def test_strict_utf8_option(self):
        options = DecodeOptions(text_encoding="utf-8")
        with pytest.raises(InvalidEncodingError):
            decode_constant(1, b"\x00\x02\xc0\x80", 0, options)

    def test_truncated_payload(self):
        with pytest.raises(OutOfBoundsError):
            decode_constant(1, b"\x00\x05Hel", 0)


class TestDecodeConstantPool:
    def test_count_is_entries_plus_one(self):
        data = b"\x01\x00\x01A" + b"\x07\x00\x01" + b"tail"
        pool, offset = decode_constant_pool(data, 3, 0)
        assert pool == (Utf8Value("A"), ClassRef(1))
        assert offset == 7

    def test_result_is_immutable_tuple(self):
        pool, _ = decode_constant_pool(b"\x08\x00\x01", 2, 0)
        assert isinstance(pool, tuple)

    @pytest.mark.parametrize("count", [0, 1])
    def test_empty_pool(self, count):
        assert decode_constant_pool(b"\xff", count, 0) == ((), 0)

    def test_truncated(self):
        data = b"\x01\x00\x01A" + b"\x07\x00\x01"
        with pytest.raises(TruncatedPoolError) as exc:
            decode_constant_pool(data, 4, 0)
        assert isinstance(exc.value, OutOfBoundsError)
        assert exc.value.kind == "TruncatedPool"
        assert exc.value.offset == 7
        assert exc.value.partial_pool == (Utf8Value("A"), ClassRef(1))

    def test_truncated_inside_entry(self):
        data = b"\x01\x00\x01A" + b"\x01\x00\x09abc"
        with pytest.raises(TruncatedPoolError) as exc:
            decode_constant_pool(data, 3, 0)
        assert exc.value.partial_pool == (Utf8Value("A"),)

    def test_unknown_tag_keeps_partial_pool(self):
        data = b"\x01\x00\x01A" + b"\xff\x00\x00"
        with pytest.raises(UnknownConstantTagError) as exc:
            decode_constant_pool(data, 4, 0)
        assert exc.value.offset == 4
        assert exc.value.partial_pool == (Utf8Value("A"),)

    def test_wide_constant_fills_two_positions(self):
        data = b"\x05" + struct.pack(">q", 7) + b"\x01\x00\x01x"
        pool, offset = decode_constant_pool(data, 4, 0)
        assert pool == (LongValue(7), UnusableSlot(), Utf8Value("x"))
        assert offset == len(data)

    def test_wide_constant_in_last_position(self):
        data = b"\x06" + struct.pack(">d", 0.5)
        pool, _ = decode_constant_pool(data, 2, 0)
        assert pool == (DoubleValue(0x3FE0000000000000),)

    def test_single_slot_wide_constants(self):
        options = DecodeOptions(wide_constants_take_two_slots=False)
        data = b"\x05" + struct.pack(">q", 7) + b"\x01\x00\x01x" + b"\x01\x00\x01y"
        pool, offset = decode_constant_pool(data, 4, 0, options)
        assert pool == (LongValue(7), Utf8Value("x"), Utf8Value("y"))
        assert offset == len(data)

"""
In-memory model of a decoded Java class file.

Every type here is immutable and defined once; the decoders, the printer and
the command line all share them.
"""

import struct
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import ClassVar, Optional

__all__ = [
    "MAGIC", "AccessFlag", "flag_names", "ConstantPoolTag", "ConstantEntry",
    "ClassRef", "FieldRef", "MethodRef", "InterfaceMethodRef", "StringRef",
    "IntegerValue", "FloatValue", "LongValue", "DoubleValue", "NameAndType",
    "Utf8Value", "MethodHandle", "MethodType", "InvokeDynamic", "UnusableSlot",
    "WIDE_CONSTANTS", "Interface", "Attribute", "FieldRecord", "MethodRecord",
    "ClassFile",
]


MAGIC = 0xCAFEBABE


class AccessFlag(IntFlag):
    PUBLIC = 0x0001
    FINAL = 0x0010
    SUPER = 0x0020
    INTERFACE = 0x0200
    ABSTRACT = 0x0400
    SYNTHETIC = 0x1000
    ANNOTATION = 0x2000
    ENUM = 0x4000


def flag_names(access_flags: int) -> list[str]:
    """Names of the known flags set in a raw access_flags value."""
    return [flag.name for flag in AccessFlag if access_flags & flag.value]


class ConstantPoolTag(IntEnum):
    UTF8 = 1
    INTEGER = 3
    FLOAT = 4
    LONG = 5
    DOUBLE = 6
    CLASS = 7
    STRING = 8
    FIELDREF = 9
    METHODREF = 10
    INTERFACE_METHODREF = 11
    NAME_AND_TYPE = 12
    METHOD_HANDLE = 15
    METHOD_TYPE = 16
    INVOKE_DYNAMIC = 18


class ConstantEntry:
    """Base class for constant pool entries."""
    tag: ClassVar[Optional[ConstantPoolTag]] = None


@dataclass(frozen=True)
class ClassRef(ConstantEntry):
    tag: ClassVar[ConstantPoolTag] = ConstantPoolTag.CLASS
    name_index: int


@dataclass(frozen=True)
class FieldRef(ConstantEntry):
    tag: ClassVar[ConstantPoolTag] = ConstantPoolTag.FIELDREF
    class_index: int
    name_and_type_index: int


@dataclass(frozen=True)
class MethodRef(ConstantEntry):
    tag: ClassVar[ConstantPoolTag] = ConstantPoolTag.METHODREF
    class_index: int
    name_and_type_index: int


@dataclass(frozen=True)
class InterfaceMethodRef(ConstantEntry):
    tag: ClassVar[ConstantPoolTag] = ConstantPoolTag.INTERFACE_METHODREF
    class_index: int
    name_and_type_index: int


@dataclass(frozen=True)
class StringRef(ConstantEntry):
    tag: ClassVar[ConstantPoolTag] = ConstantPoolTag.STRING
    string_index: int


@dataclass(frozen=True)
class IntegerValue(ConstantEntry):
    """A 32-bit integer, kept as its raw unsigned bits."""
    tag: ClassVar[ConstantPoolTag] = ConstantPoolTag.INTEGER
    bits: int

    @property
    def value(self) -> int:
        return struct.unpack(">i", struct.pack(">I", self.bits))[0]


@dataclass(frozen=True)
class FloatValue(ConstantEntry):
    """A 32-bit IEEE-754 float, kept as its raw bits."""
    tag: ClassVar[ConstantPoolTag] = ConstantPoolTag.FLOAT
    bits: int

    @property
    def value(self) -> float:
        return struct.unpack(">f", struct.pack(">I", self.bits))[0]


@dataclass(frozen=True)
class LongValue(ConstantEntry):
    """A 64-bit integer, kept as its raw unsigned bits."""
    tag: ClassVar[ConstantPoolTag] = ConstantPoolTag.LONG
    bits: int

    @property
    def value(self) -> int:
        return struct.unpack(">q", struct.pack(">Q", self.bits))[0]


@dataclass(frozen=True)
class DoubleValue(ConstantEntry):
    """A 64-bit IEEE-754 double, kept as its raw bits."""
    tag: ClassVar[ConstantPoolTag] = ConstantPoolTag.DOUBLE
    bits: int

    @property
    def value(self) -> float:
        return struct.unpack(">d", struct.pack(">Q", self.bits))[0]


@dataclass(frozen=True)
class NameAndType(ConstantEntry):
    tag: ClassVar[ConstantPoolTag] = ConstantPoolTag.NAME_AND_TYPE
    name_index: int
    descriptor_index: int


@dataclass(frozen=True)
class Utf8Value(ConstantEntry):
    tag: ClassVar[ConstantPoolTag] = ConstantPoolTag.UTF8
    text: str


@dataclass(frozen=True)
class MethodHandle(ConstantEntry):
    tag: ClassVar[ConstantPoolTag] = ConstantPoolTag.METHOD_HANDLE
    reference_kind: int
    reference_index: int


@dataclass(frozen=True)
class MethodType(ConstantEntry):
    tag: ClassVar[ConstantPoolTag] = ConstantPoolTag.METHOD_TYPE
    descriptor_index: int


@dataclass(frozen=True)
class InvokeDynamic(ConstantEntry):
    tag: ClassVar[ConstantPoolTag] = ConstantPoolTag.INVOKE_DYNAMIC
    bootstrap_method_attr_index: int
    name_and_type_index: int


@dataclass(frozen=True)
class UnusableSlot(ConstantEntry):
    """Fills the pool position after a Long or Double constant."""


WIDE_CONSTANTS = (LongValue, DoubleValue)


@dataclass(frozen=True)
class Interface:
    """Constant pool index of an implemented interface."""
    index: int


@dataclass(frozen=True)
class Attribute:
    """A named attribute whose payload is kept undecoded."""
    name_index: int
    info: bytes = b""


@dataclass(frozen=True)
class FieldRecord:
    access_flags: int
    name_index: int
    descriptor_index: int
    attributes: tuple[Attribute, ...] = ()


@dataclass(frozen=True)
class MethodRecord:
    access_flags: int
    name_index: int
    descriptor_index: int
    attributes: tuple[Attribute, ...] = ()


@dataclass(frozen=True)
class ClassFile:
    """A fully decoded class file."""
    minor_version: int
    major_version: int
    constant_pool: tuple[ConstantEntry, ...]
    access_flags: int
    this_class: int
    super_class: int
    interfaces: tuple[Interface, ...] = ()
    fields: tuple[FieldRecord, ...] = ()
    methods: tuple[MethodRecord, ...] = ()
    attributes: tuple[Attribute, ...] = ()

    @property
    def version(self) -> tuple[int, int]:
        return (self.major_version, self.minor_version)

    def constant(self, index: int) -> ConstantEntry:
        """Return the pool entry for a 1-based constant pool index."""
        if index < 1 or index > len(self.constant_pool):
            raise IndexError(f"Constant pool index out of range: {index}")
        return self.constant_pool[index - 1]

"""
Human-readable output for a decoded class file.

Names are looked up through the constant pool leniently: an index that does
not lead to the expected entry kind is shown as ``#<index>`` rather than
raising, since the decoder does not validate references.
"""

import sys
from typing import Optional, TextIO

from .classfile import (
    ClassFile, ConstantEntry, ClassRef, FieldRef, MethodRef, InterfaceMethodRef,
    StringRef, IntegerValue, FloatValue, LongValue, DoubleValue, NameAndType,
    Utf8Value, MethodHandle, MethodType, InvokeDynamic, UnusableSlot, flag_names,
)
from .descriptors import DescriptorError, MethodDescriptor, parse_descriptor


def utf8_at(class_file: ClassFile, index: int) -> Optional[str]:
    """Text of the Utf8 constant at ``index``, or None."""
    try:
        entry = class_file.constant(index)
    except IndexError:
        return None
    if isinstance(entry, Utf8Value):
        return entry.text
    return None


def class_name_at(class_file: ClassFile, index: int) -> Optional[str]:
    """Internal name of the class referenced at ``index``, or None."""
    try:
        entry = class_file.constant(index)
    except IndexError:
        return None
    if isinstance(entry, ClassRef):
        return utf8_at(class_file, entry.name_index)
    return None


def _name_or_index(name: Optional[str], index: int) -> str:
    return name if name is not None else f"#{index}"


def format_flags(access_flags: int) -> str:
    names = flag_names(access_flags)
    if names:
        return f"{access_flags:#06x} ({', '.join(names)})"
    return f"{access_flags:#06x}"


def format_constant(entry: ConstantEntry) -> str:
    """One-line rendering of a pool entry, without resolving references."""
    if isinstance(entry, Utf8Value):
        return f"Utf8 {entry.text!r}"
    if isinstance(entry, (IntegerValue, LongValue)):
        return f"{type(entry).__name__.removesuffix('Value')} {entry.value}"
    if isinstance(entry, (FloatValue, DoubleValue)):
        return f"{type(entry).__name__.removesuffix('Value')} {entry.value!r}"
    if isinstance(entry, ClassRef):
        return f"Class #{entry.name_index}"
    if isinstance(entry, StringRef):
        return f"String #{entry.string_index}"
    if isinstance(entry, (FieldRef, MethodRef, InterfaceMethodRef)):
        return f"{type(entry).__name__} #{entry.class_index}.#{entry.name_and_type_index}"
    if isinstance(entry, NameAndType):
        return f"NameAndType #{entry.name_index}:#{entry.descriptor_index}"
    if isinstance(entry, MethodHandle):
        return f"MethodHandle {entry.reference_kind}:#{entry.reference_index}"
    if isinstance(entry, MethodType):
        return f"MethodType #{entry.descriptor_index}"
    if isinstance(entry, InvokeDynamic):
        return f"InvokeDynamic #{entry.bootstrap_method_attr_index}:#{entry.name_and_type_index}"
    if isinstance(entry, UnusableSlot):
        return "(unusable)"
    return repr(entry)


def _format_member(class_file: ClassFile, member) -> str:
    name = _name_or_index(utf8_at(class_file, member.name_index), member.name_index)
    descriptor = utf8_at(class_file, member.descriptor_index)
    if descriptor is None:
        signature = f"{name} #{member.descriptor_index}"
    else:
        try:
            parsed = parse_descriptor(descriptor)
        except DescriptorError:
            signature = f"{name} {descriptor}"
        else:
            if isinstance(parsed, MethodDescriptor):
                signature = parsed.format(name)
            else:
                signature = f"{parsed} {name}"
    return f"  {format_flags(member.access_flags)} {signature}"


def _format_attribute(class_file: ClassFile, attribute) -> str:
    name = _name_or_index(utf8_at(class_file, attribute.name_index), attribute.name_index)
    return f"  {name} ({len(attribute.info)} bytes)"


def format_class(class_file: ClassFile, show_constants: bool = False) -> list[str]:
    """Render a decoded class file as lines of text."""
    lines = [
        f"Major: {class_file.major_version}",
        f"Minor: {class_file.minor_version}",
        f"Access Flags: {format_flags(class_file.access_flags)}",
        f"This Class: {_name_or_index(class_name_at(class_file, class_file.this_class), class_file.this_class)}",
    ]
    if class_file.super_class == 0:
        lines.append("Super Class: none")
    else:
        super_name = class_name_at(class_file, class_file.super_class)
        lines.append(f"Super Class: {_name_or_index(super_name, class_file.super_class)}")

    if show_constants:
        lines.append(f"Constant Pool: {len(class_file.constant_pool)} entries")
        for i, entry in enumerate(class_file.constant_pool, start=1):
            lines.append(f"  #{i} = {format_constant(entry)}")

    if class_file.interfaces:
        lines.append("Interfaces:")
        for iface in class_file.interfaces:
            lines.append(f"  {_name_or_index(class_name_at(class_file, iface.index), iface.index)}")

    if class_file.fields:
        lines.append("Fields:")
        lines.extend(_format_member(class_file, f) for f in class_file.fields)

    if class_file.methods:
        lines.append("Methods:")
        lines.extend(_format_member(class_file, m) for m in class_file.methods)

    if class_file.attributes:
        lines.append("Attributes:")
        lines.extend(_format_attribute(class_file, a) for a in class_file.attributes)

    return lines


def print_class(class_file: ClassFile, out: Optional[TextIO] = None, show_constants: bool = False):
    out = out or sys.stdout
    for line in format_class(class_file, show_constants=show_constants):
        print(line, file=out)

"""
Decoders for the count-prefixed lists of a class file: interfaces, fields,
methods and attributes.

Each takes the number of records already read from the buffer and returns
the records as a tuple along with the offset just past the last one.
"""

from .classfile import Attribute, FieldRecord, Interface, MethodRecord
from .errors import OutOfBoundsError, TruncatedListError
from .reader import read_u2, read_u4, read_bytes


def _truncated(list_kind: str, index: int, count: int, start: int,
               cause: OutOfBoundsError) -> TruncatedListError:
    if isinstance(cause, TruncatedListError):
        detail = f" in {cause.list_kind} {cause.index}"
    else:
        detail = ""
    return TruncatedListError(
        f"{list_kind.capitalize()} list truncated: record {index} of {count} "
        f"starting at offset {start} runs past the end of the buffer{detail}",
        cause.offset, list_kind, index, cause.width, cause.length,
    )


def decode_interfaces(buffer, count: int, offset: int) -> tuple[tuple[Interface, ...], int]:
    interfaces = []
    for i in range(count):
        try:
            index, offset = read_u2(buffer, offset)
        except OutOfBoundsError as e:
            raise _truncated("interface", i, count, offset, e) from e
        interfaces.append(Interface(index))
    return tuple(interfaces), offset


def decode_attributes(buffer, count: int, offset: int) -> tuple[tuple[Attribute, ...], int]:
    """Decode ``count`` attributes, keeping each payload as raw bytes."""
    attributes = []
    for i in range(count):
        start = offset
        try:
            name_index, offset = read_u2(buffer, offset)
            length, offset = read_u4(buffer, offset)
            info, offset = read_bytes(buffer, offset, length)
        except OutOfBoundsError as e:
            raise _truncated("attribute", i, count, start, e) from e
        attributes.append(Attribute(name_index, info))
    return tuple(attributes), offset


def _decode_members(buffer, count: int, offset: int, record_type, list_kind: str):
    members = []
    for i in range(count):
        start = offset
        try:
            access_flags, offset = read_u2(buffer, offset)
            name_index, offset = read_u2(buffer, offset)
            descriptor_index, offset = read_u2(buffer, offset)
            attributes_count, offset = read_u2(buffer, offset)
            attributes, offset = decode_attributes(buffer, attributes_count, offset)
        except OutOfBoundsError as e:
            raise _truncated(list_kind, i, count, start, e) from e
        members.append(record_type(access_flags, name_index, descriptor_index, attributes))
    return tuple(members), offset


def decode_fields(buffer, count: int, offset: int) -> tuple[tuple[FieldRecord, ...], int]:
    return _decode_members(buffer, count, offset, FieldRecord, "field")


def decode_methods(buffer, count: int, offset: int) -> tuple[tuple[MethodRecord, ...], int]:
    return _decode_members(buffer, count, offset, MethodRecord, "method")

"""
Field and method descriptor parser using Lark.

Descriptors are the compact type strings stored in Utf8 constants, such as
``I``, ``[Ljava/lang/String;`` or ``(IJ)V``. The printer uses this module to
show member types in Java syntax.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from lark import Lark, Transformer
from lark.exceptions import LarkError


GRAMMAR_FILE = Path(__file__).parent / "descriptor.lark"


class DescriptorError(ValueError):
    """Malformed field or method descriptor."""
    pass


class FieldType:
    """Base class for descriptor types."""
    pass


@dataclass(frozen=True)
class BaseType(FieldType):
    """Primitive type (B, C, D, F, I, J, S, Z) or void (V)."""
    descriptor: str

    @property
    def name(self) -> str:
        names = {
            "B": "byte", "C": "char", "D": "double", "F": "float",
            "I": "int", "J": "long", "S": "short", "Z": "boolean", "V": "void"
        }
        return names[self.descriptor]

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ObjectType(FieldType):
    """Class type (L<internal name>;)."""
    internal_name: str

    def __str__(self) -> str:
        return self.internal_name.replace("/", ".")


@dataclass(frozen=True)
class ArrayType(FieldType):
    """Array type ([<element>)."""
    element: FieldType

    @property
    def dimensions(self) -> int:
        if isinstance(self.element, ArrayType):
            return self.element.dimensions + 1
        return 1

    def __str__(self) -> str:
        return f"{self.element}[]"


@dataclass(frozen=True)
class MethodDescriptor:
    """Parameter types and return type of a method."""
    parameters: tuple[FieldType, ...]
    return_type: FieldType

    def format(self, name: str = "") -> str:
        params = ", ".join(str(p) for p in self.parameters)
        if name:
            return f"{self.return_type} {name}({params})"
        return f"{self.return_type} ({params})"

    def __str__(self) -> str:
        return self.format()


Descriptor = Union[FieldType, MethodDescriptor]


class DescriptorTransformer(Transformer):
    """Transforms the Lark parse tree into descriptor types."""

    def start(self, items):
        return items[0]

    def field_descriptor(self, items):
        return items[0]

    def method_descriptor(self, items):
        return MethodDescriptor(parameters=tuple(items[:-1]), return_type=items[-1])

    def base_type(self, items):
        return BaseType(str(items[0]))

    def void_type(self, items):
        return BaseType("V")

    def object_type(self, items):
        return ObjectType(str(items[0]))

    def array_type(self, items):
        return ArrayType(items[0])


class DescriptorParser:
    """Parser for field and method descriptors."""

    def __init__(self):
        with open(GRAMMAR_FILE, "r") as f:
            grammar = f.read()

        self._parser = Lark(
            grammar,
            parser="earley",
            maybe_placeholders=False,
        )
        self._transformer = DescriptorTransformer()

    def parse(self, descriptor: str) -> Descriptor:
        """Parse a descriptor and return its type."""
        try:
            tree = self._parser.parse(descriptor)
        except LarkError as e:
            raise DescriptorError(f"Invalid descriptor {descriptor!r}: {e}") from e
        return self._transformer.transform(tree)


_default_parser: Optional[DescriptorParser] = None


def parse_descriptor(descriptor: str) -> Descriptor:
    """Parse a descriptor with a shared parser instance."""
    global _default_parser
    if _default_parser is None:
        _default_parser = DescriptorParser()
    return _default_parser.parse(descriptor)

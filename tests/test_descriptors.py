"""Tests for the descriptor parser."""

import pytest

from pyjclass.descriptors import (
    ArrayType, BaseType, DescriptorError, DescriptorParser, MethodDescriptor,
    ObjectType, parse_descriptor,
)


@pytest.fixture(scope="module")
def parser():
    return DescriptorParser()


class TestFieldDescriptors:
    @pytest.mark.parametrize("descriptor, name", [
        ("B", "byte"), ("C", "char"), ("D", "double"), ("F", "float"),
        ("I", "int"), ("J", "long"), ("S", "short"), ("Z", "boolean"),
    ])
    def test_base_types(self, parser, descriptor, name):
        result = parser.parse(descriptor)
        assert result == BaseType(descriptor)
        assert str(result) == name

    def test_object_type(self, parser):
        result = parser.parse("Ljava/lang/String;")
        assert result == ObjectType("java/lang/String")
        assert str(result) == "java.lang.String"

    def test_nested_array(self, parser):
        result = parser.parse("[[J")
        assert result == ArrayType(ArrayType(BaseType("J")))
        assert result.dimensions == 2
        assert str(result) == "long[][]"

    def test_object_array(self, parser):
        assert str(parser.parse("[Ljava/util/Map$Entry;")) == "java.util.Map$Entry[]"


class TestMethodDescriptors:
    def test_main(self, parser):
        result = parser.parse("([Ljava/lang/String;)V")
        assert isinstance(result, MethodDescriptor)
        assert result.return_type == BaseType("V")
        assert str(result) == "void (java.lang.String[])"
        assert result.format("main") == "void main(java.lang.String[])"

    def test_no_parameters(self, parser):
        result = parser.parse("()V")
        assert result.parameters == ()

    def test_mixed_parameters(self, parser):
        result = parser.parse("(IDLjava/lang/Thread;)Ljava/lang/Object;")
        assert result.parameters == (
            BaseType("I"), BaseType("D"), ObjectType("java/lang/Thread"),
        )
        assert result.return_type == ObjectType("java/lang/Object")

    def test_array_return(self, parser):
        assert parser.parse("()[I").format("values") == "int[] values()"


class TestInvalid:
    @pytest.mark.parametrize("descriptor", [
        "", "Q", "V", "(I", "Ljava/lang/String", "[", "(V)V", "II",
    ])
    def test_rejected(self, parser, descriptor):
        with pytest.raises(DescriptorError):
            parser.parse(descriptor)


def test_shared_parser():
    assert parse_descriptor("Z") == BaseType("Z")

import pytest

from amigahunk.core import Chunk
from amigahunk.fields import StructField, StringField
from amigahunk.properties import Dependency
from amigahunk.exceptions import OutOfBoundsException


def test_chunk():
    """Check that building a Chunk from fields behaves correctly."""
    class Dummy(Chunk):
        a = StructField('I', default=0xbad)
        b = StringField(0x10)
        c = StructField('I')

    dummy = Dummy()

    assert dummy.a.value == 0xbad
    assert dummy.a.father == dummy

    dummy = Dummy(b'\x00\x00\x0b\xad' + b'A' * 0x10 + b'\xde\xad\xbe\xef')

    assert dummy.a.size == 4
    assert dummy.a.raw == b'\x00\x00\x0b\xad'
    assert dummy.a.value == 0xbad
    assert dummy.a.offset == 0x00

    assert dummy.b.size == 0x10
    assert dummy.b.value == b'A' * 0x10
    assert dummy.b.offset == 0x04

    assert dummy.c.value == 0xdeadbeef
    assert dummy.c.offset == 0x14

    assert dummy.size == 0x18
    assert dummy.layout == {
        'a': (0x00, 4),
        'b': (0x04, 0x10),
        'c': (0x14, 4),
    }


def test_chunk_w_dependencies():
    class Example(Chunk):
        sz    = StructField('I')
        data  = StringField(Dependency('.sz'))
        extra = StructField('I')

    example = Example(b'\x00\x00\x00\x05' + b'kebab' + b'\x0a\x0b\x0c\x0d')

    assert example.sz.value == 5
    assert example.data.value == b'kebab'
    assert example.extra.value == 0x0a0b0c0d
    assert example.extra.offset == 9


def test_inheritance():
    '''subclasses inherit fields'''
    class Father(Chunk):
        field_a = StringField(0x10)
        field_b = StructField('I')

    class Son(Father):
        field_c = StringField(0x08)

    son = Son(b'A' * 16 + b'\x01\x02\x03\x04' + b'ABCDEFGH')

    assert [_ for _, __ in son.get_fields()] == [
        'field_a', 'field_b', 'field_c',
    ]
    assert son.field_b.value == 0x01020304
    assert son.field_c.value == b'ABCDEFGH'


def test_field_from_chunk():
    class Dummy(Chunk):
        field = StructField('I')

    class DummyContainer(Chunk):
        dummy = Dummy()

    container = DummyContainer(b'\x00\x00\x00\x2a')

    assert container.dummy.father is container
    assert container.dummy.field.value == 0x2a
    assert container.dummy.field.father is container.dummy


def test_instances_do_not_share_fields():
    class Dummy(Chunk):
        field = StructField('I')

    first = Dummy(b'\x00\x00\x00\x01')
    second = Dummy(b'\x00\x00\x00\x02')

    assert first.field is not second.field
    assert first.field.value == 1
    assert second.field.value == 2


def test_optional_field():
    class Optional(Chunk):
        flag  = StructField('I')
        extra = StructField('I')

        def is_present(self, field_name):
            return field_name == 'flag' or self.flag.value != 0

    without = Optional(b'\x00\x00\x00\x00')

    assert without.size == 4
    assert list(without.layout.keys()) == ['flag']

    with_extra = Optional(b'\x00\x00\x00\x01\x00\x00\x00\x02')

    assert with_extra.size == 8
    assert with_extra.extra.value == 2


def test_error_chain():
    """The exception tells which field failed, from the outermost chunk."""
    class Inner(Chunk):
        a = StructField('I')
        b = StructField('I')

    class Outer(Chunk):
        inner = Inner()

    with pytest.raises(OutOfBoundsException) as excinfo:
        Outer(b'\x00' * 6)

    assert excinfo.value.chain == ['b', 'inner']
    assert excinfo.value.path == 'inner.b'
    assert str(excinfo.value).endswith('(at inner.b)')


def test_dependency_from_root():
    """Without the leading dot the expression starts from the outermost chunk."""
    class Header(Chunk):
        sz = StructField('I')

    class Body(Chunk):
        data = StringField(Dependency('header.sz'))

    class Container(Chunk):
        header = Header()
        body   = Body()

    container = Container(b'\x00\x00\x00\x03' + b'abc')

    assert container.body.data.value == b'abc'

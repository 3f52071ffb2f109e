from enum import Enum

import pytest

from amigahunk.core import Chunk
from amigahunk.streams import Stream
from amigahunk.meta import Endianess
from amigahunk.fields import StructField, StringField, SkipField, SelectField, ArrayField
from amigahunk.exceptions import OutOfBoundsException


def test_structfield_unpack():
    field = StructField('I')

    assert field.size == 4
    assert field.value == 0

    stream = Stream(b'\x01\x02\x03\x04')
    field.unpack(stream)

    assert field.value == 0x01020304
    assert field.raw == b'\x01\x02\x03\x04'
    assert field.offset == 0
    assert stream.tell() == 4


def test_structfield_little_endian():
    field = StructField('I', endianess=Endianess.LITTLE_ENDIAN)
    field.unpack(Stream(b'\x01\x02\x03\x04'))

    assert field.value == 0x04030201


def test_structfield_enum():
    class DummyEnum(Enum):
        NONE = 0
        FIRST = 1

    field = StructField('I', enum=DummyEnum)
    field.unpack(Stream(b'\x00\x00\x00\x01'))

    assert field.value == DummyEnum.FIRST

    # values outside the enum are kept as they are
    field.unpack(Stream(b'\x00\x00\x00\x04'))

    assert field.value == 4


def test_stringfield():
    field = StringField(0x10)
    data = bytes(range(0x10))

    field.unpack(Stream(data + b'\xff'))

    assert field.size == 0x10
    assert len(field) == 0x10
    assert field.value == data

    with pytest.raises(OutOfBoundsException):
        StringField(0x10).unpack(Stream(data[:8]))


def test_skipfield():
    field = SkipField(8)
    stream = Stream(b'\x01' * 8 + b'\x00\x00\x00\x2a')

    field.unpack(stream)

    assert field.size == 8
    assert field.value == b''
    assert stream.read_long_word() == 0x2a


def test_selectfield(longwords):
    type2field = {
        0: (StructField, ('I',), {}),
        SelectField.Type.DEFAULT: (StringField, (8,), {}),
    }

    class Dummy(Chunk):
        type = StructField('I')
        data = SelectField('type', type2field)

    dummy = Dummy(longwords(0, 0x2a))

    assert isinstance(dummy.data.value, StructField)
    assert dummy.data.value.value == 0x2a
    assert dummy.size == 8

    dummy = Dummy(longwords(1) + b'ABCDEFGH')

    assert dummy.data.value.value == b'ABCDEFGH'
    assert dummy.size == 12


def test_arrayfield(longwords):
    length = 3
    array = ArrayField(StructField('I'), n=length)
    stream = Stream(longwords(1, 2, 3, 4))

    array.unpack(stream)

    assert len(array) == length
    assert [_.value for _ in array] == [1, 2, 3]
    assert array[0] is not array[1]
    assert [_.offset for _ in array] == [0, 4, 8]
    assert array.size == 12
    assert stream.tell() == 12


def test_arrayfield_canary(longwords):
    class Item(Chunk):
        v = StructField('I')

    array = ArrayField(Item(), canary=lambda item: item.v.value == 0)
    stream = Stream(longwords(3, 2, 0, 9))

    array.unpack(stream)

    assert [_.v.value for _ in array] == [3, 2]
    assert array.terminator.v.value == 0
    assert array.size == 12
    assert stream.tell() == 12


def test_arrayfield_iter_unpack(longwords):
    array = ArrayField(StructField('I'), n=2)
    stream = Stream(longwords(7, 8))

    elements = array.iter_unpack(stream)

    assert next(elements).value == 7
    assert stream.tell() == 4
    assert next(elements).value == 8

    with pytest.raises(StopIteration):
        next(elements)


def test_arrayfield_error_chain(longwords):
    array = ArrayField(StructField('I'), n=3)

    with pytest.raises(OutOfBoundsException) as excinfo:
        array.unpack(Stream(longwords(1, 2)))

    assert excinfo.value.chain == ['2']

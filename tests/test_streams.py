import struct

import pytest

from amigahunk.streams import Stream
from amigahunk.exceptions import OutOfBoundsException


def test_read_long_word():
    data = b'\x00\x00\x03\xf3\xde\xad\xbe\xef\x00\x00\x00\x01'
    stream = Stream(data)

    for offset in range(0, len(data), 4):
        assert stream.tell() == offset
        assert stream.read_long_word() == struct.unpack('>I', data[offset:offset + 4])[0]
        assert stream.tell() == offset + 4

    assert stream.remaining() == 0


def test_read_long_word_bytes():
    data = b'\x00\x00\x03\xf3\xde\xad\xbe\xef'

    raw = Stream(data)
    value = Stream(data)

    for _ in range(2):
        assert int.from_bytes(raw.read_long_word_bytes(), 'big') == value.read_long_word()

    assert raw.tell() == value.tell() == 8


def test_out_of_bounds():
    stream = Stream(b'\x00\x00\x03')

    with pytest.raises(OutOfBoundsException):
        stream.read_long_word()

    # the failed read doesn't move the cursor
    assert stream.tell() == 0

    with pytest.raises(OutOfBoundsException):
        Stream(b'').read_long_word_bytes()


def test_advance():
    stream = Stream(b'\x00' * 12)

    stream.advance(8)
    assert stream.tell() == 8

    with pytest.raises(ValueError):
        stream.advance(3)

    with pytest.raises(ValueError):
        stream.advance(-4)

    with pytest.raises(OutOfBoundsException):
        stream.advance(8)

    assert stream.tell() == 8


def test_file_stream(tmp_path):
    path = tmp_path / 'executable'
    path.write_bytes(b'\x00\x00\x03\xf3')

    stream = Stream(str(path))

    assert len(stream) == 4
    assert stream.read_long_word() == 0x3f3


def test_bytearray_stream():
    data = bytearray(b'\x00\x00\x00\x01')
    stream = Stream(data)
    data[3] = 0x02

    assert stream.read_long_word() == 1


def test_wrong_kind_of_stream():
    with pytest.raises(ValueError):
        Stream(42)

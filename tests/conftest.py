import struct

import pytest


def pack_long_words(*values):
    return b''.join(struct.pack('>I', _) for _ in values)


@pytest.fixture
def longwords():
    """Build a big endian buffer from a list of long words."""
    return pack_long_words


@pytest.fixture
def executable():
    """The smallest executable: one hunk containing one long word of code."""
    return pack_long_words(
        0x3f3,       # magic
        0,           # no resident libraries
        1,           # table size
        0, 0,        # first and last hunk
        0,           # memory size of hunk 0
        0x3e9, 1, 0xdeadbeef,
        0x3f2,
    )

'''
This module contains the constant values used throughout the Hunk format.

See "The AmigaDOS Manual", chapter 10.
'''
from enum import Enum


# the magic cookie, i.e. the long word HUNK_HEADER at the start of an executable
MAGIC_COOKIE = b'\x00\x00\x03\xf3'

# the top two bits of hunk sizes and block types are memory flags
MEMORY_FLAGS_MASK = 0xc0000000
HUNK_TYPE_MASK    = 0x3fffffff


class HunkBlockType(Enum):
    HUNK_UNIT    = 0x3e7
    HUNK_NAME    = 0x3e8
    HUNK_CODE    = 0x3e9
    HUNK_DATA    = 0x3ea
    HUNK_BSS     = 0x3eb
    HUNK_RELOC32 = 0x3ec
    HUNK_RELOC16 = 0x3ed
    HUNK_END     = 0x3f2


class HunkMemoryType(Enum):
    '''Where the loader must allocate a hunk: the value is the pair of
    flag bits (31, 30) read as a two bit number.'''
    ANY      = 0
    CHIP     = 1
    FAST     = 2
    EXTENDED = 3  # an extra long word with the memory attributes follows


BLOCK_DESCRIPTIONS = {
    HunkBlockType.HUNK_UNIT:    'Start of program unit',
    HunkBlockType.HUNK_NAME:    'Name block',
    HunkBlockType.HUNK_CODE:    'Code block',
    HunkBlockType.HUNK_DATA:    'Initialized data block',
    HunkBlockType.HUNK_BSS:     'Uninitialized data block',
    HunkBlockType.HUNK_RELOC32: '32-bit relocation information',
    HunkBlockType.HUNK_RELOC16: '16-bit relocation information',
    HunkBlockType.HUNK_END:     'End block of a hunk',
}


def describe_block_type(block_type):
    return BLOCK_DESCRIPTIONS.get(block_type, 'Unknown hunk block type')

'''
# Hunk fields

Everything in a Hunk file is made of long words: 32 bits, big endian.
'''
from bitstring import BitArray

from ... import fields
from ...streams import LONGWORD_SIZE
from .enum import HunkBlockType, HunkMemoryType, HUNK_TYPE_MASK


class LongWordField(fields.StructField):
    '''Wrapper for the fundamental datatype of the Hunk format'''

    def __init__(self, **kwargs):
        super().__init__('I', **kwargs)


class MemoryFlagsMixin(object):
    '''The two most significant bits of some long words say in which kind
    of memory the hunk must be loaded.'''

    def split_memory_flags(self, raw):
        bits = BitArray(raw)
        return HunkMemoryType(bits[0:2].uint), bits[2:].uint


class HunkTypeField(MemoryFlagsMixin, LongWordField):
    '''The tag starting every block; the memory flags are stripped before
    looking up the block type so that the value is a HunkBlockType or, for tags
    outside the known set, the plain integer.'''

    def __init__(self, **kwargs):
        super().__init__(enum=HunkBlockType, **kwargs)
        self.memory = HunkMemoryType.ANY

    @property
    def tag(self):
        return self.value.value if isinstance(self.value, HunkBlockType) else self.value

    def _unpack(self, raw):
        self.memory, tag = self.split_memory_flags(raw)
        return self._unpack_enum(tag & HUNK_TYPE_MASK)


class HunkSizeField(MemoryFlagsMixin, LongWordField):
    '''Entry of the hunk table: the size in long words of the memory to
    allocate for a hunk, together with the memory type. For the EXTENDED type
    the memory attributes are in the long word that follows.'''

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.memory = HunkMemoryType.ANY
        self.attributes = None

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value}, {self.memory.name})>'

    @property
    def byte_size(self):
        return self.value * LONGWORD_SIZE

    def _get_size(self):
        return LONGWORD_SIZE if self.attributes is None else 2 * LONGWORD_SIZE

    def unpack(self, stream):
        self.offset = stream.tell()
        self.raw = stream.read_long_word_bytes()
        self.memory, self.value = self.split_memory_flags(self.raw)

        if self.memory == HunkMemoryType.EXTENDED:
            self.attributes = stream.read_long_word()


class LongWordsField(fields.StringField):
    '''Contiguous run of long words, "n" being the number of long words.'''

    def __repr__(self):
        return f'<{self.__class__.__name__}({len(self.value) // LONGWORD_SIZE} long words)>'

    @property
    def length(self):
        return super().length * LONGWORD_SIZE

    @property
    def long_words(self):
        '''The raw 4-bytes slices'''
        return [self.value[_:_ + LONGWORD_SIZE] for _ in range(0, len(self.value), LONGWORD_SIZE)]

    @property
    def values(self):
        return [int.from_bytes(_, 'big') for _ in self.long_words]


class LongWordsSkipField(fields.SkipField):
    '''Like LongWordsField but the data is not kept.'''

    @property
    def length(self):
        return super().length * LONGWORD_SIZE


class NameField(LongWordsField):
    '''A name is stored as a run of long words padded with NUL bytes.'''

    @property
    def text(self):
        return self.value.rstrip(b'\x00').decode('latin1')

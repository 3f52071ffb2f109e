'''
The payloads of the hunk blocks, selected by the block type.
'''
from ...core import Chunk
from ...properties import Dependency
from ...exceptions import UnknownBlockTypeException
from ... import fields
from .enum import HunkBlockType
from .fields import LongWordField, LongWordsField, LongWordsSkipField, NameField
from .reloc import Reloc32Block, Reloc16Block


class CodeBlock(Chunk):
    longs = LongWordField()
    code  = LongWordsField(Dependency('.longs'))


class DataBlock(Chunk):
    '''Only the size is interesting, the data is skipped.'''
    longs = LongWordField()
    data  = LongWordsSkipField(Dependency('.longs'))


class BSSBlock(Chunk):
    '''Memory to be zeroed at load time: nothing follows the size.'''
    longs = LongWordField()


class UnitBlock(Chunk):
    longs = LongWordField()
    label = NameField(Dependency('.longs'))


class NameBlock(UnitBlock):
    pass


class EndBlock(Chunk):
    pass


class UnknownBlock(fields.Field):
    '''There is no way to know how long the payload of an unknown block is,
    so going on would mean reading garbage.'''

    def _get_size(self):
        return 0

    def unpack(self, stream):
        self.offset = stream.tell()
        tag = self.father.father.type.tag
        raise UnknownBlockTypeException(
            chain=[],
            message=f'unknown hunk block type 0x{tag:08x} at offset 0x{self.offset - 4:x}')


type2field = {
    HunkBlockType.HUNK_UNIT:    (UnitBlock, (), {}),
    HunkBlockType.HUNK_NAME:    (NameBlock, (), {}),
    HunkBlockType.HUNK_CODE:    (CodeBlock, (), {}),
    HunkBlockType.HUNK_DATA:    (DataBlock, (), {}),
    HunkBlockType.HUNK_BSS:     (BSSBlock, (), {}),
    HunkBlockType.HUNK_RELOC32: (Reloc32Block, (), {}),
    HunkBlockType.HUNK_RELOC16: (Reloc16Block, (), {}),
    HunkBlockType.HUNK_END:     (EndBlock, (), {}),
    fields.SelectField.Type.DEFAULT: (UnknownBlock, (), {}),
}

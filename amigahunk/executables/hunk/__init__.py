'''
# AmigaOS Hunk format

The executables of AmigaOS are made of "hunks", each one the unit that the
loader places in memory on its own (code, initialized data or zeroed memory).

The file starts with the HUNK_HEADER block: the magic cookie, the list of
resident libraries to open (always empty in practice), then the hunk table
telling the loader how much memory each hunk needs. After that, for each hunk,
a sequence of blocks terminated by a HUNK_END block.

Every value is a long word (32 bits, big endian) so the stream stays aligned
at 4 bytes from start to end.

Reference: "The AmigaDOS Manual", chapter 10, and
<http://amiga-dev.wikidot.com/file-format:hunk>.
'''
import logging

from ...core import Chunk
from ...properties import Dependency, ChunkPhase
from ...exceptions import (
    HunkException,
    UnsupportedFeatureException,
    MalformedTableException,
)
from ...fields import ArrayField, SelectField
from .enum import (
    MAGIC_COOKIE,
    HunkBlockType,
    describe_block_type,
)
from .fields import LongWordField, HunkTypeField, HunkSizeField
from .blocks import type2field


logger = logging.getLogger(__name__)


def check_hunk_header(stream) -> bool:
    '''Read one long word and tell if it's the magic cookie of an executable.'''
    return stream.read_long_word_bytes() == MAGIC_COOKIE


class HunkHeader(Chunk):
    magic = LongWordField(default=int.from_bytes(MAGIC_COOKIE, 'big'))

    def validate(self):
        return self.magic.raw == MAGIC_COOKIE


class ResidentLibraries(Chunk):
    '''The names of the resident libraries, terminated by a zero long word.

    Only the empty list is supported.'''
    terminator = LongWordField()

    def unpack(self, stream):
        super().unpack(stream)

        if self.terminator.value != 0:
            raise UnsupportedFeatureException(
                chain=['terminator'],
                message=f'calls to resident libraries found at offset 0x{self.offset:x}')


def scan_resident_libraries(stream):
    ResidentLibraries().unpack(stream)


class HunkTable(Chunk):
    '''The table_size counts also the hunks coming from resident libraries, so it's
    not checked against the first and last hunk numbers.'''
    table_size = LongWordField()
    first_hunk = LongWordField()
    last_hunk  = LongWordField()
    sizes      = ArrayField(HunkSizeField(), n=Dependency('.total_hunks'))

    def total_hunks(self):
        total = self.last_hunk.value - self.first_hunk.value + 1

        if total < 1:
            raise MalformedTableException(
                chain=[],
                message=f'the hunk table goes from {self.first_hunk.value} to {self.last_hunk.value}')

        return total


def read_hunk_table(stream) -> HunkTable:
    table = HunkTable()
    table.unpack(stream)

    return table


class HunkBlock(Chunk):
    type    = HunkTypeField()
    payload = SelectField('type', type2field)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.description}, {self.payload.value!r})>'

    @property
    def description(self):
        return describe_block_type(self.type.value)

    def is_end(self):
        return self.type.value == HunkBlockType.HUNK_END


class Hunk(Chunk):
    '''The blocks up to the HUNK_END, this one is kept as blocks.terminator.'''
    blocks = ArrayField(HunkBlock(), canary=lambda block: block.is_end())

    def __len__(self):
        return len(self.blocks)

    def __iter__(self):
        return iter(self.blocks)


class HunkFile(Chunk):
    header    = HunkHeader()
    libraries = ResidentLibraries()
    table     = HunkTable()
    hunks     = ArrayField(Hunk(), n=Dependency('.table.total_hunks'))

    def iter_unpack(self, stream):
        '''Like Chunk.iter_unpack() but the hunks are yielded one at a time,
        as ('hunks', hunk), as soon as their HUNK_END is read.'''
        self._phase = ChunkPhase.UNPACKING
        self.offset = stream.tell()

        for field_name in ('header', 'libraries', 'table'):
            yield field_name, self.unpack_field(field_name, stream)

        logger.debug('unpacking %d hunks' % self.table.total_hunks())

        try:
            for hunk in self.hunks.iter_unpack(stream):
                yield 'hunks', hunk
        except HunkException as e:
            e.chain.append('hunks')
            raise

        self._phase = ChunkPhase.DONE

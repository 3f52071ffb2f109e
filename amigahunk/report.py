'''
Human readable dump of a Hunk file, one line per field or block.
'''
import logging

from .streams import Stream, LONGWORD_SIZE
from .exceptions import HunkException, MagicException, UnsupportedFeatureException
from .executables.hunk import HunkFile
from .executables.hunk.enum import HunkBlockType, HunkMemoryType
from .executables.hunk.code import disasm_block


logger = logging.getLogger(__name__)

HUNK_SEPARATOR  = '=' * 40
BLOCK_SEPARATOR = '-' * 10

# number of long words to show in each line of a raw code dump
LONGWORDS_PER_LINE = 4


def format_long_word(raw):
    return ' '.join('%02x' % _ for _ in raw)


def format_size(longs):
    return f'{longs} long words = {longs * LONGWORD_SIZE} bytes'


class HunkReporter(object):
    '''Write the report through "out", a callable taking a line.'''

    def __init__(self, out=print, disassemble=False):
        self.out = out
        self.disassemble = disassemble
        self._dumpers = {
            HunkBlockType.HUNK_UNIT:    self.dump_unit,
            HunkBlockType.HUNK_NAME:    self.dump_name,
            HunkBlockType.HUNK_CODE:    self.dump_code,
            HunkBlockType.HUNK_DATA:    self.dump_data,
            HunkBlockType.HUNK_BSS:     self.dump_bss,
            HunkBlockType.HUNK_RELOC32: self.dump_reloc,
            HunkBlockType.HUNK_RELOC16: self.dump_reloc,
        }

    def report(self, data):
        '''Decode and dump as the decoding goes on, so that when a HunkException
        is raised everything before the failing hunk has already been written.'''
        stream = data if isinstance(data, Stream) else Stream(data)
        hunk_file = HunkFile()

        index = 0
        for name, field in hunk_file.iter_unpack(stream):
            if name == 'header':
                self.out('* Header check OK')
            elif name == 'libraries':
                self.out('* No calls to resident libraries found')
            elif name == 'table':
                self.dump_table(field)
            else:
                self.dump_hunk(index, field)
                index += 1

        return hunk_file

    def dump_table(self, table):
        self.out(f'* Hunk table size: {table.table_size.value}')
        self.out(f'* First hunk: {table.first_hunk.value}')
        self.out(f'* Last hunk: {table.last_hunk.value}')
        self.out(f'* Total number of hunks in file: {table.total_hunks()}')
        for idx, size in enumerate(table.sizes):
            line = f'* Memory size for hunk {idx}: {format_size(size.value)}'
            if size.memory == HunkMemoryType.EXTENDED:
                line += f' ({size.memory.name} memory, attributes 0x{size.attributes:08x})'
            elif size.memory != HunkMemoryType.ANY:
                line += f' ({size.memory.name} memory)'
            self.out(line)
        self.out(HUNK_SEPARATOR)

    def dump_hunk(self, index, hunk):
        self.out(f'* Dumping Hunk #{index}')
        self.out(BLOCK_SEPARATOR)
        for block in hunk.blocks:
            self.dump_block(block)
            self.out(BLOCK_SEPARATOR)
        self.dump_block(hunk.blocks.terminator)
        self.out(HUNK_SEPARATOR)

    def dump_block(self, block):
        self.out(f'* Hunk block type: {block.description}')

        dumper = self._dumpers.get(block.type.value)
        if dumper:
            dumper(block.payload.value)

    def dump_unit(self, unit):
        self.out(f'** Unit name: {unit.label.text}')

    def dump_name(self, name):
        self.out(f'** Hunk name: {name.label.text}')

    def dump_code(self, code):
        self.out(f'* Code block size: {format_size(code.longs.value)}')
        self.out('** Code:')
        long_words = code.code.long_words
        for idx in range(0, len(long_words), LONGWORDS_PER_LINE):
            self.out(' '.join(format_long_word(_) for _ in long_words[idx:idx + LONGWORDS_PER_LINE]))

        if self.disassemble:
            self.out('** Disassembly:')
            for insn in disasm_block(code):
                self.out(f'{insn.address:08x}: {insn.mnemonic} {insn.op_str}'.rstrip())

    def dump_data(self, data):
        self.out(f'** Data block size: {format_size(data.longs.value)}')

    def dump_bss(self, bss):
        self.out(f'** BSS block size: {format_size(bss.longs.value)}')

    def dump_reloc(self, reloc):
        for idx, group in enumerate(reloc.groups, start=1):
            self.out(f'** N{idx}: {group.count.value}')
            self.out(f'** Hunk number {idx}: {group.hunk.value}')
            for offs, raw in enumerate(group.offsets.long_words):
                self.out(f'** Offset {offs}: {format_long_word(raw)}')


def inspect_file(data, out=print, disassemble=False) -> int:
    '''Dump the Hunk file found at the path (or in the raw bytes) passed as argument
    and return the exit status: a file that is not an executable is not an error.'''
    reporter = HunkReporter(out=out, disassemble=disassemble)

    try:
        reporter.report(data)
    except MagicException:
        out('Incorrect header for Amiga Executable')
        return 0
    except UnsupportedFeatureException as e:
        logger.debug(f'stopping: {e}')
        out('Calls to resident libraries found')
        return 0
    except HunkException as e:
        logger.error(f'decoding failed: {e}')
        out(f'* Error: {e}')
        return 1

    return 0

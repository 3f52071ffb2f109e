'''
Relocation blocks: lists of offsets, grouped by the hunk they point to, that
the loader patches with the final address of that hunk.
'''
from ...core import Chunk
from ...properties import Dependency
from ... import fields
from .fields import LongWordField, LongWordsField


class RelocGroup(Chunk):
    '''The offsets in the current hunk referring to the hunk numbered "hunk".

    A group with a zero count terminates the list and has no other field.'''
    count   = LongWordField()
    hunk    = LongWordField()
    offsets = LongWordsField(Dependency('.count'))

    def __repr__(self):
        if self.is_terminator():
            return f'<{self.__class__.__name__}(end)>'

        return f'<{self.__class__.__name__}(hunk={self.hunk.value}, offsets={[hex(_) for _ in self.offsets.values]})>'

    def is_terminator(self):
        return self.count.value == 0

    def is_present(self, field_name):
        return field_name == 'count' or not self.is_terminator()


class Reloc32Block(Chunk):
    groups = fields.ArrayField(RelocGroup(), canary=lambda group: group.is_terminator())


class Reloc16Block(Reloc32Block):
    '''Same layout of Reloc32Block, the offsets refer to 16-bit PC-relative references.'''
    pass

"""
Core module for the abstraction of a file format

"""
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import (
    HunkException,
    MagicException,
)
from .properties import (
    ChunkPhase,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    A Chunk can contain sub-chunks.

    If some data (raw bytes or a path) is passed to the constructor, the chunk
    is unpacked from it straight away.
    """

    def __init__(self, data=None, **kwargs):
        super().__init__(**kwargs)

        if data is not None:
            stream = Stream(data)
            self.logger.debug('unpacking \'%s\' from %r' % (self.__class__.__name__, stream))
            self.unpack(stream)

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def is_present(self, field_name: str) -> bool:
        '''Override to make a field optional depending on the values already unpacked.'''
        return True

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field present.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name() if self.is_present(_)]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def _get_size(self):
        '''the size parameter MUST not be set but MUST be derived from the subchunks'''
        return sum(field.size for _, field in self.get_fields())

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def unpack_field(self, field_name, stream):
        field = getattr(self, field_name)
        self.logger.debug('unpacking %s.%s at offset 0x%x' % (self.__class__.__name__, field_name, stream.tell()))

        try:
            field.unpack(stream)
        except HunkException as e:
            e.chain.append(field_name)
            raise

        return field

    def iter_unpack(self, stream):
        '''Unpack the fields in order, yielding the couple (name, instance) as soon
        as each field is complete.

        A field is present or not depending on is_present(), evaluated just before
        unpacking it, so it can depend on the fields that come before.
        '''
        self._phase = ChunkPhase.UNPACKING
        self.offset = stream.tell()

        for field_name in self.get_ordered_fields_name():
            if not self.is_present(field_name):
                self.logger.debug('skipping %s.%s' % (self.__class__.__name__, field_name))
                continue

            yield field_name, self.unpack_field(field_name, stream)

        if hasattr(self, 'validate') and not self.validate():
            self.logger.debug(f'magic for chunk \'{self.__class__.__name__}\' failed')
            raise MagicException(chain=[], message=f'{self.__class__.__name__} has the wrong magic')

        self._phase = ChunkPhase.DONE

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        The stream moves only forward so the fields are read back to back.'''
        for _ in self.iter_unpack(stream):
            pass

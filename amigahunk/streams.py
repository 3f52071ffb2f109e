import logging
import struct

from .exceptions import OutOfBoundsException


logger = logging.getLogger(__name__)

LONGWORD_SIZE = 4


class Stream(object):
    '''Read cursor over an immutable buffer.

    The buffer is loaded once (from raw bytes or from a path) and never
    modified; the only state is the offset, which moves forward only.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as raw bytes'''
        self._type = type(obj)
        self.obj = obj
        self._offset = 0

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)
        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to stream from' % self._type.__name__)

        init_method()

    def __repr__(self):
        return f'<{self.__class__.__name__}(offset=0x{self._offset:x}, size=0x{len(self):x})>'

    def __len__(self):
        return len(self.obj)

    def init_str(self):
        '''We think this is a path'''
        logger.debug('reading path \'%s\'' % self.obj)
        with open(self.obj, 'rb') as f:
            self.obj = f.read()

    def init_bytes(self):
        '''We think these are raw bytes'''
        pass

    def init_bytearray(self):
        self.obj = bytes(self.obj)

    def tell(self):
        return self._offset

    def remaining(self):
        return len(self.obj) - self._offset

    def _check(self, n):
        if n > self.remaining():
            raise OutOfBoundsException(
                chain=[],
                message=f'reading {n} bytes at offset 0x{self._offset:x} exceeds the {len(self.obj)} bytes available')

    def read(self, n):
        self._check(n)
        data = self.obj[self._offset:self._offset + n]
        self._offset += n

        return data

    def read_long_word_bytes(self):
        return self.read(LONGWORD_SIZE)

    def read_long_word(self):
        return struct.unpack('>I', self.read_long_word_bytes())[0]

    def advance(self, n):
        if n < 0 or n % LONGWORD_SIZE:
            raise ValueError(f'cannot advance by {n} bytes: only forward moves of whole long words are allowed')

        self._check(n)
        self._offset += n

"""
A Field is "fundamental" datatype from the format point of view, something directly
unpackable from a stream without knowing about its neighbours (except via Dependency).
"""
import logging
import struct
from enum import Flag, auto

from .meta import FieldBase, Endianess
from .properties import Dependency, ChunkPhase
from .exceptions import HunkException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, father=None, default=None):
        super().__init__()
        self._phase = ChunkPhase.INIT
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = None

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def resolve(self, attribute):
        '''Return the attribute, resolving it if it's a Dependency.'''
        if isinstance(attribute, Dependency):
            return attribute.resolve(self)

        return attribute

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_value(self):
        return self._value

    def _set_value(self, value):
        self._value = value

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    integers from bytes.

    The "enum" argument allows to have directly a representation of the integer
    value of the field itself as a member of some subclass of enum.Enum; values
    not in the enum are kept as plain integers.
    """

    def __init__(self, format, default=0, enum=None, endianess=Endianess.BIG_ENDIAN, **kw):
        self.format = format
        self.enum = enum
        self.endianess = endianess
        self.raw = b''
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value) if self.enum else hex(self.value))

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _unpack_struct(self, raw: bytes) -> int:
        return struct.unpack(self.get_format(), raw)[0]

    def _unpack_enum(self, value: int):
        try:
            return self.enum(value)
        except ValueError:
            self.logger.debug(f'enum {self.enum!r} doesn\'t have element with value 0x{value:x} in it')

        return value

    def _unpack(self, raw):
        value = self._unpack_struct(raw)
        if self.enum:
            value = self._unpack_enum(value)

        return value

    def unpack(self, stream):
        self.offset = stream.tell()
        self.raw = stream.read(self.size)
        self.value = self._unpack(self.raw)


class StringField(Field):
    """Represent a contiguous chunk of bytes, "n" bytes long."""

    def __init__(self, n, **kw):
        self._n = n
        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return self.length

    @property
    def length(self):
        return self.resolve(self._n)

    def value_from_default(self):
        return self.default if self.default is not None else b''

    def _get_size(self):
        return len(self.value)

    def unpack(self, stream):
        self.offset = stream.tell()
        self.value = stream.read(self.length)


class SkipField(StringField):
    """Consume "n" bytes without keeping them around."""

    def __repr__(self):
        return f'<{self.__class__.__name__}(0x{self._skipped:x})>'

    def init(self):
        super().init()
        self._skipped = 0

    def _get_size(self):
        return self._skipped

    def unpack(self, stream):
        self.offset = stream.tell()
        length = self.length
        stream.advance(length)
        self._skipped = length


class ArrayField(Field):
    '''Unpack an array of Chunks.

    You can indicate an explicit number of elements via the parameter named "n"
    or you can indicate with a callable returning True which element is the terminator
    for the list via the parameter named "canary". The terminator is consumed from
    the stream and kept in the attribute "terminator" but it's not an element of the array.
    '''

    def __init__(self, field_cls, n=0, canary=None, **kw):
        if not isinstance(n, (Dependency, int)):
            raise ValueError('n is \'%s\' must be of the right type' % n.__class__.__name__)

        self.field_cls = field_cls
        self._n = n
        self._canary = canary
        self.terminator = None

        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        return []

    @property
    def n(self):
        return self.resolve(self._n)

    def _get_size(self):
        size = sum(element.size for element in self.value)

        if self.terminator is not None:
            size += self.terminator.size

        return size

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack_element(self, index, stream):
        element = self.instance_element()
        try:
            element.unpack(stream)
        except HunkException as e:
            e.chain.append(str(index))
            raise

        return element

    def iter_unpack(self, stream):
        '''Unpack the elements one at a time, yielding each of them as soon
        as it's complete.'''
        self._phase = ChunkPhase.UNPACKING
        self.offset = stream.tell()
        self.value = []
        self.terminator = None

        if self._canary is None:
            n = self.n
            self.logger.debug('unpacking %d elements for \'%s\'' % (n, self.name))
            for index in range(n):
                element = self.unpack_element(index, stream)
                self.value.append(element)
                yield element
        else:
            index = 0
            while True:
                element = self.unpack_element(index, stream)
                if self._canary(element):
                    self.terminator = element
                    break
                self.value.append(element)
                index += 1
                yield element

        self._phase = ChunkPhase.DONE

    def unpack(self, stream):
        for _ in self.iter_unpack(stream):
            pass


class SelectField(Field):
    """Allow to select the kind of final field based on condition in the parent chunk.
    You need to pass the name of the field to use as key and a dictionary with the mapping
    between its value and a (class, args, kwargs) triple. You can use Type.DEFAULT as a default.

    Like in the following example we have a format that uses the first long word to indicate
    what follows: for value zero you have another long word, otherwise 16 bytes

        type2field = {
            0: (LongWordField, (), {}),
            SelectField.Type.DEFAULT: (fields.StringField, (0x10,), {}),
        }

        class DummyChunk(Chunk):
            type = LongWordField()
            data = fields.SelectField('type', type2field)
    """
    class Type(Flag):
        DEFAULT = auto()

    def __init__(self, key, mapping, *args, **kwargs):
        self._key = key
        self._mapping = mapping
        self._field = None

        super().__init__(*args, **kwargs)

    def __repr__(self):
        return f'<{self.__class__.__name__}{self._field!r}>'

    def value_from_default(self):
        return None

    def _get_value(self):
        return self._field

    def _set_value(self, value):
        self._field = value

    def _get_size(self) -> int:
        return self._field.size if self._field is not None else 0

    def unpack(self, stream):
        self.logger.debug('resolving key \'%s\'' % self._key)
        field_key = getattr(self.father, self._key)

        key = field_key.value if field_key.value in self._mapping else SelectField.Type.DEFAULT

        self.logger.debug('using key \'%s\' (original was \'%s\')' % (key, field_key.value))

        field_class, args, kwargs = self._mapping[key]
        self.offset = stream.tell()
        self._field = field_class(*args, **kwargs)
        self._field.father = self
        self._field.name = self.name

        self._field.unpack(stream)
        self.logger.debug(f'unpacked {self._field!r}')

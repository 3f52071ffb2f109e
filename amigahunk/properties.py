import inspect
import logging
from enum import Enum, auto


class ChunkPhase(Enum):
    '''Enum to state the actual phase of a chunk'''
    INIT      = 0
    UNPACKING = auto()
    DONE      = auto()


def get_root_from_chunk(instance):
    father = instance

    while father.father is not None:
        father = father.father

    return father


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Simple(Chunk):
            count = LongWordField()
            data  = LongWordsField(Dependency('.count'))

    and have the number of long words contained in the field named 'data'
    read from the field named 'count', already unpacked when 'data' needs it.

    The syntax for the expression is inspired from module resolution:

     - '.' as first char indicates we start from the father of the field
     - otherwise the resolution starts from the root chunk

    Each component is looked up as an attribute; the last one can be a field
    (its value is used) or a method (it's called).
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        self.logger.debug('trying to resolve \'%s\' from \'%s\'' % (
            self.expression,
            instance.__class__.__name__,
        ))

        # '.count'.split(".") -> ['', 'count']
        # 'table.count'.split(".") -> ['table', 'count']
        fields_path = self.expression.split('.')

        if fields_path[0] == '':  # we have a relative dependency
            field = instance.father
            fields_path = fields_path[1:]
        else:
            field = get_root_from_chunk(instance)

        if field is None:
            raise AttributeError(f'cannot resolve \'{self.expression}\' for a field without father')

        for component_name in fields_path:
            field = getattr(field, component_name)

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        field = self.resolve_field(instance)

        value = field() if inspect.ismethod(field) else field.value

        self.logger.debug(' resolved \'%s\' with value %s' % (self.expression, value))

        return value

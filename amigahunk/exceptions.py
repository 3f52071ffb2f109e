class HunkException(Exception):
    '''Base class to extend in order to throw exception in amigahunk.

    It takes as first argument the chain of the layers that caused the exception;
    each chunk crossed while propagating appends its field name to it, so the
    innermost name comes first.
    '''

    def __init__(self, chain, message=''):
        self.chain = chain
        self.message = message
        super().__init__(message)

    @property
    def path(self):
        return '.'.join(reversed(self.chain))

    def __str__(self):
        if not self.chain:
            return self.message

        return f'{self.message} (at {self.path})'


class UnpackException(HunkException):
    pass


class OutOfBoundsException(UnpackException):
    '''A read would go past the end of the stream.'''
    pass


class MagicException(HunkException):
    pass


class UnsupportedFeatureException(HunkException):
    pass


class MalformedTableException(HunkException):
    pass


class UnrecoverableException(HunkException):
    '''This is useful when is not possible to let an unknown value
    slip through the parsing.'''
    pass


class UnknownBlockTypeException(UnrecoverableException):
    pass

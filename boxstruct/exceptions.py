class BoxstructException(Exception):
    '''Base class to extend in order to throw exception in boxstruct.

    It takes as first argument the chain of the layers that caused the
    exception: each layer the exception crosses appends its own name, so
    the innermost element comes first.
    '''

    def __init__(self, chain, message=None):
        self.chain = chain
        self.message = message
        super().__init__(message)

    def __str__(self):
        msg = self.message or self.__class__.__name__
        if self.chain:
            msg = '%s (at %s)' % (msg, '.'.join(reversed(self.chain)))

        return msg


class UnpackException(BoxstructException):
    '''The stream ended before the data needed to unpack a field.'''
    pass


class PackException(BoxstructException):
    '''The stream accepted fewer bytes than were written to it.'''
    pass


class InvalidBoxException(BoxstructException):
    '''The data doesn't respect the structure of the format, like a child
    box declaring a size larger than its container.'''
    pass


class DepthException(BoxstructException):
    '''Boxes are nested deeper than the maximum depth allowed.'''
    pass

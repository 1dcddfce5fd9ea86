import io
import logging

from .exceptions import UnpackException, PackException


logger = logging.getLogger(__name__)

# no single read() asks for more than this, so a forged size can't make us
# allocate memory for data that is not there
READ_CHUNK_SIZE = 64 * 1024


class Stream(object):
    '''This is a simple wrapper around bytes/path/file object to
    uniform its properties: mainly we need exact reads and absolute seeks.

    A file object passed by the caller is never closed by the stream.'''
    def __init__(self, obj, flags='r'):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self._owned = False
        self.flags = flags
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_fileobj)

        init_method()

    @classmethod
    def wrap(cls, obj):
        '''Return obj if it's already a Stream, otherwise wrap it.'''
        return obj if isinstance(obj, Stream) else cls(obj)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self._type.__name__)

    def __getattr__(self, name):
        if name == 'obj':
            raise AttributeError(name)
        return getattr(self.obj, name)

    def __del__(self):
        self.close()

    def close(self):
        if getattr(self, '_owned', False):
            self.obj.close()
            self._owned = False

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        self.obj = open(self.obj, 'rb' if self.flags == 'r' else 'r+b')
        self._owned = True

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def init_fileobj(self):
        '''Anything else must already behave like a binary file object'''
        for method in ('read', 'seek', 'tell'):
            if not hasattr(self.obj, method):
                raise ValueError('\'%s\' is the wrong kind of object to use as stream' % self._type.__name__)

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        return self.obj.seek(offset)

    def tell(self):
        return self.obj.tell()

    def length(self):
        '''Total size of the underlying data, the cursor is left untouched'''
        current = self.obj.tell()
        end = self.obj.seek(0, io.SEEK_END)
        self.obj.seek(current)

        return end

    def read_exact(self, size):
        '''Read exactly size bytes, failing if the stream ends before.

        The data is read incrementally so that memory grows with what is
        actually in the stream and not with what a header claims.'''
        if size < 0:
            raise ValueError('cannot read a negative amount (%d) of bytes' % size)

        data = []
        remaining = size
        while remaining:
            block = self.obj.read(min(remaining, READ_CHUNK_SIZE))
            if not block:
                break
            data.append(block)
            remaining -= len(block)

        if remaining:
            raise UnpackException(
                chain=[],
                message='short read: expected %d bytes, got %d' % (size, size - remaining))

        return b''.join(data)

    def skip_to(self, position):
        '''Move the cursor to an absolute position, forward or backward'''
        current = self.obj.tell()
        if current != position:
            logger.debug('skipping from %d to %d' % (current, position))
            self.obj.seek(position)

    def write(self, data):
        written = self.obj.write(data)
        # some raw file objects return None when they would block
        if written is None or written != len(data):
            raise PackException(
                chain=[],
                message='short write: expected %d bytes, wrote %s' % (len(data), written))

        return written

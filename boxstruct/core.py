"""
Core module for the abstraction of a file format

"""
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .enum import ChunkPhase
from .exceptions import BoxstructException


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    A Chunk can contain sub-chunks: every class attribute that is a Field
    becomes a field of the chunk, in declaration order.

    NOTE: field names must not shadow the attributes of Field itself
          (name, father, value, size, raw, offset, ...).
    """

    def __init__(self, stream=None, **kwargs):
        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if stream is not None:
            stream = Stream.wrap(stream)
            self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, stream))
            self.unpack(stream)
        else:
            self.relayout()

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

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

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented

        return self.value == other.value

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def _get_value(self) -> Dict:
        return {name: field.value for name, field in self.get_fields()}

    def _set_value(self, value):
        # the value of a chunk is only a view over its fields
        if value is None:
            return

        for name, field_value in value.items():
            setattr(self, name, field_value)

    def _get_size(self):
        '''the size parameter MUST not be set but MUST be derived from the subchunks'''
        size = 0
        for _, field in self.get_fields():
            size += field.size

        return size

    def _get_raw(self):
        value = b''
        for field_name, field_instance in self.get_fields():
            field_raw = field_instance.raw
            self.logger.debug("field '{}' raw={}".format(field_name, field_raw))
            value += field_raw

        return value

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def relayout(self, offset=0):
        '''This method triggers the chunk's children to reset the offsets.

        In practice it's like packing() but it's only interested in the sizes
        of the chunks.'''
        phase_old = self._phase
        self._phase = ChunkPhase.RELAYOUTING
        self.offset = offset

        size = 0
        for field_name, field_instance in self.get_fields():
            self.logger.debug('relayouting %s.%s' % (self.__class__.__name__, field_name))
            size += field_instance.relayout(offset=offset + size)

        self._phase = phase_old

        return size

    def pack(self, stream):
        '''Encode each field one after the other at the current position
        of the stream; it returns the number of bytes written.'''
        stream = Stream.wrap(stream)
        self._phase = ChunkPhase.PACKING

        written = 0
        for field_name, field_instance in self.get_fields():
            self.logger.debug('packing %s.%s at offset %08x' % (
                self.__class__.__name__, field_name, stream.tell()))
            written += field_instance.pack(stream)

        self._phase = ChunkPhase.DONE

        return written

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        The fields are read one after the other starting from the current
        offset of the stream; the offset of each field is recorded.
        '''
        stream = Stream.wrap(stream)
        self._phase = ChunkPhase.UNPACKING
        for field_name, field in self.get_fields():
            self.unpack_field(field_name, field, stream)

        self._phase = ChunkPhase.DONE

    def unpack_field(self, field_name, field, stream):
        self.logger.debug('unpacking %s.%s' % (self.__class__.__name__, field_name))

        offset = stream.tell()
        self.logger.debug('offset at %d' % offset)

        try:
            field.unpack(stream)
        except BoxstructException as e:
            self._phase = ChunkPhase.ERROR
            e.chain.append(field_name)
            raise
        field.offset = offset

import logging

from ...core import Chunk
from ...meta import Endianess
from ... import fields
from . import fields as mp4_fields
from .enum import BoxType


logger = logging.getLogger(__name__)


class BoxHeader(Chunk):
    '''The 8 bytes in front of each box: its size, including the header itself,
    as a big endian 32 bits integer, followed by the four-character code
    of the type.

    No check is done on the size, neither reading nor writing: only the
    container knows what a sensible size is.'''
    length = fields.StructField('I', endianess=Endianess.BIG_ENDIAN)
    type   = mp4_fields.FourCCField()

    @classmethod
    def new(cls, box_type, size) -> "BoxHeader":
        header = cls()
        header.type.value = box_type
        header.length.value = size

        return header

    @classmethod
    def read(cls, stream) -> "BoxHeader":
        header = cls(stream)
        logger.debug('read header \'%s\' of %d bytes' % (header.type, header.length.value))

        return header

    def write(self, stream) -> int:
        return self.pack(stream)

    @property
    def box_type(self) -> BoxType:
        return BoxType.lookup(self.type.value)

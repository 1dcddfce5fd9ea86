'''
# MP4 family boxes

ISO/IEC 14496-12 (ISO base media file format) describes a file as a
sequence of boxes: a box starts with a header made of its size (header
included) and a four-character code for its type; the payload of a
container box is itself a sequence of boxes.

    .---------------------.
    | size (4 bytes, BE)  |
    | type (4 bytes)      |
    |---------------------|
    | payload             |
    |   (size - 8 bytes)  |
    '---------------------'

Only the kinds listed in BoxType are decoded, any other box is returned as
an OpaqueBox with the raw payload.
'''
import logging

from ...enum import Compliant
from ...exceptions import InvalidBoxException
from ...streams import Stream
from .box import Box, ContainerBox, FullBox, OpaqueBox
from .boxes import BOX_CLASSES, HdlrBox, MetaBox, UdtaBox
from .constants import HEADER_SIZE, HEADER_EXT_SIZE, MAX_DEPTH
from .enum import BoxType
from .header import BoxHeader


logger = logging.getLogger(__name__)


def read_box(stream, max_depth=MAX_DEPTH, compliant=Compliant.INHERIT):
    '''Read the box at the current position of the stream, dispatching on
    its type to the class decoding it.'''
    stream = Stream.wrap(stream)

    header = BoxHeader.read(stream)
    size = header.length.value

    if size < HEADER_SIZE:
        raise InvalidBoxException(
            chain=[str(header.type)],
            message=f'box declares size {size} smaller than its header')

    box_cls = BOX_CLASSES.get(header.box_type)
    if box_cls is None:
        logger.debug('\'%s\' box is not known, keeping %d bytes' % (header.type, size - HEADER_SIZE))
        return OpaqueBox(str(header.type), size, stream.read_exact(size - HEADER_SIZE))

    return box_cls.read_box(stream, size, max_depth=max_depth, compliant=compliant)


def iter_boxes(stream, end=None, **kwargs):
    '''Yield the boxes one after the other from the current position until
    "end" (by default the end of the stream).'''
    stream = Stream.wrap(stream)

    if end is None:
        end = stream.length()

    while stream.tell() < end:
        yield read_box(stream, **kwargs)

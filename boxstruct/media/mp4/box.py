'''
# Boxes

Every box kind is a Chunk that knows its own type: the fields of the chunk are
the payload of the box, the header is derived from the type and the size of
the payload each time the box is written.

Each kind provides the same interface

 - box_type: the member of BoxType identifying the kind
 - box_size(): size of the box, header included
 - read_box(stream, size): build an instance reading the stream just after the header
 - write_box(stream): write header and payload, returning the number of bytes written

so that a container doesn't need to know anything about what it contains.
'''
import json
from typing import Dict, List, NamedTuple

from ...core import Chunk
from ...enum import Compliant, ChunkPhase
from ...exceptions import BoxstructException, DepthException, InvalidBoxException
from ...streams import Stream
from ... import fields
from .constants import HEADER_SIZE, MAX_DEPTH
from .enum import BoxType
from .fields import BoxField, FourCCField, UInt24Field
from .header import BoxHeader


def _json_default(obj):
    if isinstance(obj, (bytes, bytearray)):
        return list(obj)

    raise TypeError(f'object of type {obj.__class__.__name__} is not JSON serializable')


class OpaqueBox(NamedTuple):
    '''A box whose type is not modelled: the payload is kept as it is.'''
    name: str
    size: int
    data: bytes

    @property
    def box_type(self) -> BoxType:
        return BoxType.lookup(self.name)

    def box_size(self) -> int:
        return self.size

    def to_dict(self) -> Dict:
        return dict(self._asdict())

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=_json_default)

    def summary(self) -> str:
        return ''


class Box(Chunk):
    '''With a stream the box is read starting from its header, the type
    must be the one of the class.'''
    box_type = BoxType.UNKNOWN

    def __init__(self, stream=None, **kwargs):
        super().__init__(**kwargs)

        if stream is not None:
            stream = Stream.wrap(stream)
            try:
                header = BoxHeader.read(stream)
                self.check_header(header)
                self.unpack_box(stream, header.length.value)
            except BoxstructException as e:
                e.chain.append(str(self.box_type))
                raise

    def check_header(self, header):
        if header.box_type != self.box_type:
            raise InvalidBoxException(
                chain=[],
                message=f"expected a '{self.box_type}' box, found '{header.type}'")

        if header.length.value < HEADER_SIZE:
            raise InvalidBoxException(
                chain=[],
                message=f'box declares size {header.length.value} smaller than its header')

    def check_fixed_size(self, size, fixed_size):
        if size < fixed_size:
            raise InvalidBoxException(
                chain=[],
                message=f"'{self.box_type}' box of {size} bytes cannot hold its {fixed_size} bytes of fields")

    def box_size(self) -> int:
        return HEADER_SIZE + self.size

    def get_header(self) -> BoxHeader:
        return BoxHeader.new(self.box_type, self.box_size())

    def to_bytes(self) -> bytes:
        return self.get_header().raw + self.raw

    @classmethod
    def read_box(cls, stream, size, father=None, depth=0, max_depth=MAX_DEPTH, compliant=Compliant.INHERIT):
        '''Build the box reading from the stream positioned just after its header.

        size is the size declared by the header, depth the number of boxes
        enclosing this one.'''
        stream = Stream.wrap(stream)

        try:
            if depth > max_depth:
                raise DepthException(
                    chain=[],
                    message=f'boxes nested deeper than {max_depth} levels')

            box = cls(father=father, compliant=compliant)
            box.unpack_box(stream, size, depth=depth, max_depth=max_depth)
        except BoxstructException as e:
            e.chain.append(str(cls.box_type))
            raise

        return box

    def unpack_box(self, stream, size, depth=0, max_depth=MAX_DEPTH):
        start = stream.tell() - HEADER_SIZE
        end = start + size

        self.unpack(stream)

        if stream.tell() > end:
            self.logger.warning('\'%s\' box overruns its declared size of %d bytes' % (self.box_type, size))

        stream.skip_to(end)

    def write_box(self, stream) -> int:
        '''Write header and payload, the size is computed from the actual content'''
        stream = Stream.wrap(stream)

        written = self.get_header().write(stream)
        written += self.pack(stream)

        return written

    def to_dict(self) -> Dict:
        '''Project the box into plain python objects: a sub-box missing from
        its slot doesn't appear at all.'''
        result = {}
        for name, field in self.get_fields():
            if isinstance(field, BoxField):
                if field.value is None:
                    continue
                result[name] = field.value.to_dict()
            elif isinstance(field, FourCCField):
                result[name] = str(field)
            else:
                result[name] = field.value

        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=_json_default)

    def summary(self) -> str:
        return ''


class FullBox(Box):
    '''Box whose payload starts with a version and a set of flags'''
    version = fields.StructField('B')
    flags   = UInt24Field()


class ContainerBox(Box):
    '''A box whose payload is a sequence of boxes.

    The sub-boxes the container knows about are declared as BoxField and
    the container holds at most one of each kind; any other box found while
    reading ends up in "children" as an OpaqueBox, in the order it was found.

    The size of the container only accounts for its fields, i.e. the children
    are not written back: they are there to be inspected, not to be preserved.

        class UdtaBox(ContainerBox):
            box_type = BoxType.UDTA
            meta = BoxField(MetaBox)
    '''

    def __init__(self, *args, **kwargs):
        self.children: List[OpaqueBox] = []
        super().__init__(*args, **kwargs)

    def __repr__(self):
        return '%s children=%r>' % (super().__repr__()[:-1], self.children)

    def __eq__(self, other):
        result = super().__eq__(other)
        if result is NotImplemented or not result:
            return result

        return self.children == other.children

    def to_dict(self) -> Dict:
        result = super().to_dict()
        result['children'] = [_.to_dict() for _ in self.children]

        return result

    def get_children(self) -> List[OpaqueBox]:
        return self.children

    def get_box_fields(self) -> Dict[BoxType, BoxField]:
        return {field.box_type: field for _, field in self.get_fields() if isinstance(field, BoxField)}

    def check_child_header(self, header, size, remaining):
        '''The declared size of a child is compared with the declared size of
        the container; with Compliant.BOUNDS it must fit in what remains of it.'''
        child_size = header.length.value

        if child_size < HEADER_SIZE:
            raise InvalidBoxException(
                chain=[],
                message=f"'{self.box_type}' box contains a '{header.type}' box with size {child_size} smaller than its header")

        if child_size > size:
            raise InvalidBoxException(
                chain=[],
                message=f"'{self.box_type}' box contains a '{header.type}' box with a larger size than it")

        if self.is_compliant(Compliant.BOUNDS) and child_size > remaining:
            raise InvalidBoxException(
                chain=[],
                message=f"'{self.box_type}' box contains a '{header.type}' box overrunning it by {child_size - remaining} bytes")

    def unpack_box(self, stream, size, depth=0, max_depth=MAX_DEPTH):
        start = stream.tell() - HEADER_SIZE
        end = start + size

        self._phase = ChunkPhase.UNPACKING
        try:
            self.unpack_children(stream, size, end, depth, max_depth)
        except BoxstructException:
            self._phase = ChunkPhase.ERROR
            raise

        # there could be padding or a child smaller than it declares
        stream.skip_to(end)
        self._phase = ChunkPhase.DONE

    def unpack_children(self, stream, size, end, depth, max_depth):
        box_fields = self.get_box_fields()
        fixed_fields = [(name, field) for name, field in self.get_fields() if not isinstance(field, BoxField)]

        # the fixed part of the payload, like version and flags of a full box
        self.check_fixed_size(size, HEADER_SIZE + sum(field.size for _, field in fixed_fields))
        for field_name, field in fixed_fields:
            self.unpack_field(field_name, field, stream)

        current = stream.tell()
        while current < end:
            if end - current < HEADER_SIZE:
                self.logger.debug('%d bytes of padding at the end of \'%s\' box' % (end - current, self.box_type))
                break

            header = BoxHeader.read(stream)
            self.check_child_header(header, size, end - current)

            child_size = header.length.value
            field = box_fields.get(header.box_type)

            if field is not None:
                self.logger.debug('\'%s\' box at %d goes into \'%s\'' % (header.type, current, field.name))
                # the last one wins
                field.value = field.box_cls.read_box(
                    stream, child_size, father=self, depth=depth + 1, max_depth=max_depth)
            else:
                self.logger.debug('\'%s\' box at %d is not known, keeping %d bytes' % (
                    header.type, current, child_size - HEADER_SIZE))
                data = stream.read_exact(child_size - HEADER_SIZE)
                self.children.append(OpaqueBox(str(header.type), child_size, data))

            current = stream.tell()

        if current > end:
            self.logger.warning('children of \'%s\' box overrun it by %d bytes' % (self.box_type, current - end))

'''
Fields specific of the MP4 family.
'''
from bitstring import Bits

from ... import fields
from ...streams import Stream
from .constants import HEADER_SIZE
from .enum import BoxType


class FourCCField(fields.StringField):
    '''Four-character code, like the type of a box.

    It accepts bytes, str or a BoxType as value but always stores bytes.'''

    def __init__(self, **kw):
        super().__init__(4, **kw)

    def __str__(self):
        return self.value.decode('latin-1')

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, str(self))

    def _set_value(self, value) -> None:
        if isinstance(value, BoxType):
            value = value.value
        if isinstance(value, str):
            value = value.encode('latin-1')

        super()._set_value(value)


class UInt24Field(fields.Field):
    '''24 bits unsigned big endian integer, like the flags of a full box.

    The struct module doesn't have a format for it, we let bitstring do the work.'''

    def __init__(self, default=0, **kw):
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def _get_size(self):
        return 3

    def _get_raw(self) -> bytes:
        return Bits(uint=self.value, length=24).bytes

    def _set_raw(self, raw: bytes) -> None:
        self.value = Bits(raw).uint

    def unpack(self, stream):
        self.raw = Stream.wrap(stream).read_exact(self.size)


class BoxField(fields.Field):
    '''Slot of a container for an optional sub-box of a known kind.

    The value is either None or an instance of box_cls; when present it
    contributes its whole box (header included) to the size and the raw
    data of the container.

    The sub-box is not unpacked by the field: the container reads the header
    and then decides which slot the box belongs to.'''

    def __init__(self, box_cls, **kw):
        self.box_cls = box_cls
        super().__init__(default=None, **kw)

    @property
    def box_type(self) -> BoxType:
        return self.box_cls.box_type

    def _set_value(self, value):
        if value is not None:
            if not isinstance(value, self.box_cls):
                raise ValueError(f"field '{self.name}' accepts only instances of {self.box_cls.__name__}")
            value.father = self.father

        super()._set_value(value)

    def _get_size(self):
        return self.value.box_size() if self.value is not None else 0

    def _get_raw(self) -> bytes:
        return self.value.to_bytes() if self.value is not None else b''

    def relayout(self, offset=0):
        size = super().relayout(offset=offset)
        if self.value is not None:
            self.value.relayout(offset=offset + HEADER_SIZE)

        return size

    def pack(self, stream):
        if self.value is None:
            return 0

        return self.value.write_box(stream)

    def unpack(self, stream):
        raise TypeError(f"'{self.name}' is read by its container with read_box()")

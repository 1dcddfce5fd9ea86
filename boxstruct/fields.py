"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable without need for relayouting.
"""
import logging
import struct

from .enum import Compliant, ChunkPhase
from .meta import FieldBase, Endianess
from .exceptions import UnpackException, InvalidBoxException
from .streams import Stream


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, *args, name=None, father=None, default=None, offset=None,
                 endianess=Endianess.BIG_ENDIAN, compliant=Compliant.INHERIT):
        super().__init__()
        self._phase = ChunkPhase.INIT
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.endianess = endianess
        self.compliant = compliant

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def is_compliant(self, level):
        '''Returns True if this field or, following INHERIT, one of its fathers
        requires the given level of compliance.'''
        instance = self
        while instance:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def _get_value(self):
        return self._value

    def _set_value(self, value):
        self._value = value

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    def _set_raw(self, value) -> None:
        raise NotImplementedError(f"method {self.__class__.__name__}._set_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
        fset=lambda self, value: self._set_raw(value),
    )

    def relayout(self, offset=0):
        self.logger.debug("relayouting %s", self.__class__.__name__)
        self.offset = offset

        return self.size

    def pack(self, stream):
        '''Write the binary representation at the current position of the stream,
        returning the number of bytes written.'''
        return stream.write(self.raw)

    def unpack(self, stream):
        raise NotImplementedError(f"method {self.__class__.__name__}.unpack() not implemented")


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def __str__(self):
        width = self.size * 2  # we want to be as large as possible
        formatter = '0x%%0%dx' % width
        return formatter % self.value

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        try:
            return struct.pack(self.get_format(), self.value)
        except struct.error as e:
            raise ValueError(f"value {self.value!r} doesn't fit into field '{self.name}': {e}") from e

    def _set_raw(self, raw: bytes) -> None:
        self.value = self._unpack_struct(raw)

    def _unpack_struct(self, value: bytes) -> int:
        try:
            unpacked_value = struct.unpack(self.get_format(), value)[0]
        except struct.error as e:
            self.logger.error(e)
            raise UnpackException(chain=[], message=str(e)) from e

        return unpacked_value

    def unpack(self, stream):
        self.raw = Stream.wrap(stream).read_exact(self.size)


class StringField(Field):
    """Represent a contiguous chunk of bytes with a fixed length."""

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError(f"StringField must have 'n' or 'default' indicated!")

        self.length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __len__(self):
        return self.length

    def value_from_default(self):
        return b'\x00' * self.length if not self.default else self.default

    def _get_size(self):
        return self.length

    def _set_value(self, value) -> None:
        if len(value) != self.length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self.length} bytes)')

        super()._set_value(bytes(value))

    def _get_raw(self) -> bytes:
        return self.value

    def _set_raw(self, raw: bytes) -> None:
        self.value = raw

    def unpack(self, stream):
        self.raw = Stream.wrap(stream).read_exact(self.length)


class CStringField(Field):
    """NUL terminated UTF-8 string.

    When unpacking, the string occupies exactly "length" bytes of the stream
    (usually whatever remains of the enclosing chunk) and everything after
    the first NUL is discarded; when packing a single NUL is appended.
    """

    def __init__(self, default='', **kw):
        self.length = None
        super().__init__(default=default, **kw)

    def _get_size(self):
        return len(self.raw)

    def _get_raw(self) -> bytes:
        return self.value.encode('utf-8') + b'\x00'

    def _set_raw(self, raw: bytes) -> None:
        text = raw.split(b'\x00', 1)[0]
        try:
            self.value = text.decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidBoxException(chain=[], message=f'string is not valid UTF-8: {e}') from e

    def unpack(self, stream):
        if self.length is None:
            raise ValueError(f"the length of '{self.name}' must be set before unpacking")

        self.raw = Stream.wrap(stream).read_exact(self.length)

import io
import struct

import pytest

from boxstruct.enum import Compliant
from boxstruct.exceptions import DepthException, InvalidBoxException
from boxstruct.media.mp4 import (
    BoxType,
    HdlrBox,
    MetaBox,
    OpaqueBox,
    UdtaBox,
    iter_boxes,
    read_box,
)


def hdlr_payload(handler_type=b'mdir', name=b'Apple\x00'):
    return b'\x00' * 4 + b'\x00' * 4 + handler_type + b'\x00' * 12 + name


def test_hdlr():
    src_box = HdlrBox()
    src_box.handler_type.value = 'mdir'
    src_box.handler_name.value = 'Apple'

    assert src_box.box_size() == 38

    buf = io.BytesIO()

    assert src_box.write_box(buf) == src_box.box_size()
    assert buf.getvalue() == struct.pack('>I', 38) + b'hdlr' + hdlr_payload()

    dst_box = read_box(io.BytesIO(buf.getvalue()))

    assert dst_box == src_box
    assert dst_box.summary() == 'handler_type=mdir name=Apple'


def test_hdlr_name_without_terminator(make_box):
    dst_box = read_box(io.BytesIO(make_box(b'hdlr', hdlr_payload(b'vide', b'Video'))))

    assert dst_box.handler_type.value == b'vide'
    assert dst_box.handler_name.value == 'Video'
    assert dst_box.to_dict() == {
        'version': 0,
        'flags': 0,
        'pre_defined': 0,
        'handler_type': 'vide',
        'reserved': b'\x00' * 12,
        'handler_name': 'Video',
    }


def test_hdlr_too_small(make_box):
    with pytest.raises(InvalidBoxException) as excinfo:
        read_box(io.BytesIO(make_box(b'hdlr', b'\x00' * 12)))

    assert excinfo.value.chain == ['hdlr']


def test_meta_empty():
    src_box = MetaBox()

    assert src_box.box_size() == 12
    assert src_box.summary() == ''

    buf = io.BytesIO()
    src_box.write_box(buf)

    assert read_box(io.BytesIO(buf.getvalue())) == src_box


def test_udta_meta_hdlr(make_box):
    """The usual iTunes-like layout: the item list is kept opaque."""
    ilst = make_box(b'ilst', make_box(b'\xa9nam', b'title'))
    meta = make_box(b'meta', b'\x00\x00\x00\x00' + make_box(b'hdlr', hdlr_payload()) + ilst)
    data = make_box(b'udta', meta)

    udta = read_box(io.BytesIO(data))

    assert isinstance(udta, UdtaBox)
    assert udta.children == []

    meta_box = udta.meta.value
    assert meta_box.hdlr.value.summary() == 'handler_type=mdir name=Apple'
    assert meta_box.children == [OpaqueBox('ilst', len(ilst), ilst[8:])]
    assert meta_box.father is udta
    assert meta_box.hdlr.value.father is meta_box

    buf = io.BytesIO()

    assert udta.write_box(buf) == len(data) - len(ilst)


def test_depth(make_box):
    data = make_box(b'udta', make_box(b'meta', b'\x00' * 4 + make_box(b'hdlr', hdlr_payload())))

    assert read_box(io.BytesIO(data), max_depth=2).meta.value.hdlr.value is not None

    with pytest.raises(DepthException) as excinfo:
        read_box(io.BytesIO(data), max_depth=1)

    assert excinfo.value.chain == ['hdlr', 'meta', 'udta']


def test_error_from_nested_box_propagates(make_box):
    data = make_box(b'udta', make_box(b'meta', b'\x00' * 4 + make_box(b'hdlr', hdlr_payload(name=b'\xff\xfe'))))

    with pytest.raises(InvalidBoxException) as excinfo:
        read_box(io.BytesIO(data))

    assert 'udta.meta.hdlr.handler_name' in str(excinfo.value)


def test_strict_bounds_are_inherited(make_box):
    """The flag given to the outermost box applies to the nested ones."""
    overrun = make_box(b'free', b'\x00' * 8)
    meta = make_box(b'meta', b'\x00' * 4 + overrun[:12])
    data = make_box(b'udta', meta + overrun[12:])

    udta = read_box(io.BytesIO(data))
    assert udta.meta.value.children == [OpaqueBox('free', 16, b'\x00' * 8)]

    with pytest.raises(InvalidBoxException) as excinfo:
        read_box(io.BytesIO(data), compliant=Compliant.BOUNDS)

    assert excinfo.value.chain == ['meta', 'udta']


def test_read_box_unknown(make_box):
    box = read_box(io.BytesIO(make_box(b'free', b'\x00' * 3)))

    assert box == OpaqueBox('free', 11, b'\x00' * 3)
    assert box.box_type == BoxType.UNKNOWN
    assert box.box_size() == 11


def test_read_box_too_small(make_box):
    with pytest.raises(InvalidBoxException):
        read_box(io.BytesIO(make_box(b'free', size=7)))


def test_iter_boxes(make_box):
    data = make_box(b'udta') + make_box(b'free', b'\x00') + make_box(b'meta', b'\x00' * 4)

    boxes = list(iter_boxes(io.BytesIO(data)))

    assert boxes == [
        UdtaBox(),
        OpaqueBox('free', 9, b'\x00'),
        MetaBox(),
    ]


def test_meta_too_small_for_version_and_flags(make_box):
    """The meta box declares no room for its version and flags: they must
    not be taken from the box following it."""
    data = make_box(b'udta', make_box(b'meta') + make_box(b'free', b'abcd'))

    with pytest.raises(InvalidBoxException) as excinfo:
        read_box(io.BytesIO(data))

    assert excinfo.value.chain == ['meta', 'udta']


def test_meta_from_stream():
    src_box = MetaBox()
    src_box.flags = 0x000102
    src_box.hdlr = HdlrBox()

    dst_box = MetaBox(io.BytesIO(src_box.to_bytes()))

    assert dst_box == src_box
    assert dst_box.flags.value == 0x000102

import io

import pytest

from boxstruct import streams
from boxstruct.exceptions import UnpackException, PackException
from boxstruct.streams import Stream


class RecordingBytesIO(io.BytesIO):

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.requests = []

    def read(self, size=-1):
        self.requests.append(size)
        return super().read(size)


class ShortWriter(io.BytesIO):

    def write(self, data):
        return super().write(data[:1])


def test_bytes_stream():
    stream = Stream(b'\x01\x02\x03\x04\x05')

    assert stream.read_exact(2) == b'\x01\x02'
    assert stream.tell() == 2
    assert stream.length() == 5
    assert stream.tell() == 2


def test_file_stream(tmp_path):
    path_data = tmp_path / 'data.bin'
    path_data.write_bytes(b'\x01\x02\x03\x04\x05')

    stream = Stream(str(path_data))

    assert stream.read_exact(1) == b'\x01'
    assert stream.read_exact(4) == b'\x02\x03\x04\x05'
    assert stream.tell() == 5

    stream.close()


def test_wrap():
    stream = Stream(b'')

    assert Stream.wrap(stream) is stream
    assert isinstance(Stream.wrap(io.BytesIO()), Stream)


def test_wrong_object():
    with pytest.raises(ValueError):
        Stream(42)


def test_caller_stream_is_not_closed():
    obj = io.BytesIO(b'abc')

    stream = Stream(obj)
    stream.close()
    del stream

    assert not obj.closed


def test_read_exact_short():
    stream = Stream(b'\x01\x02\x03')

    with pytest.raises(UnpackException):
        stream.read_exact(4)


def test_read_exact_is_incremental(monkeypatch):
    """A huge declared size doesn't turn into a huge read request."""
    monkeypatch.setattr(streams, 'READ_CHUNK_SIZE', 4)

    obj = RecordingBytesIO(b'\xaa' * 10)
    stream = Stream(obj)

    assert stream.read_exact(10) == b'\xaa' * 10
    assert obj.requests == [4, 4, 2]

    obj.seek(0)
    obj.requests.clear()

    with pytest.raises(UnpackException):
        stream.read_exact(1 << 40)

    assert max(obj.requests) == 4


def test_skip_to():
    stream = Stream(b'\x00' * 16)

    stream.skip_to(10)
    assert stream.tell() == 10

    stream.skip_to(3)
    assert stream.tell() == 3


def test_short_write():
    stream = Stream(ShortWriter())

    with pytest.raises(PackException):
        stream.write(b'abcd')

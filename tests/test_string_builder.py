import io

import pytest

from solitable.string_builder import BUILDER_BUFFER_SIZE, ByteReader, StringBuilder


def test_put_is_little_endian():
    builder = StringBuilder()
    builder.put(1, "I")
    assert builder.to_bytes() == b"\x01\x00\x00\x00"


@pytest.mark.parametrize("fmt,value", [("B", 200), ("H", 65000), ("I", 4000000000),
                                       ("q", -12345678901), ("d", 0.25), ("?", True)])
def test_put_get_round_trip(fmt, value):
    builder = StringBuilder()
    builder.put(value, fmt)
    reader = ByteReader(builder.to_bytes())
    assert reader.get(fmt) == value
    assert not reader


def test_string_round_trip():
    builder = StringBuilder()
    builder.put_string(b"hello")
    builder.put_string("world")
    reader = ByteReader(builder.to_bytes())
    assert reader.get_string() == b"hello"
    assert reader.get_string() == b"world"
    assert len(reader) == 0


def test_put_string_none_writes_nothing():
    builder = StringBuilder()
    builder.put_string(None)
    assert len(builder) == 0


def test_discard_string():
    builder = StringBuilder()
    builder.put_string(b"skip me")
    builder.put(7, "B")
    reader = ByteReader(builder.to_bytes())
    reader.discard_string()
    assert reader.get("B") == 7


def test_append_spans_buffers():
    data = bytes(i % 251 for i in range(BUILDER_BUFFER_SIZE + 10))
    builder = StringBuilder()
    builder.append(data)
    assert builder.to_bytes() == data
    assert builder.buffer_count == 2
    assert len(builder) == len(data)


def test_append_backwards():
    builder = StringBuilder()
    builder.append(b"abc", backwards=True)
    assert builder.to_bytes() == b"cba"


def test_put_moves_to_new_buffer_when_not_contiguous():
    builder = StringBuilder()
    builder.append(bytes(BUILDER_BUFFER_SIZE - 1))
    builder.put(99, "I")
    assert builder.buffer_count == 2
    assert len(builder) == BUILDER_BUFFER_SIZE - 1 + 4
    reader = ByteReader(builder.to_bytes())
    reader.advance(BUILDER_BUFFER_SIZE - 1)
    assert reader.get("I") == 99


def test_ensure_contiguous_space_limit():
    builder = StringBuilder()
    assert builder.ensure_contiguous_space(BUILDER_BUFFER_SIZE) is True
    assert builder.ensure_contiguous_space(BUILDER_BUFFER_SIZE + 1) is False


def test_placeholder_and_patch():
    builder = StringBuilder()
    position = builder.placeholder("H")
    builder.put_pair(b"\x01", b"\x02")
    fill_in = builder.patch
    fill_in(position, 513, "H")
    reader = ByteReader(builder.to_bytes())
    assert reader.get("H") == 513
    assert reader.consume(2) == b"\x01\x02"


def test_reset():
    builder = StringBuilder()
    builder.append(bytes(BUILDER_BUFFER_SIZE * 2))
    builder.reset()
    assert len(builder) == 0
    assert builder.buffer_count == 1
    assert builder.to_bytes() == b""


def test_write_to_stream():
    builder = StringBuilder()
    builder.put_string(b"xyz")
    stream = io.BytesIO()
    written = builder.write_to(stream)
    assert written == len(builder)
    assert stream.getvalue() == builder.to_bytes()


def test_reader_errors():
    reader = ByteReader(b"\x01\x02")
    with pytest.raises(ValueError):
        reader.get("I")
    with pytest.raises(ValueError):
        reader.consume(-1)
    with pytest.raises(ValueError):
        reader.advance(3)
    assert reader.consume(2) == b"\x01\x02"
    assert not reader


def test_reader_string_too_short():
    builder = StringBuilder()
    builder.put(10, "q")
    builder.append(b"abc")
    reader = ByteReader(builder.to_bytes())
    with pytest.raises(ValueError):
        reader.get_string()
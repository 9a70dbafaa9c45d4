import pytest

from immolog.buffers import (
    BitReader,
    BitWriter,
    ByteBuf,
    DecodeError,
    round_half_away,
)


def test_uint16_is_big_endian_on_the_wire():
    buf = ByteBuf()
    buf.write_uint(0x1234, 2)
    assert buf.to_bytes() == b"\x12\x34"


def test_read_uint_of_known_bytes():
    buf = ByteBuf(b"\x12\x34\x56")
    assert buf.read_uint(2) == 0x1234
    assert buf.reader_index == 2
    assert buf.read_uint(1) == 0x56
    assert not buf.readable()


@pytest.mark.parametrize("size", [1, 2, 4, 7, 8])
def test_unsigned_round_trip(size):
    value = (1 << (size * 8)) - 2
    buf = ByteBuf()
    buf.write_uint(value, size)
    assert buf.writer_index == size
    assert buf.read_uint(size) == value


@pytest.mark.parametrize("size,value", [(1, -5), (2, -300), (7, -123456789), (7, 98765)])
def test_signed_round_trip(size, value):
    buf = ByteBuf()
    buf.write_int(value, size)
    assert buf.read_int(size) == value


def test_write_truncates_to_field_width():
    buf = ByteBuf()
    buf.write_uint(0x1FFFF, 2)
    assert buf.read_uint(2) == 0xFFFF


def test_peek_does_not_consume():
    buf = ByteBuf(b"\xd0\x06\x00")
    assert buf.peek_uint16() == 0xD006
    assert buf.reader_index == 0
    assert buf.read_uint(2) == 0xD006


def test_peek_at_end_raises():
    with pytest.raises(DecodeError):
        ByteBuf(b"\x01").peek_uint16()


def test_read_past_end_raises():
    buf = ByteBuf(b"\x01\x02")
    with pytest.raises(DecodeError):
        buf.read_uint(4)


def test_skip_past_end_raises():
    with pytest.raises(DecodeError):
        ByteBuf(b"\x00").skip(2)


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        ByteBuf().write_zero(-1)


def test_bytes_and_zero_padding():
    buf = ByteBuf()
    buf.write_bytes(b"ab")
    buf.write_zero(3)
    assert buf.to_bytes() == b"ab\x00\x00\x00"
    buf.skip(2)
    assert buf.read_bytes(3) == b"\x00\x00\x00"


def test_string_keeps_padding_for_round_trip():
    raw = b"VIN0TEST\x00\x00"
    buf = ByteBuf(raw)
    text = buf.read_string(len(raw))
    out = ByteBuf()
    out.write_string(text)
    assert out.to_bytes() == raw


def test_invalid_utf8_round_trips():
    raw = b"\xff\xfeA"
    text = ByteBuf(raw).read_string(3)
    out = ByteBuf()
    out.write_string(text)
    assert out.to_bytes() == raw


def test_to_bytes_excludes_consumed():
    buf = ByteBuf(b"\x01\x02\x03")
    buf.skip(1)
    assert buf.to_bytes() == b"\x02\x03"
    assert len(buf) == 2


def test_bit_writer_packs_msb_first():
    buf = ByteBuf()
    writer = BitWriter(buf)
    writer.write(0xA, 4)
    writer.write(0x5, 4)
    writer.finish()
    assert buf.to_bytes() == b"\xa5"


def test_bit_writer_finish_pads_with_zero():
    buf = ByteBuf()
    writer = BitWriter(buf)
    writer.write(1, 1)
    writer.finish()
    assert buf.to_bytes() == b"\x80"


def test_bit_reader_reads_across_bytes():
    buf = ByteBuf(b"\xa5\xf0")
    reader = BitReader(buf)
    assert reader.read(4) == 0xA
    assert reader.read(8) == 0x5F
    reader.finish()
    assert not buf.readable()


def test_bit_round_trip_mixed_fields():
    fields = [(1, 1), (5, 17), (16, 40000), (10, 999), (3, 5), (48, 1700000000), (64, (1 << 64) - 3)]
    buf = ByteBuf()
    writer = BitWriter(buf)
    for bits, value in fields:
        writer.write(value, bits)
    writer.finish()
    reader = BitReader(buf)
    assert [reader.read(bits) for bits, _ in fields] == [v for _, v in fields]


@pytest.mark.parametrize("bits,value", [(29, -121474836), (28, 31230000), (14, -1), (14, 1024)])
def test_signed_bit_round_trip(bits, value):
    buf = ByteBuf()
    with BitWriter(buf) as writer:
        writer.write(value, bits, False)
    reader = BitReader(buf)
    assert reader.read(bits, False) == value


def test_finish_discards_rest_of_byte_and_reader_continues():
    buf = ByteBuf()
    writer = BitWriter(buf)
    writer.write(3, 2)
    writer.finish()
    buf.write_uint(0x7E, 1)
    writer.write(9, 5)
    writer.finish()
    assert buf.writer_index == 3

    reader = BitReader(buf)
    assert reader.read(2) == 3
    reader.finish()
    assert buf.read_uint(1) == 0x7E
    assert reader.read(5) == 9
    reader.finish()
    assert not buf.readable()


def test_skip_bits_leaves_zeros_and_is_skipped():
    buf = ByteBuf()
    writer = BitWriter(buf)
    writer.write(1, 2)
    writer.skip(2)
    writer.write(2, 4)
    writer.finish()
    reader = BitReader(buf)
    assert reader.read(2) == 1
    reader.skip(2)
    assert reader.read(4) == 2


def test_bit_reader_past_end_raises():
    reader = BitReader(ByteBuf(b"\xff"))
    with pytest.raises(DecodeError):
        reader.read(9)


@pytest.mark.parametrize("value,expected", [(2.5, 3), (-2.5, -3), (2.4, 2), (-0.4, 0)])
def test_round_half_away(value, expected):
    assert round_half_away(value) == expected


def test_round_rejects_nan():
    with pytest.raises(ValueError):
        round_half_away(float("nan"))
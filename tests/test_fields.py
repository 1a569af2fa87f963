import struct

import pytest

from pstcodec.enum import Kind
from pstcodec.exceptions import (
    OversizedField,
    NonZeroInZeroField,
    MalformedValue,
    TruncatedStream,
)
from pstcodec.fields import FIELDS, get_field
from pstcodec.streams import Stream


def unpack(kind, raw, width=None):
    """Returns the text and the number of bytes consumed."""
    stream = Stream(raw)
    value = get_field(kind).unpack(stream, kind.size if width is None else width)
    return value, stream.tell()


def test_every_kind_has_a_field():
    assert set(FIELDS.keys()) == set(Kind)

    for kind, field in FIELDS.items():
        assert field.kind == kind


def test_int_negative_is_shown_unsigned():
    value, consumed = unpack(Kind.INT, b'\xff\xff\xff\xff')

    assert value == '4294967295'
    assert consumed == 4

    field = get_field(Kind.INT)
    assert field.pack(value, 4) == b'\xff\xff\xff\xff'
    assert field.pack('-1', 4) == b'\xff\xff\xff\xff'
    assert field.pack('1234', 4) == b'\xd2\x04\x00\x00'


def test_negative_pattern_is_not_remapped_by_hex_and_binary():
    assert unpack(Kind.HEX, b'\xff\xff\xff\xff')[0] == 'FF.FF.FF.FF'
    assert unpack(Kind.BINARY, b'\xff')[0] == '11111111'


def test_hex():
    value, consumed = unpack(Kind.HEX, b'\x01\x02\x03\xab')

    assert value == 'AB.03.02.01'
    assert consumed == 4
    assert get_field(Kind.HEX).pack(value, 4) == b'\x01\x02\x03\xab'
    assert get_field(Kind.HEX).pack('ab.03.02.01', 4) == b'\x01\x02\x03\xab'

    with pytest.raises(MalformedValue):
        get_field(Kind.HEX).pack('AB.03.02', 4)


def test_binary():
    assert unpack(Kind.BINARY, b'\x05')[0] == '00000101'
    assert get_field(Kind.BINARY).pack('10000000', 1) == b'\x80'

    with pytest.raises(MalformedValue):
        get_field(Kind.BINARY).pack('1000000', 1)


def test_bulk():
    value, consumed = unpack(Kind.BULK, b'\xde\xad\xbe\xef\x01', width=5)

    assert value == 'deadbeef01'
    assert consumed == 5
    assert get_field(Kind.BULK).pack('DEADBEEF01', 5) == b'\xde\xad\xbe\xef\x01'

    with pytest.raises(MalformedValue):
        get_field(Kind.BULK).pack('dead', 5)

    with pytest.raises(MalformedValue):
        get_field(Kind.BULK).pack('kebab', 5)


def test_zero():
    value, consumed = unpack(Kind.ZERO, b'\x00' * 6, width=6)

    assert value == 'zero_string'
    assert consumed == 6
    assert get_field(Kind.ZERO).pack(value, 6) == b'\x00' * 6
    assert get_field(Kind.ZERO).pack(value, 0) == b''

    with pytest.raises(NonZeroInZeroField):
        unpack(Kind.ZERO, b'\x00\x00\x01', width=3)

    with pytest.raises(MalformedValue):
        get_field(Kind.ZERO).pack('0', 3)


def test_short_and_chars():
    assert unpack(Kind.SHORT, b'\xfe\xff')[0] == '-2'
    assert unpack(Kind.CHAR, b'\x80')[0] == '-128'
    assert unpack(Kind.LCHAR, b'\x7f')[0] == '127'

    assert get_field(Kind.SHORT).pack('-2', 2) == b'\xfe\xff'
    assert get_field(Kind.CHAR).pack('-128', 1) == b'\x80'
    # the unsigned range is accepted too
    assert get_field(Kind.CHAR).pack('200', 1) == b'\xc8'

    with pytest.raises(MalformedValue):
        get_field(Kind.CHAR).pack('256', 1)

    with pytest.raises(MalformedValue):
        get_field(Kind.SHORT).pack('two', 2)


def test_wrong_width():
    with pytest.raises(MalformedValue):
        get_field(Kind.INT).pack('1', 2)

    with pytest.raises(MalformedValue):
        unpack(Kind.SHORT, b'\x00\x00\x00\x00', width=4)


def test_micro_float():
    value, consumed = unpack(Kind.UFLOAT, struct.pack('<i', 1500000))

    assert value == '  1.500000'
    assert value.strip() == '1.500000'
    assert consumed == 4

    field = get_field(Kind.UFLOAT)
    assert field.pack(value, 4) == struct.pack('<i', 1500000)
    assert unpack(Kind.UFLOAT, struct.pack('<i', -1))[0].strip() == '-0.000001'
    assert field.pack('-0.000001', 4) == struct.pack('<i', -1)

    with pytest.raises(MalformedValue):
        field.pack('0.0000001', 4)


@pytest.mark.parametrize('number,text', [
    (0, '0'),
    (2500, '2.5'),
    (2000, '2'),
    (1234, '1.234'),
    (-1500, '-1.5'),
])
def test_milli_float(number, text):
    raw = struct.pack('<i', number)

    assert unpack(Kind.MFLOAT, raw)[0] == text
    assert get_field(Kind.MFLOAT).pack(text, 4) == raw


def test_milli_float_malformed():
    with pytest.raises(MalformedValue):
        get_field(Kind.MFLOAT).pack('1.2345', 4)

    with pytest.raises(MalformedValue):
        get_field(Kind.MFLOAT).pack('one', 4)

    with pytest.raises(MalformedValue):
        get_field(Kind.MFLOAT).pack('inf', 4)


def test_text():
    raw = struct.pack('<i', 5) + b'Drake'

    value, consumed = unpack(Kind.TEXT0, raw + b'garbage')

    assert value == 'Drake'
    assert consumed == 9
    assert get_field(Kind.TEXT0).pack(value, 0) == raw


def test_text8():
    raw = struct.pack('<i', 4) + b'Nina' + b'\x00' * 8

    value, consumed = unpack(Kind.TEXT8, raw)

    assert value == 'Nina'
    assert consumed == 16
    assert get_field(Kind.TEXT8).pack(value, 8) == raw


def test_text8_non_zero_padding_is_tolerated():
    raw = struct.pack('<i', 4) + b'Nina' + b'\x01' + b'\x00' * 7

    value, consumed = unpack(Kind.TEXT8, raw)

    assert value == 'Nina'
    assert consumed == 16
    # the padding is not kept
    assert get_field(Kind.TEXT8).pack(value, 8) == raw[:8] + bytes(8)


def test_text_bounds():
    value, _ = unpack(Kind.TEXT0, struct.pack('<i', 100) + b'A' * 100)
    assert value == 'A' * 100

    with pytest.raises(OversizedField):
        unpack(Kind.TEXT0, struct.pack('<i', 101) + b'A' * 101)

    with pytest.raises(OversizedField):
        unpack(Kind.TEXT0, struct.pack('<i', -1))

    with pytest.raises(OversizedField):
        get_field(Kind.TEXT0).pack('A' * 101, 0)


def test_text_escaping():
    raw = struct.pack('<i', 7) + b'a\\b\x00\n\xe9z'

    value, _ = unpack(Kind.TEXT0, raw)

    assert value == 'a\\\\b\\x00\\x0a\xe9z'
    assert '\n' not in value
    assert get_field(Kind.TEXT0).pack(value, 0) == raw


def test_truncated():
    with pytest.raises(TruncatedStream):
        unpack(Kind.INT, b'\x01\x02')

    with pytest.raises(TruncatedStream):
        unpack(Kind.TEXT0, struct.pack('<i', 10) + b'short')


@pytest.mark.parametrize('kind,raw', [
    (Kind.INT, b'\x00\x00\x00\x80'),
    (Kind.INT, b'\x78\x56\x34\x12'),
    (Kind.HEX, b'\x00\xff\x10\x7f'),
    (Kind.BINARY, b'\xa5'),
    (Kind.SHORT, b'\x00\x80'),
    (Kind.CHAR, b'\xff'),
    (Kind.LCHAR, b'\x01'),
    (Kind.UFLOAT, b'\x00\x00\x00\x80'),
    (Kind.MFLOAT, b'\xff\xff\xff\x7f'),
])
def test_fixed_width_round_trip(kind, raw):
    value, consumed = unpack(kind, raw)

    assert consumed == kind.size
    assert get_field(kind).pack(value, kind.size) == raw


def test_text_colon_is_escaped():
    raw = struct.pack('<i', 8) + b'Port  :x'

    value, _ = unpack(Kind.TEXT0, raw)

    assert value == 'Port  \\x3ax'
    assert get_field(Kind.TEXT0).pack(value, 0) == raw

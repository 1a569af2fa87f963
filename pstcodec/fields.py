"""
A Field is the codec for one leaf kind: it reads the bytes of a leaf from the stream
and renders them as text, and it encodes that text back into the same bytes.

Fields are stateless, a single instance for each Kind lives in FIELDS.
"""
import logging
import re
import struct
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Tuple

from .enum import Kind
from .exceptions import (
    OversizedField,
    NonZeroInZeroField,
    MalformedValue,
)
from . import grid


TEXT_ENCODING = 'latin1'
TEXT_MAX_LENGTH = 100
TEXT8_PADDING = 8

ZERO_STRING = 'zero_string'

# printable characters that are escaped anyway
ESCAPED_CHARS = ':\x7f'


def escape_text(text: str) -> str:
    '''Backslashes, control characters and the colon separating the
    columns would break the line format.'''
    return ''.join(
        '\\\\' if c == '\\' else ('\\x%02x' % ord(c) if ord(c) < 0x20 or c in ESCAPED_CHARS else c)
        for c in text)


def unescape_text(text: str) -> str:
    return re.sub(
        r'\\(\\|x[0-9a-fA-F]{2})',
        lambda m: '\\' if m.group(1) == '\\' else chr(int(m.group(1)[1:], 16)),
        text)


class Field(object):
    """Base class to subclass from"""
    kind: Kind = None

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.kind.name})>'

    @property
    def size(self) -> int:
        return self.kind.size

    def check_width(self, width: int) -> None:
        if width != self.size:
            raise MalformedValue(
                chain=[],
                msg=f'{self.kind.name} is {self.size} bytes wide, not {width}')

    def unpack(self, stream, width: int) -> str:
        raise NotImplementedError(f"method {self.__class__.__name__}.unpack() not implemented")

    def pack(self, value: str, width: int) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}.pack() not implemented")


class StructField(Field):
    """
    Mimic the behaviour of the struct module: little endian integers
    rendered in decimal.

    On packing both the signed and the unsigned range of the width are
    accepted, people editing the file write whatever they like.
    """
    format: str = None

    def get_format(self, signed=True):
        return '<%s' % (self.format if signed else self.format.upper())

    def unpack_int(self, stream, width) -> int:
        self.check_width(width)
        raw = stream.read_exact(width)
        return struct.unpack(self.get_format(), raw)[0]

    def render(self, value: int) -> str:
        return str(value)

    def parse(self, value: str) -> int:
        try:
            return int(value.strip())
        except ValueError:
            raise MalformedValue(chain=[], msg=f'\'{value}\' is not an integer')

    def pack_int(self, value: int) -> bytes:
        for signed in (True, False):
            try:
                return struct.pack(self.get_format(signed=signed), value)
            except struct.error:
                continue

        raise MalformedValue(chain=[], msg=f'{value} doesn\'t fit in {self.size} bytes')

    def unpack(self, stream, width):
        return self.render(self.unpack_int(stream, width))

    def pack(self, value, width):
        self.check_width(width)
        return self.pack_int(self.parse(value))


class IntField(StructField):
    '''Negative values are shown as their unsigned 32 bits equivalent
    since this is what the historical tools do: -1 is 4294967295.'''
    kind = Kind.INT
    format = 'i'

    def render(self, value):
        return str(value & 0xffffffff if value < 0 else value)


class ShortField(StructField):
    kind = Kind.SHORT
    format = 'h'


class CharField(StructField):
    kind = Kind.CHAR
    format = 'b'


class LCharField(CharField):
    kind = Kind.LCHAR


class BinaryField(StructField):
    kind = Kind.BINARY
    format = 'B'

    def render(self, value):
        return format(value, '08b')

    def parse(self, value):
        value = value.strip()
        if not re.fullmatch(r'[01]{8}', value):
            raise MalformedValue(chain=[], msg=f'\'{value}\' is not a string of 8 bits')

        return int(value, 2)


class HexField(StructField):
    '''Four bytes as dot-separated hex, most significant byte first: 04.03.02.01'''
    kind = Kind.HEX
    format = 'I'

    def render(self, value):
        return '.'.join('%02X' % _ for _ in value.to_bytes(4, 'big'))

    def parse(self, value):
        value = value.strip()
        if not re.fullmatch(r'[0-9a-fA-F]{2}(\.[0-9a-fA-F]{2}){3}', value):
            raise MalformedValue(chain=[], msg=f'\'{value}\' is not a dotted hex of 4 bytes')

        return int.from_bytes(bytes.fromhex(value.replace('.', '')), 'big')


class FixedPointField(StructField):
    '''32 bits integer scaled down by a power of ten.'''
    format = 'i'
    exponent: int = None

    def parse(self, value):
        try:
            number = Decimal(value.strip()).scaleb(self.exponent)
        except InvalidOperation:
            raise MalformedValue(chain=[], msg=f'\'{value}\' is not a number')

        if not number.is_finite() or number != number.to_integral_value():
            raise MalformedValue(chain=[], msg=f'\'{value}\' has too many decimals')

        return int(number)


class MicroFloatField(FixedPointField):
    kind = Kind.UFLOAT
    exponent = 6

    def render(self, value):
        return '{:>10.6f}'.format(Decimal(value).scaleb(-self.exponent))


class MilliFloatField(FixedPointField):
    '''Trailing zeros are dropped: 2500 is "2.5" and zero is "0".'''
    kind = Kind.MFLOAT
    exponent = 3

    def render(self, value):
        if value == 0:
            return '0'

        text = '{:.3f}'.format(Decimal(value).scaleb(-self.exponent))
        return text.rstrip('0').rstrip('.')


class BulkField(Field):
    '''Any number of bytes as lowercase hex, in stream order.'''
    kind = Kind.BULK

    def unpack(self, stream, width):
        return stream.read_exact(width).hex()

    def pack(self, value, width):
        value = value.strip()
        try:
            raw = bytes.fromhex(value)
        except ValueError:
            raise MalformedValue(chain=[], msg=f'\'{value}\' is not hexadecimal')

        if len(raw) != width:
            raise MalformedValue(chain=[], msg=f'\'{value}\' is {len(raw)} bytes, expected {width}')

        return raw


class ZeroField(Field):
    '''Any number of bytes that must be all zeros.'''
    kind = Kind.ZERO

    def unpack(self, stream, width):
        raw = stream.read_exact(width)
        if any(raw):
            raise NonZeroInZeroField(chain=[], msg=f'non-zero found in expected zero-string: {raw.hex()}')

        return ZERO_STRING

    def pack(self, value, width):
        if value.strip() != ZERO_STRING:
            raise MalformedValue(chain=[], msg=f'expected \'{ZERO_STRING}\', found \'{value}\'')

        return b'\x00' * width


class TextField(Field):
    '''Stores a length in chars, followed by the text.'''
    kind = Kind.TEXT0
    padding = 0

    def unpack(self, stream, width):
        length = struct.unpack('<i', stream.read_exact(4))[0]
        if not 0 <= length <= TEXT_MAX_LENGTH:
            raise OversizedField(chain=[], msg=f'text of length {length} is over {TEXT_MAX_LENGTH}')

        text = stream.read_exact(length).decode(TEXT_ENCODING)

        if self.padding:
            padding = stream.read_exact(self.padding)
            if any(padding):
                self.logger.warning('non-zero padding after text \'%s\': %s' % (text, padding.hex()))

        return escape_text(text)

    def pack(self, value, width):
        try:
            raw = unescape_text(value).encode(TEXT_ENCODING)
        except UnicodeEncodeError:
            raise MalformedValue(chain=[], msg=f'\'{value}\' is not {TEXT_ENCODING} text')

        if len(raw) > TEXT_MAX_LENGTH:
            raise OversizedField(chain=[], msg=f'text of length {len(raw)} is over {TEXT_MAX_LENGTH}')

        return struct.pack('<i', len(raw)) + raw + b'\x00' * self.padding


class Text8Field(TextField):
    '''Text followed by 8 bytes of padding.

    The padding is expected to be zero: anything else is only logged as a
    warning and is lost, pack() always writes zeros.'''
    kind = Kind.TEXT8
    padding = TEXT8_PADDING


class MapField(Field):
    '''One byte per terrain cell, see the grid module.'''

    def __init__(self, kind):
        super().__init__()
        self.kind = kind
        self.terrain = grid.TERRAINS[kind]

    def unpack_grid(self, stream, width) -> Tuple[str, List[Tuple[int, int]]]:
        packed, anomalies = grid.compress(stream.read_exact(width), self.terrain)
        return '' if self.terrain.hidden else packed, anomalies

    def unpack(self, stream, width):
        return self.unpack_grid(stream, width)[0]

    def pack(self, value, width, features: Iterable[Tuple[int, int]] = ()):
        return grid.expand(value, width, self.terrain, features)


FIELDS = {
    field.kind: field for field in (
        TextField(),
        Text8Field(),
        IntField(),
        HexField(),
        BinaryField(),
        ShortField(),
        CharField(),
        LCharField(),
        MilliFloatField(),
        MicroFloatField(),
        BulkField(),
        ZeroField(),
        MapField(Kind.FMAP),
        MapField(Kind.SMAP),
        MapField(Kind.CMAP),
    )
}


def get_field(kind: Kind) -> Field:
    return FIELDS[kind]

'''
# Terrain grids

The world maps of the savegame use one byte per cell: 0x00 is sea, 0xff is
land and, in the coast map, 0x09 is the boundary. To make the output readable
and editable we compress the land/sea information down to a single bit per
cell, four cells per hex digit, the most significant bit of the nibble
being the cell with the lowest index.

Every byte that is not one of the canonical values is an anomaly (a "feature"
of the map): it is reported out-of-band and must be replayed when packing
in order to rebuild the original bytes.
'''
import logging
import math
from collections import namedtuple
from typing import Callable, Iterable, List, Tuple

from bitstring import BitArray

from .enum import Kind
from .exceptions import MalformedValue


logger = logging.getLogger(__name__)

SEA = 0x00
LAND = 0xff
BOUNDARY = 0x09
# in the coast map every value over this is land
COAST_THRESHOLD = 4

CELLS_PER_NIBBLE = 4


Feature = namedtuple('Feature', ['identifier', 'value'])


class Terrain(object):
    '''How a kind of map tells land from sea and which byte is canonical for land.

    When hidden is True the packed grid is not meant to be shown, the map
    exists only to report its anomalies.'''

    def __init__(self, is_land: Callable[[int], bool], land: int, hidden=False):
        self.is_land = is_land
        self.land = land
        self.hidden = hidden

    def is_anomaly(self, value: int) -> bool:
        return value not in (SEA, self.land)


TERRAINS = {
    Kind.FMAP: Terrain(lambda b: b != SEA, LAND),
    Kind.SMAP: Terrain(lambda b: b != SEA, LAND, hidden=True),
    Kind.CMAP: Terrain(lambda b: b > COAST_THRESHOLD, BOUNDARY),
}


def nibbles_for(n_cells: int) -> int:
    return math.ceil(n_cells / CELLS_PER_NIBBLE)


def zeros(length: int) -> BitArray:
    return BitArray(bin='0' * length)


def compress(raw: bytes, terrain: Terrain) -> Tuple[str, List[Tuple[int, int]]]:
    '''Returns the packed grid as lowercase hex digits and the list
    of the anomalies as couples (cell index, byte value) in cell order.'''
    bits = zeros(nibbles_for(len(raw)) * CELLS_PER_NIBBLE)

    land = [idx for idx, value in enumerate(raw) if terrain.is_land(value)]
    if land:
        bits.set(True, land)

    anomalies = [(idx, value) for idx, value in enumerate(raw) if terrain.is_anomaly(value)]

    logger.debug('compressed %d cells: %d land, %d anomalies' % (len(raw), len(land), len(anomalies)))

    return bits.hex, anomalies


def expand(packed: str, n_cells: int, terrain: Terrain, features: Iterable[Tuple[int, int]] = ()) -> bytes:
    '''Inverse of compress(): every land cell gets the canonical land byte,
    every sea cell gets zero, then the features are written over them.

    An empty grid is accepted and means all sea.'''
    packed = packed.strip()

    if packed:
        if len(packed) != nibbles_for(n_cells):
            raise MalformedValue(
                chain=[],
                msg=f'grid of {n_cells} cells needs {nibbles_for(n_cells)} hex digits, found {len(packed)}')
        try:
            bits = BitArray(hex=packed)
        except ValueError as e:
            raise MalformedValue(chain=[], msg=f'grid is not hexadecimal: {e}')
    else:
        bits = zeros(n_cells)

    raw = bytearray(terrain.land if bits[idx] else SEA for idx in range(n_cells))

    for idx, value in features:
        if not 0 <= idx < n_cells:
            raise MalformedValue(chain=[], msg=f'feature at cell {idx} is outside a grid of {n_cells} cells')
        raw[idx] = value

    return bytes(raw)

'''
Rendering of the terrain grids of a pst file as an image, one pixel per cell.
'''
import logging
from typing import Dict, Iterable, List

import numpy as np
from PIL import Image

from .enum import Kind
from .exceptions import MalformedValue
from .grid import SEA, TERRAINS
from .lines import PstLine
from .pack import PendingGrid


logger = logging.getLogger(__name__)

COLOR_SEA     = (0x1f, 0x4e, 0x9c)
COLOR_LAND    = (0x3c, 0x8d, 0x2f)
COLOR_FEATURE = (0xe0, 0x20, 0x20)


def grid_rows(lines: Iterable[str], section: str) -> List[PendingGrid]:
    '''The grids of the named section, in order, with their features attached.'''
    grids: Dict[str, PendingGrid] = {}
    for text in lines:
        line = PstLine.parse(text)
        if line is None or line.identifier.split('_')[0] != section:
            continue

        if line.is_feature:
            name = line.identifier.rpartition('_')[0]
            if name in grids:
                grids[name].add_feature(line)
        elif line.kind.is_map:
            grid = PendingGrid(line)
            grids[grid.name] = grid

    if not grids:
        raise MalformedValue(chain=[section], msg='no terrain grid found')

    return list(grids.values())


def render(rows: List[PendingGrid]) -> Image.Image:
    kind: Kind = rows[0].line.kind
    terrain = TERRAINS[kind]
    cells = np.array([list(_.pack()) for _ in rows], dtype=np.uint8)

    logger.debug('rendering %s grid of %dx%d cells' % (kind.name, cells.shape[1], cells.shape[0]))

    pixels = np.zeros(cells.shape + (3,), dtype=np.uint8)
    pixels[:] = COLOR_SEA
    pixels[cells == terrain.land] = COLOR_LAND
    pixels[(cells != SEA) & (cells != terrain.land)] = COLOR_FEATURE

    return Image.fromarray(pixels, 'RGB')

#!/usr/bin/env python3
'''
Show one of the terrain grids of a pst file

 $ mapdisplay.py Drake.pst FeatureMap [output.png]
'''
import logging
import sys
import os

from pstcodec.exceptions import PstException
from pstcodec.preview import grid_rows, render


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
logger.setLevel(level=logging.INFO if 'DEBUG' not in os.environ else logging.DEBUG)


def usage(progname):
    print(f'usage: {progname} <pst file path> <FeatureMap|SailingMap|CoastMap> [<image path>]')
    sys.exit(1)


if __name__ == '__main__':
    if len(sys.argv) < 3:
        usage(sys.argv[0])

    filepath = sys.argv[1]
    section = sys.argv[2]

    try:
        with open(filepath, 'r', encoding='latin1') as f:
            rows = grid_rows(f, section)
    except PstException as e:
        logger.error(f'failed to read {section} from {filepath}: {e}')
        sys.exit(1)

    for idx, row in enumerate(rows[:4]):
        print(f'[{idx:03d}] {row.line!r} features={len(row.features)}')

    image = render(rows)

    if len(sys.argv) > 3:
        image.save(sys.argv[3])
    else:
        image.show()

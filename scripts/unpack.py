#!/usr/bin/env python3
'''
Convert a Pirates! savegame into a pst file that can be edited by hand

 $ unpack.py Drake

reads Drake.pirates_savegame (from the current directory or from the directory
in $PIRATES_SAVEGAME_DIR) and writes Drake.pst in the current directory.
'''
import logging
import os
import sys

from pstcodec.core import unpack_file
from pstcodec.exceptions import PstException
from pstcodec.savegames import PiratesSavegame
from pstcodec.utils import find_file, game_name, PST_SUFFIX, SAVEGAME_SUFFIX


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'usage: {progname} <savegame> [<pst file>]')
    sys.exit(1)


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    try:
        src = find_file(sys.argv[1], SAVEGAME_SUFFIX)
    except FileNotFoundError as e:
        logger.error(e)
        sys.exit(1)

    dst = sys.argv[2] if len(sys.argv) > 2 else f'{os.path.basename(game_name(sys.argv[1]))}.{PST_SUFFIX}'

    logger.info(f'unpacking {src} into {dst}')

    try:
        context = unpack_file(src, dst, PiratesSavegame)
    except PstException as e:
        logger.error(f'failed to unpack {src}: {e}')
        sys.exit(1)

    logger.info(f'starting year is {context.starting_year}')

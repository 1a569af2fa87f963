#!/usr/bin/env python3
'''
Convert a pst file back into a Pirates! savegame

 $ pack.py Drake

reads Drake.pst and writes Drake.pirates_savegame in the current directory.
'''
import logging
import os
import sys

from pstcodec.exceptions import PstException
from pstcodec.pack import pack_file
from pstcodec.utils import find_file, game_name, PST_SUFFIX, SAVEGAME_SUFFIX


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'usage: {progname} <pst file> [<savegame>]')
    sys.exit(1)


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    try:
        src = find_file(sys.argv[1], PST_SUFFIX)
    except FileNotFoundError as e:
        logger.error(e)
        sys.exit(1)

    dst = sys.argv[2] if len(sys.argv) > 2 else f'{os.path.basename(game_name(sys.argv[1]))}.{SAVEGAME_SUFFIX}'

    logger.info(f'packing {src} into {dst}')

    try:
        pack_file(src, dst)
    except PstException as e:
        logger.error(f'failed to pack {src}: {e}')
        sys.exit(1)

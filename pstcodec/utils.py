import logging
import os
from pathlib import Path
from typing import List


logger = logging.getLogger(__name__)

SAVEGAME_SUFFIX = 'pirates_savegame'
PST_SUFFIX = 'pst'

# where the game keeps its savegames, it's searched after the current directory
SAVEGAME_DIR_ENV = 'PIRATES_SAVEGAME_DIR'


def game_name(path: str) -> str:
    '''Strip our suffixes: "Drake.pst" and "Drake.pirates_savegame" are both "Drake".'''
    for suffix in (PST_SUFFIX, SAVEGAME_SUFFIX):
        if path.endswith('.' + suffix):
            return path[:-len(suffix) - 1]

    return path


def candidate_paths(path: str, suffix: str, directory: str = None) -> List[Path]:
    game = game_name(path)
    directory = directory if directory is not None else os.environ.get(SAVEGAME_DIR_ENV)

    candidates = [Path(f'{game}.{suffix}')]
    if directory:
        candidates.append(Path(directory) / f'{game}.{suffix}')

    return candidates


def find_file(path: str, suffix: str, directory: str = None) -> Path:
    '''Find the file with the given suffix for the game named by path.'''
    candidates = candidate_paths(path, suffix, directory=directory)
    for candidate in candidates:
        logger.debug('looking for %s' % candidate)
        if candidate.is_file():
            return candidate

    raise FileNotFoundError(f'could not find {path}, looked for: {", ".join(str(_) for _ in candidates)}')

'''
Packing of a pst file back into the binary savegame.

The schema is not needed here: every line carries its kind and its width so the
lines are simply encoded one after the other.

The only state are the terrain grids: the feature lines of a section come after
all its grids, so the grids are held back until the first line that is neither
a grid nor a feature, and then written out in order.
'''
import logging
from typing import Dict, Iterable, List, Tuple

from .exceptions import PstException, MalformedValue
from .fields import get_field
from .lines import PstLine
from .streams import Stream


logger = logging.getLogger(__name__)


class PendingGrid(object):

    def __init__(self, line: PstLine):
        self.line = line
        suffix = f'_{line.width}'
        if not line.identifier.endswith(suffix):
            raise MalformedValue(
                chain=[line.identifier],
                msg=f'grid identifier must end with its cell count \'{suffix}\'')
        self.name = line.identifier[:-len(suffix)]
        self.features: List[Tuple[int, int]] = []

    def add_feature(self, line: PstLine):
        name, _, index = line.identifier.rpartition('_')
        if name != self.name or not index.isdigit():
            raise MalformedValue(
                chain=[line.identifier],
                msg=f'feature doesn\'t belong to the grid \'{self.name}\'')

        try:
            value = bytes.fromhex(line.value.strip())
        except ValueError:
            raise MalformedValue(chain=[line.identifier], msg=f'\'{line.value}\' is not hexadecimal')

        if len(value) != line.width:
            raise MalformedValue(chain=[line.identifier], msg=f'feature must be exactly {line.width} byte')

        self.features.append((int(index), value[0]))

    def pack(self) -> bytes:
        return get_field(self.line.kind).pack(self.line.value, self.line.width, features=self.features)


class Packer(object):

    def __init__(self):
        self.pending: Dict[str, PendingGrid] = {}
        self.stream = None

    def flush(self):
        for grid in self.pending.values():
            logger.debug('packing grid %s with %d features' % (grid.name, len(grid.features)))
            try:
                self.stream.write(grid.pack())
            except PstException as e:
                e.chain.insert(0, grid.line.identifier)
                raise

        self.pending = {}

    def pack_line(self, line: PstLine):
        if line.is_feature:
            name = line.identifier.rpartition('_')[0]
            if name not in self.pending:
                raise MalformedValue(chain=[line.identifier], msg=f'no grid \'{name}\' before this feature')
            self.pending[name].add_feature(line)
            return

        if line.kind.is_map:
            grid = PendingGrid(line)
            self.pending[grid.name] = grid
            return

        self.flush()

        logger.debug('packing %s as %s%d' % (line.identifier, line.code, line.width))
        try:
            self.stream.write(get_field(line.kind).pack(line.value, line.width))
        except PstException as e:
            e.chain.insert(0, line.identifier)
            raise

    def pack(self, lines: Iterable[str], out) -> None:
        self.stream = out if isinstance(out, Stream) else Stream(out, flags='w')
        self.pending = {}

        for number, text in enumerate(lines, 1):
            try:
                line = PstLine.parse(text)
                if line is None:
                    continue
                self.pack_line(line)
            except PstException as e:
                e.chain.append(f'line {number}')
                raise

        self.flush()


def pack_file(src, dst) -> None:
    """Convert the pst file at path src into the savegame at path dst.

    On error the savegame is left in place but it's not to be trusted."""
    with open(src, 'r', encoding='latin1') as stream_in, Stream(dst, flags='w') as stream_out:
        Packer().pack(stream_in, stream_out)

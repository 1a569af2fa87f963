'''
Identity of a region inside the schema tree.

A region is named by the name of the top level section and by the list
of the indices of the instances it's nested into: the third byte of the
sixth field of the fourth ship is

    Ship_3_5_2

The generic form erases the index of the top level instance, so that a single
rule can be written for every ship

    Ship_x_5_2
'''
import re
from typing import Optional, Tuple


GENERIC_INDEX = 'x'


class RegionName(object):

    def __init__(self, base: str, indices: Tuple[Optional[int], ...] = ()):
        if '_' in base:
            raise ValueError(f'base name \'{base}\' can\'t contain underscores')
        self.base = base
        self.indices = tuple(indices)

    @classmethod
    def parse(cls, text: str) -> "RegionName":
        base, *components = text.split('_')
        indices = []
        for component in components:
            if component == GENERIC_INDEX:
                indices.append(None)
            elif re.fullmatch(r'\d+', component):
                indices.append(int(component))
            else:
                raise ValueError(f'\'{text}\' is not a valid region name')

        return cls(base, indices)

    def child(self, index: int) -> "RegionName":
        return RegionName(self.base, self.indices + (index,))

    @property
    def parent(self) -> "RegionName":
        return RegionName(self.base, self.indices[:-1])

    @property
    def generic(self) -> "RegionName":
        if not self.indices:
            return self

        return RegionName(self.base, (None,) + self.indices[1:])

    def __str__(self):
        components = [self.base]
        components.extend(GENERIC_INDEX if _ is None else str(_) for _ in self.indices)
        return '_'.join(components)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self})>'

    def __eq__(self, other):
        if not isinstance(other, RegionName):
            return NotImplemented
        return (self.base, self.indices) == (other.base, other.indices)

    def __hash__(self):
        return hash((self.base, self.indices))

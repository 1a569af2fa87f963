from enum import Enum


class Kind(Enum):
    '''Closed set of the leaf encodings: each member is the couple
    (kind code used in the pst file, default width in bytes).

    A width of zero means "variable" for the text kinds and "whatever the
    parent says" for the zero-fill and the maps.'''
    TEXT0  = ('t', 0)
    TEXT8  = ('t', 8)
    INT    = ('V', 4)
    HEX    = ('h', 4)
    BINARY = ('B', 1)
    SHORT  = ('s', 2)
    CHAR   = ('C', 1)
    LCHAR  = ('c', 1)
    MFLOAT = ('g', 4)
    UFLOAT = ('G', 4)
    FMAP   = ('M', 0)
    SMAP   = ('m', 0)
    CMAP   = ('MM', 0)
    BULK   = ('H', 4)
    ZERO   = ('x', 0)

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def size(self) -> int:
        return self.value[1]

    @property
    def is_text(self) -> bool:
        return self in (Kind.TEXT0, Kind.TEXT8)

    @property
    def is_map(self) -> bool:
        return self in (Kind.FMAP, Kind.SMAP, Kind.CMAP)

    @classmethod
    def from_code(cls, code: str, width: int) -> "Kind":
        '''The text kinds share the same code and are told apart by the width.'''
        if code == Kind.TEXT0.code:
            return Kind.TEXT8 if width == Kind.TEXT8.size else Kind.TEXT0

        for kind in cls:
            if kind.code == code:
                return kind

        raise KeyError(code)

'''
# The pst line format

Each leaf of the savegame becomes a line like

    Ship_3_0_6   : G4   :     1.500000   :   <comment> <translation>

that is the name of the region, the kind code followed by the width in bytes,
the value and an annotation that is there only for the humans. Since each line
carries kind and width, a pst file can be packed back without knowing the schema
that produced it.

The anomalies of the terrain grids are reported with lines having code F1

    FeatureMap_3_17   : F1   :  07  :  <comment> <translation>
'''
import re

from .enum import Kind
from .exceptions import MalformedValue


FEATURE_CODE = 'F'
FEATURE_WIDTH = 1

LINE_RE = re.compile(
    r'^(?P<identifier>\S+)\s+:\s*(?P<code>[A-Za-z]+)(?P<width>\d+)\s+:\s{1,3}(?P<value>.*?)\s{2,3}:(?P<annotation>.*)$'
)


class Annotator(object):
    '''Hook for the comments and translations attached to each line.

    The default one attaches nothing: subclass it to look up the meaning
    of a value by region name. The run context is passed along so that,
    for example, date stamps can be computed from the starting year.'''

    def comment(self, name, value, context) -> str:
        return ''

    def translate(self, name, value, context) -> str:
        return ''


class PstLine(object):
    '''kind is None for the feature lines.'''

    def __init__(self, identifier, kind, width, value, comment='', translation=''):
        self.identifier = identifier
        self.kind = kind
        self.width = width
        self.value = value
        self.comment = comment
        self.translation = translation

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.identifier}:{self.code}{self.width}={self.value!r})>'

    @property
    def is_feature(self):
        return self.kind is None

    @property
    def code(self):
        return FEATURE_CODE if self.is_feature else self.kind.code

    @classmethod
    def feature(cls, identifier, value, comment='', translation=''):
        return cls(identifier, None, FEATURE_WIDTH, value, comment=comment, translation=translation)

    def format(self) -> str:
        if self.is_feature:
            return f'{self.identifier}   : {self.code}{self.width}   :  {self.value}  :  {self.comment} {self.translation}'

        return f'{self.identifier}   : {self.code}{self.width}   :   {self.value}   :   {self.comment} {self.translation}'

    __str__ = format

    @classmethod
    def parse(cls, text: str) -> "PstLine":
        '''Returns None for blank lines and for the lines starting with "#".'''
        text = text.rstrip('\r\n')
        if not text.strip() or text.lstrip().startswith('#'):
            return None

        match = LINE_RE.match(text)
        if not match:
            raise MalformedValue(chain=[], msg=f'line \'{text}\' is not in the pst format')

        code = match.group('code')
        width = int(match.group('width'))

        if code == FEATURE_CODE:
            kind = None
        else:
            try:
                kind = Kind.from_code(code, width)
            except KeyError:
                raise MalformedValue(chain=[match.group('identifier')], msg=f'unknown kind code \'{code}\'')

        return cls(match.group('identifier'), kind, width, match.group('value'), comment=match.group('annotation').strip())

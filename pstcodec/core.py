"""
Core module: the schema of a savegame and the recursive walk that
turns it into pst lines.

A schema is an ordered list of sections, each one a number of instances of
the same byte width. An instance is a leaf, decoded directly by the field of its
kind, unless a rule tells how to split it further:

 1. a uniform rule: the instance is divided evenly by the width of a new kind;
    if the new kind is as wide as the instance this only changes the kind
    of that single line.
 2. a split rule: an explicit list of (kind, width, count) subsections whose
    bytes must add up to the width of the instance.

Rules are looked up by the exact name of the instance first and then by its
generic name (see names.py). Splitting never changes the numbering of the
sibling regions, so it's always possible to refine a schema without breaking
the pst files already around.
"""
import io
import logging
from typing import Dict, Iterator, List, Optional

from .enum import Kind
from .exceptions import (
    PstException,
    NonDivisibleWidth,
    SubsectionSizeMismatch,
)
from .fields import get_field
from .grid import Feature
from .lines import Annotator, PstLine
from .meta import MetaSchema, SectionBase
from .names import RegionName
from .streams import Stream


logger = logging.getLogger(__name__)


class Section(SectionBase):
    """A top level section of the schema: count instances of width bytes."""

    def __init__(self, count: int, width: int, kind: Kind = Kind.BULK):
        self.name = None
        self.count = count
        self.width = width
        self.kind = kind

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name}:{self.count}x{self.width}:{self.kind.name})>'


class Subsection(object):
    """One element of a split rule, by default a single instance as wide as its kind."""

    def __init__(self, kind: Kind, width: Optional[int] = None, count: int = 1):
        self.kind = kind
        self.width = kind.size if width is None else width
        self.count = count

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.kind.name},{self.width},{self.count})>'


class Region(object):
    """The recursion frame: count instances, named parent_<offset>, parent_<offset + 1>... """

    def __init__(self, name: RegionName, count: int, width: int, kind: Kind):
        self.name = name
        self.count = count
        self.width = width
        self.kind = kind

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name}:{self.count}x{self.width}:{self.kind.name})>'


class Context(object):
    """State shared by the whole run.

    The starting year lives far ahead in the stream but it's needed by the date
    stamps decoded well before, so it's read once with a jump ahead and back."""

    def __init__(self):
        self.starting_year: Optional[int] = None

    def capture_starting_year(self, stream: Stream, distance: int) -> int:
        if self.starting_year is not None:
            return self.starting_year

        stream.save()
        try:
            stream.seek(distance, io.SEEK_CUR)
            raw = stream.read_exact(4, name='starting_year')
        finally:
            stream.restore()

        self.starting_year = int.from_bytes(raw, 'little', signed=True)
        logger.debug('starting year is %d' % self.starting_year)

        return self.starting_year


class Schema(metaclass=MetaSchema):
    """Subclass this declaring the sections as class attributes, in order.

    uniform maps region names to the kind to split into, split maps region names
    to lists of Subsection."""
    uniform: Dict[str, Kind] = {}
    split: Dict[str, List[Subsection]] = {}

    # comment lines to print at the start of a section, by section name
    banners: Dict[str, str] = {}

    # name of the region that triggers the capture of the starting year
    sentinel: Optional[str] = None
    starting_year_distance = 0

    @classmethod
    def get_sections(cls) -> List[Section]:
        return list(cls._meta.sections.values())

    @classmethod
    def _lookup(cls, rules, name: RegionName):
        rule = rules.get(name)
        if rule is None:
            rule = rules.get(name.generic)

        return rule

    @classmethod
    def uniform_rule(cls, name: RegionName) -> Optional[Kind]:
        return cls._lookup(cls._meta.uniform, name)

    @classmethod
    def split_rule(cls, name: RegionName) -> Optional[List[Subsection]]:
        return cls._lookup(cls._meta.split, name)


class Unpacker(object):
    """Walks a schema over a binary stream producing pst lines.

    A new Context is created for each run and is available as attribute
    afterward."""

    def __init__(self, schema, annotator: Annotator = None):
        self.schema = schema
        self.annotator = annotator or Annotator()
        self.context = None
        self.stream = None

    def iter_lines(self, stream) -> Iterator[str]:
        self.stream = stream if isinstance(stream, Stream) else Stream(stream)
        self.context = Context()

        for section in self.schema.get_sections():
            offset = self.stream.tell()
            logger.debug('unpacking section %s at offset %d' % (section.name, offset))
            yield f'## {section.name} starts at byte {offset}'

            banner = self.schema.banners.get(str(section.name))
            if banner is not None:
                yield f'# {banner}'

            region = Region(section.name, section.count, section.width, section.kind)
            try:
                for line in self.unpack_region(region):
                    yield line.format()
            except PstException as e:
                e.chain.append(str(section.name))
                raise

    def unpack(self, stream, out) -> Context:
        for line in self.iter_lines(stream):
            out.write(line + '\n')

        return self.context

    def unpack_region(self, region: Region, offset: int = 0) -> Iterator[PstLine]:
        features: List[Feature] = []

        for index in range(offset, offset + region.count):
            name = region.name.child(index)

            kind = self.schema.uniform_rule(name)
            # the same kind means we have been already here
            if kind is not None and kind != region.kind:
                yield from self.unpack_uniform(region, name, kind)
                continue

            subsections = self.schema.split_rule(name)
            if subsections is not None:
                yield from self.unpack_split(region, name, subsections)
                continue

            yield self.unpack_leaf(region, name, features)

        for feature in features:
            yield PstLine.feature(
                feature.identifier,
                '%02x' % feature.value,
                comment=self.annotator.comment(feature.identifier, str(feature.value), self.context),
                translation=self.annotator.translate(feature.identifier, str(feature.value), self.context),
            )

    def unpack_uniform(self, region: Region, name: RegionName, kind: Kind) -> Iterator[PstLine]:
        size = kind.size
        if size:
            count, rest = divmod(region.width, size)
            if rest:
                raise NonDivisibleWidth(
                    chain=[str(name)],
                    msg=f'{region.width} bytes are not divisible by the {size} bytes of {kind.name}')
        else:
            # variable width kinds don't split
            count = 1
            size = 0 if kind.is_text else region.width

        logger.debug('%s: uniform split into %d x %s' % (name, count, kind.name))

        if count == 1:
            # not really a split, it's a change of kind for this single line
            return self.unpack_region(Region(region.name, 1, size, kind), offset=name.indices[-1])

        return self.unpack_region(Region(name, count, size, kind))

    def unpack_split(self, region: Region, name: RegionName, subsections: List[Subsection]) -> Iterator[PstLine]:
        total = sum(_.width * _.count for _ in subsections)
        if total != region.width:
            raise SubsectionSizeMismatch(
                chain=[str(name)],
                msg=f'subsections don\'t add up: {total} != {region.width}')

        logger.debug('%s: split into %r' % (name, subsections))

        offset = 0
        for subsection in subsections:
            yield from self.unpack_region(Region(name, subsection.count, subsection.width, subsection.kind), offset)
            offset += subsection.count

    def unpack_leaf(self, region: Region, name: RegionName, features: List[Feature]) -> PstLine:
        field = get_field(region.kind)
        identifier = str(name)

        logger.debug('reading %s as %s%d at offset %d' % (identifier, region.kind.code, region.width, self.stream.tell()))
        try:
            if region.kind.is_map:
                value, anomalies = field.unpack_grid(self.stream, region.width)
                features.extend(Feature(f'{identifier}_{idx}', byte) for idx, byte in anomalies)
            else:
                value = field.unpack(self.stream, region.width)
        except PstException as e:
            e.chain.insert(0, identifier)
            raise

        if identifier == self.schema.sentinel:
            self.context.capture_starting_year(self.stream, self.schema.starting_year_distance)

        line = PstLine(
            identifier,
            region.kind,
            region.width,
            value,
            comment=self.annotator.comment(identifier, value, self.context),
            translation=self.annotator.translate(identifier, value, self.context),
        )

        if region.kind.is_map:
            line.identifier = f'{identifier}_{region.width}'

        return line


def unpack_file(src, dst, schema, annotator: Annotator = None) -> Context:
    """Convert the savegame at path src into the pst file at path dst.

    On error the pst file is left in place but it's not to be trusted."""
    with Stream(src) as stream_in, open(dst, 'w', encoding='latin1') as stream_out:
        return Unpacker(schema, annotator=annotator).unpack(stream_in, stream_out)

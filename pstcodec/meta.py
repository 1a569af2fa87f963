import logging

from .names import RegionName


class SectionBase(object):

    def contribute_to_schema(self, cls, name):
        if name in cls._meta.sections:
            raise AttributeError(f'section {name} is already present in schema {cls.__name__}')

        self.name = RegionName(name)
        cls._meta.sections[name] = self


class Meta(object):
    """Class containing metadata about the schema"""

    def __init__(self):
        self.sections = {}
        self.uniform = {}
        self.split = {}


def normalize_rules(rules):
    '''Rules are written with plain strings like "Ship_x_2", internally they are keyed by RegionName.'''
    return {RegionName.parse(name) if isinstance(name, str) else name: rule for name, rule in rules.items()}


class MetaSchema(type):
    logger = logging.getLogger(__name__)

    def __new__(cls, names, bases, attrs):
        '''Sections are collected in order of declaration, rules are keyed by RegionName.'''
        new_cls = super(MetaSchema, cls).__new__(cls, names, bases, {
            name: value for name, value in attrs.items() if not hasattr(value, 'contribute_to_schema')
        })

        new_cls._meta = Meta()

        # handle inheritance
        parents = [_ for _ in bases if isinstance(_, MetaSchema)]
        for parent in parents:
            new_cls._meta.sections.update(parent._meta.sections)
            new_cls._meta.uniform.update(parent._meta.uniform)
            new_cls._meta.split.update(parent._meta.split)

        for obj_name, obj in attrs.items():
            new_cls.add_to_class(obj_name, obj)

        new_cls._meta.uniform.update(normalize_rules(attrs.get('uniform', {})))
        new_cls._meta.split.update(normalize_rules(attrs.get('split', {})))

        return new_cls

    def add_to_class(cls, name, value):
        if hasattr(value, 'contribute_to_schema'):
            cls.logger.debug('contribute_to_schema() found for section \'%s\'' % name)
            value.contribute_to_schema(cls, name)

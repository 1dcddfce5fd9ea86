'''
Machinery turning the Field attributes of a Chunk class into per-instance
fields: the class keeps a prototype, each instance gets its own copy the
first time the attribute is accessed.
'''
import copy
import logging
from enum import Enum, auto


logger = logging.getLogger(__name__)


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class FieldDescriptor(object):
    """Data descriptor standing in the class in place of a field."""

    def __init__(self, prototype: "Field", field_name: str):
        self.prototype = prototype
        self.prototype.name = field_name

    @property
    def name(self) -> str:
        return self.prototype.name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self.prototype

        fields = instance.__dict__
        if self.name not in fields:
            logger.debug("instancing field '%s' of %s", self.name, instance.__class__.__name__)
            fields[self.name] = self.prototype.create(father=instance)

        return fields[self.name]

    def __set__(self, instance, value):
        # a whole field of the right kind replaces the current one,
        # anything else is a value for it
        if isinstance(value, self.prototype.__class__):
            value.father = instance
            value.name = self.name
            instance.__dict__[self.name] = value
        else:
            self.__get__(instance).value = value


class FieldBase(object):

    def contribute_to_chunk(self, cls, name):
        if getattr(cls, name, None):
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

        setattr(cls, name, FieldDescriptor(self, name))

    def create(self, father):
        field = copy.deepcopy(self)
        field.father = father
        return field


class Meta(object):
    """What the metaclass records about a Chunk class"""

    def __init__(self, fields=None):
        self.fields = list(fields or [])


class MetaChunk(type):
    '''Collect the fields of a Chunk class in declaration order, the ones
    inherited from the bases come first.'''

    def __new__(mcs, name, bases, attrs):
        module = attrs.pop('__module__')
        classcell = attrs.pop('__classcell__', None)

        new_attrs = {'__module__': module}
        if classcell is not None:
            new_attrs['__classcell__'] = classcell
        new_cls = super().__new__(mcs, name, bases, new_attrs)

        inherited = []
        for base in bases:
            if not isinstance(base, MetaChunk):
                continue
            for field_name in base._meta.fields:
                if field_name in inherited:
                    continue
                setattr(new_cls, field_name, base.__dict__[field_name])
                inherited.append(field_name)

        new_cls._meta = Meta(inherited)

        for attr_name, attr in attrs.items():
            new_cls.add_to_class(attr_name, attr)

        return new_cls

    def add_to_class(cls, name, value):
        if not hasattr(value, 'contribute_to_chunk'):
            setattr(cls, name, value)
            return

        logger.debug("field '%s' added to %s", name, cls.__name__)
        cls._meta.fields.append(name)
        value.contribute_to_chunk(cls, name)

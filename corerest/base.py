# base.py: implements the CoreRestBase SQLAlchemy db Mixin
#
# pylint: disable=no-self-argument,no-member,protected-access
#
"""
CoreRestBase customizable attributes, override these to customize the behavior of the models:

property_restrictions:
Type: dict
Description: property name => PropertyRestriction, the actions that may write the property.
Properties that are not in the table may always be written.

exclude_attrs:
Type: list
Description: property names that are not rendered by `to_dict`.

show_associations:
Type: Optional[bool]
Description: render associations embedded (True) or as identifiers (False),
None means the EmbeddedResponseListener decides.
"""
import corerest
from .attr_parse import parse_attr
from .embedded import Embedded
from .errors import NotFoundError
from .metadata import get_entity_descriptor
from .util import classproperty


class CoreRestBase(Embedded):
    """This mixin implements embedded rendering and the `apply_property` capability
    for SQLAlchemy models, usage:

        class User(CoreRestBase, db.Model):
            ...

    Most methods and properties have the `_s_` prefix so they don't clash with column names
    """

    property_restrictions = {}
    exclude_attrs = []

    @classproperty
    def _s_descriptor(cls):
        return get_entity_descriptor(cls)

    @classproperty
    def _s_type(cls):
        """
        :return: the table name if this is a DB model, the class name otherwise
        """
        return getattr(cls, "__tablename__", cls.__name__)

    @classproperty
    def _s_collection_name(cls):
        """
        :return: the name of the collection, used to construct the endpoint urls
        """
        return getattr(cls, "__tablename__", cls.__name__)

    @classproperty
    def _s_object_id(cls):
        """
        :return: the url parameter name of the instance id, eg. "UserId"
        """
        return cls.__name__ + "Id"

    @classproperty
    def _s_query(cls):
        return corerest.DB.session.query(cls)

    @classproperty
    def _s_writable_properties(cls):
        """
        :return: the names of the properties `apply_property` will set
        """
        descriptor = cls._s_descriptor
        return set(descriptor.fields) | set(descriptor.associations)

    @property
    def _s_id(self):
        return getattr(self, self._s_descriptor.single_identifier_field_name)

    @property
    def jsonapi_id(self):
        """
        :return: the id as a string, as it is used in urls
        """
        return str(self._s_id)

    @classmethod
    def get_instance(cls, item):
        """
        :param item: instance id
        :return: the instance with id `item`
        """
        instance = corerest.DB.session.get(cls, cls._s_descriptor.coerce_identifier(item))
        if instance is None:
            raise NotFoundError(f"Invalid {cls._s_object_id}: {item}")
        return instance

    def apply_property(self, name, value):
        """
        Set a property, called by the CRUDTransformer when the model has no `set_<name>` method

        :param name: canonical property name
        :param value: transformed value, column values are parsed to the column type
        :return: whether the property was set
        """
        if name not in self._s_writable_properties:
            corerest.log.debug(f"{self.__class__.__name__} has no writable property {name}")
            return False
        descriptor = self._s_descriptor
        if descriptor.has_field(name):
            value = parse_attr(descriptor.fields[name].columns[0], value)
        elif value is None and descriptor.is_to_many_association(name):
            value = []
        setattr(self, name, value)
        return True

    def to_dict(self, embedded=None):
        """
        :param embedded: render the associations embedded, defaults to `show_associations`
        :return: dict with the column values and the associations
        """
        if embedded is None:
            embedded = bool(self.show_associations)
        descriptor = self._s_descriptor
        result = {name: getattr(self, name) for name in descriptor.fields if name not in self.exclude_attrs}

        for rel_name, rel in descriptor.associations.items():
            if rel_name in self.exclude_attrs:
                continue
            related = getattr(self, rel_name)
            if rel.uselist:
                result[rel_name] = [self._s_encode_related(item, embedded) for item in related]
            elif related is None:
                result[rel_name] = None
            else:
                result[rel_name] = self._s_encode_related(related, embedded)
        return result

    @staticmethod
    def _s_encode_related(instance, embedded):
        """
        Embedded related instances are rendered one level deep, their own associations as identifiers
        """
        if embedded:
            return instance.to_dict(embedded=False)
        return instance._s_id

    def __repr__(self):
        ids = [getattr(self, name, None) for name in self._s_descriptor.identifiers]
        return f"<{self.__class__.__name__} {', '.join(str(id) for id in ids)}>"

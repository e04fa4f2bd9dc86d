"""
Entity metadata: the properties a mapped class exposes and the actions that may write them

The metadata is derived from the SQLAlchemy mapper, write restrictions are declared
on the model in the `property_restrictions` table:

    class Book(CoreRestBase, db.Model):
        property_restrictions = {"status": PropertyRestriction(ACTION_UPDATE)}

"status" may only be written when an existing Book is updated, not when it's created.
Properties without a restriction are always writable.
"""
from functools import lru_cache
import stringcase
from sqlalchemy import inspect as sqla_inspect
from .attr_parse import parse_attr
from .errors import ConfigurationError

ACTION_CREATE = "create"
ACTION_UPDATE = "update"


class PropertyRestriction:
    """
    Grants write access to a property for the given actions only
    """

    def __init__(self, *actions: str) -> None:
        self.actions = frozenset(actions)

    def is_granted(self, action: str) -> bool:
        return action in self.actions

    def __repr__(self) -> str:
        return f"<PropertyRestriction {sorted(self.actions)}>"


class EntityDescriptor:
    """
    Field, association and identifier names of a mapped class
    """

    def __init__(self, entity_class) -> None:
        mapper = sqla_inspect(entity_class, raiseerr=False)
        if mapper is None:
            raise ConfigurationError(f"{entity_class} is not a mapped class")
        self.entity_class = entity_class
        self.fields = {attr.key: attr for attr in mapper.column_attrs}
        self.associations = {rel.key: rel for rel in mapper.relationships}
        self.identifiers = [mapper.get_property_by_column(col).key for col in mapper.primary_key]

    def __repr__(self) -> str:
        return f"<EntityDescriptor {self.entity_class.__name__}>"

    def has_field(self, name: str) -> bool:
        return name in self.fields

    def has_association(self, name: str) -> bool:
        return name in self.associations

    def has_property(self, name: str) -> bool:
        return self.has_field(name) or self.has_association(name)

    def get_association_target_class(self, name: str):
        return self.associations[name].mapper.class_

    def is_to_many_association(self, name: str) -> bool:
        return bool(self.associations[name].uselist)

    @property
    def single_identifier_field_name(self) -> str:
        if len(self.identifiers) != 1:
            raise ConfigurationError(f"{self.entity_class.__name__} doesn't have a single identifier: {self.identifiers}")
        return self.identifiers[0]

    def coerce_identifier(self, value):
        """
        Convert an identifier from the url or the payload to the python type of the identifier column,
        the session identity map is keyed on it ("1" and 1 are different identities)
        """
        column = self.fields[self.single_identifier_field_name].columns[0]
        return parse_attr(column, value)

    def canonical_name(self, property_name: str) -> str:
        """
        Map a payload property name to the attribute name of the entity

        The capitalized camelcase spelling is preferred when the class has an association with
        that name (eg. "owner" => "Owner"), then the name as given, then the lower camelcase
        spelling of a known property (eg. "first_name" => "firstName").
        Everything else maps to its snake_case name.
        """
        if not property_name:
            return property_name
        attr_name = stringcase.snakecase(property_name)
        capitalized = stringcase.pascalcase(attr_name)
        if self.has_association(capitalized):
            return capitalized
        if self.has_property(property_name):
            return property_name
        camelized = stringcase.camelcase(attr_name)
        if not self.has_property(attr_name) and self.has_property(camelized):
            return camelized
        return attr_name

    def get_property_restriction(self, name: str):
        """
        :param name: canonical property name
        :return: the `PropertyRestriction` declared for the property, None if it has none
        """
        restrictions = getattr(self.entity_class, "property_restrictions", None) or {}
        restriction = restrictions.get(name)
        if restriction is None or isinstance(restriction, PropertyRestriction):
            return restriction
        # allow shorthands: "update" or ("create", "update")
        if isinstance(restriction, str):
            return PropertyRestriction(restriction)
        return PropertyRestriction(*restriction)


@lru_cache(maxsize=128)
def get_entity_descriptor(entity_class) -> EntityDescriptor:
    """
    :param entity_class: SQLAlchemy mapped class
    :return: the (cached) EntityDescriptor of `entity_class`
    """
    return EntityDescriptor(entity_class)

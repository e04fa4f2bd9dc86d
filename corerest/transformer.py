# CRUD transformer: maps request properties onto SQLAlchemy entity attributes
#
# Access control always precedes value resolution: a property that may not be written
# for the requested action is never deserialized or looked up.
#
import stringcase
from sqlalchemy import inspect as sqla_inspect
from sqlalchemy.orm import make_transient_to_detached
from sqlalchemy.orm.util import identity_key
import corerest
from .deserializer import Deserializer
from .errors import ConfigurationError, ValidationError
from .metadata import EntityDescriptor, get_entity_descriptor


def get_reference(session, entity_class, identifier):
    """
    Return a lazy reference to the `entity_class` instance with the given identifier

    The reference is attached to the session without querying the database:
    its attributes are loaded on first access, which fails if the row doesn't exist.
    An instance that is already in the identity map is returned as is.

    :param session: SQLAlchemy session
    :param entity_class: mapped class
    :param identifier: primary key value
    :return: `entity_class` instance
    """
    descriptor = get_entity_descriptor(entity_class)
    identifier = descriptor.coerce_identifier(identifier)
    instance = session.identity_map.get(identity_key(entity_class, identifier))
    if instance is not None:
        return instance

    instance = sqla_inspect(entity_class).class_manager.new_instance()
    setattr(instance, descriptor.single_identifier_field_name, identifier)
    make_transient_to_detached(instance)
    session.add(instance)
    return instance


class CRUDTransformer:
    """
    Transforms incoming request properties into entity attribute values

    - `is_property_accessible` checks whether a property may be written for an action
    - `transform_property_value` resolves association values (identifiers or nested payloads) to instances
    - `process_property_value` combines both and assigns the result

    A transformer works on a single entity class: pass it to the constructor or call
    `initialize_class_metadata` before using it. Instances are request scoped, don't share them between requests.
    """

    def __init__(self, entity_class=None, session=None, deserializer=None):
        """
        :param entity_class: mapped class whose properties will be transformed
        :param session: SQLAlchemy session, defaults to `corerest.DB.session`
        :param deserializer: payload deserializer, defaults to `Deserializer()`
        """
        self._session = session
        self.deserializer = deserializer if deserializer is not None else Deserializer()
        self._class_metadata = None
        if entity_class is not None:
            self.initialize_class_metadata(entity_class)

    def initialize_class_metadata(self, entity_class) -> None:
        self._class_metadata = get_entity_descriptor(entity_class)

    @property
    def class_metadata(self) -> EntityDescriptor:
        if self._class_metadata is None:
            raise ConfigurationError("initialize_class_metadata() has to be called before transforming properties")
        return self._class_metadata

    @property
    def session(self):
        return self._session if self._session is not None else corerest.DB.session

    def is_property_accessible(self, property_name: str, action: str) -> bool:
        """
        :param property_name: property name from the payload
        :param action: ACTION_CREATE or ACTION_UPDATE
        :return: whether `property_name` may be written for `action`, False for unknown properties
        """
        class_metadata = self.class_metadata
        name = class_metadata.canonical_name(property_name)
        if not class_metadata.has_property(name):
            corerest.log.debug(f"{class_metadata.entity_class.__name__} has no property {property_name}")
            return False

        restriction = class_metadata.get_property_restriction(name)
        if restriction is not None:
            return restriction.is_granted(action)
        return True

    def transform_property_value(self, property_name: str, value, collection=None):
        """
        Resolve association values, other values are returned unchanged

        :param property_name: property name from the payload
        :param value: identifier or dict payload of the related instance
        :param collection: instances that should be reused when their identifier matches `value`
        :return: resolved value
        """
        if not self._transformation_needed(property_name, value):
            return value

        class_metadata = self.class_metadata
        target_class = class_metadata.get_association_target_class(class_metadata.canonical_name(property_name))
        if collection is not None:
            instance = self._find_by_identifier(collection, target_class, value)
            if instance is not None:
                corerest.log.debug(f"Reusing {instance} for {property_name}")
                return instance

        if isinstance(value, dict):
            return self._resolve_payload(target_class, value)

        corerest.log.debug(f"Referencing {target_class.__name__} {value} for {property_name}")
        return get_reference(self.session, target_class, value)

    def get_property_setter(self, property_name: str) -> str:
        return "set_" + stringcase.snakecase(property_name)

    def get_property_getter(self, property_name: str) -> str:
        return "get_" + stringcase.snakecase(property_name)

    def process_property_value(self, obj, property_name: str, value, action: str, collection=None) -> None:
        """
        Assign the transformed `value` to `obj` if `property_name` is accessible for `action`

        :param obj: entity instance
        :param property_name: property name from the payload
        :param value: payload value
        :param action: ACTION_CREATE or ACTION_UPDATE
        :param collection: see `transform_property_value`
        """
        if not self.is_property_accessible(property_name, action):
            corerest.log.debug(f"Property {property_name} is not writable for {action}")
            return
        value = self.transform_property_value(property_name, value, collection)
        self._assign(obj, property_name, value)

    def apply_payload(self, obj, payload: dict, action: str):
        """
        Process all properties of a payload

        To-many associations given as a list are resolved item by item against the
        current collection of `obj`, so instances that are already related keep their identity.
        Any other value for a to-many association raises a `ValidationError`, `None` clears it.

        :param obj: entity instance
        :param payload: property name => value dict
        :param action: ACTION_CREATE or ACTION_UPDATE
        :return: obj
        """
        class_metadata = self.class_metadata
        for property_name, value in payload.items():
            name = class_metadata.canonical_name(property_name)
            if value is None or not (class_metadata.has_association(name) and class_metadata.is_to_many_association(name)):
                self.process_property_value(obj, property_name, value, action)
                continue
            if not self.is_property_accessible(property_name, action):
                corerest.log.debug(f"Property {property_name} is not writable for {action}")
                continue
            if not isinstance(value, list):
                raise ValidationError(f"{property_name} should be a list")
            current = list(getattr(obj, name, None) or [])
            resolved = [self.transform_property_value(property_name, item, current) for item in value]
            self._assign(obj, property_name, [item for item in resolved if item is not None])
        return obj

    def _assign(self, obj, property_name, value):
        """
        A custom `set_<property>` method on the object takes precedence over `apply_property`,
        objects that implement neither are left untouched
        """
        setter = getattr(obj, self.get_property_setter(property_name), None)
        if callable(setter):
            setter(value)
        elif callable(getattr(obj, "apply_property", None)):
            obj.apply_property(self.class_metadata.canonical_name(property_name), value)

    def _resolve_payload(self, target_class, payload: dict):
        """
        Use the persisted instance with the identifier of the payload, or the deserialized instance if there is none
        """
        instance = self.deserializer.deserialize(payload, target_class)
        identifier = getattr(instance, get_entity_descriptor(target_class).single_identifier_field_name, None)
        if identifier is None:
            return instance
        persisted = self.session.get(target_class, identifier)
        return persisted if persisted is not None else instance

    def _find_by_identifier(self, collection, target_class, value):
        """
        :return: the last item in `collection` whose identifier equals the identifier in `value`, or None
        """
        id_name = get_entity_descriptor(target_class).single_identifier_field_name
        identifier = value.get(id_name) if isinstance(value, dict) else value
        if identifier is None:
            return None
        getter_name = self.get_property_getter(id_name)
        result = None
        for item in collection:
            getter = getattr(item, getter_name, None)
            item_id = getter() if callable(getter) else getattr(item, id_name, None)
            if item_id == identifier:
                result = item
        return result

    def _transformation_needed(self, property_name, value) -> bool:
        if value is None:
            return False
        class_metadata = self.class_metadata
        return class_metadata.has_association(class_metadata.canonical_name(property_name))

# Payload deserialization: builds (transient) entity instances from request payload dicts
import corerest
from .attr_parse import parse_attr
from .errors import ValidationError
from .metadata import get_entity_descriptor


class Deserializer:
    """
    Converts a structured payload into an instance of a mapped class.

    Column values are parsed with `parse_attr`, nested association payloads (dicts or lists of dicts)
    are deserialized recursively. Keys that don't match a property are ignored.
    The resulting instance is transient: it isn't added to any session.
    """

    def deserialize(self, payload, target_class):
        """
        :param payload: dict from the request payload
        :param target_class: mapped class to instantiate
        :return: new `target_class` instance
        """
        if not isinstance(payload, dict):
            raise ValidationError(f"Cannot deserialize {type(payload).__name__} into {target_class.__name__}")

        descriptor = get_entity_descriptor(target_class)
        kwargs = {}
        for key, val in payload.items():
            name = descriptor.canonical_name(key)
            if descriptor.has_field(name):
                kwargs[name] = parse_attr(descriptor.fields[name].columns[0], val)
            elif not descriptor.has_association(name):
                corerest.log.debug(f"{target_class.__name__} has no property {key}, ignored")
            elif descriptor.is_to_many_association(name):
                if val is None:
                    continue
                if not isinstance(val, list):
                    raise ValidationError(f"{key} should be a list")
                rel_class = descriptor.get_association_target_class(name)
                kwargs[name] = [self.deserialize(item, rel_class) for item in val if isinstance(item, dict)]
            elif val is None or isinstance(val, dict):
                rel_class = descriptor.get_association_target_class(name)
                kwargs[name] = None if val is None else self.deserialize(val, rel_class)
            else:
                # bare identifiers of nested associations are not resolved here
                corerest.log.debug(f"Skipping identifier {val} for nested association {key}")

        return target_class(**kwargs)

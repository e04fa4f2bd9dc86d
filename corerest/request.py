# Request class: access to the corerest query flags and the request payload
from flask import Request
from .config import get_config
from .errors import ValidationError
from .util import parse_bool


class CoreRestRequest(Request):
    """
    - embedded: the `_embedded` query flag, get_flag() for other boolean query parameters
    - get_payload(): the attributes from the json body
    """

    @property
    def embedded(self):
        """
        :return: parsed `_embedded` flag, None if it's not in the query string
        """
        return self.get_flag(get_config("EMBEDDED_QUERY_PARAM"))

    def get_flag(self, name):
        """
        :param name: query parameter name
        :return: parsed boolean query parameter, None if it's not in the query string
        """
        value = self.args.get(name)
        if value is None:
            return None
        return parse_bool(value)

    def get_payload(self) -> dict:
        """
        The body is either the attributes dict itself or a jsonapi style document:
            {"data": {"attributes": {...}}}
        :return: property name => value dict
        """
        result = self.get_json(silent=True)
        if not isinstance(result, dict):
            raise ValidationError(f"Invalid JSON Payload : {result}")
        data = result.get("data")
        if isinstance(data, dict) and "attributes" in data:
            attributes = data["attributes"]
            if not isinstance(attributes, dict):
                raise ValidationError(f"Invalid attributes : {attributes}")
            return attributes
        return result

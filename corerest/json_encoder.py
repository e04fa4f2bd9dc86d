# corerest to json encoding

import datetime
import decimal
from uuid import UUID
from flask.json.provider import DefaultJSONProvider
import corerest
from .base import CoreRestBase
from .embedded import CollectionResponse


class CoreRestJSONProvider(DefaultJSONProvider):
    """
    Flask JSON encoding for CoreRestBase instances, collection responses and common types
    """

    # pylint: disable=too-many-return-statements,arguments-differ
    def default(self, obj):
        """
        override the default json encoding
        :param obj: object to be encoded
        :return: encoded/serialized object
        """
        if isinstance(obj, (CoreRestBase, CollectionResponse)):
            return obj.to_dict()
        if isinstance(obj, datetime.timedelta):
            return str(obj)
        if isinstance(obj, datetime.datetime):
            return obj.isoformat(" ")
        if isinstance(obj, (datetime.date, datetime.time)):
            return obj.isoformat()
        if isinstance(obj, set):
            return list(obj)
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, decimal.Decimal):
            return float(obj)
        if isinstance(obj, bytes):
            corerest.log.debug("CoreRestJSONProvider: serializing bytes obj")
            return obj.hex()

        return super().default(obj)

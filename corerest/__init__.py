# flake8: noqa: F401
#
# corerest: embedded association rendering and CRUD transformation for Flask-SQLAlchemy REST services
#
from .corerest_init import DB, log, CoreRest
from .errors import ValidationError, GenericError, NotFoundError, ConfigurationError
from .metadata import ACTION_CREATE, ACTION_UPDATE, PropertyRestriction, EntityDescriptor, get_entity_descriptor
from .embedded import Embedded, CollectionResponse
from .base import CoreRestBase
from .view import View, render_view, view_rendering
from .listener import EmbeddedResponseListener
from .deserializer import Deserializer
from .transformer import CRUDTransformer, get_reference
from .json_encoder import CoreRestJSONProvider
from .request import CoreRestRequest
from .api import CoreRestAPI, CRUDResource
from .__about__ import __version__, __description__

__all__ = (
    "__version__",
    "__description__",
    #
    "CoreRest",
    "CoreRestAPI",
    "CRUDResource",
    # db:
    "CoreRestBase",
    "PropertyRestriction",
    "EntityDescriptor",
    "get_entity_descriptor",
    "ACTION_CREATE",
    "ACTION_UPDATE",
    # rendering:
    "Embedded",
    "CollectionResponse",
    "View",
    "render_view",
    "view_rendering",
    "EmbeddedResponseListener",
    "CoreRestJSONProvider",
    "CoreRestRequest",
    # transformation:
    "CRUDTransformer",
    "Deserializer",
    "get_reference",
    # Errors:
    "ValidationError",
    "GenericError",
    "NotFoundError",
    "ConfigurationError",
)

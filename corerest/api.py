#  This file contains the flask-restful API and the Resource that exposes CoreRestBase models:
#  - CoreRestAPI.expose_object creates the collection and instance endpoints
#  - CRUDResource implements the HTTP methods, writes go through the CRUDTransformer
#
# pylint: disable=redefined-builtin,invalid-name,protected-access
#
from functools import wraps
from http import HTTPStatus
from werkzeug.exceptions import NotFound
from flask import current_app, request, url_for
from flask_restful import Api, Resource, abort
import corerest
from .config import get_config
from .embedded import CollectionResponse
from .errors import GenericError, JsonapiError
from .metadata import ACTION_CREATE, ACTION_UPDATE
from .transformer import CRUDTransformer
from .view import View, render_view


def http_method_decorator(fun):
    """Decorator for the exposed HTTP methods (get, post, patch, delete)
    - commit the database
    - convert all exceptions to a JSON serializable error response

    :param fun:
    :return: wrapped fun
    """

    @wraps(fun)
    def method_wrapper(*args, **kwargs):
        try:
            result = fun(*args, **kwargs)
            corerest.DB.session.commit()
            return result

        except JsonapiError as exc:
            corerest.log.exception(exc)
            status_code = exc.status_code
            message = exc.message

        except NotFound:
            status_code = HTTPStatus.NOT_FOUND.value
            message = "Not Found"

        except Exception as exc:
            corerest.log.exception(exc)
            error = GenericError(str(exc), getattr(exc, "status_code", HTTPStatus.INTERNAL_SERVER_ERROR.value))
            status_code = error.status_code
            message = error.message

        corerest.DB.session.rollback()
        corerest.log.error(message)
        abort(status_code, errors=[dict(detail=message)])

    return method_wrapper


class CRUDResource(Resource):
    """
    Flask webservice wrapper for a CoreRestBase model (cls.entity_class)

    Methods return a `View`, render_view sends it to the listeners and renders it.
    """

    # set by CoreRestAPI.expose_object
    entity_class = None
    object_id = None
    instance_endpoint = None

    # render_view is applied first, so rendering errors are handled by http_method_decorator too
    method_decorators = [render_view, http_method_decorator]

    def get(self, **kwargs):
        """
        Retrieve an instance if an id is given, the collection otherwise
        """
        object_id = kwargs.get(self.object_id)
        if object_id is None:
            return View(CollectionResponse(self.entity_class._s_query.all()))
        return View(self.entity_class.get_instance(object_id))

    def post(self, **kwargs):
        """
        Create an instance, only properties that are writable for "create" are set
        """
        payload = request.get_payload()
        instance = self.entity_class()
        CRUDTransformer(self.entity_class).apply_payload(instance, payload, ACTION_CREATE)
        corerest.DB.session.add(instance)
        corerest.DB.session.flush()
        headers = {"Location": url_for(self.instance_endpoint, **{self.object_id: instance.jsonapi_id})}
        return View(instance, HTTPStatus.CREATED, headers=headers)

    def patch(self, **kwargs):
        """
        Update an instance, only properties that are writable for "update" are set
        """
        instance = self.entity_class.get_instance(kwargs.get(self.object_id))
        payload = request.get_payload()
        CRUDTransformer(self.entity_class).apply_payload(instance, payload, ACTION_UPDATE)
        corerest.DB.session.flush()
        return View(instance)

    def delete(self, **kwargs):
        instance = self.entity_class.get_instance(kwargs.get(self.object_id))
        corerest.DB.session.delete(instance)
        return View(status_code=HTTPStatus.NO_CONTENT)


class CoreRestAPI(Api):
    """
    flask-restful Api subclass where we add the expose_object method
    """

    def expose_object(self, entity_class, url_prefix=""):
        """This method creates the API url endpoints for a CoreRestBase model
        :param entity_class: CoreRestBase subclass that we would like to expose
        :param url_prefix: url prefix

        the collection is exposed on /{collection_name}/ (GET, POST),
        the instances on /{collection_name}/<{object_id}>/ (GET, PATCH, DELETE)
        """
        if not current_app:
            corerest.log.debug("Exposing objects outside of app context")
        collection_name = entity_class._s_collection_name
        object_id = entity_class._s_object_id
        endpoint = get_config("ENDPOINT_FMT").format(url_prefix, collection_name)
        instance_endpoint = endpoint + "Id"
        properties = dict(entity_class=entity_class, object_id=object_id, instance_endpoint=instance_endpoint)
        api_class_name = f"{entity_class._s_type}_API"  # name for dynamically generated classes

        url = get_config("RESOURCE_URL_FMT").format(url_prefix, collection_name)
        corerest.log.info(f"Exposing {collection_name} on {url}, endpoint: {endpoint}")
        api_class = type(api_class_name, (CRUDResource,), properties)
        self.add_resource(api_class, url, endpoint=endpoint, methods=["GET", "POST"])

        url = get_config("INSTANCE_URL_FMT").format(url_prefix, collection_name, object_id)
        corerest.log.info(f"Exposing {entity_class._s_type} instances on {url}, endpoint: {instance_endpoint}")
        api_class = type(api_class_name + "_i", (CRUDResource,), properties)
        self.add_resource(api_class, url, endpoint=instance_endpoint, methods=["GET", "PATCH", "DELETE"])

# Views: resource methods return a View, the view is rendered to a response by `render_view`.
# Listeners connected to the `view_rendering` signal may modify the view before it's rendered.
from functools import wraps
from http import HTTPStatus
from blinker import Namespace
from flask import current_app, jsonify, make_response, request

_signals = Namespace()

# sent with `request` and `view` keyword arguments, the sender is the app
view_rendering = _signals.signal("view-rendering")


class View:
    """
    Controller result: the data that will be encoded in the response body
    """

    def __init__(self, data=None, status_code=HTTPStatus.OK, headers=None):
        self.data = data
        self.status_code = status_code
        self.headers = dict(headers) if headers else {}

    def to_response(self):
        """
        Encode the data with the app json provider
        """
        if self.status_code == HTTPStatus.NO_CONTENT:
            response = make_response("", self.status_code)
        else:
            response = make_response(jsonify(self.data), self.status_code)
        for name, value in self.headers.items():
            response.headers[name] = value
        return response


def render_view(fun):
    """
    Decorator for resource methods:
    send `view_rendering` for the returned View and render it

    Other return values are passed through unchanged
    """

    @wraps(fun)
    def view_wrapper(*args, **kwargs):
        result = fun(*args, **kwargs)
        if not isinstance(result, View):
            return result
        view_rendering.send(current_app._get_current_object(), request=request, view=result)
        return result.to_response()

    return view_wrapper

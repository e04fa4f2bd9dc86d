import logging
import os
import sys
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
import corerest
from .request import CoreRestRequest
from .json_encoder import CoreRestJSONProvider
from .listener import EmbeddedResponseListener


class CoreRest:
    """This class configures the Flask application to use the corerest request class,
    json provider and the embedded response listener
    :param app: a Flask application.
    :param kwargs: configuration settings, these override the class attributes below
    """

    # Configuration settings are stored as class variables
    LOGLEVEL = logging.WARNING
    EMBEDDED_QUERY_PARAM = "_embedded"  # query parameter read by the EmbeddedResponseListener
    # first argument is the url prefix, the second the collection name, the third the object id (eg. UserId)
    # => /api/Users/<string:UserId>/
    RESOURCE_URL_FMT = "{}/{}/"
    INSTANCE_URL_FMT = RESOURCE_URL_FMT + "<string:{}>/"
    ENDPOINT_FMT = "{}api_{}"

    def __init__(self, app: Flask = None, *args, **kwargs) -> None:
        """
        Constructor
        """
        self.app = app
        self.db = None
        self.listener = EmbeddedResponseListener()
        if app is not None:
            self.init_app(app, *args, **kwargs)

    def init_app(self, app: Flask, app_db: SQLAlchemy = None, **kwargs) -> None:
        """
        Application initialization
        """
        if not isinstance(app, Flask):  # pragma: no cover
            raise TypeError("'app' should be Flask.")

        if app_db is None:
            app_db = app.extensions["sqlalchemy"]

        corerest.DB = self.db = app_db

        app.request_class = CoreRestRequest
        app.json = CoreRestJSONProvider(app)
        app.url_map.strict_slashes = False

        if app.config.get("DEBUG", False):
            log.setLevel(logging.DEBUG)

        for conf_name, conf_val in kwargs.items():
            setattr(CoreRest, conf_name, conf_val)

        self.listener.connect(app)

        # pylint: disable=unused-argument,unused-variable
        @app.teardown_appcontext
        def shutdown_session(exception=None):
            """cfr. http://flask.pocoo.org/docs/0.12/patterns/sqlalchemy/"""
            self.db.session.remove()

    @staticmethod
    def init_logging(loglevel: int = logging.WARNING) -> logging.Logger:
        """
        Specify the log format used in the webserver logs
        """
        log = logging.getLogger(__name__)
        if log.level == logging.NOTSET:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s")
            handler.setFormatter(formatter)
            log.setLevel(loglevel)
            log.addHandler(handler)
        return log


#
# DB and logging initialization
#
DB = SQLAlchemy()

try:
    DEBUG = os.getenv("DEBUG", logging.WARNING)
    LOGLEVEL = int(DEBUG)
except ValueError:  # pragma: no cover
    print(f'Invalid LogLevel in DEBUG Environment Variable! "{DEBUG}"')
    LOGLEVEL = logging.INFO

log = CoreRest.init_logging(LOGLEVEL)

import logging

from flask import request

import corerest
from corerest import CoreRest, NotFoundError, ValidationError
from corerest.config import get_config, is_debug
from corerest.errors import HIDDEN_LOG


def test_get_config_defaults():
    # no app context: class attributes, then the environment
    assert get_config("EMBEDDED_QUERY_PARAM") == CoreRest.EMBEDDED_QUERY_PARAM


def test_get_config_environment(monkeypatch):
    monkeypatch.setenv("COREREST_TEST_OPTION", "from env")
    assert get_config("COREREST_TEST_OPTION") == "from env"
    assert get_config("COREREST_MISSING_OPTION") is None


def test_app_config_takes_precedence(app):
    assert get_config("EMBEDDED_QUERY_PARAM") == "_embedded"
    app.config["EMBEDDED_QUERY_PARAM"] = "expand"
    assert get_config("EMBEDDED_QUERY_PARAM") == "expand"


def test_request_embedded_flag(app):
    with app.test_request_context("/?_embedded=Yes"):
        assert request.embedded is True
    with app.test_request_context("/?_embedded=nope"):
        assert request.embedded is False
    with app.test_request_context("/"):
        assert request.embedded is None


def test_error_messages_are_hidden_unless_debugging(monkeypatch):
    monkeypatch.setattr(corerest.log, "level", logging.WARNING)
    assert not is_debug()
    assert NotFoundError("Invalid BookId: 1").message == "NotFoundError " + HIDDEN_LOG
    assert ValidationError("bad input").message == "Validation Error: bad input"

    monkeypatch.setattr(corerest.log, "level", logging.DEBUG)
    assert is_debug()
    assert NotFoundError("Invalid BookId: 1").message == "NotFoundError Invalid BookId: 1"

# Configuration settings should be set in app.config
# The CoreRest class attributes hold the defaults, the environment is used as a last resort
import os
import logging
from flask import current_app
import corerest
from typing import Any


def get_config(option: str) -> Any:
    """Retrieve a configuration parameter from the app
    :param option: configuration parameter
    :return: configuration value
    """
    try:
        result = current_app.config[option]
    except (KeyError, RuntimeError):
        # no app context or not configured in the app
        result = getattr(corerest.CoreRest, option, os.environ.get(option, None))
    return result


def is_debug() -> bool:
    """
    We use the loglevel to check whether we're running in debug mode
    :return: whether the app is in debug mode
    :rtype: Boolean
    """
    return corerest.log.getEffectiveLevel() < logging.INFO

# Flag and descriptor helpers shared by the models, the request and the listener
from typing import Any, Callable

# values accepted as "true" by the permissive boolean filter, anything else is false
TRUE_STRINGS = ("1", "true", "on", "yes")


class ClassPropertyDescriptor:
    """
    ClassPropertyDescriptor
    """

    def __init__(self, fget: classmethod) -> None:
        self.fget = fget

    def __get__(self, obj, klass=None):
        if klass is None:
            klass = type(obj)
        return self.fget.__get__(obj, klass)()


def classproperty(func: Callable) -> ClassPropertyDescriptor:
    """
    classproperty
    """
    if not isinstance(func, (classmethod, staticmethod)):
        func = classmethod(func)

    return ClassPropertyDescriptor(func)


def parse_bool(value: Any) -> bool:
    """
    Parse a query string flag, eg. `?_embedded=1`
    :param value: raw value
    :return: True for "1", "true", "on" and "yes", False for everything else (including None)
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUE_STRINGS


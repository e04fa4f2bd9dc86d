import datetime
import sqlalchemy
import corerest
from .errors import ValidationError
from .util import parse_bool


def parse_attr(column, attr_val):
    """
    Parse the supplied `attr_val` so it can be saved in the SQLAlchemy `column`

    :param column: SQLAlchemy column
    :param attr_val: value from the request payload
    :return: processed value
    """
    if attr_val is None:
        if column.default is not None and column.default.is_scalar:
            return column.default.arg
        return None

    try:
        python_type = column.type.python_type
    except NotImplementedError as exc:
        # custom column types have to handle the conversion themselves
        corerest.log.debug(exc)
        return attr_val

    # skip type coercion on JSON columns, since they could be anything
    if isinstance(column.type, sqlalchemy.types.JSON):
        return attr_val

    if python_type is bool:
        return parse_bool(attr_val)

    # datetime is a subclass of date, so check it first
    if python_type is datetime.datetime and not isinstance(attr_val, datetime.datetime):
        return _parse_iso(datetime.datetime, column, attr_val)
    if python_type is datetime.date and not isinstance(attr_val, datetime.date):
        return _parse_iso(datetime.date, column, attr_val)
    if python_type is datetime.time and not isinstance(attr_val, datetime.time):
        return _parse_iso(datetime.time, column, attr_val)

    if isinstance(attr_val, python_type):
        return attr_val

    try:
        return python_type(attr_val)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f'Invalid value "{attr_val}" for {column.key}: {exc}')


def _parse_iso(python_type, column, attr_val):
    """
    Parse the common string representations, f.i. str(datetime.datetime.now())
    and the JS datepicker format "%Y-%m-%dT%H:%M:%S"
    """
    try:
        return python_type.fromisoformat(str(attr_val))
    except ValueError as exc:
        raise ValidationError(f'Invalid {python_type.__name__} "{attr_val}" for {column.key}: {exc}')

import datetime

import pytest
from sqlalchemy import inspect as sqla_inspect

from corerest import Deserializer, ValidationError

from models import Author, Book


def test_deserialize_columns():
    book = Deserializer().deserialize({"id": "3", "title": "Dune", "published": "1965-08-01", "unknown": 1}, Book)
    assert isinstance(book, Book)
    assert sqla_inspect(book).transient
    assert book.id == 3
    assert book.title == "Dune"
    assert book.published == datetime.date(1965, 8, 1)


def test_deserialize_camelcase_keys():
    book = Deserializer().deserialize({"authorId": 7}, Book)
    assert book.author_id == 7


def test_deserialize_nested_payloads():
    book = Deserializer().deserialize({"title": "Dune", "author": {"id": 1, "name": "Frank Herbert"}}, Book)
    assert isinstance(book.author, Author)
    assert book.author.name == "Frank Herbert"

    author = Deserializer().deserialize({"name": "Frank Herbert", "books": [{"title": "Dune"}, {"title": "Dune Messiah"}]}, Author)
    assert [book.title for book in author.books] == ["Dune", "Dune Messiah"]


def test_nested_identifiers_are_skipped():
    book = Deserializer().deserialize({"title": "Dune", "author": 1}, Book)
    assert book.author is None


def test_none_uses_column_default():
    book = Deserializer().deserialize({"status": None}, Book)
    assert book.status == "draft"


@pytest.mark.parametrize(
    "payload",
    [
        ["not", "a", "dict"],
        {"published": "last tuesday"},
        {"id": "abc"},
    ],
)
def test_invalid_payloads(payload):
    with pytest.raises(ValidationError):
        Deserializer().deserialize(payload, Book)


def test_invalid_to_many_payload():
    with pytest.raises(ValidationError) as exc_info:
        Deserializer().deserialize({"books": {"title": "Dune"}}, Author)
    assert "books should be a list" in exc_info.value.message

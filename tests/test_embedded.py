import datetime
import json

from corerest import CollectionResponse

from models import Author, Book


class _Item:
    def __init__(self, show_associations=None):
        self.show_associations = show_associations

    def to_dict(self, embedded=None):
        return {"embedded": embedded}


def test_item_flag_takes_precedence():
    collection = CollectionResponse([_Item(False), _Item()])
    collection.inherited_show_associations = True
    assert collection.to_dict()["data"] == [{"embedded": False}, {"embedded": True}]


def test_collection_flag_is_used_without_inherited_flag():
    collection = CollectionResponse([_Item()])
    collection.show_associations = True
    assert collection.to_dict()["data"] == [{"embedded": True}]


def test_items_are_not_embedded_by_default():
    collection = CollectionResponse([_Item(), "raw"], meta={"source": "test"})
    assert collection.to_dict() == {"data": [{"embedded": False}, "raw"], "meta": {"source": "test", "count": 2}}


def test_entity_renders_association_identifiers(book, author):
    result = book.to_dict()
    assert result["title"] == "Dune"
    assert result["author"] == author.id
    assert author.to_dict()["books"] == [book.id]


def test_entity_renders_embedded_associations(book, author):
    book.show_associations = True
    result = book.to_dict()
    assert result["author"] == {"id": author.id, "name": "Frank Herbert", "books": [book.id]}


def test_exclude_attrs(book, monkeypatch):
    monkeypatch.setattr(Book, "exclude_attrs", ["published", "author"])
    result = book.to_dict()
    assert "published" not in result
    assert "author" not in result
    assert "author_id" in result


def test_json_provider(app, author):
    payload = json.loads(app.json.dumps({"day": datetime.date(1965, 8, 1), "items": CollectionResponse([author])}))
    assert payload["day"] == "1965-08-01"
    assert payload["items"] == {"data": [{"id": author.id, "name": "Frank Herbert", "books": []}], "meta": {"count": 1}}


def test_repr(author):
    assert repr(author) == f"<Author {author.id}>"
    assert repr(Author()) == "<Author None>"

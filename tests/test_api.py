import logging
from http import HTTPStatus

import corerest
from corerest.errors import HIDDEN_LOG

from models import Author, Book, db


def test_create_author(client):
    response = client.post("/Authors/", json={"name": "Frank Herbert"})

    assert response.status_code == HTTPStatus.CREATED
    body = response.get_json()
    assert body["name"] == "Frank Herbert"
    assert body["books"] == []
    assert response.headers["Location"].endswith(f"/Authors/{body['id']}/")
    assert db.session.get(Author, body["id"]) is not None


def test_create_book_skips_restricted_properties(client, author):
    author_id = author.id
    response = client.post("/Books/", json={"title": " Dune ", "status": "published", "author": author_id, "isbn": "0441172717"})

    assert response.status_code == HTTPStatus.CREATED
    body = response.get_json()
    assert body["title"] == "Dune"
    assert body["status"] == "draft"
    assert body["author"] == author_id
    assert "isbn" not in body


def test_create_with_jsonapi_document(client):
    response = client.post("/Authors/", json={"data": {"type": "Authors", "attributes": {"name": "Brian Herbert"}}})
    assert response.status_code == HTTPStatus.CREATED
    assert response.get_json()["name"] == "Brian Herbert"


def test_associations_are_not_embedded_by_default(client, book, author):
    author_id = author.id
    body = client.get("/Books/").get_json()
    assert body["meta"]["count"] == 1
    assert body["data"][0]["author"] == author_id


def test_embedded_collection(client, book, author):
    author_id = author.id
    body = client.get("/Books/?_embedded=1").get_json()
    assert body["data"][0]["author"]["id"] == author_id
    assert body["data"][0]["author"]["name"] == "Frank Herbert"


def test_embedded_instance(client, book, author):
    book_id = book.id
    body = client.get(f"/Authors/{author.id}/?_embedded=true").get_json()
    assert body["books"][0]["id"] == book_id
    assert body["books"][0]["title"] == "Dune"


def test_instance_associations_as_identifiers(client, book, author):
    book_id = book.id
    body = client.get(f"/Authors/{author.id}/?_embedded=no").get_json()
    assert body["books"] == [book_id]


def test_update_book(client, book, session):
    other = Author(name="Brian Herbert")
    session.add(other)
    session.commit()
    author_id, other_id = book.author_id, other.id

    response = client.patch(f"/Books/{book.id}/", json={"status": "published", "published": "1965-08-01", "author": other_id})

    assert response.status_code == HTTPStatus.OK
    body = response.get_json()
    assert body["status"] == "published"
    assert body["published"] == "1965-08-01"
    # author may only be set when the book is created
    assert body["author"] == author_id


def test_get_missing_instance(client):
    response = client.get("/Books/999/")
    assert response.status_code == HTTPStatus.NOT_FOUND
    assert "errors" in response.get_json()


def test_invalid_payload(client):
    response = client.post("/Authors/", data="Frank Herbert", content_type="text/plain")
    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert "Invalid JSON Payload" in response.get_json()["errors"][0]["detail"]


def test_invalid_value_is_rolled_back(client, book):
    book_id = book.id
    response = client.patch(f"/Books/{book_id}/", json={"title": "Dune Messiah", "published": "last tuesday"})
    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert db.session.get(Book, book_id).title == "Dune"


def test_delete_book(client, book):
    book_id = book.id
    response = client.delete(f"/Books/{book_id}/")
    assert response.status_code == HTTPStatus.NO_CONTENT
    assert client.get(f"/Books/{book_id}/").status_code == HTTPStatus.NOT_FOUND


def test_to_many_value_should_be_a_list(client, book, author):
    book_id = book.id
    response = client.patch(f"/Authors/{author.id}/", json={"books": book_id})
    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["errors"][0]["detail"] == "Validation Error: books should be a list"


def test_unexpected_errors(client, author, monkeypatch):
    def to_dict(self, embedded=None):
        raise RuntimeError("rendering failed")

    author_id = author.id
    monkeypatch.setattr(Author, "to_dict", to_dict)

    monkeypatch.setattr(corerest.log, "level", logging.WARNING)
    response = client.get(f"/Authors/{author_id}/")
    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.get_json()["errors"][0]["detail"] == "Generic Error: " + HIDDEN_LOG

    monkeypatch.setattr(corerest.log, "level", logging.DEBUG)
    response = client.get(f"/Authors/{author_id}/")
    assert response.get_json()["errors"][0]["detail"] == "Generic Error: rendering failed"

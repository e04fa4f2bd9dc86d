import pytest
from flask import Flask
from sqlalchemy import event

from corerest import CoreRest, CoreRestAPI

from models import Author, Book, Shelf, db


@pytest.fixture
def app():
    app = Flask("corerest_test")
    app.config.update(SQLALCHEMY_DATABASE_URI="sqlite://", ERROR_404_HELP=False)
    db.init_app(app)
    CoreRest(app)
    api = CoreRestAPI(app)
    for model in (Author, Book, Shelf):
        api.expose_object(model)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    return db.session


@pytest.fixture
def author(session):
    author = Author(name="Frank Herbert")
    session.add(author)
    session.commit()
    return author


@pytest.fixture
def book(session, author):
    book = Book(title="Dune", author=author)
    session.add(book)
    session.commit()
    return book


@pytest.fixture
def statements(app):
    """
    SQL statements executed while the test runs
    """
    executed = []

    def before_cursor_execute(conn, cursor, statement, *args):
        executed.append(statement)

    event.listen(db.engine, "before_cursor_execute", before_cursor_execute)
    yield executed
    event.remove(db.engine, "before_cursor_execute", before_cursor_execute)

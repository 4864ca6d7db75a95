"""Shared pytest fixtures and test utilities for Jotion tests."""

import os
import tempfile
from typing import Generator

import pytest

from jotion.identity import Identity, IdentityProvider
from jotion.models.document import Document
from jotion.services.document_service import DocumentService
from jotion.storage.database import Database, reset_db, set_db


@pytest.fixture(scope="function")
def temp_db() -> Generator[Database, None, None]:
    """
    Create a temporary SQLite database for testing.

    The database is also installed as the global instance so RPC handlers
    and the HTTP app use it.

    Yields:
        Database instance with tables created
    """
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    reset_db()

    database = Database(f"sqlite:///{db_path}")
    database.create_tables()
    set_db(database)

    yield database

    # Cleanup
    database.drop_tables()
    database.dispose()
    reset_db()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def db_session(temp_db):
    """Get a database session from temp_db."""
    with temp_db.session() as session:
        yield session


@pytest.fixture
def document_service(temp_db):
    """Create a document service instance."""
    with temp_db.session() as session:
        yield DocumentService(session)


@pytest.fixture
def identity_provider() -> IdentityProvider:
    """Identity provider configured from the default settings."""
    return IdentityProvider.from_settings()


@pytest.fixture
def alice() -> Identity:
    """Owner used by most tests."""
    return Identity(subject="user_alice", name="Alice")


@pytest.fixture
def bob() -> Identity:
    """A second, unrelated user."""
    return Identity(subject="user_bob", name="Bob")


class TreeBuilder:
    """Creates nested documents from a compact description."""

    def __init__(self, service: DocumentService, identity: Identity):
        self.service = service
        self.identity = identity

    def build(self, shape: dict, parent_id: str | None = None) -> dict[str, Document]:
        """
        Create documents for a nested {title: {child_title: {...}}} mapping.

        Returns:
            Mapping of title to created document
        """
        created = {}
        for title, children in shape.items():
            doc = self.service.create_document(self.identity, title, parent_document=parent_id)
            created[title] = doc
            created.update(self.build(children or {}, doc.id))
        return created


@pytest.fixture
def tree_builder(document_service, alice) -> TreeBuilder:
    """TreeBuilder creating documents owned by alice."""
    return TreeBuilder(document_service, alice)


@pytest.fixture
def reload_document(document_service):
    """Re-read a document from the database, bypassing the identity map."""

    def _reload(document_id: str) -> Document | None:
        document_service.session.expire_all()
        return document_service.document_repo.get(document_id)

    return _reload

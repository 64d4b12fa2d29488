import os

import pytest
from sqlalchemy.exc import IntegrityError, MultipleResultsFound
from sqlalchemy.orm import sessionmaker

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SKIP_MIGRATIONS", "1")

from tenantscope.core.db import Base, build_engine
from tenantscope.crud.client import DataClient
from tenantscope.crud.errors import RecordNotFound


@pytest.fixture
def db_session(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path}/data_client.db")
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def client(db_session):
    client = DataClient(db_session)
    client.tenant.create({"id": 1, "name": "Acme"})
    return client


def test_find_many_orders_and_paginates(client):
    client.post.create_many([{"title": t, "tenant_id": 1} for t in ("b", "c", "a")])
    titles = [p.title for p in client.post.find_many(order_by={"title": "desc"})]
    assert titles == ["c", "b", "a"]
    page = client.post.find_many(order_by={"title": "asc"}, skip=1, take=1)
    assert [p.title for p in page] == ["b"]


def test_find_first_or_throw_raises_when_empty(client):
    assert client.post.find_first({"title": "nope"}) is None
    with pytest.raises(RecordNotFound) as exc:
        client.post.find_first_or_throw({"title": "nope"})
    assert exc.value.model_name == "Post"


def test_find_unique_rejects_ambiguous_match(client):
    client.post.create_many([{"title": "dup", "tenant_id": 1}, {"title": "dup", "tenant_id": 1}])
    with pytest.raises(MultipleResultsFound):
        client.post.find_unique({"title": "dup"})


def test_find_unique_requires_where(client):
    with pytest.raises(ValueError):
        client.post.find_unique({})


def test_unknown_column_is_rejected(client):
    with pytest.raises(ValueError):
        client.post.find_many({"author": "x"})
    with pytest.raises(ValueError):
        client.post.find_many(order_by={"author": "asc"})
    with pytest.raises(ValueError):
        client.post.find_many(order_by={"title": "sideways"})


def test_update_and_delete_many_return_counts(client):
    client.post.create_many([{"title": "a", "tenant_id": 1}, {"title": "b", "tenant_id": 1}])
    assert client.post.update_many({"title": "a"}, {"content": "body"}) == 1
    assert client.post.find_unique({"title": "a"}).content == "body"
    assert client.post.delete_many() == 2
    assert client.post.find_many() == []


def test_upsert_creates_then_updates(client):
    created = client.post.upsert({"id": 10}, {"id": 10, "title": "v1", "tenant_id": 1}, {"title": "v2"})
    assert created.title == "v1"
    updated = client.post.upsert({"id": 10}, {"id": 10, "title": "v1", "tenant_id": 1}, {"title": "v2"})
    assert updated.id == 10
    assert updated.title == "v2"


def test_create_with_unknown_tenant_propagates_integrity_error(client, db_session):
    with pytest.raises(IntegrityError):
        client.post.create({"title": "orphan", "tenant_id": 404})
    # Session is usable again after the rollback.
    assert client.post.find_many() == []


def test_tenant_with_posts_cannot_be_deleted(client):
    client.post.create({"title": "keep", "tenant_id": 1})
    with pytest.raises(IntegrityError):
        client.tenant.delete_many({"id": 1})
    assert client.tenant.find_unique({"id": 1}) is not None

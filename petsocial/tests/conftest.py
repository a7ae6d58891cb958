"""Test fixtures with an in-memory Firestore."""
import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient


# --- Fake Firestore in-memory store ---

class FakeGeoPoint:
    def __init__(self, latitude, longitude):
        self.latitude = latitude
        self.longitude = longitude


class FakeDocRef:
    def __init__(self, store, collection_path, doc_id):
        self._store = store
        self._collection_path = collection_path
        self.id = doc_id

    def _key(self):
        return (self._collection_path, self.id)

    def get(self):
        data = self._store.get(self._key())
        return FakeDocSnapshot(self.id, data, self._collection_path, self._store)

    def set(self, data):
        self._store[self._key()] = dict(data)

    def update(self, data):
        existing = self._store.get(self._key(), {})
        existing.update(data)
        self._store[self._key()] = existing

    def delete(self):
        self._store.pop(self._key(), None)


class FakeDocSnapshot:
    def __init__(self, doc_id, data, collection_path, store):
        self.id = doc_id
        self._data = data
        self._collection_path = collection_path
        self._store = store
        self.exists = data is not None
        self.reference = FakeDocRef(store, collection_path, doc_id)

    def to_dict(self):
        return dict(self._data) if self._data else None


_MISSING = object()


def _matches(data, field, op, value):
    actual = data.get(field, _MISSING)
    if actual is _MISSING:
        return False
    if op == "==":
        return actual == value
    if op == ">=":
        return actual >= value
    if op == "<":
        return actual < value
    if op == "array_contains":
        return value in (actual or [])
    raise NotImplementedError(op)


class FakeQuery:
    def __init__(self, store, collection_path, docs=None):
        self._store = store
        self._collection_path = collection_path
        self._docs = docs

    def _get_docs(self):
        if self._docs is not None:
            return list(self._docs)
        results = []
        for (coll, doc_id), data in self._store.items():
            if coll == self._collection_path:
                results.append(FakeDocSnapshot(doc_id, data, self._collection_path, self._store))
        return results

    def order_by(self, field, direction=None):
        docs = self._get_docs()
        reverse = direction == "DESCENDING"
        docs.sort(key=lambda d: d.to_dict().get(field, datetime.min.replace(tzinfo=timezone.utc)), reverse=reverse)
        return FakeQuery(self._store, self._collection_path, docs)

    def where(self, filter=None, **kwargs):
        docs = self._get_docs()
        if filter:
            field, op, value = filter.field_path, filter.op_string, filter.value
        else:
            field, op, value = kwargs.get("field"), kwargs.get("op"), kwargs.get("value")
        filtered = [d for d in docs if _matches(d.to_dict(), field, op, value)]
        return FakeQuery(self._store, self._collection_path, filtered)

    def start_after(self, doc_snapshot):
        docs = self._get_docs()
        idx = next((i for i, d in enumerate(docs) if d.id == doc_snapshot.id), -1)
        if idx >= 0:
            docs = docs[idx + 1:]
        return FakeQuery(self._store, self._collection_path, docs)

    def limit(self, n):
        docs = self._get_docs()[:n]
        return FakeQuery(self._store, self._collection_path, docs)

    def stream(self):
        return iter(self._get_docs())


class FakeCollectionRef(FakeQuery):
    def __init__(self, store, collection_path):
        super().__init__(store, collection_path)

    def document(self, doc_id):
        return FakeDocRef(self._store, self._collection_path, doc_id)


class FakeFirestoreClient:
    def __init__(self):
        self._store = {}

    def collection(self, name):
        return FakeCollectionRef(self._store, name)

    def put(self, collection, data, doc_id=None):
        """Seed a document directly, bypassing the service layer."""
        doc_id = doc_id or uuid.uuid4().hex
        self._store[(collection, doc_id)] = dict(data)
        return doc_id


# --- Fixtures ---

@pytest.fixture()
def fake_db():
    return FakeFirestoreClient()


@pytest.fixture()
def client(fake_db):
    from petsocial import dependencies

    with patch("petsocial.dependencies._init_firebase"):
        from petsocial.main import app
        app.dependency_overrides[dependencies.get_firestore_client] = lambda: fake_db
        yield TestClient(app)
        app.dependency_overrides.clear()


@pytest.fixture()
def now():
    return datetime.now(timezone.utc)


@pytest.fixture()
def seed_event(fake_db, now):
    def _seed(title, latitude=None, longitude=None, days_ahead=3, is_published=True, doc_id=None):
        location = FakeGeoPoint(latitude, longitude) if latitude is not None else None
        return fake_db.put("events", {
            "title": title,
            "description": f"{title} description",
            "date": now + timedelta(days=days_ahead),
            "location": location,
            "is_published": is_published,
            "attendee_count": 0,
        }, doc_id=doc_id)
    return _seed


@pytest.fixture()
def seed_user(fake_db):
    def _seed(username, latitude=None, longitude=None, is_public_profile=True, doc_id=None):
        location = FakeGeoPoint(latitude, longitude) if latitude is not None else None
        return fake_db.put("users", {
            "username": username,
            "profile_image": None,
            "location": location,
            "is_public_profile": is_public_profile,
            "followers_count": 0,
        }, doc_id=doc_id or username)
    return _seed


@pytest.fixture()
def seed_pet(fake_db):
    def _seed(name, owner_id, pet_type="dog", doc_id=None):
        return fake_db.put("pets", {
            "name": name,
            "type": pet_type,
            "breed": "",
            "image": None,
            "owner_id": owner_id,
        }, doc_id=doc_id or name.lower())
    return _seed


@pytest.fixture()
def geo():
    return FakeGeoPoint

import copy
import os
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.pop("SELF_URL", None)

from config import Settings  # noqa: E402
from gateway import TeamGateway  # noqa: E402
from main import create_app  # noqa: E402


class InMemoryCollection:
    """Stand-in for a pymongo Collection covering the calls the gateway makes."""

    def __init__(self):
        self.docs = {}
        self.calls = []

    def _matches(self, doc, query):
        return all(doc.get(key) == value for key, value in query.items())

    def insert_one(self, doc):
        self.calls.append("insert_one")
        doc = copy.deepcopy(doc)
        doc.setdefault("_id", ObjectId())
        self.docs[doc["_id"]] = doc
        return SimpleNamespace(inserted_id=doc["_id"], acknowledged=True)

    def find(self, query=None):
        self.calls.append("find")
        query = query or {}
        return [copy.deepcopy(d) for d in self.docs.values() if self._matches(d, query)]

    def find_one(self, query):
        self.calls.append("find_one")
        for doc in self.docs.values():
            if self._matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def update_one(self, query, update):
        self.calls.append("update_one")
        for doc in self.docs.values():
            if self._matches(doc, query):
                doc.update(copy.deepcopy(update["$set"]))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    def delete_one(self, query):
        self.calls.append("delete_one")
        for key, doc in list(self.docs.items()):
            if self._matches(doc, query):
                del self.docs[key]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


@pytest.fixture
def collection():
    return InMemoryCollection()


@pytest.fixture
def gateway(collection):
    return TeamGateway(collection, owner_scoping=True)


@pytest.fixture
def client(gateway):
    app = create_app(settings=Settings(self_url=None, owner_scoping=True), gateway=gateway)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def unscoped_client(collection):
    gateway = TeamGateway(collection, owner_scoping=False)
    app = create_app(settings=Settings(self_url=None, owner_scoping=False), gateway=gateway)
    with TestClient(app) as test_client:
        yield test_client

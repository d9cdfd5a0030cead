"""In-memory stand-in for the motor database handle used by the routes.

Supports equality filters, ``$set`` updates with upsert, unique single-field
indexes and pymongo result objects. Anything else is out of scope.
"""

import copy

from bson import ObjectId
from pymongo.errors import DuplicateKeyError
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult


def _matches(doc, query):
    return all(doc.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    def __aiter__(self):
        self._iter = iter(self._docs)
        return self

    async def __anext__(self):
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration

    async def to_list(self, length=None):
        return list(self._docs)


class FakeCollection:
    def __init__(self, name):
        self.name = name
        self.docs = []
        self.unique_fields = set()

    async def create_index(self, key, unique=False):
        if unique:
            self.unique_fields.add(key)
        return f"{key}_1"

    def _check_unique(self, doc, ignore=None):
        for field in self.unique_fields:
            if field not in doc:
                continue
            for other in self.docs:
                if other is not ignore and other.get(field) == doc[field]:
                    raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name}")

    def find(self, query=None):
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query or {})])

    async def find_one(self, query=None):
        for doc in self.docs:
            if _matches(doc, query or {}):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self._check_unique(doc)
        self.docs.append(copy.deepcopy(doc))
        return InsertOneResult(doc["_id"], True)

    async def update_one(self, query, update, upsert=False):
        fields = update.get("$set", {})
        for doc in self.docs:
            if _matches(doc, query):
                changed = any(doc.get(k) != v for k, v in fields.items())
                self._check_unique({**doc, **fields}, ignore=doc)
                doc.update(copy.deepcopy(fields))
                return UpdateResult({"n": 1, "nModified": int(changed)}, True)
        if not upsert:
            return UpdateResult({"n": 0, "nModified": 0}, True)
        new_doc = {**copy.deepcopy(query), **copy.deepcopy(fields)}
        new_doc.setdefault("_id", ObjectId())
        self._check_unique(new_doc)
        self.docs.append(new_doc)
        return UpdateResult({"n": 1, "nModified": 0, "upserted": new_doc["_id"]}, True)

    async def delete_one(self, query):
        for doc in self.docs:
            if _matches(doc, query):
                self.docs.remove(doc)
                return DeleteResult({"n": 1}, True)
        return DeleteResult({"n": 0}, True)

    async def delete_many(self, query):
        before = len(self.docs)
        self.docs = [d for d in self.docs if not _matches(d, query)]
        return DeleteResult({"n": before - len(self.docs)}, True)


class FakeDatabase:
    def __init__(self):
        self._collections = {}

    def __getitem__(self, name):
        if name not in self._collections:
            self._collections[name] = FakeCollection(name)
        return self._collections[name]

"""
Test configuration and fixtures.

The services talk to MongoDB through a handful of Beanie calls (`find`,
`find_all`, `find_one`, `get`, `project`, conditional `update`, `insert`). The
fixtures below swap the document classes inside the service modules for
in-memory stand-ins that answer those calls, so the real service code runs end
to end without a database.

The stand-ins hold either loose `FakeDocument` records (`seed`) or instances of
the real `User` / `AdminRequest` models parsed from raw stored documents
(`store_raw`), so model validation is part of the tested path.
"""

import os
from datetime import datetime, timedelta, timezone

import pytest
from beanie import UpdateResponse
from bson import ObjectId
from pymongo.errors import DuplicateKeyError
from pymongo.results import UpdateResult
from unittest.mock import patch

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-the-admin-workflow-suite")


def _matches(value, condition) -> bool:
    if isinstance(condition, dict) and "$in" in condition:
        return value in condition["$in"]
    return value == condition


def _field(doc, name):
    return doc.id if name in ("_id", "id") else getattr(doc, name, None)


def _doc_matches(doc, filter_: dict) -> bool:
    return all(_matches(_field(doc, name), condition) for name, condition in filter_.items())


class FakeQuery:
    def __init__(self, model, filter_=None):
        self.model = model
        self.filter = filter_ or {}
        self._sort_key = None
        self._projection = None

    def _matching(self):
        return [doc for doc in self.model.docs if _doc_matches(doc, self.filter)]

    def sort(self, key: str):
        self._sort_key = key
        return self

    def project(self, projection_model):
        self._projection = projection_model
        self.model.projections.append(projection_model)
        return self

    def _project(self, doc):
        fields = self._projection.model_fields
        return self._projection.model_validate(
            {(info.alias or name): _field(doc, name) for name, info in fields.items()}
        )

    async def to_list(self):
        docs = self._matching()
        if self._sort_key:
            field = self._sort_key.lstrip("-+")
            docs.sort(
                key=lambda d: (_field(d, field) is not None, _field(d, field)),
                reverse=self._sort_key.startswith("-"),
            )
        if self._projection is not None:
            docs = [self._project(doc) for doc in docs]
        return docs

    async def _first(self):
        docs = self._matching()
        return docs[0] if docs else None

    def __await__(self):
        return self._first().__await__()

    def update(self, update: dict, response_type=None):
        return self._apply_update(update, response_type)

    async def _apply_update(self, update: dict, response_type=None):
        if self.model.update_error is not None:
            error, self.model.update_error = self.model.update_error, None
            raise error
        doc = await self._first()
        if doc is not None:
            for field, value in update.get("$set", {}).items():
                setattr(doc, field, value)
            for field in update.get("$unset", {}):
                setattr(doc, field, None)
            self.model.update_calls.append((self.filter, update))

        if response_type == UpdateResponse.UPDATE_RESULT:
            matched = 0 if doc is None else 1
            return UpdateResult({"n": matched, "nModified": matched, "ok": 1.0}, True)
        return doc


class FakeDocument:
    """In-memory stand-in for a Beanie document class."""

    docs: list = []
    update_calls: list = []
    projections: list = []
    insert_error = None
    update_error = None

    def __init__(self, **fields):
        self.id = fields.pop("id", None)
        for name, value in fields.items():
            setattr(self, name, value)

    def __getattr__(self, name):
        # unset optional fields read as None, like defaults on the real models
        if name.startswith("_"):
            raise AttributeError(name)
        return None

    async def insert(self):
        cls = type(self)
        if cls.insert_error is not None:
            error, cls.insert_error = cls.insert_error, None
            raise error
        if self.id is None:
            self.id = ObjectId()
        cls.docs.append(self)
        return self

    @classmethod
    def find(cls, filter_=None):
        return FakeQuery(cls, filter_)

    @classmethod
    def find_all(cls):
        return FakeQuery(cls)

    @classmethod
    def find_one(cls, filter_):
        return FakeQuery(cls, filter_)

    @classmethod
    async def get(cls, document_id):
        return await FakeQuery(cls, {"_id": document_id})

    @classmethod
    def seed(cls, **fields):
        doc = cls(id=fields.pop("id", None) or ObjectId(), **fields)
        cls.docs.append(doc)
        return doc


def _make_model(name: str):
    return type(
        name,
        (FakeDocument,),
        {
            "docs": [],
            "update_calls": [],
            "projections": [],
            "insert_error": None,
            "update_error": None,
        },
    )


@pytest.fixture
def fake_admin_request():
    return _make_model("FakeAdminRequest")


@pytest.fixture
def fake_user():
    return _make_model("FakeUser")


@pytest.fixture
def fake_store(fake_admin_request, fake_user):
    """Patch every module that touches the store with the in-memory models."""
    targets = [
        ("admin_workflow.services.admin_request_service.AdminRequest", fake_admin_request),
        ("admin_workflow.services.admin_request_service.User", fake_user),
        ("admin_workflow.services.user_admin_service.User", fake_user),
        ("admin_workflow.api.deps.User", fake_user),
    ]
    patchers = [patch(target, model) for target, model in targets]
    for patcher in patchers:
        patcher.start()
    yield fake_admin_request, fake_user
    for patcher in patchers:
        patcher.stop()


@pytest.fixture
def make_user(fake_user):
    """Seed an account. Keyword arguments override the defaults."""
    created = {"count": 0}

    def _make_user(**fields):
        created["count"] += 1
        n = created["count"]
        defaults = {
            "username": f"user{n}",
            "firstName": f"First{n}",
            "lastName": f"Last{n}",
            "email": f"user{n}@example.com",
            "role": "user",
            "status": "active",
            "excelRecords": [],
            "chartRecords": [],
            "createdAt": datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(days=n),
        }
        defaults.update(fields)
        return fake_user.seed(**defaults)

    return _make_user


@pytest.fixture
def duplicate_key_error():
    return DuplicateKeyError(
        "E11000 duplicate key error collection: admin_requests index: one_pending_request_per_user"
    )


@pytest.fixture
def store_raw(fake_store):
    """
    Parse a raw stored document through the real model and put it in the
    in-memory collection standing in for that model.
    """

    def _store_raw(document_model, fake_model, raw: dict):
        document = document_model.model_validate({"_id": ObjectId(), **raw})
        fake_model.docs.append(document)
        return document

    return _store_raw

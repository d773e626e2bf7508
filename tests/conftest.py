"""
Shared test fixtures for the resumesync test suite.

Sets environment variables before any package imports to prevent config
failures, then provides an in-memory stand-in for the Motor collections,
a deterministic embedding backend, and sample resume/job fixtures.
"""

import os

# === Set environment BEFORE any package imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "resumesync_test")
os.environ.setdefault("ML_DEVICE", "cpu")

import copy
import re
from contextlib import asynccontextmanager
from datetime import datetime, timedelta
from types import SimpleNamespace
from typing import Any, Optional

import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure

from resumesync.data.models import (
    Certificate,
    Education,
    Experience,
    Interest,
    JobPosting,
    Language,
    PersonalInfo,
    Project,
    ResumeData,
    Skill,
    SocialMediaLink,
)
from resumesync.data.repositories import JobRepository, ResumeRepository
from resumesync.ml.embeddings import EmbeddingGenerator


# ---------------------------------------------------------------------------
# In-memory collection double
# ---------------------------------------------------------------------------


def _matches(document: dict[str, Any], query: dict[str, Any]) -> bool:
    """Evaluate the subset of the MongoDB query language the repositories use."""
    for key, condition in query.items():
        if key == "$or":
            if not any(_matches(document, sub) for sub in condition):
                return False
            continue

        value = document.get(key)
        if isinstance(condition, dict) and any(op.startswith("$") for op in condition):
            for op, arg in condition.items():
                if op == "$in":
                    if value not in arg:
                        return False
                elif op == "$gte":
                    if value is None or value < arg:
                        return False
                elif op == "$lte":
                    if value is None or value > arg:
                        return False
                elif op == "$regex":
                    flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
                    if not isinstance(value, str) or not re.search(arg, value, flags):
                        return False
                elif op == "$options":
                    continue
                else:
                    raise NotImplementedError(f"Unsupported operator in fake: {op}")
        elif value != condition:
            return False
    return True


class FakeCursor:
    def __init__(self, documents: list[dict[str, Any]]):
        self._documents = documents

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._documents.sort(key=lambda d: d.get(key), reverse=direction < 0)
        return self

    async def to_list(self, length: Optional[int] = None) -> list[dict[str, Any]]:
        documents = self._documents if length is None else self._documents[:length]
        return copy.deepcopy(documents)


class FakeCollection:
    """
    Async collection double with the Motor call signatures.

    Add an operation name to ``fail_on`` to make it raise OperationFailure.
    """

    def __init__(self, name: str):
        self.name = name
        self.documents: list[dict[str, Any]] = []
        self.fail_on: set[str] = set()
        self.indexes: list[Any] = []
        self.sessions: list[Any] = []

    def _check(self, operation: str, session: Any) -> None:
        self.sessions.append(session)
        if operation in self.fail_on:
            raise OperationFailure(f"{operation} failed on {self.name}")

    def _insert(self, document: dict[str, Any]) -> ObjectId:
        if "_id" not in document:
            document["_id"] = ObjectId()
        self.documents.append(copy.deepcopy(document))
        return document["_id"]

    async def insert_one(self, document: dict[str, Any], session: Any = None):
        self._check("insert_one", session)
        return SimpleNamespace(inserted_id=self._insert(document))

    async def insert_many(self, documents: list[dict[str, Any]], session: Any = None):
        self._check("insert_many", session)
        return SimpleNamespace(inserted_ids=[self._insert(d) for d in documents])

    async def find_one(self, query: dict[str, Any], session: Any = None):
        self._check("find_one", session)
        for document in self.documents:
            if _matches(document, query):
                return copy.deepcopy(document)
        return None

    def find(self, query: Optional[dict[str, Any]] = None, projection: Any = None, session: Any = None):
        self._check("find", session)
        return FakeCursor([d for d in self.documents if _matches(d, query or {})])

    async def update_one(self, query: dict[str, Any], update: dict[str, Any], session: Any = None):
        self._check("update_one", session)
        for document in self.documents:
            if _matches(document, query):
                document.update(copy.deepcopy(update.get("$set", {})))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_many(self, query: dict[str, Any], session: Any = None):
        self._check("delete_many", session)
        kept = [d for d in self.documents if not _matches(d, query)]
        deleted = len(self.documents) - len(kept)
        self.documents = kept
        return SimpleNamespace(deleted_count=deleted)

    async def distinct(self, key: str, query: Optional[dict[str, Any]] = None):
        self._check("distinct", None)
        values: list[Any] = []
        for document in self.documents:
            if _matches(document, query or {}) and key in document:
                if document[key] not in values:
                    values.append(document[key])
        return values

    async def create_index(self, keys: Any, **kwargs: Any) -> str:
        self.indexes.append((keys, kwargs))
        return str(keys)


class FakeDatabaseManager:
    """DatabaseManager stand-in; transactions snapshot and restore every collection."""

    def __init__(self):
        self.collections: dict[str, FakeCollection] = {}
        self.transactions = 0

    def get_async_collection(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]

    def check_sync_connection(self) -> bool:
        return True

    @asynccontextmanager
    async def async_transaction(self):
        self.transactions += 1
        snapshot = {name: copy.deepcopy(c.documents) for name, c in self.collections.items()}
        session = SimpleNamespace(transaction=self.transactions)
        try:
            yield session
        except BaseException:
            for name, collection in self.collections.items():
                collection.documents = snapshot.get(name, [])
            raise


class FakeEmbeddingBackend:
    """
    Returns a constant vector of ``dimension`` floats and records its inputs.

    ``output`` replaces the vector with an arbitrary return value.
    """

    def __init__(
        self, dimension: int = 768, error: Optional[Exception] = None, output: Any = None
    ):
        self.dimension = dimension
        self.error = error
        self.output = output
        self.texts: list[str] = []

    def embed(self, text: str) -> list[float]:
        self.texts.append(text)
        if self.error is not None:
            raise self.error
        if self.output is not None:
            return self.output
        return [0.1] * self.dimension


# ---------------------------------------------------------------------------
# Store and repository fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_db() -> FakeDatabaseManager:
    return FakeDatabaseManager()


@pytest.fixture
def fake_backend() -> FakeEmbeddingBackend:
    return FakeEmbeddingBackend()


@pytest.fixture
def generator(fake_backend) -> EmbeddingGenerator:
    return EmbeddingGenerator(backend=fake_backend, dimension=768)


@pytest.fixture
def resume_repo(fake_db, generator) -> ResumeRepository:
    return ResumeRepository(db_manager=fake_db, generator=generator, save_policy="best_effort")


@pytest.fixture
def atomic_resume_repo(fake_db, generator) -> ResumeRepository:
    return ResumeRepository(db_manager=fake_db, generator=generator, save_policy="atomic")


@pytest.fixture
def job_repo(fake_db, generator) -> JobRepository:
    return JobRepository(db_manager=fake_db, generator=generator)


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_resume() -> ResumeData:
    """A resume with every section populated."""
    return ResumeData(
        title="Backend CV",
        template_id="template-b",
        is_primary=True,
        personal_info=PersonalInfo(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            phone="+90 555 000 00 00",
            location="İstanbul",
            title="Backend Engineer",
            summary="Builds data pipelines.",
        ),
        experiences=[
            Experience(
                company="Acme",
                position="Senior Engineer",
                location="İstanbul",
                start_date="2021-03",
                current=True,
                description="Owns the ingestion service.",
            ),
            Experience(
                company="Initech",
                position="Engineer",
                start_date="2018-01",
                end_date="2021-02",
            ),
        ],
        education=[
            Education(
                institution="Boğaziçi University",
                degree="BSc",
                field="Computer Engineering",
                start_date="2014-09",
                end_date="2018-06",
                gpa="3.8",
                description="High honors",
            )
        ],
        skills=[
            Skill(name="Python", category="Languages", proficiency="expert"),
            Skill(name="MongoDB", category="Databases", proficiency="advanced"),
            Skill(name="Go", proficiency="beginner"),
        ],
        projects=[
            Project(
                name="resumesync",
                description="Resume embeddings",
                technologies=["Python", "Motor"],
                start_date="2023-01",
                url="https://example.com/resumesync",
            )
        ],
        certificates=[
            Certificate(name="CKA", issuer="CNCF", issue_date="2022-05", credential_id="abc-123"),
        ],
        languages=[
            Language(name="Turkish", proficiency="native"),
            Language(name="English", proficiency="professional"),
        ],
        social_media=[SocialMediaLink(platform="GitHub", url="https://github.com/ada")],
        interests=[Interest(name="Chess"), Interest(name="Climbing")],
    )


@pytest.fixture
def make_job():
    """Factory for JobPosting models with sensible defaults."""

    def _factory(**overrides: Any) -> JobPosting:
        data: dict[str, Any] = {
            "job_title": "Backend Engineer",
            "company_name": "Acme",
            "location": "İstanbul, Avrupa",
            "job_description": "Build and operate Python services.",
            "employment_type": "full-time",
            "experience_level": "senior",
            "min_salary": 50000,
            "max_salary": 80000,
            "currency": "TRY",
            "language": "en",
            "must_have_skills": ["Python", "MongoDB"],
            "nice_to_have_skills": ["Go"],
        }
        data.update(overrides)
        return JobPosting(**data)

    return _factory


@pytest.fixture
def insert_jobs(fake_db):
    """Insert JobPostings straight into the jobs collection, newest last."""

    def _insert(jobs: list[JobPosting]) -> list[JobPosting]:
        collection = fake_db.get_async_collection("jobs")
        base = datetime(2024, 1, 1)
        for index, job in enumerate(jobs):
            job.created_at = base + timedelta(minutes=index)
            document = job.model_dump_mongo()
            document["_id"] = ObjectId()
            job.id = document["_id"]
            collection.documents.append(document)
        return jobs

    return _insert


@pytest.fixture
def resume_content():
    """Resume fields that survive a save/fetch round trip, without store ids."""

    def _content(resume: ResumeData) -> dict[str, Any]:
        data = resume.model_dump(exclude={"resume_id", "embedding"})
        for value in data.values():
            if isinstance(value, list):
                for item in value:
                    item.pop("id", None)
        return data

    return _content


@pytest.fixture
def make_backend():
    """Factory for embedding backends with a custom dimension or error."""
    return FakeEmbeddingBackend

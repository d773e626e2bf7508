"""
Tests for ResumeRepository: save/fetch, partial failures, embeddings and
the atomic save policy.
"""

import asyncio

import pytest
from bson import ObjectId

from resumesync.data.models import ResumeData, Skill
from resumesync.data.repositories import ResumeRepository
from resumesync.ml.embeddings import EmbeddingGenerator


class TestSave:
    def test_new_resume_gets_id(self, fake_db, resume_repo, sample_resume):
        result = asyncio.run(resume_repo.save(sample_resume, "user-1"))

        assert result.success is True
        assert ObjectId.is_valid(result.resume_id)
        assert result.section_errors == {}
        assert result.embedding_error is None

        (row,) = fake_db.get_async_collection("resumes").documents
        assert row["user_id"] == "user-1"
        assert row["title"] == "Backend CV"
        assert row["template_id"] == "template-b"
        assert row["is_primary"] is True

    def test_defaults_for_blank_title_and_template(self, fake_db, resume_repo):
        resume = ResumeData(title="", template_id="")
        asyncio.run(resume_repo.save(resume, "user-1"))

        (row,) = fake_db.get_async_collection("resumes").documents
        assert row["title"] == "Untitled Resume"
        assert row["template_id"] == "template-a"

    def test_round_trip(self, resume_repo, sample_resume, resume_content):
        result = asyncio.run(resume_repo.save(sample_resume, "user-1"))
        fetched = asyncio.run(resume_repo.fetch(result.resume_id))

        assert fetched is not None
        assert fetched.resume_id == result.resume_id
        assert resume_content(fetched) == resume_content(sample_resume)
        assert [lang.proficiency for lang in fetched.languages] == ["native", "professional"]

    def test_update_existing(self, fake_db, resume_repo, sample_resume):
        result = asyncio.run(resume_repo.save(sample_resume, "user-1"))

        edited = sample_resume.model_copy(
            update={"resume_id": result.resume_id, "title": "Renamed", "skills": [Skill(name="Rust")]}
        )
        second = asyncio.run(resume_repo.save(edited, "user-1"))

        assert second.success is True
        assert second.resume_id == result.resume_id
        assert len(fake_db.get_async_collection("resumes").documents) == 1
        skills = fake_db.get_async_collection("resume_skills").documents
        assert [s["skill_name"] for s in skills] == ["Rust"]

        fetched = asyncio.run(resume_repo.fetch(result.resume_id))
        assert fetched.title == "Renamed"

    def test_update_unknown_id_still_writes_sections(self, fake_db, resume_repo, sample_resume):
        resume_id = str(ObjectId())
        resume = sample_resume.model_copy(update={"resume_id": resume_id})

        result = asyncio.run(resume_repo.save(resume, "user-1"))

        assert result.success is True
        assert result.resume_id == resume_id
        assert result.embedding_error == "Resume not found"
        assert fake_db.get_async_collection("resumes").documents == []
        skills = fake_db.get_async_collection("resume_skills").documents
        assert {str(s["resume_id"]) for s in skills} == {resume_id}

    def test_invalid_id_fails(self, resume_repo):
        result = asyncio.run(resume_repo.save(ResumeData(resume_id="not-an-id"), "user-1"))
        assert result.success is False
        assert "invalid resume id" in result.error

    def test_metadata_failure_fails_save(self, fake_db, resume_repo, sample_resume):
        fake_db.get_async_collection("resumes").fail_on.add("insert_one")
        result = asyncio.run(resume_repo.save(sample_resume, "user-1"))

        assert result.success is False
        assert result.resume_id is None
        assert fake_db.get_async_collection("resume_skills").documents == []

    def test_section_failure_is_isolated(self, fake_db, resume_repo, sample_resume):
        fake_db.get_async_collection("resume_skills").fail_on.add("insert_many")

        result = asyncio.run(resume_repo.save(sample_resume, "user-1"))

        assert result.success is True
        assert set(result.section_errors) == {"skills"}
        # sections after the failing one are still written
        assert len(fake_db.get_async_collection("resume_projects").documents) == 1
        assert len(fake_db.get_async_collection("resume_interests").documents) == 2

        fetched = asyncio.run(resume_repo.fetch(result.resume_id))
        assert fetched.skills == []
        assert len(fetched.experiences) == 2

    def test_embedding_stored(self, fake_db, resume_repo, sample_resume, fake_backend):
        result = asyncio.run(resume_repo.save(sample_resume, "user-1"))

        (row,) = fake_db.get_async_collection("resumes").documents
        assert len(row["embedding"]) == 768
        assert fake_backend.texts[0].startswith("[TOP SKILLS]")

    def test_embedding_failure_does_not_fail_save(self, fake_db, sample_resume, make_backend):
        backend = make_backend(error=RuntimeError("quota exceeded"))
        repo = ResumeRepository(
            db_manager=fake_db,
            generator=EmbeddingGenerator(backend=backend, dimension=768),
            save_policy="best_effort",
        )

        result = asyncio.run(repo.save(sample_resume, "user-1"))

        assert result.success is True
        assert "quota exceeded" in result.embedding_error
        (row,) = fake_db.get_async_collection("resumes").documents
        assert row.get("embedding") is None

    def test_wrong_dimension_is_not_stored(self, fake_db, sample_resume, make_backend):
        repo = ResumeRepository(
            db_manager=fake_db,
            generator=EmbeddingGenerator(backend=make_backend(dimension=512), dimension=768),
            save_policy="best_effort",
        )

        result = asyncio.run(repo.save(sample_resume, "user-1"))

        assert result.success is True
        assert result.embedding_error == "Invalid embedding dimensions: expected 768, got 512"
        (row,) = fake_db.get_async_collection("resumes").documents
        assert row.get("embedding") is None


    @pytest.mark.parametrize("output", [["n/a"] * 768, [None] * 768, [[0.1] * 384, [0.2] * 384]])
    def test_malformed_vector_is_not_stored(self, fake_db, sample_resume, make_backend, output):
        repo = ResumeRepository(
            db_manager=fake_db,
            generator=EmbeddingGenerator(backend=make_backend(output=output), dimension=768),
            save_policy="best_effort",
        )

        result = asyncio.run(repo.save(sample_resume, "user-1"))

        assert result.success is True
        assert result.embedding_error.startswith("Failed to generate embedding")
        (row,) = fake_db.get_async_collection("resumes").documents
        assert row.get("embedding") is None


class TestAtomicSave:
    def test_success_uses_one_transaction(self, fake_db, atomic_resume_repo, sample_resume):
        result = asyncio.run(atomic_resume_repo.save(sample_resume, "user-1"))

        assert result.success is True
        assert fake_db.transactions == 1
        sessions = fake_db.get_async_collection("resume_skills").sessions
        assert sessions[0] is not None

    def test_section_failure_rolls_back(self, fake_db, atomic_resume_repo, sample_resume):
        fake_db.get_async_collection("resume_languages").fail_on.add("insert_many")

        result = asyncio.run(atomic_resume_repo.save(sample_resume, "user-1"))

        assert result.success is False
        assert "[languages]" in result.error
        assert fake_db.get_async_collection("resumes").documents == []
        assert fake_db.get_async_collection("resume_experience").documents == []


    def test_update_unknown_id_fails(self, fake_db, atomic_resume_repo, sample_resume):
        resume = sample_resume.model_copy(update={"resume_id": str(ObjectId())})

        result = asyncio.run(atomic_resume_repo.save(resume, "user-1"))

        assert result.success is False
        assert "resume not found" in result.error
        assert fake_db.get_async_collection("resume_skills").documents == []


class TestFetch:
    def test_missing_resume(self, resume_repo):
        assert asyncio.run(resume_repo.fetch(str(ObjectId()))) is None

    def test_invalid_id(self, resume_repo):
        assert asyncio.run(resume_repo.fetch("not-an-id")) is None

    def test_read_failure_falls_back_to_empty(self, fake_db, resume_repo, sample_resume):
        result = asyncio.run(resume_repo.save(sample_resume, "user-1"))
        fake_db.get_async_collection("resume_certificates").fail_on.add("find")

        fetched = asyncio.run(resume_repo.fetch(result.resume_id))

        assert fetched.certificates == []
        assert len(fetched.skills) == 3

    def test_user_resumes(self, resume_repo, sample_resume):
        first = asyncio.run(resume_repo.save(sample_resume, "user-1"))
        asyncio.run(resume_repo.save(ResumeData(title="Other"), "user-2"))
        second = asyncio.run(resume_repo.save(ResumeData(title="Newer"), "user-1"))
        # re-saving the first resume moves it to the top
        asyncio.run(resume_repo.save(sample_resume.model_copy(update={"resume_id": first.resume_id}), "user-1"))

        summaries = asyncio.run(resume_repo.fetch_user_resumes("user-1"))

        assert [s.resume_id for s in summaries] == [first.resume_id, second.resume_id]
        assert summaries[0].title == "Backend CV"

    def test_user_resumes_failure(self, fake_db, resume_repo):
        fake_db.get_async_collection("resumes").fail_on.add("find")
        assert asyncio.run(resume_repo.fetch_user_resumes("user-1")) == []


class TestEmbeddings:
    def test_generate_for_missing_resume(self, resume_repo):
        result = asyncio.run(resume_repo.generate_and_save_embedding(str(ObjectId())))
        assert result.success is False
        assert result.error == "Resume not found"

    def test_regenerate_skips_unchanged(self, resume_repo, sample_resume, fake_backend):
        saved = asyncio.run(resume_repo.save(sample_resume, "user-1"))
        calls = len(fake_backend.texts)

        result = asyncio.run(resume_repo.regenerate_embedding_if_needed(saved.resume_id, sample_resume))

        assert result.regenerated is False
        assert len(fake_backend.texts) == calls

    def test_regenerate_on_new_skill(self, resume_repo, sample_resume, fake_backend):
        saved = asyncio.run(resume_repo.save(sample_resume, "user-1"))
        changed = sample_resume.model_copy(
            update={"skills": [*sample_resume.skills, Skill(name="Kubernetes")]}
        )

        result = asyncio.run(resume_repo.regenerate_embedding_if_needed(saved.resume_id, changed))

        assert result.regenerated is True
        assert "Kubernetes" in fake_backend.texts[-1]

    def test_regenerate_missing_resume(self, resume_repo, sample_resume):
        result = asyncio.run(resume_repo.regenerate_embedding_if_needed(str(ObjectId()), sample_resume))
        assert result.regenerated is False
        assert result.error == "Resume not found"

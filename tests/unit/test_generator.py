"""
Tests for EmbeddingGenerator dimension checks and error wrapping.
"""

import asyncio

import pytest

from resumesync.exceptions import EmbeddingDimensionError, EmbeddingError, EmbeddingTransportError
from resumesync.ml.embeddings import EmbeddingGenerator, format_job, format_resume


class TestGenerate:
    def test_returns_vector(self, generator):
        vector = asyncio.run(generator.generate("hello"))
        assert len(vector) == 768
        assert all(isinstance(v, float) for v in vector)

    def test_wrong_dimension(self, make_backend):
        generator = EmbeddingGenerator(backend=make_backend(dimension=512), dimension=768)
        with pytest.raises(EmbeddingDimensionError, match="expected 768, got 512") as exc_info:
            asyncio.run(generator.generate("hello"))
        assert exc_info.value.expected == 768
        assert exc_info.value.actual == 512

    def test_empty_vector(self, make_backend):
        generator = EmbeddingGenerator(backend=make_backend(dimension=0), dimension=768)
        with pytest.raises(EmbeddingDimensionError, match="got 0"):
            asyncio.run(generator.generate("hello"))

    def test_backend_error_wrapped(self, make_backend):
        error = ConnectionError("network down")
        generator = EmbeddingGenerator(backend=make_backend(error=error), dimension=768)
        with pytest.raises(EmbeddingTransportError, match="Failed to generate embedding: network down") as exc_info:
            asyncio.run(generator.generate("hello"))
        assert exc_info.value.cause is error

    def test_non_numeric_output(self, make_backend):
        generator = EmbeddingGenerator(backend=make_backend(output=["n/a"] * 768), dimension=768)
        with pytest.raises(EmbeddingTransportError, match="could not convert"):
            asyncio.run(generator.generate("hello"))

    def test_missing_values_rejected(self, make_backend):
        generator = EmbeddingGenerator(backend=make_backend(output=[None] * 768), dimension=768)
        with pytest.raises(EmbeddingTransportError, match="non-finite"):
            asyncio.run(generator.generate("hello"))

    def test_infinite_values_rejected(self, make_backend):
        output = [0.1] * 767 + [float("inf")]
        generator = EmbeddingGenerator(backend=make_backend(output=output), dimension=768)
        with pytest.raises(EmbeddingTransportError, match="non-finite"):
            asyncio.run(generator.generate("hello"))

    def test_matrix_rejected(self, make_backend):
        output = [[0.1] * 384, [0.2] * 384]
        generator = EmbeddingGenerator(backend=make_backend(output=output), dimension=768)
        with pytest.raises(EmbeddingTransportError, match=r"shape \(2, 384\)"):
            asyncio.run(generator.generate("hello"))

    def test_errors_share_base(self):
        assert issubclass(EmbeddingDimensionError, EmbeddingError)
        assert issubclass(EmbeddingTransportError, EmbeddingError)

    def test_no_retry(self, make_backend):
        backend = make_backend(error=TimeoutError("slow"))
        generator = EmbeddingGenerator(backend=backend, dimension=768)
        with pytest.raises(EmbeddingTransportError):
            asyncio.run(generator.generate("hello"))
        assert len(backend.texts) == 1


class TestConvenience:
    def test_resume_embedding_uses_formatter(self, generator, fake_backend, sample_resume):
        asyncio.run(generator.generate_resume_embedding(sample_resume))
        assert fake_backend.texts == [format_resume(sample_resume)]

    def test_job_embedding_uses_formatter(self, generator, fake_backend, make_job):
        job = make_job()
        asyncio.run(generator.generate_job_embedding(job))
        assert fake_backend.texts == [format_job(job)]

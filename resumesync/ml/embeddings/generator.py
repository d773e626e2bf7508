"""
Embedding generation with dimension checking.

Wraps an EmbeddingBackend: backend failures become EmbeddingTransportError
and vectors of the wrong length become EmbeddingDimensionError, so callers
only ever receive a complete vector. There are no retries.
"""

import asyncio
from typing import Optional

import numpy as np

from resumesync.data.models import JobPosting, ResumeData
from resumesync.exceptions import EmbeddingDimensionError, EmbeddingTransportError
from resumesync.utils.config import get_settings
from resumesync.utils.logger import get_logger

from .embedding_model import EmbeddingBackend, get_embedding_backend
from .text_formatter import format_job, format_resume

logger = get_logger(__name__)


class EmbeddingGenerator:
    """Turns embedding documents into fixed-length vectors."""

    def __init__(
        self,
        backend: Optional[EmbeddingBackend] = None,
        dimension: Optional[int] = None,
    ):
        self._backend = backend
        self.dimension = dimension or get_settings().ml.embedding_dimension

    @property
    def backend(self) -> EmbeddingBackend:
        if self._backend is None:
            self._backend = get_embedding_backend()
        return self._backend

    async def generate(self, text: str) -> list[float]:
        """
        Embed one document.

        The backend call runs in a worker thread since local models are
        CPU-bound.

        Raises:
            EmbeddingTransportError: If the backend call fails or returns
                something other than a flat vector of finite floats
            EmbeddingDimensionError: If the vector length is not ``dimension``
        """
        try:
            raw = await asyncio.to_thread(self.backend.embed, text)
            vector = np.asarray(raw if raw is not None else [], dtype=float)
        except Exception as e:
            logger.error(f"Error generating embedding: {e}")
            raise EmbeddingTransportError(str(e), cause=e) from e

        if vector.ndim != 1:
            raise EmbeddingTransportError(f"expected a flat vector, got shape {vector.shape}")
        if vector.shape[0] != self.dimension:
            raise EmbeddingDimensionError(self.dimension, int(vector.shape[0]))
        if not np.isfinite(vector).all():
            raise EmbeddingTransportError("vector contains non-finite values")

        return vector.tolist()

    async def generate_resume_embedding(self, resume: ResumeData) -> list[float]:
        return await self.generate(format_resume(resume))

    async def generate_job_embedding(self, job: JobPosting) -> list[float]:
        return await self.generate(format_job(job))


_generator: Optional[EmbeddingGenerator] = None


def get_embedding_generator() -> EmbeddingGenerator:
    """Get the shared embedding generator."""
    global _generator
    if _generator is None:
        _generator = EmbeddingGenerator()
    return _generator

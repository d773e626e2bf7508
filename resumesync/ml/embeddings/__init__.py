"""
Embedding documents, vectors and staleness checks.

Components:
- text_formatter: Resume and job posting embedding documents
- EmbeddingGenerator: Dimension-checked vectors from a backend
- SentenceTransformerBackend / GeminiEmbeddingBackend: Model backends
- should_regenerate: Structural change detection
"""

from .change_detector import ChangeSignature, should_regenerate
from .embedding_model import (
    EmbeddingBackend,
    GeminiEmbeddingBackend,
    SentenceTransformerBackend,
    get_embedding_backend,
)
from .generator import EmbeddingGenerator, get_embedding_generator
from .text_formatter import format_job, format_resume

__all__ = [
    # Formatting
    "format_job",
    "format_resume",
    # Generation
    "EmbeddingGenerator",
    "get_embedding_generator",
    # Backends
    "EmbeddingBackend",
    "GeminiEmbeddingBackend",
    "SentenceTransformerBackend",
    "get_embedding_backend",
    # Change detection
    "ChangeSignature",
    "should_regenerate",
]

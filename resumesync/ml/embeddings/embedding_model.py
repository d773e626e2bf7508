"""
Embedding backends for generating text embeddings.

A backend turns one document into one vector. The local backend wraps a
sentence-transformers model; the hosted backend calls the Gemini
embedding API. Both load lazily on first use.
"""

from typing import Optional, Protocol, Sequence, runtime_checkable

import numpy as np

from resumesync.utils.config import get_settings
from resumesync.utils.logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class EmbeddingBackend(Protocol):
    """Anything that can embed a single text."""

    def embed(self, text: str) -> Sequence[float]:
        ...


class SentenceTransformerBackend:
    """
    Wrapper for sentence-transformers embedding models.

    The default model (all-mpnet-base-v2) produces 768-dimensional vectors.
    """

    def __init__(
        self,
        model_name: Optional[str] = None,
        device: Optional[str] = None,
    ):
        """
        Initialize the embedding model.

        Args:
            model_name: Name of the sentence-transformers model to use.
                       Defaults to config setting.
            device: Device to run model on ('cpu', 'cuda', 'mps').
                   Defaults to config setting.
        """
        settings = get_settings()
        self.model_name = model_name or settings.ml.embedding_model
        self.device = device or settings.ml.device

        self._model = None
        self._initialized = False

    def _load_model(self) -> None:
        """Lazy load the embedding model."""
        if self._initialized:
            return

        try:
            from sentence_transformers import SentenceTransformer

            logger.info(f"Loading embedding model: {self.model_name}")
            self._model = SentenceTransformer(
                self.model_name,
                device=self.device,
            )
            self._initialized = True
            logger.info(f"Embedding model loaded on device: {self.device}")

        except Exception as e:
            logger.error(f"Failed to load embedding model: {e}")
            raise

    @property
    def model(self):
        """Get the underlying sentence-transformer model."""
        if not self._initialized:
            self._load_model()
        return self._model

    def embed(self, text: str) -> list[float]:
        """
        Generate a normalized embedding for one text.

        Args:
            text: Document to encode.

        Returns:
            Embedding vector as a list of floats.
        """
        embedding: np.ndarray = self.model.encode(
            [text],
            show_progress_bar=False,
            normalize_embeddings=True,
            convert_to_numpy=True,
        )[0]
        return embedding.astype(float).tolist()


class GeminiEmbeddingBackend:
    """Gemini embedding API backend (text-embedding-004, 768 dimensions)."""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        settings = get_settings()
        self.api_key = api_key or settings.ml.gemini_api_key
        self.model_name = model_name or settings.ml.gemini_model
        if not self.api_key:
            raise ValueError("Gemini API key required. Set ML_GEMINI_API_KEY.")
        self._client = None

    def _load_client(self):
        if self._client is None:
            try:
                import google.generativeai as genai
            except ImportError as e:
                raise ImportError(
                    "google-generativeai not installed. "
                    "Install with: pip install 'resumesync[gemini]'"
                ) from e

            genai.configure(api_key=self.api_key)
            self._client = genai
            logger.info(f"Gemini embedding client configured: {self.model_name}")
        return self._client

    def embed(self, text: str) -> list[float]:
        genai = self._load_client()
        result = genai.embed_content(
            model=self.model_name,
            content=text,
            task_type="semantic_similarity",
        )
        return list(result["embedding"])


_backend: Optional[EmbeddingBackend] = None


def get_embedding_backend() -> EmbeddingBackend:
    """Get the shared backend selected by ML_EMBEDDING_PROVIDER."""
    global _backend
    if _backend is None:
        provider = get_settings().ml.embedding_provider
        if provider == "gemini":
            _backend = GeminiEmbeddingBackend()
        else:
            _backend = SentenceTransformerBackend()
        logger.info(f"Using embedding provider: {provider}")
    return _backend

"""Exception hierarchy for persistence and embedding failures."""

from typing import Optional


class ResumeSyncError(Exception):
    """Base class for all resumesync errors."""


class PersistenceError(ResumeSyncError):
    """
    A store operation failed for one section of a resume.

    Attributes:
        section: Section name (e.g. 'skills', 'personalInfo', 'resume')
        operation: Store operation that failed ('delete', 'insert', 'read', ...)
        cause: The underlying driver exception, if any
    """

    def __init__(
        self,
        section: str,
        message: str,
        operation: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.section = section
        self.operation = operation
        self.cause = cause

        parts = [f"[{section}]"]
        if operation:
            parts.append(f"{operation} failed:")
        parts.append(message)
        super().__init__(" ".join(parts))


class EmbeddingError(ResumeSyncError):
    """Base class for embedding generation failures."""


class EmbeddingDimensionError(EmbeddingError):
    """The model returned a vector of the wrong length."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid embedding dimensions: expected {expected}, got {actual}"
        )


class EmbeddingTransportError(EmbeddingError):
    """The embedding model call itself failed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(f"Failed to generate embedding: {message}")


class NotFoundError(ResumeSyncError):
    """A resume or job does not exist."""

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found: {resource_id}")

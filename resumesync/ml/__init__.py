"""
Machine learning components for resumesync.

Submodules:
- embeddings: Embedding documents, generation and change detection
"""

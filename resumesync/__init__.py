"""
resumesync - resume/job synchronization and semantic embedding pipeline.

Maps UI-shaped resume aggregates onto a multi-collection store, serializes
resumes and job postings into embedding documents, and serves filtered,
paginated job listings.
"""

__app_name__ = "resumesync"
__version__ = "0.1.0"

"""Storage package initialization."""

from .client import B2CommandLineClient, ObjectStorageClient

__all__ = [
    "B2CommandLineClient",
    "ObjectStorageClient",
]

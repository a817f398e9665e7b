from .base import BlobStore, DirectoryStore
from .blob_store import LocalBlobStore
from .sql_store import SqlDirectoryStore, create_store_engine

__all__ = [
    "BlobStore",
    "DirectoryStore",
    "LocalBlobStore",
    "SqlDirectoryStore",
    "create_store_engine",
]

"""Object storage backends for attachment bytes."""

from autolog.storage.object_storage import ObjectStorage, get_object_storage

__all__ = ["ObjectStorage", "get_object_storage"]

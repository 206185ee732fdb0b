from functools import cached_property
from vfs_simple_s3.errors import NotAFile

import enum


class EntryType(enum.Enum):
    FILE = "file"
    FOLDER = "folder"
    MISSING = "missing"


class ResolvedEntry:
    """The result of resolving one ObjectPath.

    Metadata is read lazily from the fetched object and kept for the
    lifetime of the entry. A new resolution always builds a new entry.
    """

    def __init__(self, path, type, handle=None):
        if (type is EntryType.FILE) != (handle is not None):
            raise ValueError("Only FILE entries carry an object handle")
        self.path = path
        self.type = type
        self.handle = handle

    def _require_handle(self):
        if self.handle is None:
            raise NotAFile(f"{self.path} is {self.type.value}, not a file")
        return self.handle

    @cached_property
    def _headers(self):
        return self._require_handle().response

    @property
    def size(self):
        return self._headers["ContentLength"]

    @property
    def last_modified(self):
        """Timezone-aware datetime of the last upload."""
        return self._headers["LastModified"]

    @property
    def etag(self):
        return self._headers.get("ETag")

    @property
    def content_type(self):
        return self._headers.get("ContentType")

    @cached_property
    def attributes(self):
        headers = self._headers
        attrs = {
            "etag": headers.get("ETag"),
            "content-type": headers.get("ContentType"),
            "content-length": headers["ContentLength"],
            "last-modified": headers["LastModified"],
        }
        for name, value in headers.get("Metadata", {}).items():
            attrs[f"x-amz-meta-{name}"] = value
        return attrs

    def close(self):
        if self.handle is not None:
            self.handle.close()

    def __repr__(self):
        return f"<ResolvedEntry {self.path} {self.type.name}>"

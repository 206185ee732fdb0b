from vfs_simple_s3.fileobject import S3FileObject
from vfs_simple_s3.paths import S3FileName
from vfs_simple_s3.store import S3ObjectStore

import logging


logger = logging.getLogger(__name__)


class S3FileSystem:
    """All files reachable below one s3://host/ root."""

    def __init__(self, root_name, client, capabilities, temp_dir=None):
        self.root_name = root_name
        self.client = client
        self.store = S3ObjectStore(client, temp_dir=temp_dir)
        self._capabilities = frozenset(capabilities)

    def has_capability(self, capability):
        return capability in self._capabilities

    def resolve_file(self, name):
        """Return a new, unattached S3FileObject for an S3FileName or path."""
        if not isinstance(name, S3FileName):
            name = self.root_name.resolve(name)
        if (name.host, name.port) != (self.root_name.host, self.root_name.port):
            raise ValueError(f"{name} does not belong to {self.root_name.root_uri}")
        return S3FileObject(name, self)

    def __repr__(self):
        return f"<S3FileSystem {self.root_name.root_uri}>"

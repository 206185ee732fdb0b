from vfs_simple_s3.entry import EntryType
from vfs_simple_s3.entry import ResolvedEntry
from vfs_simple_s3.errors import NotAFile
from vfs_simple_s3.interfaces import IObjectStore
from vfs_simple_s3.paths import SEPARATOR
from vfs_simple_s3.reader import RangeReader
from vfs_simple_s3.s3client import NotFound
from vfs_simple_s3.upload import WriteSession
from zope.interface import implementer

import logging


logger = logging.getLogger(__name__)


@implementer(IObjectStore)
class S3ObjectStore:
    """Hierarchical path semantics on top of S3's flat key space.

    S3 has no folders, only keys that contain separators. A path is a
    FILE when an object exists at exactly its key, a FOLDER when keys exist
    below its prefix, and MISSING otherwise.
    """

    def __init__(self, client, temp_dir=None):
        self._client = client
        self._temp_dir = temp_dir

    @property
    def client(self):
        return self._client

    # -- Resolution --

    def resolve(self, path):
        # Keys ending in a separator (the container root included) name
        # folders; a zero-byte marker stored there is not a file.
        if not path.key.endswith(SEPARATOR):
            result = self._client.get_object(path.container, path.key)
            if not isinstance(result, NotFound):
                # Only the headers are kept; content is fetched again on read.
                result.close()
                # An exact object wins even when descendants share its prefix.
                return ResolvedEntry(path, EntryType.FILE, result)
        if self._client.prefix_exists(path.container, path.prefix):
            entry_type = EntryType.FOLDER
        else:
            entry_type = EntryType.MISSING
        logger.debug("Resolved %s as %s", path, entry_type.name)
        return ResolvedEntry(path, entry_type)

    def resolve_type(self, path):
        entry = self.resolve(path)
        entry.close()
        return entry.type

    # -- Listing --

    def list_children(self, path):
        prefix = path.prefix
        listing = self._client.list_objects(
            path.container, prefix=prefix, delimiter=SEPARATOR
        )
        children = []
        for key in listing.keys:
            if key == prefix:
                # A zero-byte "folder marker" is the folder itself.
                continue
            children.append(path.child(key))
        for common_prefix in listing.common_prefixes:
            # Kept verbatim: the trailing separator is part of the folder key.
            children.append(path.child(common_prefix))
        return children

    def iter_keys(self, path):
        """All keys below path, at any depth."""
        return self._client.list_objects(path.container, prefix=path.prefix).keys

    # -- Content --

    def open_for_read(self, entry):
        if entry.type is not EntryType.FILE:
            raise NotAFile(f"{entry.path} is {entry.type.value}, not a file")
        result = self._client.get_object(entry.path.container, entry.path.key)
        if isinstance(result, NotFound):
            raise NotAFile(f"{entry.path} no longer exists")
        return result.take_body()

    def open_random_access(self, entry):
        return RangeReader(self._client, entry.path, entry.size)

    def open_for_write(self, path, append=False, on_commit=None):
        if path.is_root:
            raise NotAFile(f"Cannot write to container root {path}")
        initial = None
        if append:
            entry = self.resolve(path)
            if entry.type is EntryType.FILE:
                initial = self.open_for_read(entry)
        return WriteSession(
            self._client,
            path,
            temp_dir=self._temp_dir,
            on_commit=on_commit,
            initial=initial,
        )

    def put_file(self, path, local_path):
        """Upload an existing local file to path."""
        if path.is_root:
            raise NotAFile(f"Cannot write to container root {path}")
        self._client.put_object(path.container, path.key, local_path)

    # -- Metadata --

    def get_size(self, entry):
        return entry.size

    def get_last_modified(self, entry):
        return entry.last_modified

    # -- Deletion --

    def delete(self, path):
        self._client.delete_object(path.container, path.key)

    def create_folder(self, path):
        logger.info("create_folder(%s) ignored, S3 has no folders", path)

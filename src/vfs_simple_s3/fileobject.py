from vfs_simple_s3.entry import EntryType
from vfs_simple_s3.errors import NotAFile
from vfs_simple_s3.errors import NotAFolder
from vfs_simple_s3.interfaces import IFileObject
from zope.interface import implementer

import logging
import shutil


logger = logging.getLogger(__name__)


@implementer(IFileObject)
class S3FileObject:
    """A file or folder of an S3FileSystem.

    The object is unattached until first used. Attaching resolves the path
    against S3 and keeps the result until ``detach()``; attaching again
    always resolves from scratch.
    """

    def __init__(self, name, file_system):
        self.name = name
        self.file_system = file_system
        self._entry = None
        self._children = None

    @property
    def _store(self):
        return self.file_system.store

    @property
    def is_attached(self):
        return self._entry is not None

    def attach(self):
        if self._entry is None:
            path = self.name.object_path
            try:
                self._entry = self._store.resolve(path)
            except Exception:
                logger.error("attach() failed for %s", self.name, exc_info=True)
                raise
        return self._entry

    def detach(self):
        entry, self._entry = self._entry, None
        self._children = None
        if entry is not None:
            entry.close()

    # -- Type --

    def get_type(self):
        return self.attach().type

    def exists(self):
        return self.get_type() is not EntryType.MISSING

    def is_file(self):
        return self.get_type() is EntryType.FILE

    def is_folder(self):
        return self.get_type() is EntryType.FOLDER

    # -- Navigation --

    def get_parent(self):
        parent = self.name.parent
        if parent is None:
            return None
        return self.file_system.resolve_file(parent)

    def resolve_file(self, name):
        return self.file_system.resolve_file(self.name.resolve(name))

    def get_children(self):
        """Immediate children of a folder; cached until detach."""
        entry = self.attach()
        if entry.type is not EntryType.FOLDER:
            raise NotAFolder(f"{self.name} is {entry.type.value}, not a folder")
        if self._children is None:
            paths = self._store.list_children(entry.path)
            self._children = [
                self.file_system.resolve_file(self.name.for_object(p)) for p in paths
            ]
        return list(self._children)

    # -- Metadata --

    def get_content_size(self):
        return self._store.get_size(self.attach())

    def get_last_modified_time(self):
        """Last modification time in milliseconds since the epoch."""
        modified = self._store.get_last_modified(self.attach())
        return int(modified.timestamp() * 1000)

    def set_last_modified_time(self, modtime):
        logger.info("set_last_modified_time() not supported on %s", self.name)
        return False

    def get_attributes(self):
        return dict(self.attach().attributes)

    # -- Content --

    def get_input_stream(self):
        return self._store.open_for_read(self.attach())

    def get_random_access_content(self):
        entry = self.attach()
        if entry.type is not EntryType.FILE:
            raise NotAFile(f"{self.name} is {entry.type.value}, not a file")
        return self._store.open_random_access(entry)

    def get_output_stream(self, append=False):
        return self._store.open_for_write(
            self.name.object_path, append=append, on_commit=self._on_commit
        )

    def _on_commit(self, path):
        self.detach()

    def copy_from(self, local_path):
        """Upload a local file to this location."""
        self._store.put_file(self.name.object_path, local_path)
        self.detach()

    def copy_to(self, local_path):
        """Download this file to a local path."""
        stream = self.get_input_stream()
        try:
            with open(local_path, "wb") as f:
                shutil.copyfileobj(stream, f)
        finally:
            stream.close()

    # -- Mutation --

    def delete(self):
        """Delete this file; returns False for missing or folder entries."""
        entry = self.attach()
        if entry.type is not EntryType.FILE:
            logger.debug("delete() skipped for %s (%s)", self.name, entry.type.name)
            return False
        self._store.delete(entry.path)
        self.detach()
        return True

    def delete_all(self):
        """Delete this file or every object below this folder."""
        entry = self.attach()
        count = 0
        if entry.type is EntryType.FILE:
            self._store.delete(entry.path)
            count += 1
        elif entry.type is EntryType.FOLDER:
            for key in self._store.iter_keys(entry.path):
                self._store.delete(entry.path.child(key))
                count += 1
        self.detach()
        return count

    def create_folder(self):
        self._store.create_folder(self.name.object_path)

    def __repr__(self):
        return f"<S3FileObject {self.name.uri}>"

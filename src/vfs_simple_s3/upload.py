from vfs_simple_s3.errors import StorageServiceError
from vfs_simple_s3.errors import UploadFailure

import contextlib
import logging
import os
import shutil
import tempfile


logger = logging.getLogger(__name__)


class WriteSession:
    """Buffers written bytes in a local spool file and uploads them on close.

    No bytes reach S3 before ``close()``. The spool belongs to this session
    alone and is removed once the session ends, whether the upload succeeded,
    failed or was aborted.
    """

    def __init__(self, client, path, temp_dir=None, on_commit=None, initial=None):
        self._client = client
        self.path = path
        self._on_commit = on_commit
        fd, self.spool_path = tempfile.mkstemp(
            dir=temp_dir, prefix="s3vfs-", suffix=".spool"
        )
        self._spool = os.fdopen(fd, "wb")
        self._closed = False
        if initial is not None:
            try:
                shutil.copyfileobj(initial, self._spool)
            except BaseException:
                self.abort()
                raise
            finally:
                initial.close()

    @property
    def closed(self):
        return self._closed

    def writable(self):
        return not self._closed

    def _check_open(self):
        if self._closed:
            raise ValueError("I/O operation on closed write session")

    def write(self, data):
        self._check_open()
        return self._spool.write(data)

    def writelines(self, lines):
        for line in lines:
            self.write(line)

    def flush(self):
        self._check_open()
        self._spool.flush()

    def close(self):
        """Upload the spooled bytes with a single request."""
        if self._closed:
            return
        self._closed = True
        try:
            self._spool.close()
            logger.debug(
                "Uploading %d bytes to %s",
                os.path.getsize(self.spool_path),
                self.path,
            )
            self._client.put_object(
                self.path.container, self.path.key, self.spool_path
            )
        except StorageServiceError as e:
            raise UploadFailure(f"Upload to {self.path} failed", code=e.code) from e
        finally:
            self._remove_spool()
        if self._on_commit is not None:
            self._on_commit(self.path)

    def abort(self):
        """Discard the spooled bytes without uploading anything."""
        if self._closed:
            return
        self._closed = True
        try:
            self._spool.close()
        finally:
            self._remove_spool()
        logger.debug("Aborted write to %s", self.path)

    def _remove_spool(self):
        with contextlib.suppress(OSError):
            os.remove(self.spool_path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.close()
        else:
            self.abort()

    def __repr__(self):
        state = "closed" if self._closed else "open"
        return f"<WriteSession {self.path} {state}>"

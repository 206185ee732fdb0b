class FileSystemError(Exception):
    """Base class for errors raised by the S3 file system."""


class InvalidPath(FileSystemError, ValueError):
    """The path or URI cannot be mapped to a container and key."""


class StorageServiceError(FileSystemError):
    """Wraps boto3 errors to avoid leaking AWS infrastructure details."""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


class UploadFailure(StorageServiceError):
    """The single upload performed when a write session closes failed."""


class NotAFile(FileSystemError):
    """Content or metadata was requested from a folder or missing entry."""


class NotAFolder(FileSystemError):
    """Children were requested from something that is not a folder."""

from zope.interface import Attribute
from zope.interface import Interface


class IObjectStoreClient(Interface):
    """Abstraction over S3-compatible object storage."""

    def get_object(bucket, key):
        """Fetch an object, or return NOT_FOUND if there is no such key."""

    def get_object_range(bucket, key, start, end):
        """Return the bytes of an object between start and end (inclusive)."""

    def list_objects(bucket, prefix="", delimiter=None):
        """Return a Listing of all keys and common prefixes under prefix."""

    def prefix_exists(bucket, prefix=""):
        """Return True if at least one key starts with prefix."""

    def put_object(bucket, key, local_path):
        """Upload a local file to S3 in a single request."""

    def delete_object(bucket, key):
        """Delete an S3 object."""


class IObjectStore(Interface):
    """Maps filesystem-style paths onto the flat S3 key space."""

    def resolve(path):
        """Return a fresh ResolvedEntry for an ObjectPath."""

    def resolve_type(path):
        """Return the EntryType of an ObjectPath."""

    def list_children(path):
        """Return the ObjectPaths of the immediate children of a folder."""

    def open_for_read(entry):
        """Return a readable binary stream for a resolved file entry."""

    def open_for_write(path, append=False, on_commit=None):
        """Return a WriteSession that uploads to path on close."""

    def delete(path):
        """Delete the object stored at path."""


class IUserAuthenticator(Interface):
    """Supplies the credentials used to build an object-store client."""

    def request_authentication(types):
        """Return a dict mapping each requested type to its value (or None)."""


class IFileObject(Interface):
    """A file or folder addressed by an s3:// URI."""

    name = Attribute("The S3FileName of this file object")

    def attach():
        """Resolve the path against the store."""

    def detach():
        """Drop the cached resolution; the next use re-resolves."""

    def get_type():
        """Return the EntryType of this file object."""

    def get_children():
        """Return the child file objects of a folder."""

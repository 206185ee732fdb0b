from collections import namedtuple
from urllib.parse import quote
from urllib.parse import unquote
from urllib.parse import urlsplit
from vfs_simple_s3.errors import InvalidPath

import logging


logger = logging.getLogger(__name__)

SCHEME = "s3"
SEPARATOR = "/"
ROOT_KEY = "/"


class ObjectPath(namedtuple("ObjectPath", ["container", "key"])):
    """A container (bucket) and the key of an object inside it.

    The root of a container is represented by the key "/".
    """

    __slots__ = ()

    @property
    def is_root(self):
        return self.key == ROOT_KEY

    @property
    def prefix(self):
        """Key prefix under which the children of this path live.

        The container root has no prefix at all.
        """
        if self.is_root:
            return ""
        if self.key.endswith(SEPARATOR):
            return self.key
        return self.key + SEPARATOR

    def join(self):
        if self.is_root:
            return self.container
        return f"{self.container}{SEPARATOR}{self.key}"

    def child(self, key):
        return ObjectPath(self.container, key)

    def __str__(self):
        return f"/{self.join()}"


def decode(path):
    """Split a filesystem-style path into an ObjectPath.

    >>> decode("/uploadFile02/dir01/file01")
    ObjectPath(container='uploadFile02', key='dir01/file01')
    >>> decode("uploadFile02")
    ObjectPath(container='uploadFile02', key='/')
    """
    if path is None:
        raise InvalidPath("Path must not be None")
    stripped = path.lstrip(SEPARATOR)
    if not stripped.strip():
        logger.debug("decode(): path %r does not name a container", path)
        raise InvalidPath(f"Path {path!r} does not appear to be valid")
    if SEPARATOR not in stripped:
        return ObjectPath(stripped, ROOT_KEY)
    container, key = stripped.split(SEPARATOR, 1)
    if not key:
        return ObjectPath(container, ROOT_KEY)
    return ObjectPath(container, key)


class S3FileName:
    """Parsed form of ``s3://[user[:password]@]host[:port]/container/key``.

    The authority is required even though S3 does not need a host per object,
    so the scheme never collides with a plain HTTP provider. The path is kept
    verbatim; only ``resolve()`` of a relative name interprets "." and "..".
    """

    def __init__(self, host, path="/", port=None, username=None, password=None):
        if not host:
            raise InvalidPath("s3 URIs must include an authority (host)")
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        if not path.startswith(SEPARATOR):
            path = SEPARATOR + path
        self.path = path

    @classmethod
    def parse(cls, uri):
        parts = urlsplit(uri, allow_fragments=False)
        if parts.scheme.lower() != SCHEME:
            raise InvalidPath(f"Unsupported URI scheme in {uri!r}")
        if not parts.hostname:
            raise InvalidPath(f"URI {uri!r} has no authority")
        path = parts.path
        if parts.query:
            # Keys are passed through verbatim, "?" included.
            path = f"{path}?{parts.query}"
        try:
            port = parts.port
        except ValueError as e:
            raise InvalidPath(f"URI {uri!r} has an invalid port") from e
        username = parts.username
        password = parts.password
        return cls(
            parts.hostname,
            path=path or "/",
            port=port,
            username=unquote(username) if username is not None else None,
            password=unquote(password) if password is not None else None,
        )

    @property
    def authority(self):
        host = self.host if self.port is None else f"{self.host}:{self.port}"
        if self.username:
            return f"{quote(self.username, safe='')}@{host}"
        return host

    @property
    def root_uri(self):
        return f"{SCHEME}://{self.authority}/"

    @property
    def uri(self):
        return f"{SCHEME}://{self.authority}{self.path}"

    @property
    def _trimmed(self):
        """The path without one trailing separator (folder names carry one)."""
        if not self.is_root and self.path.endswith(SEPARATOR):
            return self.path[: -len(SEPARATOR)]
        return self.path

    @property
    def base_name(self):
        trimmed = self._trimmed
        return trimmed[trimmed.rfind(SEPARATOR) + 1 :]

    @property
    def is_root(self):
        return self.path == "/"

    @property
    def object_path(self):
        return decode(self.path)

    @property
    def parent(self):
        if self.is_root:
            return None
        trimmed = self._trimmed
        idx = trimmed.rfind(SEPARATOR)
        parent = trimmed[:idx]
        if parent.endswith(SEPARATOR):
            # An empty last segment belongs to the parent folder's key.
            parent = trimmed[: idx + 1]
        return self._with_path(parent or "/")

    def for_object(self, path):
        """Name of an ObjectPath on this host, built from its raw key."""
        return self._with_path(str(path))

    def resolve(self, name):
        """Resolve name relative to this file name (absolute names replace it)."""
        if name.startswith(SEPARATOR):
            return self._with_path(name)
        segments = self.path.split(SEPARATOR)[1:]
        if segments and segments[-1] == "":
            segments.pop()
        for segment in name.split(SEPARATOR):
            if segment == ".":
                continue
            if segment == "..":
                if segments:
                    segments.pop()
                continue
            segments.append(segment)
        return self._with_path(SEPARATOR + SEPARATOR.join(segments))

    def _with_path(self, path):
        return S3FileName(
            self.host,
            path=path,
            port=self.port,
            username=self.username,
            password=self.password,
        )

    def __eq__(self, other):
        if not isinstance(other, S3FileName):
            return NotImplemented
        return self.uri == other.uri

    def __hash__(self):
        return hash(self.uri)

    def __repr__(self):
        return f"<S3FileName {self.uri}>"

    def __str__(self):
        return self.uri

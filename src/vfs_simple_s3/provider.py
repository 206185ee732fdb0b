"""Entry point of the S3 file system.

Example::

    provider = S3FileProvider()
    provider.set_region("us-east-1")          # optional
    provider.set_endpoint("http://minio:9000")  # optional

    auth = StaticUserAuthenticator(None, access_key_id, secret_access_key)
    fo = provider.resolve_file("s3://s3.amazonaws.com/bucket/dir/file.txt", auth)
"""

from vfs_simple_s3 import auth
from vfs_simple_s3.filesystem import S3FileSystem
from vfs_simple_s3.paths import S3FileName
from vfs_simple_s3.s3client import S3Client

import enum
import logging


logger = logging.getLogger(__name__)


class Capability(enum.Enum):
    GET_TYPE = "get-type"
    READ_CONTENT = "read-content"
    APPEND_CONTENT = "append-content"
    URI = "uri"
    ATTRIBUTES = "attributes"
    RANDOM_ACCESS_READ = "random-access-read"
    DIRECTORY_READ_CONTENT = "directory-read-content"
    LIST_CHILDREN = "list-children"
    LAST_MODIFIED = "last-modified"
    GET_LAST_MODIFIED = "get-last-modified"
    CREATE = "create"
    DELETE = "delete"


CAPABILITIES = frozenset(
    {
        Capability.GET_TYPE,
        Capability.READ_CONTENT,
        Capability.APPEND_CONTENT,
        Capability.URI,
        Capability.ATTRIBUTES,
        Capability.RANDOM_ACCESS_READ,
        Capability.DIRECTORY_READ_CONTENT,
        Capability.LIST_CHILDREN,
        Capability.LAST_MODIFIED,
        Capability.GET_LAST_MODIFIED,
        Capability.CREATE,
        Capability.DELETE,
    }
)

AUTHENTICATOR_TYPES = (auth.USERNAME, auth.PASSWORD)


class S3FileProvider:
    """Creates S3FileSystems for s3:// URIs."""

    def __init__(
        self,
        endpoint=None,
        region=None,
        use_ssl=True,
        addressing_style="auto",
        temp_dir=None,
        authenticator=None,
    ):
        self.endpoint = endpoint
        self.region = region
        self.use_ssl = use_ssl
        self.addressing_style = addressing_style
        self.temp_dir = temp_dir
        self.default_authenticator = authenticator
        self._file_systems = {}

    @property
    def capabilities(self):
        return CAPABILITIES

    def set_endpoint(self, endpoint):
        """Set the S3 endpoint; affects file systems created afterwards."""
        self.endpoint = endpoint

    def set_region(self, region):
        self.region = region

    def get_region(self):
        return self.region

    def _credentials(self, root_name, authenticator):
        access_key = root_name.username
        secret_key = root_name.password
        if authenticator is not None:
            data = authenticator.request_authentication(AUTHENTICATOR_TYPES)
            access_key = data.get(auth.USERNAME) or access_key
            secret_key = data.get(auth.PASSWORD) or secret_key
        return access_key, secret_key

    def create_file_system(self, root_name, authenticator=None):
        if not isinstance(root_name, S3FileName):
            root_name = S3FileName.parse(root_name)
        root_name = root_name.resolve("/")
        authenticator = authenticator or self.default_authenticator
        access_key, secret_key = self._credentials(root_name, authenticator)
        logger.debug(
            "Creating file system for %s (endpoint=%s, region=%s)",
            root_name.root_uri,
            self.endpoint,
            self.region,
        )
        client = S3Client(
            endpoint_url=self.endpoint,
            region_name=self.region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            use_ssl=self.use_ssl,
            addressing_style=self.addressing_style,
        )
        return S3FileSystem(root_name, client, CAPABILITIES, temp_dir=self.temp_dir)

    def get_file_system(self, root_name, authenticator=None):
        """Return the cached file system for a root, creating it on first use."""
        authenticator = authenticator or self.default_authenticator
        access_key, _secret = self._credentials(root_name, authenticator)
        cache_key = (root_name.root_uri, access_key)
        file_system = self._file_systems.get(cache_key)
        if file_system is None:
            file_system = self.create_file_system(root_name, authenticator)
            self._file_systems[cache_key] = file_system
        return file_system

    def resolve_file(self, uri, authenticator=None):
        name = uri if isinstance(uri, S3FileName) else S3FileName.parse(uri)
        file_system = self.get_file_system(name, authenticator)
        return file_system.resolve_file(name)

    def close(self):
        self._file_systems.clear()

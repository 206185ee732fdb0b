from vfs_simple_s3.auth import StaticUserAuthenticator
from vfs_simple_s3.entry import EntryType
from vfs_simple_s3.paths import SCHEME
from vfs_simple_s3.paths import ObjectPath
from vfs_simple_s3.paths import decode
from vfs_simple_s3.provider import Capability
from vfs_simple_s3.provider import S3FileProvider


__all__ = [
    "SCHEME",
    "Capability",
    "EntryType",
    "ObjectPath",
    "S3FileProvider",
    "StaticUserAuthenticator",
    "decode",
]

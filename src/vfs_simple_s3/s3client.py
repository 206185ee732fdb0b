from botocore.config import Config
from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError
from collections import namedtuple
from vfs_simple_s3.errors import StorageServiceError
from vfs_simple_s3.interfaces import IObjectStoreClient
from zope.interface import implementer

import boto3
import logging


logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "404"})

Listing = namedtuple("Listing", ["keys", "common_prefixes"])


class NotFound:
    """Tagged result of a fetch for a key that does not exist."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "NOT_FOUND"


NOT_FOUND = NotFound()


class S3Object:
    """An object fetched with GetObject: its response headers and body."""

    def __init__(self, bucket, key, response):
        self.bucket = bucket
        self.key = key
        self.response = response
        self._body = response.get("Body")

    def take_body(self):
        """Return the content stream once; later calls return None."""
        body, self._body = self._body, None
        return body

    def close(self):
        body = self.take_body()
        if body is not None:
            body.close()

    def __repr__(self):
        return f"<S3Object s3://{self.bucket}/{self.key}>"


@implementer(IObjectStoreClient)
class S3Client:
    """Thin boto3 wrapper for S3-compatible object storage."""

    def __init__(
        self,
        endpoint_url=None,
        region_name=None,
        aws_access_key_id=None,
        aws_secret_access_key=None,
        use_ssl=True,
        addressing_style="auto",
    ):
        config = Config(s3={"addressing_style": addressing_style})

        kwargs = {"config": config}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        if region_name:
            kwargs["region_name"] = region_name
        if aws_access_key_id:
            kwargs["aws_access_key_id"] = aws_access_key_id
        if aws_secret_access_key:
            kwargs["aws_secret_access_key"] = aws_secret_access_key
        kwargs["use_ssl"] = use_ssl
        if not use_ssl:
            logger.warning(
                "S3 SSL is disabled, data and credentials are transmitted in cleartext"
            )

        self._client = boto3.client("s3", **kwargs)

    def _wrap_error(self, e, operation, bucket, key):
        """Wrap a boto error in a generic error, logging the original at DEBUG."""
        logger.debug("S3 %s failed for %s/%s: %s", operation, bucket, key, e)
        if isinstance(e, ClientError):
            code = e.response["Error"].get("Code", "Unknown")
        else:
            code = type(e).__name__
        raise StorageServiceError(
            f"S3 {operation} failed for {bucket}/{key}: {code}", code=code
        ) from e

    def get_object(self, bucket, key):
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
        except ClientError as e:
            if e.response["Error"].get("Code") in _NOT_FOUND_CODES:
                return NOT_FOUND
            self._wrap_error(e, "get", bucket, key)
        except BotoCoreError as e:
            self._wrap_error(e, "get", bucket, key)
        return S3Object(bucket, key, response)

    def get_object_range(self, bucket, key, start, end):
        try:
            response = self._client.get_object(
                Bucket=bucket, Key=key, Range=f"bytes={start}-{end}"
            )
            return response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            self._wrap_error(e, "ranged get", bucket, key)

    def list_objects(self, bucket, prefix="", delimiter=None):
        kwargs = {"Bucket": bucket, "Prefix": prefix}
        if delimiter:
            kwargs["Delimiter"] = delimiter
        keys = []
        common_prefixes = []
        paginator = self._client.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(**kwargs):
                for obj in page.get("Contents", []):
                    keys.append(obj["Key"])
                for cp in page.get("CommonPrefixes", []):
                    common_prefixes.append(cp["Prefix"])
        except (ClientError, BotoCoreError) as e:
            self._wrap_error(e, "list", bucket, prefix)
        return Listing(keys, common_prefixes)

    def prefix_exists(self, bucket, prefix=""):
        try:
            response = self._client.list_objects_v2(
                Bucket=bucket, Prefix=prefix, MaxKeys=1
            )
        except (ClientError, BotoCoreError) as e:
            self._wrap_error(e, "list", bucket, prefix)
        return response.get("KeyCount", 0) > 0

    def put_object(self, bucket, key, local_path):
        # Always a single PutObject, never multipart.
        try:
            with open(local_path, "rb") as f:
                self._client.put_object(Bucket=bucket, Key=key, Body=f)
        except (ClientError, BotoCoreError) as e:
            self._wrap_error(e, "upload", bucket, key)

    def delete_object(self, bucket, key):
        try:
            self._client.delete_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            self._wrap_error(e, "delete", bucket, key)

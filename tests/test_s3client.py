from moto import mock_aws
from vfs_simple_s3.errors import StorageServiceError
from vfs_simple_s3.interfaces import IObjectStoreClient
from vfs_simple_s3.s3client import NOT_FOUND
from vfs_simple_s3.s3client import NotFound
from vfs_simple_s3.s3client import S3Client
from vfs_simple_s3.s3client import S3Object

import boto3
import pytest


@pytest.fixture
def s3_env():
    with mock_aws():
        boto3.client("s3", region_name="us-east-1").create_bucket(
            Bucket="test-bucket"
        )
        yield


@pytest.fixture
def client(s3_env):
    return S3Client(region_name="us-east-1")


@pytest.fixture
def raw_s3(s3_env):
    return boto3.client("s3", region_name="us-east-1")


class TestS3ClientInterface:
    def test_interface_provided(self, client):
        assert IObjectStoreClient.providedBy(client)


class TestNotFound:
    def test_singleton(self):
        assert NotFound() is NOT_FOUND

    def test_falsy(self):
        assert not NOT_FOUND


class TestGetObject:
    def test_existing_object(self, client, raw_s3):
        raw_s3.put_object(Bucket="test-bucket", Key="a/b.txt", Body=b"hello")

        result = client.get_object("test-bucket", "a/b.txt")

        assert isinstance(result, S3Object)
        assert result.response["ContentLength"] == 5
        assert result.take_body().read() == b"hello"

    def test_body_taken_once(self, client, raw_s3):
        raw_s3.put_object(Bucket="test-bucket", Key="once", Body=b"x")
        result = client.get_object("test-bucket", "once")

        assert result.take_body() is not None
        assert result.take_body() is None

    def test_missing_key_is_not_found(self, client):
        assert client.get_object("test-bucket", "missing") is NOT_FOUND

    def test_missing_bucket_raises(self, client):
        with pytest.raises(StorageServiceError) as exc_info:
            client.get_object("no-such-bucket", "key")
        assert exc_info.value.code == "NoSuchBucket"

    def test_range(self, client, raw_s3):
        raw_s3.put_object(Bucket="test-bucket", Key="r", Body=b"0123456789")
        assert client.get_object_range("test-bucket", "r", 2, 5) == b"2345"


class TestListObjects:
    def test_list_with_delimiter(self, client, raw_s3):
        for key in ("dir/a", "dir/b", "dir/sub/c", "other"):
            raw_s3.put_object(Bucket="test-bucket", Key=key, Body=b"")

        listing = client.list_objects("test-bucket", prefix="dir/", delimiter="/")

        assert sorted(listing.keys) == ["dir/a", "dir/b"]
        assert listing.common_prefixes == ["dir/sub/"]

    def test_list_without_delimiter_is_recursive(self, client, raw_s3):
        for key in ("dir/a", "dir/sub/c"):
            raw_s3.put_object(Bucket="test-bucket", Key=key, Body=b"")

        listing = client.list_objects("test-bucket", prefix="dir/")

        assert sorted(listing.keys) == ["dir/a", "dir/sub/c"]
        assert listing.common_prefixes == []

    def test_list_pages_are_flattened(self, client, raw_s3):
        for i in range(1005):
            raw_s3.put_object(Bucket="test-bucket", Key=f"many/{i:04d}", Body=b"")

        listing = client.list_objects("test-bucket", prefix="many/")

        assert len(listing.keys) == 1005

    def test_list_empty(self, client):
        listing = client.list_objects("test-bucket", prefix="nonexistent/")
        assert listing.keys == []
        assert listing.common_prefixes == []

    def test_list_missing_bucket_raises(self, client):
        with pytest.raises(StorageServiceError):
            client.list_objects("no-such-bucket")


class TestPrefixExists:
    def test_prefix_exists(self, client, raw_s3):
        raw_s3.put_object(Bucket="test-bucket", Key="dir/a", Body=b"")
        assert client.prefix_exists("test-bucket", "dir/")
        assert not client.prefix_exists("test-bucket", "nope/")

    def test_empty_prefix_on_empty_bucket(self, client):
        assert not client.prefix_exists("test-bucket", "")


class TestPutDelete:
    def test_put_object_from_file(self, client, raw_s3, tmp_path):
        src = tmp_path / "source.bin"
        src.write_bytes(b"hello blob data")

        client.put_object("test-bucket", "test/key.bin", str(src))

        resp = raw_s3.get_object(Bucket="test-bucket", Key="test/key.bin")
        assert resp["Body"].read() == b"hello blob data"

    def test_put_to_missing_bucket_raises(self, client, tmp_path):
        src = tmp_path / "source.bin"
        src.write_bytes(b"data")
        with pytest.raises(StorageServiceError):
            client.put_object("no-such-bucket", "key", str(src))

    def test_delete_object(self, client, raw_s3):
        raw_s3.put_object(Bucket="test-bucket", Key="del/key", Body=b"x")

        client.delete_object("test-bucket", "del/key")

        assert client.get_object("test-bucket", "del/key") is NOT_FOUND

    def test_delete_nonexistent_does_not_raise(self, client):
        client.delete_object("test-bucket", "nonexistent/key")

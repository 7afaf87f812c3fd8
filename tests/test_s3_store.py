"""Tests for the boto3-backed object listing."""

from datetime import datetime, timezone

import boto3
import pytest
from botocore.exceptions import EndpointConnectionError
from botocore.stub import Stubber

from savepoints.exceptions import ConfigurationError, ListingError, ListingFailure
from savepoints.location import parse_location
from savepoints.resolver import ObjectStorageResolver
from savepoints.settings import StorageSettings
from savepoints.storage import ObjectEntry
from savepoints.storage.s3 import S3ObjectStore, load_default_client


@pytest.fixture()
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def test_list_entries_sends_prefix(s3_client):
    modified = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    with Stubber(s3_client) as stubber:
        stubber.add_response(
            "list_objects_v2",
            {"Contents": [{"Key": "sp/savepoint-1/_metadata", "LastModified": modified}], "IsTruncated": False},
            {"Bucket": "bucket", "Prefix": "sp/"},
        )
        entries = S3ObjectStore(s3_client).list_entries("bucket", "sp/")
        stubber.assert_no_pending_responses()

    assert entries == [ObjectEntry(key="sp/savepoint-1/_metadata", last_modified=modified)]


def test_list_entries_without_prefix(s3_client):
    with Stubber(s3_client) as stubber:
        stubber.add_response("list_objects_v2", {"IsTruncated": False}, {"Bucket": "bucket"})
        assert S3ObjectStore(s3_client).list_entries("bucket") == []


def test_only_first_page_is_read(s3_client):
    old = datetime(2024, 1, 1, tzinfo=timezone.utc)
    with Stubber(s3_client) as stubber:
        stubber.add_response(
            "list_objects_v2",
            {
                "Contents": [{"Key": "sp/savepoint-1/_metadata", "LastModified": old}],
                "IsTruncated": True,
                "NextContinuationToken": "token",
            },
            {"Bucket": "bucket", "Prefix": "sp"},
        )
        result = ObjectStorageResolver(S3ObjectStore(s3_client)).latest(parse_location("s3://bucket/sp"))

    assert result == "s3://bucket/sp/savepoint-1/_metadata"


def test_no_such_bucket_is_classified(s3_client):
    with Stubber(s3_client) as stubber:
        stubber.add_client_error(
            "list_objects_v2",
            service_error_code="NoSuchBucket",
            service_message="The specified bucket does not exist",
            http_status_code=404,
        )
        with pytest.raises(ListingError) as excinfo:
            S3ObjectStore(s3_client).list_entries("missing", "sp")

    error = excinfo.value
    assert error.reason is ListingFailure.BUCKET_NOT_FOUND
    assert error.message.startswith("listing S3 objects: ")
    assert error.details["bucket"] == "missing"
    assert error.details["code"] == "NoSuchBucket"


def test_other_client_errors_are_generic(s3_client):
    with Stubber(s3_client) as stubber:
        stubber.add_client_error("list_objects_v2", service_error_code="AccessDenied", http_status_code=403)
        with pytest.raises(ListingError) as excinfo:
            S3ObjectStore(s3_client).list_entries("bucket", "sp")

    assert excinfo.value.reason is ListingFailure.REQUEST_FAILED
    assert not excinfo.value.bucket_missing


def test_transport_errors_are_generic():
    class _Unreachable:
        def list_objects_v2(self, **kwargs):
            raise EndpointConnectionError(endpoint_url="http://localhost:9000")

    with pytest.raises(ListingError) as excinfo:
        S3ObjectStore(_Unreachable()).list_entries("bucket")

    assert excinfo.value.reason is ListingFailure.REQUEST_FAILED
    assert "localhost:9000" in excinfo.value.message


def test_load_default_client_uses_settings(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    client = load_default_client(StorageSettings(region="eu-west-1", endpoint_url="http://localhost:9000"))
    assert client.meta.region_name == "eu-west-1"
    assert client.meta.endpoint_url == "http://localhost:9000"


def test_unknown_profile_is_configuration_error(monkeypatch, tmp_path):
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "credentials"))
    monkeypatch.delenv("AWS_PROFILE", raising=False)

    with pytest.raises(ConfigurationError, match="unable to load SDK config"):
        load_default_client(StorageSettings(profile="does-not-exist", region="us-east-1"))

from __future__ import annotations

from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from savepoints.exceptions import ConfigurationError, ListingError, ListingFailure
from savepoints.logging_config import get_logger
from savepoints.settings import StorageSettings
from savepoints.storage import ObjectEntry

logger = get_logger(__name__)

NO_SUCH_BUCKET = "NoSuchBucket"


def load_default_client(settings: StorageSettings | None = None) -> Any:
    """Create a boto3 S3 client from the ambient AWS configuration.

    Credentials and region come from the usual environment variables and
    shared config files; ``settings`` may pin region, profile or endpoint.

    Raises:
        ConfigurationError: If the SDK configuration cannot be loaded.
    """
    settings = settings or StorageSettings()
    try:
        session = boto3.session.Session(
            region_name=settings.region,
            profile_name=settings.profile,
        )
        return session.client("s3", endpoint_url=settings.endpoint_url)
    except BotoCoreError as exc:
        raise ConfigurationError(
            f"unable to load SDK config: {exc}",
            {"profile": settings.profile or "", "region": settings.region or ""},
        ) from exc


class S3ObjectStore:
    """Lists objects of an S3 (or S3-compatible) bucket."""

    def __init__(self, client: Any) -> None:
        self.client = client

    @classmethod
    def from_settings(cls, settings: Optional[StorageSettings] = None) -> "S3ObjectStore":
        return cls(load_default_client(settings))

    def list_entries(self, bucket: str, prefix: str | None = None) -> list[ObjectEntry]:
        # One ListObjectsV2 page only; continuation tokens are not followed.
        params = {"Bucket": bucket}
        if prefix is not None:
            params["Prefix"] = prefix
        try:
            response = self.client.list_objects_v2(**params)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            reason = ListingFailure.BUCKET_NOT_FOUND if code == NO_SUCH_BUCKET else ListingFailure.REQUEST_FAILED
            raise ListingError(
                f"listing S3 objects: {exc}",
                reason=reason,
                details={"bucket": bucket, "prefix": prefix or "", "code": code},
            ) from exc
        except BotoCoreError as exc:
            raise ListingError(
                f"listing S3 objects: {exc}",
                details={"bucket": bucket, "prefix": prefix or ""},
            ) from exc

        contents = response.get("Contents", [])
        if response.get("IsTruncated"):
            logger.debug("Listing of s3://{}/{} truncated after {} objects", bucket, prefix or "", len(contents))
        return [ObjectEntry(key=item["Key"], last_modified=item["LastModified"]) for item in contents]


__all__ = ["S3ObjectStore", "load_default_client", "NO_SUCH_BUCKET"]

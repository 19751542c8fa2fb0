"""S3 listing, download and upload helpers."""

from typing import List

import structlog
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import StorageError
from ..types import S3Client, ObjectDescriptor, Logger

logger: Logger = structlog.get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


async def list_objects(s3_client: S3Client, bucket: str, prefix: str) -> List[ObjectDescriptor]:
    """List every object under a prefix, following continuation tokens.

    Args:
        s3_client: Async S3 client
        bucket: S3 bucket name
        prefix: Key prefix to filter objects

    Returns:
        Object descriptors in listing order, empty if nothing matches

    Raises:
        StorageError: If the listing call fails
    """
    logger.info("Listing objects from S3", bucket=bucket, prefix=prefix)
    descriptors: List[ObjectDescriptor] = []
    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        async for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
            descriptors.extend(ObjectDescriptor.from_s3(obj) for obj in page.get("Contents", []))
    except (ClientError, BotoCoreError) as e:
        logger.error("Failed to list objects", bucket=bucket, prefix=prefix, error=str(e))
        raise StorageError(f"Failed to list files from S3: {e}") from e

    logger.info("Found objects", bucket=bucket, prefix=prefix, count=len(descriptors))
    return descriptors


async def download_object(s3_client: S3Client, bucket: str, key: str) -> bytes:
    """Download an object's bytes.

    Raises:
        StorageError: If the object is missing or the transfer fails
    """
    try:
        logger.info("Downloading from S3", bucket=bucket, key=key)
        response = await s3_client.get_object(Bucket=bucket, Key=key)
        content = await response["Body"].read()
    except (ClientError, BotoCoreError) as e:
        logger.error("Failed to download from S3", bucket=bucket, key=key, error=str(e))
        raise StorageError(f"Failed to download file {key}: {e}") from e

    logger.info("Successfully downloaded from S3", bucket=bucket, key=key, size=len(content))
    return content


async def upload_object(
    s3_client: S3Client,
    bucket: str,
    key: str,
    data: bytes,
    content_type: str = DEFAULT_CONTENT_TYPE,
) -> str:
    """Upload bytes, overwriting any existing object at ``key``.

    Returns:
        The ``s3://`` location of the uploaded object

    Raises:
        StorageError: If the upload fails
    """
    try:
        logger.info("Uploading to S3", bucket=bucket, key=key, size=len(data))
        await s3_client.put_object(
            Bucket=bucket,
            Key=key,
            Body=data,
            ContentType=content_type
        )
    except (ClientError, BotoCoreError) as e:
        logger.error("Failed to upload to S3", bucket=bucket, key=key, error=str(e))
        raise StorageError(f"Failed to upload decrypted file: {e}") from e

    location = f"s3://{bucket}/{key}"
    logger.info("Successfully uploaded to S3", location=location)
    return location

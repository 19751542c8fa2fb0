"""Per-object download, decrypt and re-upload."""

import time
from typing import List, Optional, Sequence

import structlog

from ..types import (
    S3Client,
    KeyMaterial,
    ObjectDescriptor,
    ProcessingResult,
    DecryptionSuccess,
    DecryptionFailure,
    Logger,
)
from ..errors import as_pipeline_error
from .pgp import UnlockedKey, decrypt_message
from .s3_client import download_object, upload_object

logger: Logger = structlog.get_logger(__name__)

DEFAULT_CIPHERTEXT_SUFFIX = ".gpg"
DEFAULT_DECRYPTED_SUFFIX = ".decrypted"


def is_directory_marker(key: str) -> bool:
    """Whether the key is a zero-byte "folder" placeholder."""
    return key.endswith("/")


def build_decrypted_key(
    source_key: str,
    destination_prefix: str,
    ciphertext_suffix: str = DEFAULT_CIPHERTEXT_SUFFIX,
    decrypted_suffix: str = DEFAULT_DECRYPTED_SUFFIX,
) -> str:
    """Destination key for a decrypted object.

    ``in/a.gpg`` -> ``<prefix>a``; ``in/a.bin`` -> ``<prefix>a.bin.decrypted``.
    A name that is only the suffix keeps it, so the key never ends at the prefix.
    """
    file_name = source_key.rsplit("/", 1)[-1]
    if file_name.endswith(ciphertext_suffix) and len(file_name) > len(ciphertext_suffix):
        decrypted_name = file_name[: -len(ciphertext_suffix)]
    else:
        decrypted_name = f"{file_name}{decrypted_suffix}"
    return f"{destination_prefix}{decrypted_name}"


async def process_object(
    s3_client: S3Client,
    bucket: str,
    descriptor: ObjectDescriptor,
    key_material: KeyMaterial,
    destination_prefix: str,
    ciphertext_suffix: str = DEFAULT_CIPHERTEXT_SUFFIX,
    decrypted_suffix: str = DEFAULT_DECRYPTED_SUFFIX,
    unlocked_key: Optional[UnlockedKey] = None,
) -> Optional[ProcessingResult]:
    """Download, decrypt and re-upload a single object.

    Args:
        s3_client: Async S3 client
        bucket: Bucket holding both the encrypted and the decrypted objects
        descriptor: Object to process
        key_material: Private key and optional passphrase
        destination_prefix: Prefix for the decrypted object
        ciphertext_suffix: Suffix stripped from the file name when present
        decrypted_suffix: Suffix appended when ``ciphertext_suffix`` is absent
        unlocked_key: Key already unlocked for this listing; when omitted the
            key is parsed from ``key_material`` for this object alone

    Returns:
        ``None`` for directory markers, otherwise a success or failure result.
        Errors never propagate; they are recorded in the returned failure.
    """
    if is_directory_marker(descriptor.key):
        logger.info("Skipping directory", key=descriptor.key)
        return None

    start_time = time.time()
    logger.info("Processing file", bucket=bucket, key=descriptor.key, size=descriptor.size)

    try:
        encrypted_data = await download_object(s3_client, bucket, descriptor.key)
        if unlocked_key is not None:
            decrypted_data = unlocked_key.decrypt(encrypted_data)
        else:
            decrypted_data = decrypt_message(encrypted_data, key_material)

        decrypted_key = build_decrypted_key(
            descriptor.key, destination_prefix, ciphertext_suffix, decrypted_suffix
        )
        await upload_object(s3_client, bucket, decrypted_key, decrypted_data)

    except Exception as e:
        error = as_pipeline_error(e)
        error_type = type(error).__name__
        logger.error(
            "Failed to process file",
            key=descriptor.key,
            error=str(error),
            error_type=error_type,
            processing_time=round(time.time() - start_time, 3),
        )
        return DecryptionFailure(
            original_key=descriptor.key,
            error_message=str(error),
            error_type=error_type,
        )

    logger.info(
        "Successfully processed file",
        key=descriptor.key,
        decrypted_key=decrypted_key,
        input_size=len(encrypted_data),
        output_size=len(decrypted_data),
        processing_time=round(time.time() - start_time, 3),
    )
    return DecryptionSuccess(
        original_key=descriptor.key,
        decrypted_key=decrypted_key,
        size=descriptor.size,
        last_modified=descriptor.last_modified,
    )


async def process_objects(
    s3_client: S3Client,
    bucket: str,
    descriptors: Sequence[ObjectDescriptor],
    key_material: KeyMaterial,
    destination_prefix: str,
    ciphertext_suffix: str = DEFAULT_CIPHERTEXT_SUFFIX,
    decrypted_suffix: str = DEFAULT_DECRYPTED_SUFFIX,
) -> List[ProcessingResult]:
    """Process objects one at a time, in listing order.

    Returns one result per non-directory descriptor.
    """
    results: List[ProcessingResult] = []
    with UnlockedKey(key_material) as unlocked_key:
        for descriptor in descriptors:
            result = await process_object(
                s3_client,
                bucket,
                descriptor,
                key_material,
                destination_prefix,
                ciphertext_suffix,
                decrypted_suffix,
                unlocked_key,
            )
            if result is not None:
                results.append(result)
    return results

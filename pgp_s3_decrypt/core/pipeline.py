"""Resolve key, list, decrypt each object, summarize."""

import structlog

from ..config import Settings
from ..types import S3Client, SecretsManagerClient, InvocationSummary, Logger
from .aggregator import aggregate
from .decrypt_worker import process_objects
from .s3_client import list_objects
from .secrets import build_key_sources, resolve_key_material

logger: Logger = structlog.get_logger(__name__)


async def run_decryption(
    settings: Settings,
    s3_client: S3Client,
    secrets_client: SecretsManagerClient,
) -> InvocationSummary:
    """Run one pass over the source prefix.

    Key resolution and listing errors propagate and abort the run; per-object
    errors are recorded in the summary.
    """
    key_material = await resolve_key_material(build_key_sources(settings, secrets_client))

    descriptors = await list_objects(s3_client, settings.bucket_name, settings.source_prefix)
    if not descriptors:
        logger.info("No files found to decrypt", bucket=settings.bucket_name, prefix=settings.source_prefix)
        return aggregate([])

    results = await process_objects(
        s3_client,
        settings.bucket_name,
        descriptors,
        key_material,
        settings.destination_prefix,
        settings.ciphertext_suffix,
        settings.decrypted_suffix,
    )
    summary = aggregate(results)

    logger.info(
        "Processing completed",
        total_files=summary.total_count,
        successful=summary.success_count,
        failed=summary.failure_count,
    )
    return summary

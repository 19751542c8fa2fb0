"""Lambda handler for PGP decryption of S3 objects."""

import asyncio
import json
import time
from typing import Any, Dict, Optional

import structlog

from .config import Settings
from .core.clients import aws_clients
from .core.pipeline import run_decryption
from .errors import as_pipeline_error
from .logging_config import setup_logging
from .types import S3Client, SecretsManagerClient, InvocationSummary

logger = structlog.get_logger(__name__)


def success_response(summary: InvocationSummary) -> Dict[str, Any]:
    return {
        "statusCode": 200,
        "body": json.dumps(summary.to_dict(), indent=2)
    }


def error_response(error: Exception) -> Dict[str, Any]:
    error = as_pipeline_error(error)
    error_type = type(error).__name__
    return {
        "statusCode": 500,
        "body": json.dumps({
            "error": "Internal server error",
            "errorType": error_type,
            "message": str(error)
        })
    }


async def async_lambda_handler(
    event: Any,
    context: Any,
    *,
    settings: Optional[Settings] = None,
    s3_client: Optional[S3Client] = None,
    secrets_client: Optional[SecretsManagerClient] = None,
) -> Dict[str, Any]:
    """Decrypt every object under the configured prefix.

    Clients and settings may be injected; otherwise settings come from the
    environment and aioboto3 clients are opened for this invocation only.
    """
    start_time = time.time()
    logger.info("Lambda function started", trigger_event=event)

    try:
        if settings is None:
            settings = Settings.from_env()
            setup_logging(settings.log_level)
        logger.info("Configuration loaded", **settings.log_summary())

        if s3_client is not None and secrets_client is not None:
            summary = await run_decryption(settings, s3_client, secrets_client)
        else:
            async with aws_clients(settings) as (s3, secrets):
                summary = await run_decryption(settings, s3_client or s3, secrets_client or secrets)

    except Exception as e:
        logger.error(
            "Lambda function failed",
            error=str(e),
            error_type=type(as_pipeline_error(e)).__name__,
            processing_time=round(time.time() - start_time, 3),
        )
        return error_response(e)

    logger.info(
        "Lambda processing completed",
        message=summary.message,
        processing_time=round(time.time() - start_time, 3),
    )
    return success_response(summary)


def lambda_handler(event, context):
    """Main Lambda handler entry point."""
    return asyncio.run(async_lambda_handler(event, context))

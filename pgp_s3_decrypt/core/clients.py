"""aioboto3 clients scoped to one invocation."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Tuple

import aioboto3

from ..config import Settings
from ..types import S3Client, SecretsManagerClient


@asynccontextmanager
async def aws_clients(settings: Settings) -> AsyncIterator[Tuple[S3Client, SecretsManagerClient]]:
    """Open S3 and Secrets Manager clients, closing both on exit."""
    session = aioboto3.Session()
    async with session.client("s3", region_name=settings.aws_region) as s3, session.client(
        "secretsmanager", region_name=settings.effective_secrets_region
    ) as secrets:
        yield s3, secrets

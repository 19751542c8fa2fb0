"""Type definitions for PGP S3 Decrypt."""

from .models import (
    ProcessingStatus,
    KeyMaterial,
    ObjectDescriptor,
    DecryptionSuccess,
    DecryptionFailure,
    ProcessingResult,
    InvocationSummary,
    S3Client,
    SecretsManagerClient,
    Logger
)

__all__ = [
    "ProcessingStatus",
    "KeyMaterial",
    "ObjectDescriptor",
    "DecryptionSuccess",
    "DecryptionFailure",
    "ProcessingResult",
    "InvocationSummary",
    "S3Client",
    "SecretsManagerClient",
    "Logger"
]

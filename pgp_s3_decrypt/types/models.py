"""Type definitions for PGP S3 Decrypt."""

from datetime import datetime
from typing import Dict, List, Optional, Any, Protocol, Union, runtime_checkable
from dataclasses import dataclass, field
from enum import Enum


class ProcessingStatus(str, Enum):
    """Status of a single object decryption."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class KeyMaterial:
    """PGP private key and optional passphrase for one invocation."""
    private_key_armored: str = field(repr=False)
    passphrase: Optional[str] = field(default=None, repr=False)
    source: str = "unknown"


@dataclass(frozen=True)
class ObjectDescriptor:
    """An S3 object returned by a listing call."""
    key: str
    size: int = 0
    last_modified: Optional[datetime] = None

    @classmethod
    def from_s3(cls, obj: Dict[str, Any]) -> "ObjectDescriptor":
        """Build from a ``Contents`` entry of ``list_objects_v2``."""
        return cls(
            key=obj["Key"],
            size=int(obj.get("Size", 0)),
            last_modified=obj.get("LastModified"),
        )


@dataclass(frozen=True)
class DecryptionSuccess:
    """An object that was decrypted and uploaded."""
    original_key: str
    decrypted_key: str
    size: int
    last_modified: Optional[datetime] = None

    @property
    def status(self) -> ProcessingStatus:
        return ProcessingStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the response body shape."""
        return {
            "originalFile": self.original_key,
            "decryptedFile": self.decrypted_key,
            "size": self.size,
            "lastModified": self.last_modified.isoformat() if self.last_modified else None,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class DecryptionFailure:
    """An object whose download, decryption or upload failed."""
    original_key: str
    error_message: str
    error_type: str = "UnexpectedError"

    @property
    def status(self) -> ProcessingStatus:
        return ProcessingStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the response body shape."""
        return {
            "originalFile": self.original_key,
            "error": self.error_message,
            "errorType": self.error_type,
            "status": self.status.value,
        }


ProcessingResult = Union[DecryptionSuccess, DecryptionFailure]


@dataclass(frozen=True)
class InvocationSummary:
    """Outcome of one invocation."""
    total_count: int
    success_count: int
    failure_count: int
    message: str
    results: List[ProcessingResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the response body shape."""
        return {
            "message": self.message,
            "totalCount": self.total_count,
            "successCount": self.success_count,
            "failureCount": self.failure_count,
            "results": [result.to_dict() for result in self.results],
        }


@runtime_checkable
class S3Client(Protocol):
    """Type protocol for the async S3 client."""
    async def get_object(self, **kwargs) -> Any: ...
    async def put_object(self, **kwargs) -> Any: ...
    def get_paginator(self, operation_name: str) -> Any: ...


@runtime_checkable
class SecretsManagerClient(Protocol):
    """Type protocol for the async Secrets Manager client."""
    async def get_secret_value(self, **kwargs) -> Any: ...


# Type aliases
Logger = Any  # structlog logger

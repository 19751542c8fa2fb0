"""Configuration settings for PGP S3 Decrypt."""

import os
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator, model_validator

from ..errors import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Field name -> environment variables, first one set wins
ENV_VARS: Dict[str, Tuple[str, ...]] = {
    "bucket_name": ("bucketName", "S3_BUCKET_NAME"),
    "source_prefix": ("S3_PREFIX", "encryptedPrefix"),
    "destination_prefix": ("decryptedPrefix", "DECRYPTED_PREFIX"),
    "aws_region": ("AWS_REGION",),
    "secrets_region": ("SECRET_REGION",),
    "secret_name": ("secretName", "SECRET_NAME"),
    "key_field": ("keyName", "KEY_NAME"),
    "private_key": ("privateKey", "PGP_PRIVATE_KEY"),
    "passphrase": ("passphrase", "PGP_PASSPHRASE"),
    "ciphertext_suffix": ("CIPHERTEXT_SUFFIX",),
    "decrypted_suffix": ("DECRYPTED_SUFFIX",),
    "log_level": ("LOG_LEVEL",),
}


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    model_config = ConfigDict(frozen=True)

    bucket_name: str = Field(min_length=1)
    source_prefix: str = "encrypt_files/"
    destination_prefix: str = "decrypt_files/"
    aws_region: str = "ap-southeast-2"
    secrets_region: Optional[str] = None
    secret_name: Optional[str] = None
    key_field: str = Field(default="pgp-key", min_length=1)
    private_key: Optional[SecretStr] = None
    passphrase: Optional[SecretStr] = None
    ciphertext_suffix: str = Field(default=".gpg", min_length=1)
    decrypted_suffix: str = Field(default=".decrypted", min_length=1)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return level

    @model_validator(mode="after")
    def _check_prefixes(self) -> "Settings":
        if self.source_prefix == self.destination_prefix:
            raise ValueError("source and destination prefixes must differ")
        if self.destination_prefix.startswith(self.source_prefix):
            raise ValueError("destination prefix must not be inside the source prefix")
        return self

    @property
    def effective_secrets_region(self) -> str:
        return self.secrets_region or self.aws_region

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from the process environment.

        Empty values count as unset. Raises ``ConfigurationError`` when a
        required value is missing or a value is invalid.
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for field_name, names in ENV_VARS.items():
            for name in names:
                value = environ.get(name)
                if value:
                    values[field_name] = value
                    break

        if "bucket_name" not in values:
            raise ConfigurationError(
                "No S3 bucket configured (set bucketName or S3_BUCKET_NAME)"
            )

        try:
            return cls(**values)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigurationError(f"Invalid configuration: {problems}") from e

    def log_summary(self) -> Dict[str, Any]:
        """Redacted view of the settings, safe to log."""
        return {
            "bucket": self.bucket_name,
            "source_prefix": self.source_prefix,
            "destination_prefix": self.destination_prefix,
            "aws_region": self.aws_region,
            "secrets_region": self.effective_secrets_region,
            "secret_name": self.secret_name or "[NOT SET]",
            "key_field": self.key_field,
            "private_key": "[PROVIDED]" if self.private_key else "[FROM SECRET]",
            "passphrase": "[PROVIDED]" if self.passphrase else "[FROM SECRET]",
        }

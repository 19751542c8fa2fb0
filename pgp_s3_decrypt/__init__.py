"""PGP S3 Decrypt.

An AWS Lambda function that decrypts PGP-encrypted files stored in S3. The
private key comes from the environment or from AWS Secrets Manager; every
object under the source prefix is downloaded, decrypted and uploaded to the
destination prefix of the same bucket.

Key Features:
- Environment overrides or Secrets Manager for the private key and passphrase
- Paginated listing of the source prefix
- Per-file error isolation: one bad file never stops the rest
- Structured logging and explicit error taxonomy
- Environment-based configuration with Pydantic validation

"""

# Core modules
from . import config
from . import errors
from . import logging_config

# Main entry point
from .lambda_main import lambda_handler

__version__ = "1.0.0"
__author__ = "PGP S3 Decrypt Team"

__all__ = [
    # Core
    "config",
    "errors",
    "logging_config",
    # Main
    "lambda_handler",
]

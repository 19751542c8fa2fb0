"""AWS Lambda entry point for PGP S3 Decrypt.

Configure the function handler as ``pgp_s3_decrypt.main.lambda_handler``.
"""

import json
import os

from pgp_s3_decrypt.lambda_main import lambda_handler
from pgp_s3_decrypt.logging_config import setup_logging

# Initialize logging
setup_logging(os.environ.get("LOG_LEVEL", "INFO"))

# Export the main handler for Lambda runtime
__all__ = ["lambda_handler"]


def main():
    """Run one invocation locally against the configured environment."""
    response = lambda_handler({"source": "local"}, None)
    print(json.dumps(response, indent=2))


if __name__ == "__main__":
    main()

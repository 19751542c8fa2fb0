"""Configuration for PGP S3 Decrypt."""

from .settings import Settings

__all__ = ["Settings"]

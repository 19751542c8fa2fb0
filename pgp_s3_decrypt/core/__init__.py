"""Core business logic for PGP S3 Decrypt."""

from .aggregator import aggregate
from .decrypt_worker import process_object, process_objects, build_decrypted_key
from .pgp import decrypt_message
from .pipeline import run_decryption
from .s3_client import list_objects, download_object, upload_object
from .secrets import resolve_key_material, EnvironmentKeySource, SecretsManagerKeySource

__all__ = [
    "aggregate",
    "process_object",
    "process_objects",
    "build_decrypted_key",
    "decrypt_message",
    "run_decryption",
    "list_objects",
    "download_object",
    "upload_object",
    "resolve_key_material",
    "EnvironmentKeySource",
    "SecretsManagerKeySource"
]

"""Shared fixtures: PGPy test keys and settings."""

from typing import Optional

import pgpy
import pytest
from pgpy.constants import (
    CompressionAlgorithm,
    HashAlgorithm,
    KeyFlags,
    PubKeyAlgorithm,
    SymmetricKeyAlgorithm,
)

from pgp_s3_decrypt.config import Settings
from pgp_s3_decrypt.types import KeyMaterial

PASSPHRASE = "correct horse battery staple"


def _generate_key(name: str, passphrase: Optional[str] = None) -> pgpy.PGPKey:
    key = pgpy.PGPKey.new(PubKeyAlgorithm.RSAEncryptOrSign, 2048)
    uid = pgpy.PGPUID.new(name, email=f"{name.lower()}@example.com")
    key.add_uid(
        uid,
        usage={KeyFlags.Sign, KeyFlags.EncryptCommunications, KeyFlags.EncryptStorage},
        hashes=[HashAlgorithm.SHA256],
        ciphers=[SymmetricKeyAlgorithm.AES256],
        compression=[CompressionAlgorithm.ZLIB, CompressionAlgorithm.Uncompressed],
    )
    if passphrase:
        key.protect(passphrase, SymmetricKeyAlgorithm.AES256, HashAlgorithm.SHA256)
    return key


@pytest.fixture(scope="session")
def pgp_key() -> pgpy.PGPKey:
    """Passphrase-protected key."""
    return _generate_key("Recipient", PASSPHRASE)


@pytest.fixture(scope="session")
def other_pgp_key() -> pgpy.PGPKey:
    """Unprotected key that was not used to encrypt anything."""
    return _generate_key("Stranger")


@pytest.fixture(scope="session")
def encrypt(pgp_key):
    """Encrypt bytes to ``pgp_key``, returning the binary message."""
    def _encrypt(plaintext: bytes, key: Optional[pgpy.PGPKey] = None) -> bytes:
        recipient = (key or pgp_key).pubkey
        return bytes(recipient.encrypt(pgpy.PGPMessage.new(plaintext)))
    return _encrypt


@pytest.fixture
def key_material(pgp_key) -> KeyMaterial:
    return KeyMaterial(private_key_armored=str(pgp_key), passphrase=PASSPHRASE, source="test")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        bucket_name="b",
        source_prefix="in/",
        destination_prefix="out/",
        secret_name="pgp-key",
    )


@pytest.fixture
def passphrase() -> str:
    return PASSPHRASE

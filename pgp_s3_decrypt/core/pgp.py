"""PGP decryption using PGPy (pure Python).

The whole message is held in memory, which is fine for the file sizes a
Lambda invocation can handle.
"""

from contextlib import ExitStack
from typing import Any, Optional

import structlog
from pgpy import PGPKey, PGPMessage
from pgpy.packet.packets import LiteralData

from ..errors import DecryptionError
from ..types import KeyMaterial, Logger

logger: Logger = structlog.get_logger(__name__)

# PGPy decodes text literals on read; these undo it byte for byte
LITERAL_TEXT_ENCODINGS = {"t": "latin-1", "u": "utf-8"}


def load_private_key(private_key_armored: str) -> PGPKey:
    """Parse an armored private key.

    Raises:
        DecryptionError: If the key cannot be parsed or is a public key
    """
    try:
        key, _ = PGPKey.from_blob(private_key_armored)
    except Exception as e:
        raise DecryptionError(f"Failed to read private key: {e}") from e
    if key.is_public:
        raise DecryptionError("Failed to read private key: key is a public key")
    return key


def _find_literal(node: Any) -> Optional[LiteralData]:
    if isinstance(node, LiteralData):
        return node
    if isinstance(node, PGPMessage):
        return _find_literal(getattr(node, "_message", None))
    for child in getattr(node, "packets", None) or []:
        found = _find_literal(child)
        if found is not None:
            return found
    return None


def literal_bytes(decrypted: PGPMessage) -> bytes:
    """Raw literal data of a decrypted message, whatever its literal format."""
    payload = decrypted.message
    if isinstance(payload, str):
        literal = _find_literal(decrypted)
        literal_format = literal.format if literal is not None else "u"
        payload = payload.encode(LITERAL_TEXT_ENCODINGS.get(literal_format, "utf-8"))
    return bytes(payload)


class UnlockedKey:
    """A private key parsed and unlocked once, then used for many messages.

    Key problems (malformed key, bad passphrase) do not raise on enter; they
    are raised as ``DecryptionError`` by every ``decrypt`` call so each file
    still fails on its own.
    """

    def __init__(self, key_material: KeyMaterial):
        self._key_material = key_material
        self._key: Optional[PGPKey] = None
        self._error: Optional[DecryptionError] = None
        self._stack = ExitStack()

    def __enter__(self) -> "UnlockedKey":
        try:
            key = load_private_key(self._key_material.private_key_armored)
            if self._key_material.passphrase:
                self._stack.enter_context(key.unlock(self._key_material.passphrase))
        except DecryptionError as e:
            self._error = e
        except Exception as e:
            self._error = DecryptionError(f"Failed to decrypt file: {e}")
        else:
            self._key = key
        return self

    def __exit__(self, *exc_info) -> None:
        self._stack.close()
        self._key = None

    def decrypt(self, encrypted_data: bytes) -> bytes:
        """Decrypt a binary or ASCII-armored PGP message.

        Raises:
            DecryptionError: On malformed ciphertext, wrong key or bad passphrase
        """
        if self._error is not None:
            raise DecryptionError(str(self._error)) from self._error
        if self._key is None:
            raise DecryptionError("Failed to decrypt file: key is not unlocked")

        logger.debug("Starting PGP decryption", size=len(encrypted_data))
        try:
            message = PGPMessage.from_blob(encrypted_data)
            if not message.is_encrypted:
                raise DecryptionError("Failed to decrypt file: message is not encrypted")
            payload = literal_bytes(self._key.decrypt(message))
        except DecryptionError:
            raise
        except Exception as e:
            raise DecryptionError(f"Failed to decrypt file: {e}") from e

        logger.debug("PGP decryption completed", size=len(payload))
        return payload


def decrypt_message(encrypted_data: bytes, key_material: KeyMaterial) -> bytes:
    """Decrypt a single message with a one-off unlocked key.

    Returns:
        The literal data bytes exactly as they were encrypted

    Raises:
        DecryptionError: On malformed ciphertext, wrong key or bad passphrase
    """
    with UnlockedKey(key_material) as key:
        return key.decrypt(encrypted_data)

"""PGP key resolution from the environment or AWS Secrets Manager."""

import json
from typing import List, Optional, Protocol, Sequence

import structlog
from botocore.exceptions import BotoCoreError, ClientError

from ..config import Settings
from ..errors import ConfigurationError
from ..types import KeyMaterial, SecretsManagerClient, Logger

logger: Logger = structlog.get_logger(__name__)

DEFAULT_KEY_FIELD = "pgp-key"
PASSPHRASE_FIELD = "passphrase"


class KeySource(Protocol):
    """A place the private key may come from.

    ``load`` returns ``None`` when the source is not configured and raises
    ``ConfigurationError`` when it is configured but unusable.
    """
    name: str

    async def load(self) -> Optional[KeyMaterial]: ...


class EnvironmentKeySource:
    """Key and passphrase passed directly through the environment."""

    name = "environment"

    def __init__(self, private_key: Optional[str], passphrase: Optional[str] = None):
        self._private_key = private_key
        self._passphrase = passphrase

    async def load(self) -> Optional[KeyMaterial]:
        if not self._private_key:
            return None
        return KeyMaterial(
            private_key_armored=self._private_key,
            passphrase=self._passphrase or None,
            source=self.name,
        )


class SecretsManagerKeySource:
    """Key and passphrase stored as a JSON secret in Secrets Manager."""

    name = "secrets-manager"

    def __init__(
        self,
        client: SecretsManagerClient,
        secret_name: Optional[str],
        key_field: str = DEFAULT_KEY_FIELD,
    ):
        self._client = client
        self._secret_name = secret_name
        self._key_field = key_field

    async def load(self) -> Optional[KeyMaterial]:
        if not self._secret_name:
            return None

        logger.info(
            "Retrieving PGP private key from Secrets Manager",
            secret_name=self._secret_name,
            key_field=self._key_field,
        )
        try:
            response = await self._client.get_secret_value(SecretId=self._secret_name)
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "Failed to retrieve secret", secret_name=self._secret_name, error=str(e)
            )
            raise ConfigurationError(f"Failed to retrieve PGP private key: {e}") from e

        secret_string = response.get("SecretString")
        if secret_string is None:
            raise ConfigurationError(
                f"Secret {self._secret_name} value is not a string"
            )

        try:
            secret_data = json.loads(secret_string)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Secret {self._secret_name} is not valid JSON: {e}"
            ) from e

        if not isinstance(secret_data, dict):
            raise ConfigurationError(f"Secret {self._secret_name} is not a JSON object")

        private_key = secret_data.get(self._key_field)
        if not private_key:
            raise ConfigurationError(
                f"Secret {self._secret_name} does not contain {self._key_field} field"
            )

        logger.info("Successfully retrieved secret", secret_name=self._secret_name)
        return KeyMaterial(
            private_key_armored=private_key,
            passphrase=secret_data.get(PASSPHRASE_FIELD) or None,
            source=self.name,
        )


def build_key_sources(
    settings: Settings, secrets_client: SecretsManagerClient
) -> List[KeySource]:
    """Default resolution order: environment overrides, then Secrets Manager."""
    return [
        EnvironmentKeySource(
            settings.private_key.get_secret_value() if settings.private_key else None,
            settings.passphrase.get_secret_value() if settings.passphrase else None,
        ),
        SecretsManagerKeySource(secrets_client, settings.secret_name, settings.key_field),
    ]


async def resolve_key_material(sources: Sequence[KeySource]) -> KeyMaterial:
    """Return key material from the first configured source.

    Raises:
        ConfigurationError: If no source is configured, or a configured source fails
    """
    for source in sources:
        key_material = await source.load()
        if key_material is not None:
            logger.info(
                "Resolved PGP private key",
                source=source.name,
                passphrase="[SET]" if key_material.passphrase else "[NOT SET]",
            )
            return key_material

    raise ConfigurationError(
        "No PGP private key configured: set privateKey or secretName"
    )

"""
1Password Backend

Resolves 1Password secret references using the official SDK:

    op:Key Vault:GitHub PAT/credential   -> op://Key Vault/GitHub PAT/credential

Authenticates with a service account token read from the environment
variable named by `op_service_account_env` (default: OP_SERVICE_ACCOUNT_TOKEN).
"""

import logging
import os
from typing import Optional

from onepassword.client import Client

from ..errors import ResolveError, SecretNotFound
from ..path import SecretPath
from ..secret import Secret
from .interface import Backend, SecretResolver

logger = logging.getLogger(__name__)

INTEGRATION_VERSION = "v1.0.0"


class OnePasswordResolver(SecretResolver):
    """1Password references, never leased."""

    backend = Backend.OP

    _client: Optional[Client] = None

    async def _get_client(self) -> Client:
        """Get or create authenticated 1Password client."""
        if self._client is None:
            token = os.getenv(self.config.op_service_account_env)
            if not token:
                raise ResolveError(f"Environment variable {self.config.op_service_account_env} not set")
            self._client = await Client.authenticate(
                auth=token,
                integration_name=self.config.op_integration_name,
                integration_version=INTEGRATION_VERSION
            )
            logger.info("✅ Connected to 1Password")
        return self._client

    @staticmethod
    def reference(path: SecretPath) -> str:
        """Build the op:// reference of a path."""
        if len(path.args) != 1 or path.kwargs:
            raise ResolveError(f"Expected a single vault argument, got {path.args!r}")
        return f"op://{path.args[0]}/{path.path}"

    async def resolve(self, path: SecretPath) -> Secret:
        reference = self.reference(path)
        client = await self._get_client()
        try:
            value = await client.secrets.resolve(reference)
        except Exception as e:
            raise SecretNotFound(f"Secret reference not found: {reference}: {e}") from e
        return Secret(value).select(path.anchor)

    async def close(self) -> None:
        self._client = None

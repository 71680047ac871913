"""
Vault Backend

Resolves Vault paths:

    vault:role[,METHOD][,key=val...]:path#anchor

The first positional argument is the role to log in with, the optional
second one the HTTP method (default GET). Keyword arguments are sent with
the request. The anchor is a JSON pointer into the response body, so
"#/data" keeps the data member only.
"""

import logging

from ..client import SecretsClient
from ..config import ClientConfig
from ..errors import ResolveError
from ..path import SecretPath
from ..secret import Secret
from .interface import Backend, SecretResolver

logger = logging.getLogger(__name__)


class VaultResolver(SecretResolver):
    """Secrets fetched through a SecretsClient."""

    backend = Backend.VAULT

    def __init__(self, config: ClientConfig, client: SecretsClient):
        super().__init__(config)
        self.client = client

    async def resolve(self, path: SecretPath) -> Secret:
        if not path.args or len(path.args) > 2:
            raise ResolveError(f"Expected role[,METHOD] arguments, got {path.args!r}")
        role = path.args[0]
        method = path.args[1] if len(path.args) > 1 else "GET"

        await self.client.login(role)
        secret = await self.client.fetch_secret(role, method, path.path, path.kwargs_dict() or None)
        logger.debug(f"Resolved {method} {path.path} (lease: {secret.duration()})")
        return secret.select(path.anchor)

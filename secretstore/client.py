"""
Secrets Client

Caches one Auth per role and fetches secrets through a transport.

Usage:
    from secretstore.client import SecretsClient

    async with SecretsClient.from_config() as client:
        await client.login("my-app")
        secret = await client.fetch_secret("my-app", "GET", "secret/data/my-app")
        if secret.has_lease() and secret.needs_renewal():
            ...

The client never renews anything on its own. Callers poll is_valid() and
needs_renewal() before each use and call login() again when needed.
"""

import logging
from typing import Dict, List, Optional

from .auth import Auth
from .config import ClientConfig, load_config
from .errors import NotLogged
from .secret import Secret
from .transport import SecretTransport, VaultTransport

logger = logging.getLogger(__name__)


class SecretsClient:
    """
    Secret store client caching its auth tokens.

    A cached Auth is replaced wholesale on re-login, never mutated.
    """

    def __init__(self, transport: SecretTransport):
        self.transport = transport
        self._auth: Dict[str, Auth] = {}

    @classmethod
    def from_config(cls, config: Optional[ClientConfig] = None) -> "SecretsClient":
        """Create a client backed by a VaultTransport."""
        return cls(VaultTransport(config or load_config()))

    async def login(self, role: str) -> Auth:
        """
        Log in as `role` unless the cached token is valid and not due for renewal.

        Args:
            role: Role name

        Returns:
            The cached or freshly obtained Auth

        Raises:
            TransportError: If the secret store could not be reached
            VaultError: If the secret store rejected the login
        """
        cached = self._auth.get(role)
        if cached is not None and cached.is_valid() and not cached.needs_renewal():
            logger.debug(f"Reusing token for role {role}")
            return cached

        response = await self.transport.login(role)
        auth = Auth.new(response.token, response.ttl, response.renewable)
        # insert and forget the old value if any
        self._auth[role] = auth
        logger.info(f"✅ Logged in as role {role} (lease: {auth.duration()})")
        return auth

    async def fetch_secret(
        self,
        role: str,
        method: str,
        path: str,
        args: Optional[Dict[str, str]] = None
    ) -> Secret:
        """
        Fetch a secret with the token cached for `role`.

        Args:
            role: Role previously passed to login()
            method: HTTP method
            path: Secret path
            args: Request arguments

        Returns:
            The secret, leased for the duration the secret store reported

        Raises:
            NotLogged: If login() was never called for the role
        """
        auth = self._auth.get(role)
        if auth is None:
            raise NotLogged(role)

        response = await self.transport.fetch(role, auth.client_token, method, path, args)
        return Secret(response.value, response.ttl, response.renewable)

    def get_auth(self, role: str) -> Optional[Auth]:
        """Get the cached Auth for a role, if any."""
        return self._auth.get(role)

    def logout(self, role: str) -> bool:
        """Forget the token of a role. Returns False if none was cached."""
        return self._auth.pop(role, None) is not None

    def roles(self) -> List[str]:
        """List roles with a cached token."""
        return list(self._auth.keys())

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self) -> "SecretsClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

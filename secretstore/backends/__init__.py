"""
Secret Backends

Resolvers for the backends a secret path can address, and a registry
that parses an expression and dispatches it to the right resolver.

Usage:
    from secretstore.backends import SecretResolverRegistry

    async with SecretResolverRegistry.from_config() as registry:
        cert = await registry.resolve("vault:pki,POST,common_name=example.com:pki/issue/example.com#/data")
        url = await registry.resolve("const:str:https://localhost:8200#")
"""

from typing import Dict, Optional, Type

from ..client import SecretsClient
from ..config import ClientConfig, load_config
from ..path import SecretPath, parse
from ..secret import Secret
from .const import ConstResolver
from .interface import Backend, SecretResolver
from .onepassword import OnePasswordResolver
from .vault import VaultResolver


# Registry of available resolvers
RESOLVERS: Dict[Backend, Type[SecretResolver]] = {
    Backend.VAULT: VaultResolver,
    Backend.CONST: ConstResolver,
    Backend.OP: OnePasswordResolver,
}


class SecretResolverRegistry:
    """
    Parses secret path expressions and routes them to resolvers.

    Resolver instances are created on first use and kept.
    """

    def __init__(self, client: SecretsClient, config: Optional[ClientConfig] = None):
        self.client = client
        self.config = config or ClientConfig()
        self._resolvers: Dict[Backend, SecretResolver] = {}

    @classmethod
    def from_config(cls, config: Optional[ClientConfig] = None) -> "SecretResolverRegistry":
        config = config or load_config()
        return cls(SecretsClient.from_config(config), config)

    def parse(self, expression: str) -> SecretPath:
        """Parse with the configured path parser."""
        return parse(expression, Backend, self.config.path_parser)

    def get_resolver(self, backend: Backend) -> SecretResolver:
        """Get or create the resolver of a backend."""
        if backend in self._resolvers:
            return self._resolvers[backend]

        resolver_class = RESOLVERS[backend]
        if resolver_class is VaultResolver:
            resolver = VaultResolver(self.config, self.client)
        else:
            resolver = resolver_class(self.config)
        self._resolvers[backend] = resolver
        return resolver

    async def resolve(self, expression: str) -> Secret:
        """
        Fetch the secret an expression designates.

        Raises:
            PathError: If the expression does not parse
            ResolveError: If the backend cannot use the path arguments
        """
        path = self.parse(expression)
        return await self.get_resolver(path.backend).resolve(path)

    async def close(self) -> None:
        for resolver in self._resolvers.values():
            await resolver.close()
        await self.client.close()

    async def __aenter__(self) -> "SecretResolverRegistry":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


__all__ = [
    "Backend",
    "SecretResolver",
    "SecretResolverRegistry",
    "RESOLVERS",
    "ConstResolver",
    "VaultResolver",
    "OnePasswordResolver",
]

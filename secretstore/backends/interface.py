"""
Secret Resolver Interface

Defines the backend tag of a secret path and the abstract interface of the
resolvers turning a parsed path into a Secret.
"""

from abc import ABC, abstractmethod
from enum import Enum

from ..config import ClientConfig
from ..path import SecretPath
from ..secret import Secret


class Backend(str, Enum):
    """Backends a secret path can address."""
    VAULT = "vault"
    CONST = "const"
    OP = "op"

    def __str__(self) -> str:
        return self.value


class SecretResolver(ABC):
    """
    Abstract base class for secret resolvers.

    Each resolver handles the paths of one Backend and applies the path
    anchor to the fetched value.
    """

    backend: Backend

    def __init__(self, config: ClientConfig):
        """
        Initialize the resolver.

        Args:
            config: Client configuration
        """
        self.config = config

    @abstractmethod
    async def resolve(self, path: SecretPath) -> Secret:
        """
        Fetch the secret `path` designates.

        Args:
            path: A parsed path whose backend is self.backend

        Returns:
            The secret, narrowed to the path anchor

        Raises:
            ResolveError: If the path arguments do not suit the backend
            PointerError: If the anchor does not match the value
        """
        pass

    async def close(self) -> None:
        """Release resources held by the resolver."""
        pass

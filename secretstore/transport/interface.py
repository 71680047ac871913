"""
Secret Store Transport Interface

Defines the abstract interface of the network side of a secret store:
logging in with a role and fetching a secret with the resulting token.
The lease model never talks to the network itself; it only wraps what a
transport returns.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class LoginResponse:
    """Result of a successful login."""
    token: str
    ttl: Optional[int] = None  # seconds, None when the response had no lease
    renewable: bool = False


@dataclass
class FetchResponse:
    """Result of a successful fetch."""
    value: Any
    ttl: Optional[int] = None  # seconds, None when the response had no lease
    renewable: bool = False


class SecretTransport(ABC):
    """
    Abstract base class for secret store transports.

    Implementations raise TransportError when no usable response was
    obtained and VaultError when the store rejected the request.
    """

    @abstractmethod
    async def login(self, role: str) -> LoginResponse:
        """
        Authenticate as `role`.

        Args:
            role: Role name known to the secret store

        Returns:
            The token and its lease
        """
        pass

    @abstractmethod
    async def fetch(
        self,
        role: str,
        token: str,
        method: str,
        path: str,
        args: Optional[Dict[str, str]] = None
    ) -> FetchResponse:
        """
        Fetch a secret.

        Args:
            role: Role the token belongs to
            token: Token from a previous login
            method: HTTP method (GET, POST, LIST...)
            path: Secret path relative to the store API root
            args: Request arguments

        Returns:
            The secret value and its lease
        """
        pass

    async def close(self) -> None:
        """Release network resources."""
        pass

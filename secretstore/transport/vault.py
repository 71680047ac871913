"""
Vault Transport

Implements SecretTransport for HashiCorp Vault over its HTTP API using
httpx. Logs in with the Kubernetes auth method: the service account JWT is
read from `token_path` and exchanged for a client token.
"""

import json
import logging
import ssl
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from ..config import ClientConfig
from ..errors import TokenError, TransportError, VaultError
from .interface import FetchResponse, LoginResponse, SecretTransport

logger = logging.getLogger(__name__)

# Methods whose arguments travel in the query string
QUERY_METHODS = {"GET", "LIST", "DELETE"}


class VaultTransport(SecretTransport):
    """
    Vault HTTP transport.

    Config:
        url: API root, e.g. "https://vault:8200/v1"
        token_path: File holding the Kubernetes service account JWT
        cacert: CA bundle used to verify the server (default: system CAs)
        auth_mount: Mount point of the Kubernetes auth method
        timeout: Request timeout in seconds
    """

    def __init__(self, config: ClientConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.url = config.url.rstrip("/")
        self._jwt: Optional[str] = None
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            verify: Any = True
            if self.config.cacert:
                try:
                    verify = ssl.create_default_context(cafile=self.config.cacert)
                except (OSError, ssl.SSLError) as e:
                    raise TransportError(f"Cannot load CA bundle {self.config.cacert}: {e}") from e
            self._client = httpx.AsyncClient(
                verify=verify,
                timeout=self.config.timeout,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    def _read_jwt(self) -> str:
        """Read the service account JWT once."""
        if self._jwt is None:
            try:
                self._jwt = Path(self.config.token_path).read_text().strip()
            except OSError as e:
                raise TokenError(f"Cannot read token file {self.config.token_path}: {e}") from e
        return self._jwt

    async def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        """Send a request and decode the JSON body, raising on rejection."""
        try:
            res = await self._get_client().request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        if res.is_success:
            if not res.content:
                return {}
            try:
                body = res.json()
            except json.JSONDecodeError as e:
                raise TransportError(f"Invalid JSON response from {url}: {e}") from e
            if not isinstance(body, dict):
                raise TransportError(f"Unexpected response from {url}: {type(body).__name__}")
            return body

        try:
            errors = res.json().get("errors", [])
        except (json.JSONDecodeError, AttributeError):
            errors = [res.text] if res.text else []
        logger.error(f"❌ Vault rejected {method} {url}: {res.status_code}")
        raise VaultError(res.status_code, errors)

    async def login(self, role: str) -> LoginResponse:
        """Exchange the service account JWT for a Vault token."""
        url = f"{self.url}/auth/{self.config.auth_mount}/login"
        body = await self._request("POST", url, json={"role": role, "jwt": self._read_jwt()})

        auth = body.get("auth") or {}
        return LoginResponse(
            token=auth.get("client_token") or "",
            ttl=auth.get("lease_duration"),
            renewable=bool(auth.get("renewable", False)),
        )

    async def fetch(
        self,
        role: str,
        token: str,
        method: str,
        path: str,
        args: Optional[Dict[str, str]] = None
    ) -> FetchResponse:
        """Send `method` to `path` with the Vault token, returning the whole response body."""
        method = method.upper()
        url = f"{self.url}/{path.lstrip('/')}"
        kwargs: Dict[str, Any] = {"headers": {"X-Vault-Token": token}}
        if args:
            if method in QUERY_METHODS:
                kwargs["params"] = args
            else:
                kwargs["json"] = args

        logger.debug(f"Fetching {method} {path} as role {role}")
        body = await self._request(method, url, **kwargs)
        return FetchResponse(
            value=body,
            ttl=body.get("lease_duration"),
            renewable=bool(body.get("renewable", False)),
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

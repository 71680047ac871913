"""
Secret Store MCP

Provides tools to parse secret paths and retrieve the secrets they designate.

Run with:
    python -m secretstore.server
"""

import json
import logging
import os

from fastmcp import FastMCP

from .backends import SecretResolverRegistry
from .errors import SecretStoreError

logger = logging.getLogger(__name__)

mcp = FastMCP("Secret-Store")

_registry: SecretResolverRegistry | None = None


def _get_registry() -> SecretResolverRegistry:
    """Get or create the resolver registry."""
    global _registry
    if _registry is None:
        _registry = SecretResolverRegistry.from_config()
    return _registry


def _render(value) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2)


@mcp.tool()
def ping() -> str:
    """Health check. Returns pong if the secret store MCP is running."""
    return "pong from Secret Store MCP 🔐"


@mcp.tool()
def secret_parse(expression: str) -> str:
    """
    Parse a secret path expression.

    Args:
        expression: Secret path (e.g., "vault:my-app:secret/data/my-app#/data/data/password")

    Returns:
        JSON description of the backend, arguments, path and anchor, or error message
    """
    try:
        path = _get_registry().parse(expression)
    except SecretStoreError as e:
        return f"❌ Invalid secret path: {e}"

    return json.dumps({
        "backend": str(path.backend),
        "args": path.args,
        "kwargs": path.kwargs,
        "path": path.path,
        "anchor": path.anchor,
    }, indent=2)


@mcp.tool()
async def secret_login(role: str) -> str:
    """
    Log in to Vault with a role, reusing the cached token while it is fresh.

    Args:
        role: Vault role name

    Returns:
        Token lease information, or error message if login fails
    """
    try:
        auth = await _get_registry().client.login(role)
    except SecretStoreError as e:
        return f"❌ Login failed: {e}"

    if auth.lease is None:
        return f"✅ Logged in as {role} (no lease)"
    return f"✅ Logged in as {role} (lease: {auth.duration()}, renew after: {auth.renew_delay()})"


@mcp.tool()
async def secret_get(expression: str) -> str:
    """
    Get the secret a secret path expression designates.

    Args:
        expression: Secret path (e.g., "vault:my-app:secret/data/my-app#/data/data/password"
                    or "op:Key Vault:GitHub PAT/credential")

    Returns:
        The secret value (JSON for structured values), or error message if retrieval fails
    """
    try:
        secret = await _get_registry().resolve(expression)
    except KeyError as e:
        return f"❌ Secret not found: {e}"
    except SecretStoreError as e:
        return f"❌ Error retrieving secret: {e}"
    return _render(secret.value)


if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    mcp.run(transport="http", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))

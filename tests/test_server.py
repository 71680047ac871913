"""Tests for secretstore.server — tools and helpers."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from secretstore import server
from secretstore.auth import Auth
from secretstore.backends import SecretResolverRegistry
from secretstore.config import ClientConfig
from secretstore.errors import ConfigError, PointerError, SecretNotFound, TransportError, VaultError
from secretstore.secret import Secret


def tool(obj):
    """The plain function behind a registered tool."""
    return getattr(obj, "fn", obj)


@pytest.fixture
def registry(monkeypatch):
    client = MagicMock()
    client.login = AsyncMock()
    registry = SecretResolverRegistry(client, ClientConfig())
    registry.resolve = AsyncMock()
    monkeypatch.setattr(server, "_registry", registry)
    return registry


# ─── secret_parse ────────────────────────────────────────────────────


class TestSecretParse:
    def test_returns_json(self, registry):
        result = tool(server.secret_parse)("vault:role,POST,common_name=example.com:pki/issue/example.com#/data")
        assert json.loads(result) == {
            "backend": "vault",
            "args": ["role", "POST"],
            "kwargs": [["common_name", "example.com"]],
            "path": "pki/issue/example.com",
            "anchor": "/data",
        }

    def test_invalid_path(self, registry):
        result = tool(server.secret_parse)("vault:role")
        assert result.startswith("❌ Invalid secret path:")

    def test_unknown_backend(self, registry):
        result = tool(server.secret_parse)("nope:a:b")
        assert result.startswith("❌ Invalid secret path:")
        assert "nope" in result

    def test_invalid_config(self, monkeypatch):
        monkeypatch.setattr(server, "_registry", None)
        monkeypatch.setattr(
            server.SecretResolverRegistry,
            "from_config",
            MagicMock(side_effect=ConfigError("Unknown path parser 'regex'")),
        )
        result = tool(server.secret_parse)("vault:role:secret")
        assert result == "❌ Invalid secret path: Unknown path parser 'regex'"


# ─── secret_login ────────────────────────────────────────────────────


class TestSecretLogin:
    @pytest.mark.asyncio
    async def test_no_lease(self, registry):
        registry.client.login.return_value = Auth.new("s.abc")
        result = await tool(server.secret_login)("my-app")
        assert result == "✅ Logged in as my-app (no lease)"
        registry.client.login.assert_awaited_once_with("my-app")

    @pytest.mark.asyncio
    async def test_with_lease(self, registry):
        registry.client.login.return_value = Auth.new("s.abc", 3600)
        result = await tool(server.secret_login)("my-app")
        assert result == "✅ Logged in as my-app (lease: 1:00:00, renew after: 0:40:00)"

    @pytest.mark.asyncio
    async def test_rejected(self, registry):
        registry.client.login.side_effect = VaultError(403, ["permission denied"])
        result = await tool(server.secret_login)("my-app")
        assert result.startswith("❌ Login failed: http error code 403")

    @pytest.mark.asyncio
    async def test_unreachable(self, registry):
        registry.client.login.side_effect = TransportError("Cannot load CA bundle /missing.pem")
        result = await tool(server.secret_login)("my-app")
        assert result == "❌ Login failed: Cannot load CA bundle /missing.pem"


# ─── secret_get ──────────────────────────────────────────────────────


class TestSecretGet:
    @pytest.mark.asyncio
    async def test_string_value(self, registry):
        registry.resolve.return_value = Secret("hunter2")
        assert await tool(server.secret_get)("const:str:hunter2") == "hunter2"
        registry.resolve.assert_awaited_once_with("const:str:hunter2")

    @pytest.mark.asyncio
    async def test_structured_value(self, registry):
        registry.resolve.return_value = Secret({"password": "hunter2"})
        result = await tool(server.secret_get)("vault:my-app:secret/data/my-app#/data/data")
        assert json.loads(result) == {"password": "hunter2"}

    @pytest.mark.asyncio
    async def test_not_found(self, registry):
        registry.resolve.side_effect = SecretNotFound("Secret reference not found: op://Vault/Missing/x")
        result = await tool(server.secret_get)("op:Vault:Missing/x")
        assert result == "❌ Secret not found: Secret reference not found: op://Vault/Missing/x"

    @pytest.mark.asyncio
    async def test_anchor_miss(self, registry):
        registry.resolve.side_effect = PointerError("no member 'x' for pointer '/x'")
        result = await tool(server.secret_get)("const:js:{}#/x")
        assert result == "❌ Secret not found: no member 'x' for pointer '/x'"

    @pytest.mark.asyncio
    async def test_store_error(self, registry):
        registry.resolve.side_effect = VaultError(500, ["internal error"])
        result = await tool(server.secret_get)("vault:my-app:secret/data/my-app")
        assert result == "❌ Error retrieving secret: http error code 500\ninternal error"


# ─── Helpers ─────────────────────────────────────────────────────────


class TestServerHelpers:
    def test_ping(self):
        assert tool(server.ping)() == "pong from Secret Store MCP 🔐"

    def test_render_string(self):
        assert server._render("hunter2") == "hunter2"

    def test_render_json(self):
        assert server._render({"a": [1]}) == '{\n  "a": [\n    1\n  ]\n}'

    def test_registry_is_created_once(self, monkeypatch):
        registry = MagicMock()
        from_config = MagicMock(return_value=registry)
        monkeypatch.setattr(server, "_registry", None)
        monkeypatch.setattr(server.SecretResolverRegistry, "from_config", from_config)

        assert server._get_registry() is registry
        assert server._get_registry() is registry
        from_config.assert_called_once_with()

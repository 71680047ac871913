"""Tests for secretstore.transport.vault — VaultTransport over a mocked HTTP layer."""

import json

import httpx
import pytest

from secretstore.config import ClientConfig
from secretstore.errors import TokenError, TransportError, VaultError
from secretstore.transport import VaultTransport


@pytest.fixture
def token_file(tmp_path):
    path = tmp_path / "token"
    path.write_text("jwt-from-k8s\n")
    return path


def make_transport(token_file, handler):
    config = ClientConfig(url="https://vault.test/v1/", token_path=str(token_file))
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return VaultTransport(config, client=client)


class TestLogin:
    @pytest.mark.asyncio
    async def test_login(self, token_file):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={
                "auth": {"client_token": "s.abc", "lease_duration": 3600, "renewable": True}
            })

        transport = make_transport(token_file, handler)
        response = await transport.login("my-app")

        assert response.token == "s.abc"
        assert response.ttl == 3600
        assert response.renewable is True
        assert requests[0].method == "POST"
        assert str(requests[0].url) == "https://vault.test/v1/auth/kubernetes/login"
        assert json.loads(requests[0].content) == {"role": "my-app", "jwt": "jwt-from-k8s"}

    @pytest.mark.asyncio
    async def test_login_missing_fields(self, token_file):
        transport = make_transport(token_file, lambda request: httpx.Response(200, json={"auth": None}))
        response = await transport.login("my-app")
        assert response.token == ""
        assert response.ttl is None
        assert response.renewable is False

    @pytest.mark.asyncio
    async def test_login_rejected(self, token_file):
        def handler(request):
            return httpx.Response(403, json={"errors": ["permission denied", "invalid role"]})

        transport = make_transport(token_file, handler)
        with pytest.raises(VaultError) as exc_info:
            await transport.login("my-app")

        assert exc_info.value.status == 403
        assert exc_info.value.errors == ["permission denied", "invalid role"]
        assert str(exc_info.value) == "http error code 403\npermission denied\ninvalid role"

    @pytest.mark.asyncio
    async def test_rejection_without_json_body(self, token_file):
        transport = make_transport(token_file, lambda request: httpx.Response(502, text="bad gateway"))
        with pytest.raises(VaultError) as exc_info:
            await transport.login("my-app")
        assert exc_info.value.errors == ["bad gateway"]

    @pytest.mark.asyncio
    async def test_missing_token_file(self, tmp_path):
        transport = make_transport(tmp_path / "missing", lambda request: httpx.Response(200, json={}))
        with pytest.raises(TokenError):
            await transport.login("my-app")

    @pytest.mark.asyncio
    async def test_network_error(self, token_file):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = make_transport(token_file, handler)
        with pytest.raises(TransportError, match="connection refused"):
            await transport.login("my-app")

    @pytest.mark.asyncio
    async def test_missing_ca_bundle(self, token_file, tmp_path):
        config = ClientConfig(token_path=str(token_file), cacert=str(tmp_path / "missing-ca.pem"))
        transport = VaultTransport(config)
        with pytest.raises(TransportError, match="Cannot load CA bundle"):
            await transport.login("my-app")

    @pytest.mark.asyncio
    async def test_unreadable_ca_bundle(self, token_file, tmp_path):
        cacert = tmp_path / "ca.pem"
        cacert.write_text("not a certificate\n")
        transport = VaultTransport(ClientConfig(token_path=str(token_file), cacert=str(cacert)))
        with pytest.raises(TransportError, match="Cannot load CA bundle"):
            await transport.login("my-app")

    @pytest.mark.asyncio
    async def test_invalid_json(self, token_file):
        transport = make_transport(token_file, lambda request: httpx.Response(200, text="not json"))
        with pytest.raises(TransportError, match="Invalid JSON"):
            await transport.login("my-app")


class TestFetch:
    @pytest.mark.asyncio
    async def test_get_sends_token_and_query(self, token_file):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={
                "lease_duration": 0,
                "renewable": False,
                "data": {"data": {"password": "hunter2"}},
            })

        transport = make_transport(token_file, handler)
        response = await transport.fetch("my-app", "s.abc", "get", "/secret/data/my-app", {"version": "2"})

        request = requests[0]
        assert request.method == "GET"
        assert request.headers["X-Vault-Token"] == "s.abc"
        assert request.url.path == "/v1/secret/data/my-app"
        assert request.url.params["version"] == "2"
        assert response.value["data"]["data"]["password"] == "hunter2"
        assert response.ttl == 0
        assert response.renewable is False

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self, token_file):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"lease_duration": 86400, "renewable": False, "data": {}})

        transport = make_transport(token_file, handler)
        response = await transport.fetch(
            "pki", "s.abc", "POST", "pki/issue/example.com", {"common_name": "example.com"}
        )

        assert requests[0].method == "POST"
        assert json.loads(requests[0].content) == {"common_name": "example.com"}
        assert response.ttl == 86400

    @pytest.mark.asyncio
    async def test_response_without_lease(self, token_file):
        transport = make_transport(token_file, lambda request: httpx.Response(200, json={"keys": ["a"]}))
        response = await transport.fetch("my-app", "s.abc", "LIST", "secret/metadata")
        assert response.ttl is None
        assert response.value == {"keys": ["a"]}

    @pytest.mark.asyncio
    async def test_empty_response(self, token_file):
        transport = make_transport(token_file, lambda request: httpx.Response(204))
        response = await transport.fetch("my-app", "s.abc", "DELETE", "secret/data/old")
        assert response.value == {}

    @pytest.mark.asyncio
    async def test_not_found(self, token_file):
        transport = make_transport(token_file, lambda request: httpx.Response(404, json={"errors": []}))
        with pytest.raises(VaultError) as exc_info:
            await transport.fetch("my-app", "s.abc", "GET", "secret/data/none")
        assert exc_info.value.status == 404

    @pytest.mark.asyncio
    async def test_close(self, token_file):
        transport = make_transport(token_file, lambda request: httpx.Response(200, json={}))
        await transport.close()
        assert transport._client is None

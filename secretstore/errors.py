"""
Secret Store Errors

Every error raised by the library derives from SecretStoreError so callers
can catch the whole family at once. Parse and config errors also derive from
ValueError and lookup misses from KeyError, matching the builtin exceptions the
backends raised before this hierarchy existed.
"""

from typing import List, Optional


class SecretStoreError(Exception):
    """Base class for all secret store errors."""


# =============================================================================
# SECRET PATH PARSING
# =============================================================================

class PathError(SecretStoreError, ValueError):
    """A secret path expression could not be parsed."""

    def __init__(self, message: str, remainder: str = ""):
        super().__init__(message)
        self.remainder = remainder


class NoBackend(PathError):
    def __init__(self):
        super().__init__("no backend in empty secret path")


class UnknownBackend(PathError):
    def __init__(self, backend: str):
        super().__init__(f"unknown backend: {backend!r}", backend)
        self.backend = backend


class NoArgs(PathError):
    def __init__(self, remainder: str):
        super().__init__(f"no arguments in secret path: {remainder!r}", remainder)


class NoPath(PathError):
    def __init__(self, remainder: str):
        super().__init__(f"no path in secret path: {remainder!r}", remainder)


class ExtraData(PathError):
    def __init__(self, remainder: str):
        super().__init__(f"extra data after secret path: {remainder!r}", remainder)


# =============================================================================
# CLIENT / TRANSPORT
# =============================================================================

class NotLogged(SecretStoreError):
    """No credential is cached for the role."""

    def __init__(self, role: str = ""):
        super().__init__(f"not logged to vault server (role: {role!r})")
        self.role = role


class TransportError(SecretStoreError):
    """The request never produced a usable response (network, decoding)."""


class TokenError(TransportError):
    """The login JWT could not be read."""


class VaultError(SecretStoreError):
    """The secret store rejected the request."""

    def __init__(self, status: int, errors: Optional[List[str]] = None):
        self.status = status
        self.errors = list(errors or [])
        super().__init__(f"http error code {status}\n" + "\n".join(self.errors))


# =============================================================================
# RESOLUTION
# =============================================================================

class ResolveError(SecretStoreError, ValueError):
    """A parsed secret path cannot be resolved by its backend."""


class SecretNotFound(SecretStoreError, KeyError):
    """The backend has no secret at the requested location."""

    def __str__(self) -> str:
        # KeyError quotes its argument
        return str(self.args[0]) if self.args else ""


class PointerError(SecretNotFound):
    """A JSON pointer anchor does not match the secret value."""


# =============================================================================
# CONFIGURATION
# =============================================================================

class ConfigError(SecretStoreError, ValueError):
    """The configuration file or a configured value is invalid."""

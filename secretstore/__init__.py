"""
secretstore

In-process model of a remote secret store:
- lease, auth, secret: validity and renewal of tokens and fetched secrets
- path: parsing of "backend:args:path#anchor" secret path expressions
- transport, client: logging in and fetching through a secret store (Vault)
- backends: resolving a secret path expression to a secret
"""

import logging

from .auth import Auth
from .errors import (
    ConfigError,
    ExtraData,
    NoArgs,
    NoBackend,
    NoPath,
    NotLogged,
    PathError,
    PointerError,
    ResolveError,
    SecretNotFound,
    SecretStoreError,
    TokenError,
    TransportError,
    UnknownBackend,
    VaultError,
)
from .lease import Lease
from .path import SecretPath, parse
from .secret import Secret

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.3.0"

__all__ = [
    "Auth",
    "Lease",
    "Secret",
    "SecretPath",
    "parse",
    "SecretStoreError",
    "PathError",
    "NoBackend",
    "UnknownBackend",
    "NoArgs",
    "NoPath",
    "ExtraData",
    "NotLogged",
    "TransportError",
    "TokenError",
    "VaultError",
    "ResolveError",
    "SecretNotFound",
    "PointerError",
    "ConfigError",
]

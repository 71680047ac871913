"""
Secret Store Transports

Available transports for talking to a secret store.
"""

from .interface import FetchResponse, LoginResponse, SecretTransport
from .vault import VaultTransport

__all__ = ["SecretTransport", "LoginResponse", "FetchResponse", "VaultTransport"]

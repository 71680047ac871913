"""
Constant Backend

Resolves values written inline in the path, for settings that do not come
from a secret store:

    const:str:https://localhost:8200#     -> "https://localhost:8200"
    const:js:{"key": "val"}#/key          -> "val"
"""

import json

from ..errors import ResolveError
from ..path import SecretPath
from ..secret import Secret
from .interface import Backend, SecretResolver

KINDS = ("str", "js")


class ConstResolver(SecretResolver):
    """Inline string or JSON values, never leased."""

    backend = Backend.CONST

    async def resolve(self, path: SecretPath) -> Secret:
        kind = path.args[0] if path.args else ""
        if kind == "str":
            value = path.path
        elif kind == "js":
            try:
                value = json.loads(path.path)
            except json.JSONDecodeError as e:
                raise ResolveError(f"Invalid JSON constant {path.path!r}: {e}") from e
        else:
            raise ResolveError(f"Unknown constant kind {kind!r}, expected one of: {', '.join(KINDS)}")
        return Secret(value).select(path.anchor)

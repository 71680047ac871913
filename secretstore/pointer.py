"""JSON pointer (RFC 6901) lookup used for secret path anchors."""

from typing import Any

from .errors import PointerError


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def resolve_pointer(document: Any, pointer: str) -> Any:
    """
    Return the element of `document` that `pointer` designates.

    An empty pointer designates the whole document. Array members are
    addressed by their decimal index.

    Raises:
        PointerError: If the pointer is malformed or a member is missing
    """
    if pointer == "":
        return document
    if not pointer.startswith("/"):
        raise PointerError(f"invalid JSON pointer: {pointer!r}")

    current = document
    for token in pointer[1:].split("/"):
        token = _unescape(token)
        if isinstance(current, dict):
            if token not in current:
                raise PointerError(f"no member {token!r} for pointer {pointer!r}")
            current = current[token]
        elif isinstance(current, list):
            if not token.isdigit() or (len(token) > 1 and token.startswith("0")):
                raise PointerError(f"invalid array index {token!r} for pointer {pointer!r}")
            index = int(token)
            if index >= len(current):
                raise PointerError(f"index {index} out of range for pointer {pointer!r}")
            current = current[index]
        else:
            raise PointerError(f"cannot descend into {type(current).__name__} for pointer {pointer!r}")
    return current

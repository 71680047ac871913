"""
Secret Path Interface

Defines the parsed form of a secret path expression and the abstract
interface both parsing strategies implement.

    backend:arg1,arg2,key=val:path#anchor

The backend token, the leading ASCII letters, is turned into a
caller-supplied type: anything callable with the token that raises
ValueError/KeyError/TypeError for unknown tokens and renders back with
str() (a str-valued Enum works).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, List, Optional, Tuple, TypeVar, Union

from ..errors import NoBackend, UnknownBackend

B = TypeVar("B")

BackendType = Callable[[str], B]


@dataclass(frozen=True)
class Arg:
    """A positional argument."""
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class KwArg:
    """A keyword argument, split on the first '='."""
    key: str
    value: str

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


Argument = Union[Arg, KwArg]


@dataclass(frozen=True)
class SecretPath(Generic[B]):
    """
    A parsed secret path.

    `full_path` is the text after the second colon, verbatim. `path` and
    `anchor` are that text split on its last '#'. `arguments` keeps the
    arguments in input order so the expression renders back unchanged.
    """
    backend: B
    args: List[str]
    kwargs: Optional[List[Tuple[str, str]]]
    path: str
    full_path: str
    anchor: Optional[str] = None
    arguments: Tuple[Argument, ...] = field(default=(), repr=False, compare=False)

    @classmethod
    def build(cls, backend: B, arguments: List[Argument], full_path: str) -> "SecretPath[B]":
        """Partition `arguments` and split the anchor off `full_path`."""
        args, kwargs = split_args(arguments)
        path, anchor = split_anchor(full_path)
        return cls(
            backend=backend,
            args=args,
            kwargs=kwargs,
            path=path,
            full_path=full_path,
            anchor=anchor,
            arguments=tuple(arguments),
        )

    def kwargs_dict(self) -> Dict[str, str]:
        """Keyword arguments as a dict, the last duplicate key wins."""
        return dict(self.kwargs or [])

    def __str__(self) -> str:
        if self.arguments:
            rendered = ",".join(str(a) for a in self.arguments)
        else:
            rendered = ",".join(
                self.args + [f"{k}={v}" for k, v in (self.kwargs or [])]
            )
        return f"{self.backend}:{rendered}:{self.full_path}"


def split_args(arguments: List[Argument]) -> Tuple[List[str], Optional[List[Tuple[str, str]]]]:
    """Separate positional and keyword arguments, keeping order in each."""
    args: List[str] = []
    kwargs: List[Tuple[str, str]] = []
    for argument in arguments:
        if isinstance(argument, KwArg):
            kwargs.append((argument.key, argument.value))
        else:
            args.append(argument.value)
    return args, (kwargs or None)


def split_anchor(full_path: str) -> Tuple[str, Optional[str]]:
    """Split on the last '#': ('a#b', 'c') for 'a#b#c', ('a', None) for 'a'."""
    path, sep, anchor = full_path.rpartition("#")
    if not sep:
        return full_path, None
    return path, anchor


def is_backend_char(c: str) -> bool:
    """Backend tokens are made of ASCII letters only."""
    return c.isascii() and c.isalpha()


def make_backend(backend_type: BackendType, token: str) -> B:
    """Convert the backend token, reporting any rejection as UnknownBackend."""
    if not token:
        raise UnknownBackend(token)
    try:
        return backend_type(token)
    except (ValueError, KeyError, TypeError):
        raise UnknownBackend(token) from None


class PathParser(ABC):
    """
    Abstract base class for secret path parsers.

    Implementations must accept and reject exactly the same inputs and
    raise the same PathError subclass for a rejected input.
    """

    name: str = "base"

    def parse(self, expression: str, backend_type: BackendType) -> SecretPath:
        """
        Parse a secret path expression.

        Args:
            expression: The expression, e.g. "vault:role:secret/data/app#/data"
            backend_type: Callable turning the backend token into a backend

        Returns:
            The parsed SecretPath

        Raises:
            NoBackend: If the expression is empty
            UnknownBackend: If backend_type rejects the backend token
            NoArgs: If no argument list follows the backend
            NoPath: If no path follows the argument list
            ExtraData: If input is left after a complete parse
        """
        if not expression:
            raise NoBackend()
        return self._parse(expression, backend_type)

    @abstractmethod
    def _parse(self, expression: str, backend_type: BackendType) -> SecretPath:
        pass

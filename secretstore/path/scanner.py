"""
Scanner Parser

Walks a secret path once with a three state machine:

    BACKEND --':'--> ARGS --':'--> PATH

The backend is the leading run of ASCII letters and must be followed by a
colon. The first colon ends the backend, the second ends the argument list and
everything after it is the path, colons included. There is no escaping
mechanism and no backtracking: an argument is checked when its ',' or ':'
is reached and the scan stops at the first error.
"""

from enum import Enum
from typing import List, Optional

from ..errors import NoArgs, NoPath
from .interface import (
    Arg,
    Argument,
    BackendType,
    KwArg,
    PathParser,
    SecretPath,
    is_backend_char,
    make_backend,
    split_args,
)

DELIMITERS = ":,="


class Pos(Enum):
    BACKEND = "backend"
    ARGS = "args"
    PATH = "path"


class ScannerParser(PathParser):
    """Single pass secret path parser."""

    name = "scanner"

    def _parse(self, expression: str, backend_type: BackendType) -> SecretPath:
        pos = Pos.BACKEND
        backend = None
        arguments: List[Argument] = []
        args_start = seg_start = path_start = 0
        eq: Optional[int] = None
        anchor_at: Optional[int] = None

        for i, c in enumerate(expression):
            if pos is Pos.BACKEND:
                if c == ":":
                    backend = make_backend(backend_type, expression[:i])
                    pos = Pos.ARGS
                    args_start = seg_start = i + 1
                elif not is_backend_char(c):
                    make_backend(backend_type, expression[:i])
                    raise NoArgs(expression[i:])
            elif pos is Pos.ARGS:
                if i == args_start and c in DELIMITERS:
                    raise NoArgs(expression[i:])
                if c == "=":
                    if i == seg_start:
                        # ,=value: the list ends before the ','
                        raise NoPath(expression[i - 1:])
                    if eq is not None:
                        if i == eq + 1:
                            # key==...: only the key is an argument
                            raise NoPath(expression[eq:])
                        # key=value=more: the second '=' ends the argument list
                        raise NoPath(expression[i:])
                    eq = i
                elif c in ",:":
                    arguments.append(self._argument(expression, seg_start, eq, i))
                    eq = None
                    seg_start = i + 1
                    if c == ":":
                        pos = Pos.PATH
                        path_start = i + 1
            elif c == "#":
                anchor_at = i

        if pos is Pos.BACKEND:
            make_backend(backend_type, expression)
            raise NoArgs("")
        if pos is Pos.ARGS:
            if seg_start == args_start == len(expression):
                raise NoArgs("")
            arguments.append(self._argument(expression, seg_start, eq, len(expression)))
            raise NoPath("")
        if path_start == len(expression):
            raise NoPath("")

        full_path = expression[path_start:]
        if anchor_at is None:
            path, anchor = full_path, None
        else:
            path, anchor = expression[path_start:anchor_at], expression[anchor_at + 1:]
        args, kwargs = split_args(arguments)
        return SecretPath(
            backend=backend,
            args=args,
            kwargs=kwargs,
            path=path,
            full_path=full_path,
            anchor=anchor,
            arguments=tuple(arguments),
        )

    @staticmethod
    def _argument(expression: str, start: int, eq: Optional[int], end: int) -> Argument:
        """Check the argument in expression[start:end] and build it."""
        if start == end:
            # empty argument: the list ends before its separator
            raise NoPath(expression[start - 1:])
        if eq is None:
            return Arg(expression[start:end])
        if eq + 1 == end:
            # key= : only the key is an argument
            raise NoPath(expression[eq:])
        return KwArg(expression[start:eq], expression[eq + 1:end])

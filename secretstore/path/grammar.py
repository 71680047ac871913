"""
Grammar Parser

Parses secret paths by composing small parsing rules. A rule is a callable
taking (text, pos) and returning (value, new_pos). A rule that does not
match raises _NoMatch, which alternatives and lists recover from; expect()
turns a non-match into the PathError the caller sees, so parsing stops as
soon as a required delimiter is missing.

    secret_path := backend ":" args ":" path_anchor
    backend     := one or more ASCII letters
    args        := arg ("," arg)*
    arg         := kwarg | literal
    kwarg       := literal "=" literal
    literal     := one or more characters except ':' ',' '='
"""

from typing import Any, Callable, List, Tuple, Type

from ..errors import ExtraData, NoArgs, NoPath, PathError, UnknownBackend
from .interface import Arg, BackendType, KwArg, PathParser, SecretPath, is_backend_char, make_backend

Rule = Callable[[str, int], Tuple[Any, int]]

DELIMITERS = ":,="


class _NoMatch(Exception):
    """A rule did not match at the given position."""

    def __init__(self, pos: int):
        super().__init__(pos)
        self.pos = pos


# =============================================================================
# COMBINATORS
# =============================================================================

def tag(expected: str) -> Rule:
    def rule(text: str, pos: int) -> Tuple[str, int]:
        if text.startswith(expected, pos):
            return expected, pos + len(expected)
        raise _NoMatch(pos)
    return rule


def take_while1(predicate: Callable[[str], bool]) -> Rule:
    def rule(text: str, pos: int) -> Tuple[str, int]:
        end = pos
        while end < len(text) and predicate(text[end]):
            end += 1
        if end == pos:
            raise _NoMatch(pos)
        return text[pos:end], end
    return rule


def rest1(text: str, pos: int) -> Tuple[str, int]:
    """Everything left, at least one character."""
    if pos >= len(text):
        raise _NoMatch(pos)
    return text[pos:], len(text)


def mapped(rule: Rule, func: Callable[[Any], Any]) -> Rule:
    def wrapped(text: str, pos: int) -> Tuple[Any, int]:
        value, pos = rule(text, pos)
        return func(value), pos
    return wrapped


def sequence(*rules: Rule) -> Rule:
    def wrapped(text: str, pos: int) -> Tuple[tuple, int]:
        values = []
        for rule in rules:
            value, pos = rule(text, pos)
            values.append(value)
        return tuple(values), pos
    return wrapped


def alt(*rules: Rule) -> Rule:
    def wrapped(text: str, pos: int) -> Tuple[Any, int]:
        for rule in rules:
            try:
                return rule(text, pos)
            except _NoMatch:
                continue
        raise _NoMatch(pos)
    return wrapped


def terminated(rule: Rule, terminator: Rule) -> Rule:
    def wrapped(text: str, pos: int) -> Tuple[Any, int]:
        value, pos = rule(text, pos)
        _, pos = terminator(text, pos)
        return value, pos
    return wrapped


def separated_list1(separator: Rule, element: Rule) -> Rule:
    """One or more elements; a separator not followed by an element is left unconsumed."""
    def wrapped(text: str, pos: int) -> Tuple[List[Any], int]:
        first, pos = element(text, pos)
        values = [first]
        while True:
            try:
                _, after_sep = separator(text, pos)
                value, after_elem = element(text, after_sep)
            except _NoMatch:
                return values, pos
            values.append(value)
            pos = after_elem
    return wrapped


def expect(rule: Rule, error: Type[PathError]) -> Rule:
    """Turn a non-match into `error(remaining input)`."""
    def wrapped(text: str, pos: int) -> Tuple[Any, int]:
        try:
            return rule(text, pos)
        except _NoMatch:
            raise error(text[pos:]) from None
    return wrapped


# =============================================================================
# RULES
# =============================================================================

literal = take_while1(lambda c: c not in DELIMITERS)

kwarg = mapped(sequence(literal, tag("="), literal), lambda v: KwArg(v[0], v[2]))

arg = mapped(literal, Arg)

arg_list = separated_list1(tag(","), alt(kwarg, arg))

path_anchor = rest1


def backend(backend_type: BackendType) -> Rule:
    """The leading letters, converted with `backend_type`."""
    token = take_while1(is_backend_char)

    def rule(text: str, pos: int) -> Tuple[Any, int]:
        try:
            value, end = token(text, pos)
        except _NoMatch:
            raise UnknownBackend("") from None
        return make_backend(backend_type, value), end
    return rule


def secret_path(backend_type: BackendType) -> Rule:
    return sequence(
        terminated(backend(backend_type), expect(tag(":"), NoArgs)),
        terminated(expect(arg_list, NoArgs), expect(tag(":"), NoPath)),
        expect(path_anchor, NoPath),
    )


class GrammarParser(PathParser):
    """Secret path parser built from composed grammar rules."""

    name = "grammar"

    def _parse(self, expression: str, backend_type: BackendType) -> SecretPath:
        (backend_value, arguments, full_path), pos = secret_path(backend_type)(expression, 0)
        # unreachable while path_anchor consumes the rest of the input
        if pos != len(expression):
            raise ExtraData(expression[pos:])
        return SecretPath.build(backend_value, arguments, full_path)

"""
Secret Path Parsing

Parses expressions locating a secret:

    backend:arg1,arg2,key=val:path#anchor

Two interchangeable parsers are available, selected by name:

    from secretstore.path import parse
    from secretstore.backends import Backend

    path = parse("vault:role,POST,common_name=example.com:pki/issue/example.com#/data", Backend)
    path = parse("const:str:https://localhost:8200#", Backend, strategy="scanner")

Both accept and reject the same inputs. The grammar parser additionally
reports ExtraData for input left after a complete parse, which cannot occur
with the current grammar since the path consumes the rest of the input.
"""

from typing import Dict, Optional, Type

from .interface import Arg, KwArg, PathParser, SecretPath, split_anchor, split_args
from .grammar import GrammarParser
from .scanner import ScannerParser

# Registry of available parsers
PARSERS: Dict[str, Type[PathParser]] = {
    GrammarParser.name: GrammarParser,
    ScannerParser.name: ScannerParser,
}

DEFAULT_PARSER = GrammarParser.name


def get_parser(strategy: Optional[str] = None) -> PathParser:
    """Instantiate the parser registered under `strategy`."""
    name = strategy or DEFAULT_PARSER
    if name not in PARSERS:
        available = ", ".join(PARSERS)
        raise ValueError(f"Unknown path parser '{name}'. Available: {available}")
    return PARSERS[name]()


def parse(expression: str, backend_type, strategy: Optional[str] = None) -> SecretPath:
    """Parse `expression` with the named parser (default: grammar)."""
    return get_parser(strategy).parse(expression, backend_type)


__all__ = [
    "Arg",
    "KwArg",
    "SecretPath",
    "PathParser",
    "GrammarParser",
    "ScannerParser",
    "PARSERS",
    "DEFAULT_PARSER",
    "get_parser",
    "parse",
    "split_anchor",
    "split_args",
]

"""
Parsers Package.

Importing this package registers the bundled parsers; `get_parser` and
`available_parsers` expose the registry.
"""

from retext.parsers.base import Parser, available_parsers, get_parser, register_parser
from retext.parsers.latin import LatinParser

DEFAULT_PARSER = "latin"

__all__ = [
  "DEFAULT_PARSER",
  "LatinParser",
  "Parser",
  "available_parsers",
  "get_parser",
  "register_parser",
]

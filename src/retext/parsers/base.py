"""
Parser Base Class and Registry.

A parser turns a string into a concrete syntax tree (nested mappings with
`type`, `children`/`value` and optional `data`). Parsers register under a short
name so configuration can select one by key.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Type

from retext.errors import UnknownParserError


class Parser(ABC):
  """
  Abstract base class for natural-language parsers.

  Attributes:
      object_model (Any): The object model bound to this parser by `Retext`.
  """

  def __init__(self) -> None:
    self.object_model: Any = None

  @abstractmethod
  def parse(self, text: Optional[str]) -> Dict[str, Any]:
    """
    Parses text into a concrete syntax tree.

    Args:
        text: The text to parse.

    Returns:
        Dict[str, Any]: The root CST node.
    """
    pass


_PARSER_REGISTRY: Dict[str, Type[Parser]] = {}


def register_parser(name: str) -> Callable[[Type[Parser]], Type[Parser]]:
  def wrapper(cls: Type[Parser]) -> Type[Parser]:
    _PARSER_REGISTRY[name] = cls
    return cls

  return wrapper


def get_parser(name: str) -> Parser:
  """
  Instantiates a registered parser.

  Args:
      name: The registry key (e.g. 'latin').

  Returns:
      Parser: A fresh parser instance.

  Raises:
      UnknownParserError: If no parser is registered under `name`.
  """
  cls = _PARSER_REGISTRY.get(name)
  if cls is None:
    raise UnknownParserError(f"Unknown parser: '{name}'. Available parsers: {available_parsers()}")
  return cls()


def available_parsers() -> List[str]:
  return list(_PARSER_REGISTRY.keys())

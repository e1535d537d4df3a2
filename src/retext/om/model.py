"""
Object Model Registry.

An `ObjectModel` maps CST type names to node classes. Each processing instance
owns one, bound bidirectionally to its parser (`model.parser` and
`parser.object_model`), so plugins reaching either side can get to the other.

The dispatch table is a plain dict built at construction; plugins may register
additional node classes from their `attach` hook.
"""

from typing import Any, Dict, Iterable, List, Optional, Type

from retext.errors import UnknownNodeTypeError
from retext.om.nodes import DEFAULT_NODE_TYPES, Node


class ObjectModel:
  """
  Registry of node constructors keyed by type name.

  Attributes:
      parser (Any): The parser bound to this model, if any.
  """

  def __init__(self, node_types: Optional[Iterable[Type[Node]]] = None) -> None:
    """
    Initializes the registry.

    Args:
        node_types: Node classes to register. Defaults to the standard text node set.
    """
    self._constructors: Dict[str, Type[Node]] = {}
    self.parser: Any = None
    for node_cls in DEFAULT_NODE_TYPES if node_types is None else node_types:
      self.register(node_cls)

  def register(self, node_cls: Type[Node], name: Optional[str] = None) -> Type[Node]:
    """
    Adds (or overrides) a constructor.

    Args:
        node_cls: A `Node` subclass.
        name: Registration key. Defaults to `node_cls.type`.

    Returns:
        Type[Node]: `node_cls`, so this can be used as a class decorator.
    """
    if not (isinstance(node_cls, type) and issubclass(node_cls, Node)):
      raise TypeError(f"Expected a Node subclass, got {node_cls!r}")
    self._constructors[name or node_cls.type] = node_cls
    return node_cls

  def __getitem__(self, type_name: str) -> Type[Node]:
    try:
      return self._constructors[type_name]
    except KeyError:
      raise UnknownNodeTypeError(type_name) from None

  def __contains__(self, type_name: object) -> bool:
    return type_name in self._constructors

  def types(self) -> List[str]:
    """Returns the registered type names in registration order."""
    return list(self._constructors)

  def create(self, type_name: str) -> Node:
    """
    Instantiates an empty node of the given type.

    Raises:
        UnknownNodeTypeError: If `type_name` is not registered.
    """
    return self[type_name]()

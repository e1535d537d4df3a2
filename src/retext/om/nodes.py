"""
Text Object Model Nodes.

Defines the mutable node types a parsed text is built from. Every node carries a
`data` dict for plugins and parsers to annotate, and knows its parent so that
plugins can move, remove, and replace nodes in place.

Hierarchy:
    - Parent: RootNode, ParagraphNode, SentenceNode
    - Text (leaf): WordNode, PunctuationNode, WhiteSpaceNode, SourceNode, TextNode
"""

from typing import Any, Dict, Iterator, List, Optional


class Node:
  """
  Abstract base class for all object model nodes.

  Attributes:
      type (str): The CST type name this class is registered under.
      data (Dict[str, Any]): Free-form annotations.
      parent (Optional[Parent]): The containing node, if attached.
  """

  type: str = "Node"

  def __init__(self) -> None:
    self.data: Dict[str, Any] = {}
    self.parent: Optional["Parent"] = None

  def append(self, child: "Node") -> "Node":
    raise TypeError(f"{self.type} cannot contain children")

  def from_string(self, value: Optional[str]) -> "Node":
    raise TypeError(f"{self.type} cannot be built from a string")

  def to_string(self) -> str:
    """
    Returns the text this node covers.

    Raises:
        NotImplementedError: If not implemented by subclass.
    """
    raise NotImplementedError

  @property
  def prev(self) -> Optional["Node"]:
    """The previous sibling, or None."""
    if self.parent is None:
      return None
    index = self.parent.index_of(self)
    return self.parent.children[index - 1] if index > 0 else None

  @property
  def next(self) -> Optional["Node"]:
    """The next sibling, or None."""
    if self.parent is None:
      return None
    siblings = self.parent.children
    index = self.parent.index_of(self)
    return siblings[index + 1] if index + 1 < len(siblings) else None

  def remove(self) -> "Node":
    """
    Detaches the node from its parent. A detached node is returned unchanged.

    Returns:
        Node: self.
    """
    if self.parent is not None:
      parent = self.parent
      del parent.children[parent.index_of(self)]
      self.parent = None
    return self

  def replace(self, other: "Node") -> "Node":
    """
    Puts `other` at this node's position and detaches this node.

    Args:
        other: The replacement node. Detached from its own parent first.

    Returns:
        Node: self, now detached.

    Raises:
        ValueError: If this node has no parent.
    """
    if self.parent is None:
      raise ValueError(f"Cannot replace a detached {self.type}")
    if other is self:
      return self
    other.remove()
    parent = self.parent
    index = parent.index_of(self)
    parent.children[index] = other
    other.parent = parent
    self.parent = None
    return self

  def __repr__(self) -> str:
    return f"{self.__class__.__name__}({self.to_string()!r})"


class Parent(Node):
  """
  A node holding an ordered list of children.
  """

  type = "Parent"

  def __init__(self) -> None:
    super().__init__()
    self.children: List[Node] = []

  def insert(self, index: int, child: Node) -> Node:
    """
    Inserts `child` before position `index`, detaching it from any previous parent.

    Args:
        index: Position as accepted by `list.insert`.
        child: The node to insert.

    Returns:
        Node: The inserted child.
    """
    if not isinstance(child, Node):
      raise TypeError(f"Expected a Node, got {type(child).__name__}")
    if child is self or child in list(self._ancestors()):
      raise ValueError("Cannot insert a node into itself or its descendants")
    if child.parent is self:
      # Positions refer to the list before the move.
      current = self.index_of(child)
      if index < 0:
        index += len(self.children)
      if current < index:
        index -= 1
    child.remove()
    self.children.insert(index, child)
    child.parent = self
    return child

  def append(self, child: Node) -> Node:
    """Adds `child` as the last child."""
    return self.insert(len(self.children), child)

  def prepend(self, child: Node) -> Node:
    """Adds `child` as the first child."""
    return self.insert(0, child)

  def index_of(self, child: Node) -> int:
    """
    Returns the position of `child` by identity.

    Raises:
        ValueError: If `child` is not a child of this node.
    """
    for index, candidate in enumerate(self.children):
      if candidate is child:
        return index
    raise ValueError(f"{child!r} is not a child of {self.type}")

  @property
  def head(self) -> Optional[Node]:
    return self.children[0] if self.children else None

  @property
  def tail(self) -> Optional[Node]:
    return self.children[-1] if self.children else None

  def walk(self) -> Iterator[Node]:
    """
    Yields this node and all descendants in pre-order, depth-first.
    """
    stack: List[Node] = [self]
    while stack:
      node = stack.pop()
      yield node
      if isinstance(node, Parent):
        stack.extend(reversed(node.children))

  def find_all(self, type_name: str) -> List[Node]:
    """Returns every descendant (or self) whose `type` equals `type_name`, in document order."""
    return [node for node in self.walk() if node.type == type_name]

  def to_string(self) -> str:
    return "".join(child.to_string() for child in self.children)

  def _ancestors(self) -> Iterator["Parent"]:
    node = self.parent
    while node is not None:
      yield node
      node = node.parent

  def __iter__(self) -> Iterator[Node]:
    return iter(list(self.children))


class Text(Node):
  """
  A leaf node holding a literal string.
  """

  type = "Text"

  def __init__(self, value: str = "") -> None:
    super().__init__()
    self.value = value

  def from_string(self, value: Optional[str]) -> "Text":
    """
    Sets the node's content. `None` is treated as the empty string.

    Returns:
        Text: self.
    """
    self.value = "" if value is None else str(value)
    return self

  def to_string(self) -> str:
    return self.value


class RootNode(Parent):
  """The document: paragraphs and the whitespace between them."""

  type = "RootNode"


class ParagraphNode(Parent):
  """A block of sentences."""

  type = "ParagraphNode"


class SentenceNode(Parent):
  """A run of words, punctuation and whitespace."""

  type = "SentenceNode"


class WordNode(Text):
  type = "WordNode"


class PunctuationNode(Text):
  type = "PunctuationNode"


class WhiteSpaceNode(Text):
  type = "WhiteSpaceNode"


class SourceNode(Text):
  """Verbatim content a parser chose not to analyse (e.g. code, markup)."""

  type = "SourceNode"


class TextNode(Text):
  type = "TextNode"


DEFAULT_NODE_TYPES = (
  RootNode,
  ParagraphNode,
  SentenceNode,
  WordNode,
  PunctuationNode,
  WhiteSpaceNode,
  SourceNode,
  TextNode,
)

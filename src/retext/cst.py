"""
Concrete Syntax Tree Schema.

Parsers hand back plain nested mappings of the shape::

    {"type": "SentenceNode", "children": [{"type": "WordNode", "value": "Cat"}]}

This module validates such mappings into `CSTNode` models so the tree builder
can rely on the `children` XOR `value` invariant instead of re-checking it at
every level.

Validation goes one level at a time (`validate_cst_level`). Children stay
unvalidated until they are visited, so tree depth is never limited by the
validator's own nesting guard.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from retext.errors import MalformedCSTError


class _CSTFields(BaseModel):
  model_config = ConfigDict(extra="ignore", frozen=True)

  type: str = Field(..., description="Name of the object model constructor to use.")
  value: Optional[str] = Field(None, description="Literal text (leaf).")
  data: Optional[Dict[str, Any]] = Field(None, description="Free-form data forwarded to the node.")

  @model_validator(mode="after")
  def check_children_xor_value(self) -> "_CSTFields":
    """
    Ensures a node is either a parent or a leaf, never both or neither.

    Raises:
        ValueError: If both or neither of `children` and `value` are present.
    """
    if (self.children is None) == (self.value is None):
      raise ValueError(f"CST node '{self.type}' must have exactly one of 'children' or 'value'")
    return self

  @property
  def is_leaf(self) -> bool:
    return self.children is None


class CSTNode(_CSTFields):
  """
  A single node of a parser's concrete syntax tree.

  Exactly one of `children` (non-leaf) or `value` (leaf) is set.
  """

  children: Optional[List["CSTNode"]] = Field(None, description="Ordered child nodes (non-leaf).")


class CSTLevel(_CSTFields):
  """
  One validated CST node whose children are left as given (mappings or `CSTNode`s).
  """

  children: Optional[List[Any]] = Field(None, description="Ordered, not yet validated child nodes.")


CSTInput = Union[CSTNode, Mapping[str, Any]]


def validate_cst_level(cst: Any) -> Union[CSTNode, CSTLevel]:
  """
  Validates a single CST node without descending into its children.

  Args:
      cst: A `CSTNode` (returned untouched) or a mapping.

  Returns:
      The node, with `type`, `value`, `data` and the shape of `children` checked.

  Raises:
      MalformedCSTError: If the node breaks the CST schema.
  """
  if isinstance(cst, CSTNode):
    return cst
  try:
    return CSTLevel.model_validate(cst)
  except ValidationError as e:
    raise MalformedCSTError(f"Invalid concrete syntax tree: {e}") from e


def validate_cst(cst: CSTInput) -> CSTNode:
  """
  Coerces a raw parser result into a validated `CSTNode`.

  Walks the tree with an explicit stack, so arbitrarily deep input is accepted.

  Args:
      cst: A `CSTNode` (returned untouched) or a nested mapping.

  Returns:
      CSTNode: The validated tree.

  Raises:
      MalformedCSTError: If any node breaks the CST schema.
  """
  if isinstance(cst, CSTNode):
    return cst

  root = validate_cst_level(cst)
  ordered: List[Tuple[Any, Optional[List[Any]]]] = []
  stack = [root]
  while stack:
    level = stack.pop()
    if isinstance(level, CSTNode) or level.children is None:
      ordered.append((level, None))
      continue
    kids = [validate_cst_level(child) for child in level.children]
    ordered.append((level, kids))
    stack.extend(kids)

  built: Dict[int, CSTNode] = {}
  for level, kids in reversed(ordered):
    if isinstance(level, CSTNode):
      built[id(level)] = level
      continue
    children = None if kids is None else [built[id(kid)] for kid in kids]
    built[id(level)] = CSTNode.model_construct(
      type=level.type, children=children, value=level.value, data=level.data
    )
  return built[id(root)]

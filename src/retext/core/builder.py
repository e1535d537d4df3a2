"""
CST to Object Model Conversion.

Turns a parser's concrete syntax tree into a tree of mutable object model nodes.
Each CST node is validated as it is visited. The conversion is recursive and has
no side effects beyond node construction; very deep trees can exhaust the
interpreter's recursion limit.
"""

from typing import Any

from retext.cst import CSTInput, validate_cst_level
from retext.om.model import ObjectModel
from retext.om.nodes import Node


def from_cst(object_model: ObjectModel, cst: CSTInput) -> Node:
  """
  Builds a node tree from a concrete syntax tree.

  Args:
      object_model: Registry used to resolve each CST `type`.
      cst: The root CST node, as a `CSTNode` or a nested mapping.

  Returns:
      Node: The root of the constructed tree.

  Raises:
      MalformedCSTError: If `cst` breaks the CST schema.
      UnknownNodeTypeError: If any `type` is not registered in `object_model`.
  """
  return _build(object_model, cst)


def _build(object_model: ObjectModel, raw: Any) -> Node:
  cst = validate_cst_level(raw)
  node = object_model.create(cst.type)

  if cst.children is not None:
    for child in cst.children:
      node.append(_build(object_model, child))
  else:
    node.from_string(cst.value)

  # Shallow copy; keys set by the parser win over anything the constructor set.
  if cst.data:
    for key, value in cst.data.items():
      node.data[key] = value

  return node

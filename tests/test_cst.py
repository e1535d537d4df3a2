"""
Tests for the Concrete Syntax Tree Schema.
"""

import pytest
from pydantic import ValidationError

from retext.cst import CSTNode, validate_cst, validate_cst_level
from retext.errors import MalformedCSTError

from tests.conftest import CAT_CST


def test_validates_nested_mapping():
  node = validate_cst(CAT_CST)

  assert isinstance(node, CSTNode)
  assert node.type == "RootNode"
  assert not node.is_leaf
  sentence = node.children[0]
  assert [child.value for child in sentence.children] == ["Cat", "."]
  assert sentence.children[0].is_leaf


def test_model_passthrough():
  node = CSTNode(type="WordNode", value="Cat")
  assert validate_cst(node) is node


def test_empty_children_is_a_parent():
  node = validate_cst({"type": "RootNode", "children": []})
  assert node.children == []
  assert not node.is_leaf


def test_empty_value_is_a_leaf():
  assert validate_cst({"type": "WordNode", "value": ""}).is_leaf


def test_unknown_keys_ignored():
  node = validate_cst({"type": "WordNode", "value": "Cat", "position": {"line": 1}})
  assert node.value == "Cat"


def test_data_is_kept():
  node = validate_cst({"type": "WordNode", "value": "Cat", "data": {"lang": "en"}})
  assert node.data == {"lang": "en"}


@pytest.mark.parametrize(
  "cst",
  [
    {"type": "WordNode"},
    {"type": "WordNode", "value": "Cat", "children": []},
    {"value": "Cat"},
    {"type": "RootNode", "children": [{"type": "WordNode"}]},
    {"type": "WordNode", "value": 42},
  ],
)
def test_malformed(cst):
  with pytest.raises(MalformedCSTError) as excinfo:
    validate_cst(cst)
  assert isinstance(excinfo.value, ValueError)


def test_nodes_are_frozen():
  node = CSTNode(type="WordNode", value="Cat")
  with pytest.raises(ValidationError):
    node.value = "Dog"


def test_deep_tree_validates():
  cst = {"type": "WordNode", "value": "deep"}
  for _ in range(1000):
    cst = {"type": "SentenceNode", "children": [cst]}

  node = validate_cst(cst)
  depth = 0
  while not node.is_leaf:
    node = node.children[0]
    depth += 1

  assert depth == 1000
  assert node.value == "deep"


def test_level_validation_leaves_children_raw():
  level = validate_cst_level({"type": "RootNode", "children": [{"type": "WordNode"}]})

  assert level.type == "RootNode"
  assert level.children == [{"type": "WordNode"}]
  with pytest.raises(MalformedCSTError):
    validate_cst_level(level.children[0])

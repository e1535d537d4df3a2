"""
Text Object Model Package.

Node classes for parsed natural-language text and the registry mapping CST type
names to them.
"""

from retext.om.model import ObjectModel
from retext.om.nodes import (
  DEFAULT_NODE_TYPES,
  Node,
  ParagraphNode,
  Parent,
  PunctuationNode,
  RootNode,
  SentenceNode,
  SourceNode,
  Text,
  TextNode,
  WhiteSpaceNode,
  WordNode,
)

__all__ = [
  "DEFAULT_NODE_TYPES",
  "Node",
  "ObjectModel",
  "ParagraphNode",
  "Parent",
  "PunctuationNode",
  "RootNode",
  "SentenceNode",
  "SourceNode",
  "Text",
  "TextNode",
  "WhiteSpaceNode",
  "WordNode",
]

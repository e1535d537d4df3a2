"""
Latin-script Parser.

A small regex-driven tokenizer producing the CST shape the default object model
expects::

    RootNode
      ParagraphNode
        SentenceNode
          WordNode / PunctuationNode / WhiteSpaceNode
        WhiteSpaceNode
      WhiteSpaceNode (blank-line separators)

Every character of the input ends up in exactly one leaf, so concatenating the
leaf values in order reproduces the input.

Sentence boundaries are a run of terminal marks (`.`, `?`, `!`, `…`) plus any
closing quotes or brackets, followed by whitespace or the end of the paragraph.
Abbreviations are not special-cased.
"""

import re
from typing import Any, Dict, List, Optional, Tuple

from retext.parsers.base import Parser, register_parser

Token = Tuple[str, str]

_WORD = "word"
_SPACE = "space"
_PUNCT = "punct"


@register_parser("latin")
class LatinParser(Parser):
  """
  Splits Latin-script text into paragraphs, sentences, words and punctuation.
  """

  _PARAGRAPH_BREAK = re.compile(r"([ \t]*(?:\r\n|\n|\r(?!\n))(?:[ \t]*(?:\r\n|\n|\r(?!\n)))+[ \t]*)")
  _TOKEN_RE = re.compile(r"(?P<word>\w+(?:['’\-]\w+)*)|(?P<space>\s+)|(?P<punct>.)", re.DOTALL)
  _EDGE_SPACE = re.compile(r"^(?P<lead>\s*)(?P<body>.*?)(?P<trail>\s*)\Z", re.DOTALL)

  TERMINAL_MARKS = frozenset(".?!…")
  CLOSING_MARKS = frozenset("\"')]}”’»")

  def parse(self, text: Optional[str]) -> Dict[str, Any]:
    """
    Parses text into a RootNode CST.

    Args:
        text: The text to parse. `None` is treated as the empty string.

    Returns:
        Dict[str, Any]: The root CST node.

    Raises:
        TypeError: If `text` is neither a string nor None.
    """
    if text is None:
      text = ""
    if not isinstance(text, str):
      raise TypeError(f"LatinParser.parse expects a string, got {type(text).__name__}")

    match = self._EDGE_SPACE.match(text)
    lead, body, trail = match.group("lead"), match.group("body"), match.group("trail")

    children: List[Dict[str, Any]] = []
    if lead:
      children.append(_leaf("WhiteSpaceNode", lead))

    if body:
      parts = self._PARAGRAPH_BREAK.split(body)
      for index, part in enumerate(parts):
        if index % 2:
          children.append(_leaf("WhiteSpaceNode", part))
        else:
          children.append(self.parse_paragraph(part))

    if trail:
      children.append(_leaf("WhiteSpaceNode", trail))

    return {"type": "RootNode", "children": children}

  def parse_paragraph(self, text: str) -> Dict[str, Any]:
    """
    Splits a paragraph into sentences and the whitespace between them.
    """
    tokens = self.tokenize(text)
    children: List[Dict[str, Any]] = []
    sentence: List[Token] = []
    index = 0

    while index < len(tokens):
      kind, value = tokens[index]
      index += 1

      if kind == _SPACE and not sentence:
        children.append(_leaf("WhiteSpaceNode", value))
        continue

      sentence.append((kind, value))

      if kind == _PUNCT and value in self.TERMINAL_MARKS:
        while index < len(tokens) and self._continues_boundary(tokens[index]):
          sentence.append(tokens[index])
          index += 1
        if index == len(tokens) or tokens[index][0] == _SPACE:
          children.extend(self._flush_sentence(sentence))
          sentence = []

    if sentence:
      children.extend(self._flush_sentence(sentence))

    return {"type": "ParagraphNode", "children": children}

  def tokenize(self, text: str) -> List[Token]:
    tokens: List[Token] = []
    for match in self._TOKEN_RE.finditer(text):
      kind = match.lastgroup
      tokens.append((kind, match.group(kind)))
    return tokens

  def _continues_boundary(self, token: Token) -> bool:
    kind, value = token
    return kind == _PUNCT and (value in self.TERMINAL_MARKS or value in self.CLOSING_MARKS)

  def _flush_sentence(self, tokens: List[Token]) -> List[Dict[str, Any]]:
    trailing: List[Dict[str, Any]] = []
    while tokens and tokens[-1][0] == _SPACE:
      trailing.insert(0, _leaf("WhiteSpaceNode", tokens.pop()[1]))

    nodes = [_leaf(_LEAF_TYPES[kind], value) for kind, value in tokens]
    return [{"type": "SentenceNode", "children": nodes}] + trailing


_LEAF_TYPES = {
  _WORD: "WordNode",
  _SPACE: "WhiteSpaceNode",
  _PUNCT: "PunctuationNode",
}


def _leaf(type_name: str, value: str) -> Dict[str, Any]:
  return {"type": type_name, "value": value}

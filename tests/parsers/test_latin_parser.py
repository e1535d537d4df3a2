"""
Tests for the Latin-script Parser and Parser Registry.
"""

import pytest

from retext.cst import validate_cst
from retext.errors import UnknownParserError
from retext.parsers import LatinParser, available_parsers, get_parser


def _leaf_values(cst):
  if "value" in cst:
    return [cst["value"]]
  values = []
  for child in cst["children"]:
    values.extend(_leaf_values(child))
  return values


def _types(cst):
  return [child["type"] for child in cst["children"]]


@pytest.fixture
def parser():
  return LatinParser()


@pytest.mark.parametrize(
  "text",
  [
    "",
    "Cat.",
    "  Leading and trailing.  \n",
    "The cat sat.  It purred!\n\nA new paragraph?",
    "He said \"stop.\" Then left…",
    "Pi is 3.14, roughly; isn't it?",
    "Tabs\tand\r\nwindows\r\n\r\nbreaks",
    "No terminal mark",
    "Ünïcödé wörds çount tóo.",
  ],
)
def test_leaves_reconstruct_input(parser, text):
  cst = parser.parse(text)
  assert "".join(_leaf_values(cst)) == text
  validate_cst(cst)


def test_cat_structure(parser):
  assert parser.parse("Cat.") == {
    "type": "RootNode",
    "children": [
      {
        "type": "ParagraphNode",
        "children": [
          {
            "type": "SentenceNode",
            "children": [
              {"type": "WordNode", "value": "Cat"},
              {"type": "PunctuationNode", "value": "."},
            ],
          }
        ],
      }
    ],
  }


def test_sentences_split_on_terminal_marks(parser):
  paragraph = parser.parse("One. Two! Three?")["children"][0]

  assert _types(paragraph) == [
    "SentenceNode",
    "WhiteSpaceNode",
    "SentenceNode",
    "WhiteSpaceNode",
    "SentenceNode",
  ]


def test_decimal_point_is_not_a_boundary(parser):
  paragraph = parser.parse("It costs 3.50 today.")["children"][0]
  assert _types(paragraph) == ["SentenceNode"]


def test_closing_quote_stays_with_sentence(parser):
  paragraph = parser.parse('"Stop." She left.')["children"][0]
  first = paragraph["children"][0]

  assert _leaf_values(first) == ['"', "Stop", ".", '"']
  assert _types(paragraph) == ["SentenceNode", "WhiteSpaceNode", "SentenceNode"]


def test_contractions_and_hyphens_are_single_words(parser):
  sentence = parser.parse("Isn't well-known")["children"][0]["children"][0]
  assert sentence["children"] == [
    {"type": "WordNode", "value": "Isn't"},
    {"type": "WhiteSpaceNode", "value": " "},
    {"type": "WordNode", "value": "well-known"},
  ]


def test_paragraphs_split_on_blank_lines(parser):
  root = parser.parse("First.\n\nSecond.\n \nThird.")
  assert _types(root) == [
    "ParagraphNode",
    "WhiteSpaceNode",
    "ParagraphNode",
    "WhiteSpaceNode",
    "ParagraphNode",
  ]


@pytest.mark.parametrize("newline", ["\n", "\r\n", "\r"])
def test_single_newline_stays_in_paragraph(parser, newline):
  root = parser.parse(f"Line one{newline}line two.")
  assert _types(root) == ["ParagraphNode"]


def test_windows_blank_line_splits_paragraphs(parser):
  root = parser.parse("One.\r\n\r\nTwo.")
  assert _types(root) == ["ParagraphNode", "WhiteSpaceNode", "ParagraphNode"]
  assert root["children"][1]["value"] == "\r\n\r\n"


def test_edge_whitespace_belongs_to_root(parser):
  root = parser.parse("  Cat.\n")
  assert root["children"][0] == {"type": "WhiteSpaceNode", "value": "  "}
  assert root["children"][-1] == {"type": "WhiteSpaceNode", "value": "\n"}
  assert _types(root) == ["WhiteSpaceNode", "ParagraphNode", "WhiteSpaceNode"]


def test_empty_and_none_produce_empty_root(parser):
  assert parser.parse("") == {"type": "RootNode", "children": []}
  assert parser.parse(None) == {"type": "RootNode", "children": []}


def test_whitespace_only(parser):
  assert parser.parse(" \n ") == {"type": "RootNode", "children": [{"type": "WhiteSpaceNode", "value": " \n "}]}


def test_non_string_rejected(parser):
  with pytest.raises(TypeError):
    parser.parse(42)


def test_registry_lookup():
  assert "latin" in available_parsers()
  assert isinstance(get_parser("latin"), LatinParser)
  assert get_parser("latin") is not get_parser("latin")


def test_unknown_parser():
  with pytest.raises(UnknownParserError, match="klingon"):
    get_parser("klingon")

"""
Tests for the bundled `position` plugin.
"""

from retext import Retext, get_plugin


def _parse(processor, text):
  results = []
  processor.parse(text, lambda err, node: results.append((err, node)))
  err, node = results[0]
  assert err is None
  return node


def test_offsets_slice_the_source():
  text = "  The cat sat.\n\nIt purred!  "
  node = _parse(Retext().use(get_plugin("position")), text)

  for current in node.walk():
    start, end = current.data["start"], current.data["end"]
    assert text[start:end] == current.to_string()

  assert node.data == {"start": 0, "end": len(text)}


def test_word_offsets():
  node = _parse(Retext().use(get_plugin("position")), "Cat sat.")
  words = node.find_all("WordNode")

  assert [(w.data["start"], w.data["end"]) for w in words] == [(0, 3), (4, 7)]


def test_empty_document():
  node = _parse(Retext().use(get_plugin("position")), "")
  assert node.data == {"start": 0, "end": 0}

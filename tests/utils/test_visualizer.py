"""
Tests for the tree visualizer.
"""

import io

from rich.console import Console

from retext import Retext
from retext.utils.visualizer import build_tree, print_tree


def _render(renderable):
  console = Console(file=io.StringIO(), record=True, width=100)
  console.print(renderable)
  return console.export_text()


def test_tree_lists_every_node():
  node = Retext().build("Cat.")
  output = _render(build_tree(node))

  assert "RootNode[1]" in output
  assert "SentenceNode[2]" in output
  assert "WordNode: 'Cat'" in output
  assert "PunctuationNode: '.'" in output
  assert output.index("WordNode") < output.index("PunctuationNode")


def test_data_hidden_by_default():
  node = Retext().build("Cat.")
  node.data["lang"] = "en"

  assert "lang" not in _render(build_tree(node))
  assert "{'lang': 'en'}" in _render(build_tree(node, show_data=True))


def test_markup_in_text_is_escaped():
  node = Retext().build("Cat.")
  node.find_all("WordNode")[0].from_string("[bold]x[/bold]")

  assert "'[bold]x[/bold]'" in _render(build_tree(node))


def test_print_tree_to_given_console():
  console = Console(file=io.StringIO(), record=True, width=100)
  print_tree(Retext().build("Hi."), console=console)

  assert "WordNode: 'Hi'" in console.export_text()

"""
Tree Inspection Helpers.

Renders a node tree with `rich` for debugging plugins::

    RootNode[1]
    └── ParagraphNode[1]
        └── SentenceNode[2]
            ├── WordNode: 'Cat'
            └── PunctuationNode: '.'
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from retext.om.nodes import Node, Parent
from retext.utils.console import console as default_console


def _label(node: Node, show_data: bool) -> str:
  if isinstance(node, Parent):
    label = f"[node.parent]{node.type}[/node.parent]" + escape(f"[{len(node.children)}]")
  else:
    label = f"[node.leaf]{node.type}[/node.leaf]: {escape(repr(node.to_string()))}"

  if show_data and node.data:
    label += f" [node.data]{escape(repr(node.data))}[/node.data]"
  return label


def build_tree(node: Node, show_data: bool = False) -> Tree:
  """
  Builds a `rich.tree.Tree` mirroring `node`.

  Args:
      node: The root to render.
      show_data: If True, append each node's `data` dict to its label.

  Returns:
      Tree: A renderable tree.
  """
  tree = Tree(_label(node, show_data))
  stack = [(node, tree)]
  while stack:
    current, branch = stack.pop()
    if isinstance(current, Parent):
      for child in current.children:
        stack.append((child, branch.add(_label(child, show_data))))
  return tree


def print_tree(node: Node, show_data: bool = False, console: Optional[Console] = None) -> None:
  """
  Prints `node` as a tree to `console` (defaults to the shared retext console).
  """
  (console or default_console).print(build_tree(node, show_data))

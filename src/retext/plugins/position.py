"""
Plugin recording character offsets.

Sets `data["start"]` and `data["end"]` on every node so that
`text[node.data["start"]:node.data["end"]] == node.to_string()` for the text
the tree was parsed from.
"""

from retext.core.plugins import register_plugin
from retext.om.nodes import Node, Parent


@register_plugin("position")
def position(node: Node, retext) -> None:
  """
  Annotates `node` and its descendants with offsets, starting at 0.

  Args:
      node (Node): The tree root.
      retext (Retext): The processing instance (unused).
  """
  _annotate(node, 0)


def _annotate(node: Node, offset: int) -> int:
  start = offset
  if isinstance(node, Parent):
    for child in node.children:
      offset = _annotate(child, offset)
  else:
    offset += len(node.to_string())

  node.data["start"] = start
  node.data["end"] = offset
  return offset

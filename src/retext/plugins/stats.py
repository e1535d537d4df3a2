"""
Plugin counting words, sentences and paragraphs.

Stores a summary on the processed node::

    node.data["stats"] == {"paragraphs": 1, "sentences": 2, "words": 5}

Settings (`plugin_settings`):
    stats_include_punctuation (bool): Also count punctuation marks.
"""

from typing import Dict

from pydantic import BaseModel, Field

from retext.core.plugins import register_plugin
from retext.om.nodes import Node, Parent


class StatsSettings(BaseModel):
  stats_include_punctuation: bool = Field(False, description="Also count PunctuationNodes.")


_COUNTED = {
  "ParagraphNode": "paragraphs",
  "SentenceNode": "sentences",
  "WordNode": "words",
}


@register_plugin("stats")
def stats(node: Node, retext) -> None:
  settings = retext.validate_settings(StatsSettings)

  counts: Dict[str, int] = {key: 0 for key in _COUNTED.values()}
  if settings.stats_include_punctuation:
    counts["punctuation"] = 0

  nodes = node.walk() if isinstance(node, Parent) else [node]
  for current in nodes:
    key = _COUNTED.get(current.type)
    if key is None and settings.stats_include_punctuation and current.type == "PunctuationNode":
      key = "punctuation"
    if key is not None:
      counts[key] += 1

  node.data["stats"] = counts

"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Global plugin registry isolation so tests registering plugins do not leak.
- A stub parser returning fixed concrete syntax trees.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

import pytest

# Add src to path so we can import 'retext' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

import retext.core.plugins as plugin_registry  # noqa: E402

CAT_CST: Dict[str, Any] = {
  "type": "RootNode",
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


class StubParser:
  """
  Parser double returning a fixed CST and recording what it was asked to parse.
  """

  def __init__(self, cst: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
    self.cst = cst if cst is not None else CAT_CST
    self.error = error
    self.calls = []
    self.object_model = None

  def parse(self, text):
    self.calls.append(text)
    if self.error is not None:
      raise self.error
    return self.cst


@pytest.fixture
def stub_parser():
  return StubParser()


@pytest.fixture(autouse=True)
def isolate_plugin_registry():
  """
  Ensures that plugins registered by name inside a test do not leak between tests.
  """
  original = dict(plugin_registry._PLUGINS)
  original_loaded = plugin_registry._PLUGINS_LOADED
  original_external = set(plugin_registry._EXTERNAL_MODULES)
  yield
  plugin_registry._EXTERNAL_MODULES.clear()
  plugin_registry._EXTERNAL_MODULES.update(original_external)
  plugin_registry._PLUGINS.clear()
  plugin_registry._PLUGINS.update(original)
  plugin_registry._PLUGINS_LOADED = original_loaded

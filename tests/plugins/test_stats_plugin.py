"""
Tests for the bundled `stats` plugin and its settings.
"""

import pytest

from retext import Retext, RetextConfig, get_plugin
from retext.errors import ConfigurationError

TEXT = "The cat sat. It purred!\n\nA new paragraph?"


def _run(config=None):
  results = []
  Retext(config=config).use(get_plugin("stats")).parse(TEXT, lambda err, node: results.append((err, node)))
  return results[0]


def test_counts():
  err, node = _run()

  assert err is None
  assert node.data["stats"] == {"paragraphs": 2, "sentences": 3, "words": 8}


def test_punctuation_opt_in():
  err, node = _run(RetextConfig(plugin_settings={"stats_include_punctuation": True}))

  assert err is None
  assert node.data["stats"]["punctuation"] == 3


def test_invalid_setting_reaches_callback():
  err, node = _run(RetextConfig(plugin_settings={"stats_include_punctuation": "sometimes"}))

  assert isinstance(err, ConfigurationError)
  assert node is None


def test_counts_subtree():
  processor = Retext()
  sentence = processor.build("Two words.").find_all("SentenceNode")[0]
  results = []

  processor.use(get_plugin("stats")).run(sentence, lambda err, node: results.append(err))

  assert results == [None]
  assert sentence.data["stats"] == {"paragraphs": 0, "sentences": 1, "words": 2}


@pytest.mark.parametrize("name", ["position", "stats"])
def test_bundled_plugins_are_sync(name):
  assert get_plugin(name).mode.value == "sync"

"""
retext Package.

Parses natural-language text into a mutable node tree and runs an ordered
pipeline of plugins over it.

Usage
-----

Callback API
^^^^^^^^^^^^

.. code-block:: python

    import retext

    def shout(node, processor):
      for word in node.find_all("WordNode"):
        word.from_string(word.to_string().upper())

    def done(error, tree):
      if error:
        raise error
      print(tree.to_string())

    retext.construct().use(shout).parse("Cat.", done)
    # CAT.

Asynchronous Plugins
^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from retext import Retext, continuation

    @continuation
    def later(node, processor, next):
      schedule(lambda: next())

    async def main():
      tree = await Retext().use(later).parse_async("Cat.")
"""

from retext.config import RetextConfig
from retext.core import (
  Plugin,
  Retext,
  available_plugins,
  construct,
  continuation,
  from_cst,
  get_plugin,
  plugin,
  register_plugin,
)
from retext.enums import PluginMode
from retext.errors import (
  ConfigurationError,
  InvalidCallbackError,
  InvalidPluginError,
  MalformedCSTError,
  MissingEventLoopError,
  PluginError,
  RetextError,
  UnknownNodeTypeError,
  UnknownParserError,
  UnknownPluginError,
)

__version__ = "0.1.0"

__all__ = [
  "ConfigurationError",
  "InvalidCallbackError",
  "InvalidPluginError",
  "MalformedCSTError",
  "MissingEventLoopError",
  "Plugin",
  "PluginError",
  "PluginMode",
  "Retext",
  "RetextConfig",
  "RetextError",
  "UnknownNodeTypeError",
  "UnknownParserError",
  "UnknownPluginError",
  "__version__",
  "available_plugins",
  "construct",
  "continuation",
  "from_cst",
  "get_plugin",
  "plugin",
  "register_plugin",
]

"""
Processing Instance.

This module provides `Retext`, the facade tying together:

1.  **Parser**: turns text into a concrete syntax tree (`retext.parsers`).
2.  **Object Model**: the node classes the CST is mapped onto (`retext.om`).
    Parser and object model reference each other (`parser.object_model`,
    `object_model.parser`) for the lifetime of the instance.
3.  **Plugins**: an ordered, deduplicated list applied by the `Pipeline`.

Guards on `use`, `parse` and `run` raise immediately. Parser failures and
unknown node types also raise from `parse`. Only plugin failures travel through
the completion callback.
"""

import asyncio
import logging
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel

from retext.config import RetextConfig
from retext.core.builder import from_cst
from retext.core.pipeline import DoneCallback, Pipeline
from retext.core.plugins import PluginRegistry, as_plugin, get_plugin, load_plugins
from retext.core.tracer import PipelineTracer
from retext.errors import InvalidCallbackError
from retext.om.model import ObjectModel
from retext.om.nodes import Node
from retext.parsers import Parser, get_parser

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class Retext:
  """
  A configured text processor: one parser, one object model, one plugin list.

  Attributes:
      parser: The bound parser.
      object_model (ObjectModel): The bound node registry.
      plugins (PluginRegistry): Attached plugins in execution order.
      config (RetextConfig): Runtime configuration.
      tracer (Optional[PipelineTracer]): Event recorder when `config.trace` is set.
  """

  def __init__(
    self,
    parser: Optional[Parser] = None,
    config: Optional[RetextConfig] = None,
    object_model: Optional[ObjectModel] = None,
  ):
    """
    Initializes the instance and binds parser and object model to each other.

    Args:
        parser: Any object with a `parse(text)` method returning a CST. Defaults
                to a new instance of the parser named in `config`.
        config: Runtime configuration. Defaults to `RetextConfig()`.
        object_model: Node registry. Defaults to the standard text node set.

    Raises:
        TypeError: If `parser` has no callable `parse` method.
    """
    self.config = config or RetextConfig()

    if parser is None:
      parser = get_parser(self.config.parser)
    if not callable(getattr(parser, "parse", None)):
      raise TypeError(f"{parser!r} is not a parser: it has no callable `parse(text)` method")

    self.parser = parser
    self.object_model = object_model or ObjectModel()
    self.plugins = PluginRegistry()
    self.tracer: Optional[PipelineTracer] = PipelineTracer() if self.config.trace else None

    self.parser.object_model = self.object_model
    self.object_model.parser = self.parser

  @classmethod
  def from_config(cls, config: Optional[RetextConfig] = None, parser: Optional[Parser] = None) -> "Retext":
    """
    Builds an instance and attaches the plugins named in the configuration.

    Modules in `config.plugin_paths` are imported first so their registered
    plugins can be named in `config.plugins`.

    Args:
        config: Configuration. Defaults to `RetextConfig.load()`.
        parser: Optional parser overriding `config.parser`.

    Returns:
        Retext: The configured instance.

    Raises:
        UnknownPluginError: If a configured plugin name is not registered.
    """
    config = config or RetextConfig.load()
    instance = cls(parser=parser, config=config)

    if config.plugin_paths:
      load_plugins(extra_dirs=config.plugin_paths)
    for name in config.plugins:
      instance.use(get_plugin(name))

    return instance

  def use(self, plugin: Any) -> "Retext":
    """
    Attaches `plugin`. Attaching the same plugin again is a no-op.

    On first attachment the plugin's `attach` hook (if any) runs once with this
    instance. The hook may call `use` to attach dependencies; they run after it.

    Args:
        plugin: A `Plugin` or a plain callable.

    Returns:
        Retext: self, for chaining.

    Raises:
        InvalidPluginError: If `plugin` (or its attach hook) is not callable.
    """
    entry = as_plugin(plugin)

    if self.plugins.add(entry):
      logger.debug("Attached plugin '%s'", entry.name)
      if entry.attach is not None:
        entry.attach(self)

    return self

  def parse(self, text: Optional[str], done: DoneCallback) -> "Retext":
    """
    Parses `text`, builds a node tree, and runs the attached plugins on it.

    Args:
        text: The text to process.
        done: Called once with `(error, node)` when the plugins finish.

    Returns:
        Retext: self.

    Raises:
        InvalidCallbackError: If `done` is not callable. Nothing is parsed.
        UnknownNodeTypeError: If the parser emits a type the object model lacks.
        Exception: Anything the parser raises.
    """
    _check_callback(done, "Retext.parse(text, done)")
    node = self.build(text)
    return self.run(node, done)

  def run(self, node: Node, done: DoneCallback) -> "Retext":
    """
    Runs the attached plugins on `node`.

    Plugins attached while the run is in flight apply to later runs only.

    Args:
        node: The tree to process.
        done: Called once with `(error, node)`.

    Returns:
        Retext: self.

    Raises:
        InvalidCallbackError: If `done` is not callable. No plugin runs.
    """
    _check_callback(done, "Retext.run(node, done)")
    Pipeline(self.plugins.snapshot(), self.tracer).run(node, self, done)
    return self

  def build(self, text: Optional[str]) -> Node:
    """
    Parses `text` and builds the node tree without running any plugins.
    """
    cst = self.parser.parse(text)
    return from_cst(self.object_model, cst)

  async def parse_async(self, text: Optional[str]) -> Node:
    """
    Coroutine form of `parse`: resolves with the processed node or raises the plugin error.

    Required when coroutine plugins are attached. Awaits forever if a plugin
    never signals completion; wrap in `asyncio.wait_for` to bound it.
    """
    node = self.build(text)
    return await self.run_async(node)

  async def run_async(self, node: Node) -> Node:
    """
    Coroutine form of `run`.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def done(error: Optional[BaseException], result: Any) -> None:
      if future.done():
        return
      if isinstance(error, asyncio.CancelledError):
        future.cancel()
      elif error is not None:
        future.set_exception(error)
      else:
        future.set_result(result)

    self.run(node, done)
    return await future

  def plugin_config(self, key: str, default: Any = None) -> Any:
    """Retrieve a raw value from the unstructured plugin settings dict."""
    return self.config.plugin_settings.get(key, default)

  def validate_settings(self, model: Type[T]) -> T:
    """Validates plugin settings against a plugin-specific Pydantic schema."""
    return self.config.parse_plugin_settings(model)


def _check_callback(done: Any, signature: str) -> None:
  if not callable(done):
    raise InvalidCallbackError(done, signature)


def construct(parser: Optional[Parser] = None, config: Optional[RetextConfig] = None) -> Retext:
  """
  Creates a processing instance. Shorthand for `Retext(parser, config)`.
  """
  return Retext(parser=parser, config=config)

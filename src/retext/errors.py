"""
Exception Hierarchy.

All errors raised or delivered by retext derive from `RetextError`. Guard errors
(invalid plugins, invalid callbacks) additionally subclass `TypeError` so that
callers catching the builtin keep working, and lookup failures subclass
`LookupError`.

Programmer-error guards are raised synchronously at the offending call.
Pipeline errors are delivered once through the completion callback.
"""

from typing import Any, Optional


class RetextError(Exception):
  """
  Base class for all retext errors.
  """


class InvalidPluginError(RetextError, TypeError):
  """
  Raised by `Retext.use` when the plugin (or its `attach` hook) is not callable.
  """

  def __init__(self, plugin: Any, reason: Optional[str] = None):
    self.plugin = plugin
    message = reason or f"Illegal invocation: `{plugin!r}` is not a valid argument for `Retext.use(plugin)`"
    super().__init__(message)


class InvalidCallbackError(RetextError, TypeError):
  """
  Raised by `Retext.parse` and `Retext.run` when the completion callback is not callable.
  """

  def __init__(self, callback: Any, signature: str):
    self.callback = callback
    super().__init__(f"Illegal invocation: `{callback!r}` is not a valid argument for `{signature}`")


class UnknownNodeTypeError(RetextError, LookupError):
  """
  Raised when a CST node names a type that the object model does not define.
  """

  def __init__(self, type_name: str):
    self.type_name = type_name
    super().__init__(f"Unknown node type: '{type_name}'")


class MalformedCSTError(RetextError, ValueError):
  """
  Raised when a concrete syntax tree does not have exactly one of `children` or `value`.
  """


class PluginError(RetextError):
  """
  Wraps a non-exception failure value signalled through a plugin continuation.

  Attributes:
      value: The raw value the plugin passed as its error.
      plugin_name (str): Name of the plugin that signalled the failure.
  """

  def __init__(self, value: Any, plugin_name: str):
    self.value = value
    self.plugin_name = plugin_name
    super().__init__(f"Plugin '{plugin_name}' failed: {value}")


class MissingEventLoopError(RetextError, RuntimeError):
  """
  Raised inside the pipeline when a coroutine plugin runs without a running asyncio loop.
  """


class ConfigurationError(RetextError, ValueError):
  """
  Raised when configuration or plugin settings fail validation.
  """


class UnknownParserError(RetextError, LookupError):
  """
  Raised when a parser name is not registered.
  """


class UnknownPluginError(RetextError, LookupError):
  """
  Raised when a plugin name is not registered.
  """

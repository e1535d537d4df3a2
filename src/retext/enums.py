"""
Enumerations for retext.

This module defines the enumerations shared across the pipeline and tracing
machinery.
"""

from enum import Enum


class PluginMode(str, Enum):
  """
  Calling convention a plugin declares when it is registered.

  The runner never inspects a plugin's arity; the mode decides how it is invoked.
  """

  SYNC = "sync"  # plugin(node, retext)
  CONTINUATION = "continuation"  # plugin(node, retext, next)
  COROUTINE = "coroutine"  # await plugin(node, retext)


class TraceEventType(str, Enum):
  """
  Event kinds recorded by the pipeline tracer.
  """

  RUN_START = "run_start"
  PLUGIN_START = "plugin_start"
  PLUGIN_END = "plugin_end"
  PLUGIN_ERROR = "plugin_error"
  RUN_END = "run_end"

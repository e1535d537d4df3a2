"""
Core Package.

CST-to-tree building, plugin registration, and the sequential pipeline.
"""

from retext.core.builder import from_cst
from retext.core.engine import Retext, construct
from retext.core.pipeline import Pipeline
from retext.core.plugins import (
  Plugin,
  PluginRegistry,
  available_plugins,
  continuation,
  get_plugin,
  load_plugins,
  plugin,
  register_plugin,
)

__all__ = [
  "Pipeline",
  "Plugin",
  "PluginRegistry",
  "Retext",
  "available_plugins",
  "construct",
  "continuation",
  "from_cst",
  "get_plugin",
  "load_plugins",
  "plugin",
  "register_plugin",
]

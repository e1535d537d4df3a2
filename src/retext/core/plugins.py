"""
Plugin Wrapper, Registries, and Dynamic Loader.

A plugin is a function applied to a parsed tree by the pipeline. Its calling
convention is declared, never guessed from its signature:

- ``PluginMode.SYNC``: ``plugin(node, retext)``; returning means done.
- ``PluginMode.CONTINUATION``: ``plugin(node, retext, next)``; done when
  ``next(error=None, node=None)`` is called, now or later.
- ``PluginMode.COROUTINE``: ``async def plugin(node, retext)``; awaited on the
  running event loop.

Plain functions default to SYNC (``async def`` functions to COROUTINE). Use
the `plugin` decorator or `continuation` to declare anything else:

.. code-block:: python

    @continuation
    def spell(node, retext, next):
      lookup_later(node, lambda: next())

    @spell.on_attach
    def _(retext):
      retext.use(position)

Two registries live here:

1. `PluginRegistry`: the ordered, identity-deduplicated list owned by each
   `Retext` instance.
2. A global name → plugin table populated by `register_plugin`, which
   configuration uses to attach plugins by name.
"""

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Set, Tuple, Union

from retext.enums import PluginMode
from retext.errors import InvalidPluginError, UnknownPluginError

logger = logging.getLogger(__name__)

AttachHook = Callable[[Any], Any]


class Plugin:
  """
  A callable plugin with an explicit calling mode and an optional attach hook.

  Identity is the wrapped function: two `Plugin` objects around the same
  function, or a `Plugin` and its bare function, count as the same plugin.

  Attributes:
      func (Callable): The wrapped function.
      mode (PluginMode): How the pipeline invokes `func`.
      attach (Optional[Callable]): Called once with the instance when attached.
      name (str): Display name used in logs and trace events.
  """

  def __init__(
    self,
    func: Callable[..., Any],
    mode: Optional[Union[PluginMode, str]] = None,
    attach: Optional[AttachHook] = None,
    name: Optional[str] = None,
  ):
    """
    Wraps a function as a plugin.

    Args:
        func: The plugin body.
        mode: Calling convention. Defaults to COROUTINE for `async def`
              functions and SYNC otherwise.
        attach: Initialization hook. Defaults to `func.attach` if present.
        name: Display name. Defaults to `func.__name__`.

    Raises:
        InvalidPluginError: If `func` or the attach hook is not callable, or
                            `mode` is not a known mode.
    """
    if isinstance(func, Plugin):
      func = func.func
    if not callable(func):
      raise InvalidPluginError(func)

    if mode is None:
      mode = PluginMode.COROUTINE if inspect.iscoroutinefunction(func) else PluginMode.SYNC
    try:
      self.mode = PluginMode(mode)
    except ValueError:
      raise InvalidPluginError(func, f"Unknown plugin mode: {mode!r}") from None

    if attach is None:
      attach = getattr(func, "attach", None)
    if attach is not None and not callable(attach):
      raise InvalidPluginError(func, f"The `attach` hook of {func!r} is not callable")

    self.func = func
    self.attach = attach
    self.name = name or getattr(func, "__name__", None) or repr(func)

  def on_attach(self, hook: AttachHook) -> AttachHook:
    """
    Decorator setting the attach hook.

    Args:
        hook: Called once with the `Retext` instance when this plugin is attached.

    Returns:
        The hook, unchanged.
    """
    if not callable(hook):
      raise InvalidPluginError(self.func, f"The `attach` hook of {self.name} is not callable")
    self.attach = hook
    return hook

  def __call__(self, *args: Any) -> Any:
    return self.func(*args)

  def __repr__(self) -> str:
    return f"Plugin({self.name!r}, mode={self.mode.value!r})"


def as_plugin(candidate: Any) -> Plugin:
  """
  Returns `candidate` if it is a `Plugin`, otherwise wraps it.

  Raises:
      InvalidPluginError: If `candidate` is not callable.
  """
  if isinstance(candidate, Plugin):
    return candidate
  return Plugin(candidate)


def plugin(
  func: Optional[Callable[..., Any]] = None,
  *,
  mode: Optional[Union[PluginMode, str]] = None,
  attach: Optional[AttachHook] = None,
  name: Optional[str] = None,
) -> Any:
  """
  Decorator declaring a function as a plugin. Usable bare or with arguments.
  """

  def decorator(f: Callable[..., Any]) -> Plugin:
    return Plugin(f, mode=mode, attach=attach, name=name)

  if func is not None:
    return decorator(func)
  return decorator


def continuation(
  func: Optional[Callable[..., Any]] = None,
  *,
  attach: Optional[AttachHook] = None,
  name: Optional[str] = None,
) -> Any:
  """Decorator declaring a plugin that signals completion through its `next` argument."""
  return plugin(func, mode=PluginMode.CONTINUATION, attach=attach, name=name)


class PluginRegistry:
  """
  Ordered, identity-deduplicated plugin list owned by a processing instance.

  Insertion order is execution order. There is no removal.
  """

  def __init__(self) -> None:
    self._plugins: List[Plugin] = []

  def add(self, entry: Plugin) -> bool:
    """
    Appends `entry` unless a plugin with the same identity is present.

    Returns:
        bool: True if the plugin was added, False if it was already registered.
    """
    if entry.func in self:
      return False
    self._plugins.append(entry)
    return True

  def snapshot(self) -> Tuple[Plugin, ...]:
    return tuple(self._plugins)

  def __contains__(self, candidate: object) -> bool:
    key = candidate.func if isinstance(candidate, Plugin) else candidate
    # Equality rather than identity so bound methods of the same object match.
    return any(entry.func == key for entry in self._plugins)

  def __iter__(self) -> Iterator[Plugin]:
    return iter(self.snapshot())

  def __len__(self) -> int:
    return len(self._plugins)


# Global name -> plugin table
_PLUGINS: Dict[str, Plugin] = {}
_PLUGINS_LOADED = False
_EXTERNAL_MODULES: Set[str] = set()


def register_plugin(
  name: str,
  mode: Optional[Union[PluginMode, str]] = None,
  attach: Optional[AttachHook] = None,
) -> Callable[[Callable[..., Any]], Plugin]:
  """
  Decorator registering a function under `name` so configuration can attach it.

  Args:
      name: The unique plugin name (e.g. "position").
      mode: Calling convention, as for `Plugin`.
      attach: Optional attach hook.

  Returns:
      A decorator returning the registered `Plugin`.
  """

  def decorator(func: Callable[..., Any]) -> Plugin:
    entry = Plugin(func, mode=mode, attach=attach, name=name)
    if name in _PLUGINS and _PLUGINS[name].func is not entry.func:
      logger.debug("Plugin name '%s' re-registered", name)
    _PLUGINS[name] = entry
    return entry

  return decorator


def get_plugin(name: str) -> Plugin:
  """
  Retrieves a registered plugin by name, loading the bundled plugins on first use.

  Raises:
      UnknownPluginError: If no plugin is registered under `name`.
  """
  if not _PLUGINS_LOADED:
    load_plugins()
  try:
    return _PLUGINS[name]
  except KeyError:
    raise UnknownPluginError(f"Unknown plugin: '{name}'. Available plugins: {sorted(_PLUGINS)}") from None


def available_plugins() -> List[str]:
  if not _PLUGINS_LOADED:
    load_plugins()
  return sorted(_PLUGINS)


def clear_plugins() -> None:
  """Resets the global plugin table. Primarily for testing."""
  global _PLUGINS_LOADED
  _PLUGINS.clear()
  _EXTERNAL_MODULES.clear()
  _PLUGINS_LOADED = False


def load_plugins(plugins_dir: Optional[Path] = None, extra_dirs: Optional[List[Path]] = None) -> int:
  """
  Imports plugin modules so their `register_plugin` decorators run.

  Args:
      plugins_dir: Overrides the bundled `retext.plugins` package with a directory of .py files.
      extra_dirs: Additional directories to scan (e.g. user extensions).

  Returns:
      int: Number of modules loaded.
  """
  global _PLUGINS_LOADED
  total_loaded = 0

  if not _PLUGINS_LOADED and plugins_dir is None:
    from retext.plugins import load_bundled

    total_loaded += load_bundled()
    _PLUGINS_LOADED = True

  if plugins_dir and plugins_dir.is_dir():
    total_loaded += _import_from_dir(plugins_dir)
    _PLUGINS_LOADED = True

  for ex_dir in extra_dirs or []:
    if ex_dir.is_dir():
      total_loaded += _import_from_dir(ex_dir)
    else:
      logger.warning("Plugin directory %s does not exist", ex_dir)

  return total_loaded


def _import_from_dir(directory: Path) -> int:
  """Imports every non-private .py file in `directory` under a unique module name."""
  count = 0
  for item in sorted(directory.glob("*.py")):
    if item.name.startswith("_"):
      continue

    unique_name = f"retext_plugin_{item.stem}_{item.stat().st_ino}"
    if unique_name in _EXTERNAL_MODULES:
      continue

    # Modules left over from before `clear_plugins` are executed again so they re-register.
    spec = importlib.util.spec_from_file_location(unique_name, item)
    if spec is None or spec.loader is None:
      continue
    mod = importlib.util.module_from_spec(spec)
    sys.modules[unique_name] = mod
    try:
      spec.loader.exec_module(mod)
    except Exception:
      del sys.modules[unique_name]
      logger.warning("Failed to load plugin module %s", item, exc_info=True)
      continue
    _EXTERNAL_MODULES.add(unique_name)
    count += 1
  return count

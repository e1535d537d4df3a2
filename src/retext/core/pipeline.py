"""
Sequential Plugin Pipeline.

This module provides the `Pipeline`, which applies a fixed sequence of plugins
to a node and reports the outcome through a single ``done(error, node)``
callback.

Execution rules:

1.  Plugins run strictly one after another. A continuation or coroutine plugin
    suspends the run until it signals completion; nothing else runs meanwhile.
2.  The first failure (a raised exception, or an error passed to ``next``)
    ends the run. ``done`` receives ``(error, None)``; the tree keeps whatever
    mutations happened before the failure.
3.  A continuation may hand back a replacement node (``next(None, new_node)``);
    later plugins and ``done`` see the replacement.
4.  ``done`` is called exactly once per run. Repeated or late signals from a
    misbehaving plugin are logged and ignored.

A plugin that never signals completion stalls its run forever; there is no
timeout. Exceptions raised by ``done`` itself propagate to whoever triggered
completion (the caller of ``run`` or of ``next``).
"""

import asyncio
import logging
from typing import Any, Callable, Optional, Sequence

from retext.core.plugins import Plugin
from retext.core.tracer import PipelineTracer
from retext.enums import PluginMode
from retext.errors import MissingEventLoopError, PluginError
from retext.om.nodes import Node

logger = logging.getLogger(__name__)

DoneCallback = Callable[[Optional[BaseException], Any], Any]


class Pipeline:
  """
  Runs an ordered, immutable sequence of plugins.
  """

  def __init__(self, plugins: Sequence[Plugin], tracer: Optional[PipelineTracer] = None) -> None:
    """
    Initializes the pipeline.

    Args:
        plugins: Plugins in execution order. Copied, so later registrations do not leak in.
        tracer: Optional recorder for run and plugin events.
    """
    self.plugins = tuple(plugins)
    self.tracer = tracer

  def run(self, node: Any, context: Any, done: DoneCallback) -> None:
    """
    Applies every plugin to `node` and calls `done` once with the outcome.

    Returns as soon as the run completes or suspends on an asynchronous plugin.

    Args:
        node: The tree to transform.
        context: Second argument passed to every plugin (the `Retext` instance).
        done: Completion callback receiving `(error, node)`.
    """
    _Run(self, node, context, done).drive()


class _Run:
  """
  State of one pipeline execution.

  The driving loop handles synchronous plugins iteratively so long pipelines do
  not grow the call stack; it only returns early when a plugin suspends.
  """

  def __init__(self, pipeline: Pipeline, node: Any, context: Any, done: DoneCallback) -> None:
    self.plugins = pipeline.plugins
    self.tracer = pipeline.tracer
    self.node = node
    self.context = context
    self.finished = False
    self._done = done
    self._index = 0
    self._run_id = self.tracer.start_run(len(self.plugins)) if self.tracer else None

  def drive(self) -> None:
    while not self.finished:
      if self._index >= len(self.plugins):
        self.finish(None, self.node)
        return

      step = _Step(self, self._index)
      self._index += 1
      step.invoke()

      if not step.completed:
        # Suspended: the step resumes the run when it completes.
        return
      if not self.settle(step):
        return

  def resume(self, step: "_Step") -> None:
    if self.settle(step):
      self.drive()

  def settle(self, step: "_Step") -> bool:
    """
    Applies a completed step's outcome. Returns True if the run should continue.
    """
    if step.error is not None:
      logger.debug("Plugin '%s' failed: %r", step.plugin.name, step.error)
      if self.tracer:
        self.tracer.plugin_error(self._run_id, step.plugin.name, step.index, step.error)
      self.finish(step.error, None)
      return False

    replaced = step.result is not None
    if replaced:
      self.node = step.result
    if self.tracer:
      self.tracer.plugin_end(self._run_id, step.plugin.name, step.index, replaced)
    return True

  def finish(self, error: Optional[BaseException], node: Any) -> None:
    if self.finished:
      return
    self.finished = True
    if self.tracer:
      self.tracer.end_run(self._run_id, error)
    self._done(error, node)


class _Step:
  """
  One plugin invocation. Instances are the `next` continuation handed to
  CONTINUATION plugins.
  """

  def __init__(self, run: _Run, index: int) -> None:
    self.run = run
    self.index = index
    self.plugin = run.plugins[index]
    self.completed = False
    self.error: Optional[BaseException] = None
    self.result: Any = None
    self._in_call = False

  def invoke(self) -> None:
    run = self.run
    mode = self.plugin.mode
    logger.debug("Running plugin '%s' (%s)", self.plugin.name, mode.value)
    if run.tracer:
      run.tracer.plugin_start(run._run_id, self.plugin.name, self.index)

    self._in_call = True
    try:
      if mode is PluginMode.CONTINUATION:
        self.plugin(run.node, run.context, self)
      elif mode is PluginMode.COROUTINE:
        self._schedule(self.plugin(run.node, run.context))
      else:
        self.plugin(run.node, run.context)
        self._signal(None, None)
    except Exception as exc:
      self._raised(exc)
    finally:
      self._in_call = False

  def __call__(self, error: Any = None, node: Any = None) -> None:
    """
    The `next` continuation: signals that the plugin finished.

    Args:
        error: None on success. Exceptions are passed through; any other value
               is wrapped in `PluginError`.
        node: Optional replacement for the tree.
    """
    if self.completed or self.run.finished:
      logger.warning("Plugin '%s' signalled completion more than once; ignoring", self.plugin.name)
      return
    self._signal(error, node)
    if not self._in_call:
      self.run.resume(self)

  def _signal(self, error: Any, node: Any) -> None:
    self.completed = True
    self.error = self._normalize(error)
    self.result = None if self.error is not None else node

  def _raised(self, exc: Exception) -> None:
    # A raise fails the step even after a synchronous success signal; the run
    # has not advanced yet. An earlier failure signal wins.
    if self.completed and self.error is not None:
      logger.warning("Plugin '%s' raised after signalling failure; ignoring %r", self.plugin.name, exc)
      return
    self.completed = True
    self.error = exc
    self.result = None

  def _normalize(self, error: Any) -> Optional[BaseException]:
    if error is None or isinstance(error, BaseException):
      return error
    return PluginError(error, self.plugin.name)

  def _schedule(self, awaitable: Any) -> None:
    try:
      asyncio.get_running_loop()
    except RuntimeError:
      if asyncio.iscoroutine(awaitable):
        awaitable.close()
      raise MissingEventLoopError(
        f"Plugin '{self.plugin.name}' is a coroutine but no asyncio event loop is running; "
        "use Retext.parse_async or Retext.run_async"
      ) from None

    task = asyncio.ensure_future(awaitable)
    task.add_done_callback(self._on_task_done)

  def _on_task_done(self, task: "asyncio.Future[Any]") -> None:
    if task.cancelled():
      self(asyncio.CancelledError())
      return
    error = task.exception()
    if error is not None:
      self(error)
      return
    result = task.result()
    if result is not None and not isinstance(result, Node):
      logger.debug("Ignoring non-node result of plugin '%s': %r", self.plugin.name, result)
      result = None
    self(None, result)
